"""Pydantic request/response contracts for users and authentication."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from tahoak.models.enums import Role


class UserOut(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    roles: List[str]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class UserUpdate(BaseModel):
    name: Optional[str] = None
    roles: Optional[List[Role]] = None
    is_active: Optional[bool] = None
