"""Pydantic request/response contracts for tags and entity tag assignments."""

from pydantic import BaseModel
from typing import Dict, Optional
from datetime import datetime

from tahoak.models.enums import TagCategory


class TagOut(BaseModel):
    id: str
    name: str
    slug: str
    category: str
    created_at: Optional[datetime] = None


class TagCreate(BaseModel):
    name: str
    category: TagCategory
    name_translations: Optional[Dict[str, str]] = None


class EntityTagCreate(BaseModel):
    tag_id: str


class EntityTagOut(BaseModel):
    id: str
    entity_id: str
    tag_id: str
    verified: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    tag: TagOut
    entity_name: Optional[str] = None
