"""Auth API router: registration, login and the current account."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tahoak.database import get_db
from tahoak.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserOut
from tahoak.services import auth_service
from tahoak.middleware.auth_middleware import get_current_user
from tahoak.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    return auth_service.register(db, request)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, request.email, request.password)
    token = auth_service.create_access_token(user.id)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    return {"message": "Logged out"}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
