"""Auth service: password hashing, token issue, account registration and login."""

from datetime import datetime, timedelta
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from tahoak.models.user import User
from tahoak.config import settings
from tahoak.schemas.user import RegisterRequest
from tahoak.utils.helpers import is_valid_email

ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 8

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id: str) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def register(db: Session, data: RegisterRequest) -> User:
    email = data.email.strip().lower()
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Invalid email format")
    if len(data.password or "") < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail="Password must be at least 8 characters long")
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="User with this email already exists")

    user = User(
        email=email,
        name=(data.name or "").strip() or None,
        password_hash=hash_password(data.password),
        roles=["USER"],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = (
        db.query(User)
        .filter(User.email == (email or "").strip().lower(), User.is_active == True)  # noqa: E712
        .first()
    )
    if not user or not verify_password(password or "", user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return user
