"""Bearer-token authentication and role gates for API routes."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from tahoak.database import get_db
from tahoak.models.user import User
from tahoak.config import settings
from tahoak.services.auth_service import ALGORITHM

security = HTTPBearer()


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    user_id = decode_token(credentials.credentials).get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    # deactivated accounts lose access even with an unexpired token
    user = db.query(User).filter(User.id == str(user_id), User.is_active == True).first()  # noqa: E712
    if not user:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


def require_roles(*roles):
    """Dependency factory: the current user must hold at least one of ``roles``."""
    required = [str(getattr(r, "value", r)) for r in roles]

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_role(*required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(required)}",
            )
        return current_user
    return checker
