"""User service: admin-side account listing and role management."""

from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from tahoak.models.user import User
from tahoak.schemas.user import UserUpdate
from tahoak.utils.helpers import LIKE_ESCAPE, like_pattern
from tahoak.utils.permissions import ADMIN


def get_users(db: Session, search: Optional[str] = None, role: Optional[str] = None) -> List[User]:
    q = db.query(User)
    if search:
        pattern = like_pattern(search.strip())
        q = q.filter(or_(
            User.email.ilike(pattern, escape=LIKE_ESCAPE),
            User.name.ilike(pattern, escape=LIKE_ESCAPE),
        ))
    users = q.order_by(User.created_at.desc()).all()
    if role:
        # roles is a JSON list; filter in Python to stay portable across backends
        users = [u for u in users if u.has_role(role)]
    return users


def _active_admin_count(db: Session) -> int:
    return sum(1 for u in db.query(User).filter(User.is_active == True).all() if u.has_role(ADMIN))  # noqa: E712


def update_user(db: Session, user_id: str, data: UserUpdate) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    updates = data.model_dump(exclude_unset=True)
    new_roles = updates.get("roles")
    if new_roles is not None:
        new_roles = sorted({str(getattr(r, "value", r)) for r in new_roles})
        if not new_roles:
            raise HTTPException(status_code=400, detail="At least one role is required")

    losing_admin = user.has_role(ADMIN) and user.is_active and (
        (new_roles is not None and ADMIN not in new_roles)
        or updates.get("is_active") is False
    )
    if losing_admin and _active_admin_count(db) <= 1:
        raise HTTPException(status_code=409, detail="Cannot demote the last active admin")

    if "name" in updates:
        user.name = updates["name"]
    if new_roles is not None:
        user.roles = new_roles
    if updates.get("is_active") is not None:
        user.is_active = updates["is_active"]

    db.commit()
    db.refresh(user)
    return user
