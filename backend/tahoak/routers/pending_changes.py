"""Pending changes API router: the admin moderation queue and review decisions."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from tahoak.database import get_db
from tahoak.schemas.pending_change import PendingChangeOut, PendingChangeReview
from tahoak.services import pending_change_service
from tahoak.middleware.auth_middleware import require_roles
from tahoak.models.enums import Role
from tahoak.models.user import User

router = APIRouter(prefix="/api/admin/pending-changes", tags=["pending-changes"])


@router.get("", response_model=List[PendingChangeOut])
def list_pending_changes(
    status: Optional[str] = None,
    entity_id: Optional[str] = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(require_roles(Role.ADMIN)),
):
    return pending_change_service.list_changes(db, status=status, entity_id=entity_id)


@router.get("/{change_id}", response_model=PendingChangeOut)
def get_pending_change(
    change_id: str,
    db: Session = Depends(get_db),
    _admin: User = Depends(require_roles(Role.ADMIN)),
):
    return pending_change_service.get_change(db, change_id)


@router.put("/{change_id}", response_model=PendingChangeOut)
def review_pending_change(
    change_id: str,
    data: PendingChangeReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(Role.ADMIN)),
):
    return pending_change_service.review_change(db, change_id, data, current_user)
