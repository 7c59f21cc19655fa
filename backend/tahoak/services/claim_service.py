"""Claim service: email-verified ownership claims that land in the moderation queue."""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from tahoak.models.entity import Entity
from tahoak.models.enums import ChangeStatus, ChangeType, MagicLinkPurpose
from tahoak.models.pending_change import PendingChange
from tahoak.models.user import User
from tahoak.services import email_service
from tahoak.services.subscription_service import consume_magic_link, issue_magic_link, mark_used
from tahoak.utils.helpers import is_valid_email
from tahoak.utils.permissions import ADMIN

logger = logging.getLogger(__name__)

CLAIM_FIELD_NAME = "owner_id (Claim Request)"


def request_claim(db: Session, email: str, entity_id: str):
    email = (email or "").strip().lower()
    if not is_valid_email(email) or not entity_id:
        raise HTTPException(status_code=400, detail="Email and Entity ID are required")

    if not db.query(Entity.id).filter(Entity.id == entity_id).first():
        raise HTTPException(status_code=404, detail="Entity not found")

    link = issue_magic_link(db, email, MagicLinkPurpose.CLAIM_ENTITY)
    db.commit()

    if not email_service.send_magic_link_email(email, link.token, MagicLinkPurpose.CLAIM_ENTITY, entity_id):
        raise HTTPException(status_code=502, detail="Failed to send verification email")


def _first_admin(db: Session) -> User | None:
    users = db.query(User).filter(User.is_active == True).order_by(User.created_at.asc()).all()  # noqa: E712
    return next((u for u in users if u.has_role(ADMIN)), None)


def verify_claim(db: Session, token: str, entity_id: str) -> dict:
    link = consume_magic_link(db, token, MagicLinkPurpose.CLAIM_ENTITY)
    if not entity_id:
        raise HTTPException(status_code=400, detail="Entity ID is required")

    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")

    # Unknown emails get an empty patch; an admin assigns the owner after creating the account.
    existing_user = db.query(User).filter(User.email == link.email).first()
    change = PendingChange(
        entity_id=entity.id,
        change_type=ChangeType.UPDATE_ENTITY.value,
        field_name=CLAIM_FIELD_NAME,
        old_value={"owner_id": entity.owner_id},
        new_value={"owner_id": existing_user.id} if existing_user else {},
        submitter_email=link.email,
        notes=(
            f"User exists: {existing_user.id}" if existing_user
            else f"User does not exist yet. Email: {link.email}"
        ),
        status=ChangeStatus.PENDING.value,
    )
    db.add(change)
    mark_used(link)
    db.commit()

    admin = _first_admin(db)
    if admin and not email_service.send_claim_notification_email(admin.email, entity.name, link.email):
        logger.warning("[claim] admin notification for entity %s was not delivered", entity.id)

    return {
        "email": link.email,
        "entity_id": entity.id,
        "entity_name": entity.name,
        "pending_change_id": change.id,
    }
