"""Pending change service: change submission, the moderation queue and the change applier."""

import logging
from typing import List, Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from tahoak.models.entity import Category, Entity
from tahoak.models.enums import ChangeStatus, ReviewAction
from tahoak.models.pending_change import PendingChange
from tahoak.models.tag import EntityTag, Tag
from tahoak.models.user import User
from tahoak.schemas.pending_change import (
    AddTagChange,
    PendingChangeCreate,
    PendingChangeReview,
    RemoveTagChange,
    UpdateEntityChange,
    UpdateImageChange,
    change_payload_adapter,
    payload_to_json,
)
from tahoak.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def parse_payload(change_type: str, new_value):
    """Validate ``new_value`` against the payload shape for ``change_type``."""
    try:
        return change_payload_adapter.validate_python({"change_type": change_type, "new_value": new_value})
    except ValidationError as exc:
        errors = exc.errors()
        if errors and errors[0].get("type") == "union_tag_invalid":
            raise HTTPException(status_code=400, detail="Invalid change_type")
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ())[1:])
        raise HTTPException(
            status_code=400,
            detail=f"Invalid new_value for {change_type}: {location} {first.get('msg', '')}".strip(),
        )


def submit_change(db: Session, entity_id: str, data: PendingChangeCreate, current_user: User) -> PendingChange:
    if not data.change_type or data.new_value is None:
        raise HTTPException(status_code=400, detail="change_type and new_value are required")

    payload = parse_payload(data.change_type, data.new_value)

    entity = db.query(Entity.id).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")

    change = PendingChange(
        entity_id=entity_id,
        change_type=data.change_type,
        field_name=data.field_name,
        old_value=data.old_value,
        new_value=payload_to_json(payload),
        submitted_by=current_user.id,
        submitter_email=current_user.email,
        status=ChangeStatus.PENDING.value,
    )
    db.add(change)
    db.commit()
    logger.info("[moderation] change %s submitted for entity %s (%s)", change.id, entity_id, data.change_type)
    return get_change(db, change.id)


def _change_query(db: Session):
    return db.query(PendingChange).options(joinedload(PendingChange.entity))


def list_changes(db: Session, status: Optional[str] = None, entity_id: Optional[str] = None) -> List[PendingChange]:
    if status not in {s.value for s in ChangeStatus}:
        status = ChangeStatus.PENDING.value

    q = _change_query(db).filter(PendingChange.status == status)
    if entity_id:
        q = q.filter(PendingChange.entity_id == entity_id)
    return q.order_by(PendingChange.created_at.asc(), PendingChange.id.asc()).all()


def get_change(db: Session, change_id: str) -> PendingChange:
    change = _change_query(db).filter(PendingChange.id == change_id).first()
    if not change:
        raise HTTPException(status_code=404, detail="Pending change not found")
    return change


def _get_target_entity(db: Session, entity_id: str) -> Entity:
    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    return entity


def _apply_entity_update(db: Session, change: PendingChange, payload: UpdateEntityChange):
    entity = _get_target_entity(db, change.entity_id)
    fields = payload.new_value.changed_fields()

    owner_id = fields.get("owner_id")
    if owner_id and not db.query(User.id).filter(User.id == owner_id).first():
        raise HTTPException(status_code=404, detail="Owner not found")
    category_id = fields.get("category_id")
    if category_id and not db.query(Category.id).filter(Category.id == category_id).first():
        raise HTTPException(status_code=404, detail="Category not found")

    for key, value in fields.items():
        setattr(entity, key, value)


def _apply_add_tag(db: Session, change: PendingChange, payload: AddTagChange):
    tag_id = payload.new_value.tag_id
    if not db.query(Tag.id).filter(Tag.id == tag_id).first():
        raise HTTPException(status_code=404, detail="Tag not found")

    entity_tag = (
        db.query(EntityTag)
        .filter(EntityTag.entity_id == change.entity_id, EntityTag.tag_id == tag_id)
        .first()
    )
    if entity_tag:
        entity_tag.verified = True
        return
    db.add(EntityTag(
        entity_id=change.entity_id,
        tag_id=tag_id,
        verified=True,
        created_by=change.submitted_by,
    ))


def _apply_remove_tag(db: Session, change: PendingChange, payload: RemoveTagChange):
    (
        db.query(EntityTag)
        .filter(EntityTag.entity_id == change.entity_id, EntityTag.tag_id == payload.new_value.tag_id)
        .delete(synchronize_session=False)
    )


def _apply_image_update(db: Session, change: PendingChange, payload: UpdateImageChange):
    entity = _get_target_entity(db, change.entity_id)
    entity.images = dict(payload.new_value.root)


APPLIERS = {
    UpdateEntityChange: _apply_entity_update,
    AddTagChange: _apply_add_tag,
    RemoveTagChange: _apply_remove_tag,
    UpdateImageChange: _apply_image_update,
}


def _parse_action(action: Optional[str]) -> ReviewAction:
    try:
        return ReviewAction(action)
    except ValueError:
        raise HTTPException(status_code=400, detail="Valid action (APPROVE or REJECT) is required")


def review_change(db: Session, change_id: str, data: PendingChangeReview, reviewer: User) -> PendingChange:
    """Approve or reject a pending change.

    The PENDING -> APPROVED/REJECTED transition is a single conditional
    UPDATE; a change that is no longer PENDING yields 409 and is left
    untouched. Approval side effects share the transaction, so a failing
    side effect leaves the change PENDING.
    """
    action = _parse_action(data.action)
    change = get_change(db, change_id)
    new_status = ChangeStatus.APPROVED if action == ReviewAction.APPROVE else ChangeStatus.REJECTED

    try:
        updated = (
            db.query(PendingChange)
            .filter(PendingChange.id == change_id, PendingChange.status == ChangeStatus.PENDING.value)
            .update(
                {
                    PendingChange.status: new_status.value,
                    PendingChange.reviewed_by: reviewer.id,
                    PendingChange.reviewed_at: utcnow(),
                    PendingChange.notes: data.notes or None,
                },
                synchronize_session=False,
            )
        )
        if updated == 0:
            raise HTTPException(status_code=409, detail="Change is already processed")

        if new_status == ChangeStatus.APPROVED:
            payload = parse_payload(change.change_type, change.new_value)
            APPLIERS[type(payload)](db, change, payload)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Change conflicts with existing data")
    except Exception:
        db.rollback()
        raise

    logger.info(
        "[moderation] change %s %s by %s",
        change_id,
        new_status.value.lower(),
        reviewer.id,
    )
    db.expire_all()
    return get_change(db, change_id)
