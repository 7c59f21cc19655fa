"""Admin service: dashboard stats, entity administration and spot checks."""

import random
from datetime import timedelta
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from tahoak.config import settings
from tahoak.models.entity import Entity
from tahoak.models.enums import ChangeStatus, EntityStatus, ReportStatus, SuggestionStatus
from tahoak.models.feedback import EntitySuggestion, IssueReport
from tahoak.models.pending_change import PendingChange
from tahoak.models.tag import EntityTag
from tahoak.models.user import User
from tahoak.schemas.entity import AdminEntityUpdate
from tahoak.services.entity_service import entity_query, get_entity, search_condition, to_response
from tahoak.utils.helpers import utcnow
from tahoak.utils.permissions import ADMIN, BUSINESS_OWNER, USER

SORT_FIELDS = {
    "name": Entity.name,
    "entity_type": Entity.entity_type,
    "status": Entity.status,
    "created_at": Entity.created_at,
    "owner": User.name,
}


def get_stats(db: Session) -> dict:
    status_counts = dict(db.query(Entity.status, func.count(Entity.id)).group_by(Entity.status).all())
    users = db.query(User).all()

    return {
        "entities": {
            "total": sum(status_counts.values()),
            "active": status_counts.get(EntityStatus.ACTIVE.value, 0),
            "pending": status_counts.get(EntityStatus.PENDING.value, 0),
            "inactive": status_counts.get(EntityStatus.INACTIVE.value, 0),
        },
        "users": {
            "total": len(users),
            "user": sum(1 for u in users if u.has_role(USER)),
            "business_owner": sum(1 for u in users if u.has_role(BUSINESS_OWNER)),
            "admin": sum(1 for u in users if u.has_role(ADMIN)),
        },
        "pending_changes": db.query(PendingChange).filter(PendingChange.status == ChangeStatus.PENDING.value).count(),
        "pending_suggestions": db.query(EntitySuggestion)
        .filter(EntitySuggestion.status == SuggestionStatus.PENDING.value)
        .count(),
        "pending_issue_reports": db.query(IssueReport).filter(IssueReport.status == ReportStatus.PENDING.value).count(),
        "unverified_tags": db.query(EntityTag).filter(EntityTag.verified == False).count(),  # noqa: E712
    }


def list_entities(
    db: Session,
    locale: str,
    status: Optional[str] = None,
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> List[dict]:
    if sort_by not in SORT_FIELDS:
        raise HTTPException(status_code=400, detail="Invalid sort_by parameter")
    if sort_order not in ("asc", "desc"):
        raise HTTPException(status_code=400, detail="Invalid sort_order parameter")

    q = entity_query(db)
    if status:
        q = q.filter(Entity.status == status)
    if category_id:
        q = q.filter(Entity.category_id == category_id)
    if entity_type:
        q = q.filter(Entity.entity_type == entity_type)
    if search and search.strip():
        q = q.filter(search_condition(db, search.strip()))

    column = SORT_FIELDS[sort_by]
    if sort_by == "owner":
        q = q.outerjoin(User, Entity.owner_id == User.id)
    q = q.order_by(column.asc() if sort_order == "asc" else column.desc(), Entity.id.asc())
    return [to_response(e, locale) for e in q.all()]


def update_entity(db: Session, entity_id: str, data: AdminEntityUpdate, locale: str) -> dict:
    updates = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if not updates:
        raise HTTPException(
            status_code=400,
            detail="At least one field (status, featured, or entity_type) must be provided",
        )

    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    for key, value in updates.items():
        setattr(entity, key, value)
    db.commit()
    db.expire_all()
    return get_entity(db, entity_id, locale)


def get_spot_checks(db: Session, locale: str) -> List[dict]:
    """Stale active entities first (never or long ago checked), topped up at random."""
    cutoff = utcnow() - timedelta(days=settings.SPOT_CHECK_STALE_DAYS)
    stale = (
        entity_query(db)
        .filter(
            Entity.status == EntityStatus.ACTIVE.value,
            or_(Entity.spot_check_date.is_(None), Entity.spot_check_date < cutoff),
        )
        .order_by(Entity.updated_at.asc())
        .limit(settings.SPOT_CHECK_STALE_LIMIT)
        .all()
    )

    needed = settings.SPOT_CHECK_SIZE - len(stale)
    extra = []
    if needed > 0:
        stale_ids = [e.id for e in stale]
        candidate_ids = [
            row[0]
            for row in db.query(Entity.id)
            .filter(Entity.status == EntityStatus.ACTIVE.value, ~Entity.id.in_(stale_ids))
            .all()
        ]
        picked = random.sample(candidate_ids, min(needed, len(candidate_ids)))
        if picked:
            extra = entity_query(db).filter(Entity.id.in_(picked)).all()

    return [to_response(e, locale) for e in stale + extra]


def mark_spot_checked(db: Session, entity_id: str, locale: str) -> dict:
    entity = db.query(Entity).filter(Entity.id == entity_id).first()
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    entity.spot_check_date = utcnow()
    db.commit()
    db.expire_all()
    return get_entity(db, entity_id, locale)
