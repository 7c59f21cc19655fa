"""Feedback service: public issue reports and entity suggestions, plus their admin review."""

import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from tahoak.models.entity import Entity
from tahoak.models.enums import (
    EntityStatus,
    EntityType,
    IssueType,
    ReportAction,
    ReportStatus,
    ReviewAction,
    SuggestionStatus,
)
from tahoak.models.feedback import EntitySuggestion, IssueReport
from tahoak.models.user import User
from tahoak.schemas.public import IssueReportCreate, IssueReportReview, SuggestionCreate, SuggestionReview
from tahoak.services.entity_service import get_entity, unique_slug
from tahoak.utils.helpers import generate_slug, is_valid_email, utcnow

logger = logging.getLogger(__name__)


def create_issue_report(db: Session, data: IssueReportCreate) -> IssueReport:
    if not (data.entity_id and data.issue_type and data.description and data.submitter_email):
        raise HTTPException(status_code=400, detail="Entity ID, issue type, description, and email are required")
    if data.issue_type not in {t.value for t in IssueType}:
        raise HTTPException(status_code=400, detail="Invalid issue type")
    if not db.query(Entity.id).filter(Entity.id == data.entity_id).first():
        raise HTTPException(status_code=404, detail="Entity not found")
    if not is_valid_email(data.submitter_email.strip()):
        raise HTTPException(status_code=400, detail="Invalid email format")

    report = IssueReport(
        entity_id=data.entity_id,
        issue_type=data.issue_type,
        description=data.description,
        submitter_email=data.submitter_email.strip(),
        submitter_name=data.submitter_name,
        status=ReportStatus.PENDING.value,
    )
    db.add(report)
    db.commit()
    return get_issue_report(db, report.id)


def get_issue_report(db: Session, report_id: str) -> IssueReport:
    report = (
        db.query(IssueReport)
        .options(joinedload(IssueReport.entity))
        .filter(IssueReport.id == report_id)
        .first()
    )
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


def list_issue_reports(db: Session, status: Optional[str] = None) -> List[IssueReport]:
    if status not in {s.value for s in ReportStatus}:
        status = ReportStatus.PENDING.value
    return (
        db.query(IssueReport)
        .options(joinedload(IssueReport.entity))
        .filter(IssueReport.status == status)
        .order_by(IssueReport.created_at.asc())
        .all()
    )


def review_issue_report(db: Session, report_id: str, data: IssueReportReview, reviewer: User) -> IssueReport:
    try:
        action = ReportAction(data.action)
    except ValueError:
        raise HTTPException(status_code=400, detail="Valid action (RESOLVE or DISMISS) is required")

    get_issue_report(db, report_id)
    status = ReportStatus.RESOLVED if action == ReportAction.RESOLVE else ReportStatus.DISMISSED
    updated = (
        db.query(IssueReport)
        .filter(IssueReport.id == report_id, IssueReport.status == ReportStatus.PENDING.value)
        .update(
            {
                IssueReport.status: status.value,
                IssueReport.reviewed_by: reviewer.id,
                IssueReport.reviewed_at: utcnow(),
                IssueReport.resolution: data.resolution or None,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise HTTPException(status_code=409, detail="Report is already processed")
    db.commit()
    db.expire_all()
    return get_issue_report(db, report_id)


def create_suggestion(db: Session, data: SuggestionCreate) -> EntitySuggestion:
    name = (data.name or "").strip()
    if not name or not data.submitter_email:
        raise HTTPException(status_code=400, detail="Name and email are required")
    if not is_valid_email(data.submitter_email.strip()):
        raise HTTPException(status_code=400, detail="Invalid email format")

    suggestion = EntitySuggestion(
        name=name,
        description=data.description or None,
        address=data.address or None,
        website=data.website or None,
        submitter_email=data.submitter_email.strip(),
        submitter_name=data.submitter_name or None,
        status=SuggestionStatus.PENDING.value,
    )
    db.add(suggestion)
    db.commit()
    db.refresh(suggestion)
    return suggestion


def list_suggestions(db: Session, status: Optional[str] = None) -> List[EntitySuggestion]:
    if status not in {s.value for s in SuggestionStatus}:
        status = SuggestionStatus.PENDING.value
    return (
        db.query(EntitySuggestion)
        .filter(EntitySuggestion.status == status)
        .order_by(EntitySuggestion.created_at.asc())
        .all()
    )


def review_suggestion(db: Session, suggestion_id: str, data: SuggestionReview, reviewer: User, locale: str) -> dict:
    try:
        action = ReviewAction(data.action)
    except ValueError:
        raise HTTPException(status_code=400, detail="Valid action (APPROVE or REJECT) is required")

    suggestion = db.query(EntitySuggestion).filter(EntitySuggestion.id == suggestion_id).first()
    if not suggestion:
        raise HTTPException(status_code=404, detail="Suggestion not found")

    status = SuggestionStatus.APPROVED if action == ReviewAction.APPROVE else SuggestionStatus.REJECTED
    updated = (
        db.query(EntitySuggestion)
        .filter(EntitySuggestion.id == suggestion_id, EntitySuggestion.status == SuggestionStatus.PENDING.value)
        .update(
            {
                EntitySuggestion.status: status.value,
                EntitySuggestion.reviewed_by: reviewer.id,
                EntitySuggestion.reviewed_at: utcnow(),
                EntitySuggestion.notes: data.notes or None,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise HTTPException(status_code=409, detail="Suggestion is already processed")

    entity = None
    if action == ReviewAction.APPROVE and data.create_entity:
        # approved suggestions go live immediately, owned by the reviewing admin
        entity = Entity(
            name=suggestion.name,
            slug=unique_slug(db, Entity, generate_slug(suggestion.name)),
            description=suggestion.description,
            address=suggestion.address,
            website=suggestion.website,
            status=EntityStatus.ACTIVE.value,
            entity_type=EntityType.COMMERCE.value,
            owner_id=reviewer.id,
        )
        db.add(entity)
    db.commit()
    logger.info("[moderation] suggestion %s %s by %s", suggestion_id, status.value.lower(), reviewer.id)

    db.refresh(suggestion)
    return {
        "suggestion": suggestion,
        "entity": get_entity(db, entity.id, locale) if entity else None,
    }
