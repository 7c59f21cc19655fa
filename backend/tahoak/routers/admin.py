"""Admin API router: dashboard, users, catalogue maintenance, entity review and public feedback."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from tahoak.database import get_db
from tahoak.schemas.admin import AdminStatsOut
from tahoak.schemas.entity import AdminEntityUpdate, CategoryCreate, CategoryFeaturedUpdate, CategoryOut, EntityOut
from tahoak.schemas.public import (
    IssueReportOut,
    IssueReportReview,
    SubscriberOut,
    SuggestionOut,
    SuggestionReview,
    SuggestionReviewOut,
)
from tahoak.schemas.tag import EntityTagOut, TagCreate, TagOut
from tahoak.schemas.user import UserOut, UserUpdate
from tahoak.services import (
    admin_service,
    category_service,
    feedback_service,
    subscription_service,
    tag_service,
    user_service,
)
from tahoak.middleware.auth_middleware import require_roles
from tahoak.models.enums import Role
from tahoak.models.user import User
from tahoak.utils.translations import get_locale_from_request

router = APIRouter(prefix="/api/admin", tags=["admin"])

admin_only = require_roles(Role.ADMIN)


@router.get("/stats", response_model=AdminStatsOut)
def stats(db: Session = Depends(get_db), _admin: User = Depends(admin_only)):
    return admin_service.get_stats(db)


# Users

@router.get("/users", response_model=List[UserOut])
def list_users(
    search: Optional[str] = None,
    role: Optional[str] = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return user_service.get_users(db, search=search, role=role)


@router.put("/users/{user_id}", response_model=UserOut)
def update_user(user_id: str, data: UserUpdate, db: Session = Depends(get_db), _admin: User = Depends(admin_only)):
    return user_service.update_user(db, user_id, data)


# Categories and tags

@router.post("/categories", response_model=CategoryOut, status_code=201)
def create_category(
    data: CategoryCreate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return category_service.create_category(db, data, locale)


@router.put("/categories/{category_id}", response_model=CategoryOut)
def set_category_featured(
    category_id: str,
    data: CategoryFeaturedUpdate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return category_service.set_featured(db, category_id, data.featured, locale)


@router.post("/tags", response_model=TagOut, status_code=201)
def create_tag(
    data: TagCreate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return tag_service.create_tag(db, data, locale)


@router.delete("/tags/{tag_id}")
def delete_tag(tag_id: str, db: Session = Depends(get_db), _admin: User = Depends(admin_only)):
    removed = tag_service.delete_tag(db, tag_id)
    return {"message": "Tag deleted", "removed_assignments": removed}


@router.get("/entity-tags", response_model=List[EntityTagOut])
def list_entity_tags(
    verified: Optional[bool] = None,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return tag_service.get_entity_tag_assignments(db, locale, verified=verified)


@router.put("/entity-tags/{entity_tag_id}/verify", response_model=EntityTagOut)
def verify_entity_tag(
    entity_tag_id: str,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return tag_service.verify_entity_tag(db, entity_tag_id, locale)


# Entities

@router.get("/entities", response_model=List[EntityOut])
def list_entities(
    status: Optional[str] = None,
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    entity_type: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return admin_service.list_entities(
        db,
        locale,
        status=status,
        search=search,
        category_id=category_id,
        entity_type=entity_type,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.put("/entities/{entity_id}", response_model=EntityOut)
def update_entity(
    entity_id: str,
    data: AdminEntityUpdate,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return admin_service.update_entity(db, entity_id, data, locale)


@router.get("/spot-checks", response_model=List[EntityOut])
def spot_checks(
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return admin_service.get_spot_checks(db, locale)


@router.put("/entities/{entity_id}/spot-check", response_model=EntityOut)
def mark_spot_checked(
    entity_id: str,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return admin_service.mark_spot_checked(db, entity_id, locale)


# Public feedback

@router.get("/issue-reports", response_model=List[IssueReportOut])
def list_issue_reports(status: Optional[str] = None, db: Session = Depends(get_db), _admin: User = Depends(admin_only)):
    return feedback_service.list_issue_reports(db, status=status)


@router.put("/issue-reports/{report_id}", response_model=IssueReportOut)
def review_issue_report(
    report_id: str,
    data: IssueReportReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return feedback_service.review_issue_report(db, report_id, data, current_user)


@router.get("/suggestions", response_model=List[SuggestionOut])
def list_suggestions(status: Optional[str] = None, db: Session = Depends(get_db), _admin: User = Depends(admin_only)):
    return feedback_service.list_suggestions(db, status=status)


@router.put("/suggestions/{suggestion_id}", response_model=SuggestionReviewOut)
def review_suggestion(
    suggestion_id: str,
    data: SuggestionReview,
    locale: str = Depends(get_locale_from_request),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    return feedback_service.review_suggestion(db, suggestion_id, data, current_user, locale)


@router.get("/subscribers", response_model=List[SubscriberOut])
def list_subscribers(
    filter_by: str = Query("all", alias="filter"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    _admin: User = Depends(admin_only),
):
    return subscription_service.list_subscribers(db, filter_by=filter_by, search=search)
