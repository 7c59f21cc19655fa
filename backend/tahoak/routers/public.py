"""Public API router: subscriptions, entity claims, issue reports and suggestions.

None of these endpoints require an account; identity is proven through
emailed magic links where it matters.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from tahoak.database import get_db
from tahoak.schemas.public import (
    ClaimRequest,
    ClaimVerifyOut,
    IssueReportCreate,
    IssueReportOut,
    ManageLinkRequest,
    MessageOut,
    PreferencesUpdate,
    SubscribeRequest,
    SubscriberPreferencesOut,
    SuggestionCreate,
    SuggestionOut,
)
from tahoak.services import claim_service, feedback_service, subscription_service

router = APIRouter(prefix="/api/public", tags=["public"])


@router.post("/subscribe", response_model=MessageOut)
def subscribe(data: SubscribeRequest, db: Session = Depends(get_db)):
    subscription_service.subscribe(db, data.email, data.preferences)
    return MessageOut(message="Verification email sent")


@router.get("/subscribe/verify", response_model=MessageOut)
def verify_subscription(token: Optional[str] = None, db: Session = Depends(get_db)):
    subscription_service.verify_subscription(db, token)
    return MessageOut(message="Subscription verified successfully")


@router.post("/subscribe/manage-link", response_model=MessageOut)
def request_manage_link(data: ManageLinkRequest, db: Session = Depends(get_db)):
    subscription_service.send_manage_link(db, data.email)
    return MessageOut(message="Preferences link sent")


@router.get("/subscribe/preferences", response_model=SubscriberPreferencesOut)
def get_preferences(token: Optional[str] = None, db: Session = Depends(get_db)):
    return subscription_service.get_preferences(db, token)


@router.put("/subscribe/preferences", response_model=SubscriberPreferencesOut)
def update_preferences(data: PreferencesUpdate, token: Optional[str] = None, db: Session = Depends(get_db)):
    return subscription_service.update_preferences(db, token, data.preferences)


@router.post("/subscribe/unsubscribe", response_model=MessageOut)
def unsubscribe(token: Optional[str] = None, db: Session = Depends(get_db)):
    subscription_service.unsubscribe(db, token)
    return MessageOut(message="Unsubscribed successfully")


@router.post("/claim-entity", response_model=MessageOut)
def claim_entity(data: ClaimRequest, db: Session = Depends(get_db)):
    claim_service.request_claim(db, data.email, data.entity_id)
    return MessageOut(message="Verification email sent")


@router.get("/claim/verify", response_model=ClaimVerifyOut)
def verify_claim(
    token: Optional[str] = None,
    entity_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return claim_service.verify_claim(db, token, entity_id)


@router.post("/report-issue", response_model=IssueReportOut, status_code=201)
def report_issue(data: IssueReportCreate, db: Session = Depends(get_db)):
    return feedback_service.create_issue_report(db, data)


@router.post("/suggest-entity", response_model=SuggestionOut, status_code=201)
def suggest_entity(data: SuggestionCreate, db: Session = Depends(get_db)):
    return feedback_service.create_suggestion(db, data)
