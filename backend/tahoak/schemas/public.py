"""Pydantic contracts for public flows: subscriptions, claims, issue reports, suggestions."""

from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime

from tahoak.schemas.entity import EntityIdentity, EntityOut


class MessageOut(BaseModel):
    message: str


class SubscribeRequest(BaseModel):
    email: str
    preferences: Optional[Dict[str, Any]] = None


class ManageLinkRequest(BaseModel):
    email: str


class PreferencesUpdate(BaseModel):
    preferences: Optional[Dict[str, Any]] = None


class SubscriberPreferencesOut(BaseModel):
    email: str
    preferences: Dict[str, Any] = {}
    verified: bool
    unsubscribed: bool


class SubscriberOut(BaseModel):
    id: str
    email: str
    verified: bool
    verified_at: Optional[datetime] = None
    preferences: Optional[Dict[str, Any]] = None
    unsubscribed: bool
    unsubscribed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ClaimRequest(BaseModel):
    email: str
    entity_id: str


class ClaimVerifyOut(BaseModel):
    email: str
    entity_id: str
    entity_name: str
    pending_change_id: str


class IssueReportCreate(BaseModel):
    entity_id: str
    issue_type: str
    description: str
    submitter_email: str
    submitter_name: Optional[str] = None


class IssueReportReview(BaseModel):
    action: Optional[str] = None
    resolution: Optional[str] = None


class IssueReportOut(BaseModel):
    id: str
    entity_id: str
    issue_type: str
    description: str
    submitter_email: str
    submitter_name: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    resolution: Optional[str] = None
    created_at: datetime
    entity: Optional[EntityIdentity] = None

    model_config = {"from_attributes": True}


class SuggestionCreate(BaseModel):
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    submitter_email: str
    submitter_name: Optional[str] = None


class SuggestionReview(BaseModel):
    action: Optional[str] = None
    notes: Optional[str] = None
    create_entity: bool = False


class SuggestionOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    submitter_email: str
    submitter_name: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SuggestionReviewOut(BaseModel):
    suggestion: SuggestionOut
    entity: Optional[EntityOut] = None
