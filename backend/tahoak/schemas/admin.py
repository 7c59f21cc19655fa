"""Pydantic contracts for the admin dashboard."""

from pydantic import BaseModel


class EntityCounts(BaseModel):
    total: int
    active: int
    pending: int
    inactive: int


class UserCounts(BaseModel):
    total: int
    user: int
    business_owner: int
    admin: int


class AdminStatsOut(BaseModel):
    entities: EntityCounts
    users: UserCounts
    pending_changes: int
    pending_suggestions: int
    pending_issue_reports: int
    unverified_tags: int
