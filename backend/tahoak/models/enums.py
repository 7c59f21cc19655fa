"""Closed value sets shared by models, schemas and services.

Values are the exact strings exchanged over the wire and stored in the database.
"""

import enum


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    BUSINESS_OWNER = "BUSINESS_OWNER"


class EntityStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class EntityType(str, enum.Enum):
    COMMERCE = "COMMERCE"
    CIVIC = "CIVIC"
    ADVOCACY = "ADVOCACY"
    PUBLIC_SPACE = "PUBLIC_SPACE"
    NON_PROFIT = "NON_PROFIT"
    EVENT = "EVENT"
    SERVICE_PROVIDER = "SERVICE_PROVIDER"


class TagCategory(str, enum.Enum):
    IDENTITY = "IDENTITY"
    FRIENDLINESS = "FRIENDLINESS"
    AMENITY = "AMENITY"


class ChangeType(str, enum.Enum):
    UPDATE_ENTITY = "UPDATE_ENTITY"
    ADD_TAG = "ADD_TAG"
    REMOVE_TAG = "REMOVE_TAG"
    UPDATE_IMAGE = "UPDATE_IMAGE"


class ChangeStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReviewAction(str, enum.Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class SuggestionStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class IssueType(str, enum.Enum):
    INCORRECT_INFO = "INCORRECT_INFO"
    CLOSED = "CLOSED"
    INELIGIBLE = "INELIGIBLE"
    OTHER = "OTHER"


class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


class ReportAction(str, enum.Enum):
    RESOLVE = "RESOLVE"
    DISMISS = "DISMISS"


class MagicLinkPurpose(str, enum.Enum):
    VERIFY_SUBSCRIPTION = "VERIFY_SUBSCRIPTION"
    MANAGE_PREFERENCES = "MANAGE_PREFERENCES"
    CLAIM_ENTITY = "CLAIM_ENTITY"
