"""SQLAlchemy model package."""

from tahoak.models.user import User
from tahoak.models.entity import Category, Entity
from tahoak.models.tag import Tag, EntityTag
from tahoak.models.pending_change import PendingChange
from tahoak.models.subscription import Subscriber, MagicLink
from tahoak.models.feedback import IssueReport, EntitySuggestion

__all__ = [
    "User",
    "Category", "Entity",
    "Tag", "EntityTag",
    "PendingChange",
    "Subscriber", "MagicLink",
    "IssueReport", "EntitySuggestion",
]
