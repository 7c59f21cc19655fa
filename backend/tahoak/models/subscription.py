"""SQLAlchemy models for newsletter subscribers and emailed magic links."""

from sqlalchemy import Column, String, DateTime, Boolean, Index, JSON
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class Subscriber(Base):
    __tablename__ = "subscriber"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False)
    preferences = Column(JSON, default=dict)
    verified = Column(Boolean, nullable=False, default=False)
    verified_at = Column(DateTime)
    unsubscribed = Column(Boolean, nullable=False, default=False)
    unsubscribed_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class MagicLink(Base):
    __tablename__ = "magic_link"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False)
    token = Column(String(128), unique=True, nullable=False)
    purpose = Column(String(30), nullable=False)  # VERIFY_SUBSCRIPTION/MANAGE_PREFERENCES/CLAIM_ENTITY
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, nullable=False, default=False)
    used_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        Index("idx_magic_link_email", "email"),
    )
