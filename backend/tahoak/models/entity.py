"""SQLAlchemy models for directory entities and their categories."""

from sqlalchemy import Column, String, Text, DateTime, Boolean, Float, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class Category(Base):
    __tablename__ = "category"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, nullable=False)
    description = Column(Text)
    name_translations = Column(JSON)  # {"en": "...", "es": "..."}
    description_translations = Column(JSON)
    featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)

    entities = relationship("Entity", back_populates="category")


class Entity(Base):
    __tablename__ = "entity"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    slug = Column(String(220), unique=True, nullable=False)
    description = Column(Text)
    address = Column(String(300))
    phone = Column(String(40))
    website = Column(String(300))
    email = Column(String(255))
    entity_type = Column(String(30), nullable=False, default="COMMERCE")
    status = Column(String(20), nullable=False, default="PENDING")  # ACTIVE/PENDING/INACTIVE
    featured = Column(Boolean, default=False)
    category_id = Column(String(32), ForeignKey("category.id", ondelete="SET NULL"), nullable=True)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=True)
    latitude = Column(Float)
    longitude = Column(Float)
    images = Column(JSON)  # {"logo": url, "hero": url}
    hours = Column(JSON)
    social_media = Column(JSON)
    name_translations = Column(JSON)
    description_translations = Column(JSON)
    seo_title_translations = Column(JSON)
    seo_description_translations = Column(JSON)
    spot_check_date = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    category = relationship("Category", back_populates="entities")
    owner = relationship("User", back_populates="owned_entities")
    tags = relationship("EntityTag", back_populates="entity", cascade="all, delete-orphan")
    pending_changes = relationship("PendingChange", back_populates="entity", cascade="all, delete-orphan")
    issue_reports = relationship("IssueReport", back_populates="entity", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_entity_status", "status", "created_at"),
        Index("idx_entity_owner", "owner_id"),
    )
