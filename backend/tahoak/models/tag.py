"""SQLAlchemy models for tags and entity tag assignments."""

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Index, UniqueConstraint, JSON
from sqlalchemy.orm import relationship
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class Tag(Base):
    __tablename__ = "tag"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, nullable=False)
    name_translations = Column(JSON)
    category = Column(String(20), nullable=False)  # IDENTITY/FRIENDLINESS/AMENITY
    created_at = Column(DateTime, default=utcnow)

    entities = relationship("EntityTag", back_populates="tag", cascade="all, delete-orphan")


class EntityTag(Base):
    __tablename__ = "entity_tag"

    id = Column(String(32), primary_key=True, default=new_id)
    entity_id = Column(String(32), ForeignKey("entity.id", ondelete="CASCADE"), nullable=False)
    tag_id = Column(String(32), ForeignKey("tag.id", ondelete="CASCADE"), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    entity = relationship("Entity", back_populates="tags")
    tag = relationship("Tag", back_populates="entities")

    __table_args__ = (
        UniqueConstraint("entity_id", "tag_id", name="uq_entity_tag_entity_tag"),
        Index("idx_entity_tag_tag", "tag_id"),
    )
