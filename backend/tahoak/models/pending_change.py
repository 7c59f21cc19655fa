"""SQLAlchemy model for proposed entity changes awaiting admin review."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class PendingChange(Base):
    __tablename__ = "pending_change"

    id = Column(String(32), primary_key=True, default=new_id)
    entity_id = Column(String(32), ForeignKey("entity.id", ondelete="CASCADE"), nullable=False)
    change_type = Column(String(20), nullable=False)  # UPDATE_ENTITY/ADD_TAG/REMOVE_TAG/UPDATE_IMAGE
    field_name = Column(String(100))
    old_value = Column(JSON)
    new_value = Column(JSON, nullable=False)
    submitted_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    submitter_email = Column(String(255))
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING/APPROVED/REJECTED
    reviewed_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    entity = relationship("Entity", back_populates="pending_changes")

    __table_args__ = (
        Index("idx_pending_change_status", "status", "created_at"),
        Index("idx_pending_change_entity", "entity_id"),
    )
