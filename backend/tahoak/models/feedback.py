"""SQLAlchemy models for public feedback: issue reports and new-entity suggestions."""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class IssueReport(Base):
    __tablename__ = "issue_report"

    id = Column(String(32), primary_key=True, default=new_id)
    entity_id = Column(String(32), ForeignKey("entity.id", ondelete="CASCADE"), nullable=False)
    issue_type = Column(String(30), nullable=False)  # INCORRECT_INFO/CLOSED/INELIGIBLE/OTHER
    description = Column(Text, nullable=False)
    submitter_email = Column(String(255), nullable=False)
    submitter_name = Column(String(100))
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING/RESOLVED/DISMISSED
    reviewed_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime)
    resolution = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    entity = relationship("Entity", back_populates="issue_reports")

    __table_args__ = (
        Index("idx_issue_report_status", "status", "created_at"),
    )


class EntitySuggestion(Base):
    __tablename__ = "entity_suggestion"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    address = Column(String(300))
    website = Column(String(300))
    submitter_email = Column(String(255), nullable=False)
    submitter_name = Column(String(100))
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING/APPROVED/REJECTED
    reviewed_by = Column(String(32), ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        Index("idx_entity_suggestion_status", "status", "created_at"),
    )
