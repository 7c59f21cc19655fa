"""SQLAlchemy model for directory user accounts."""

from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from tahoak.database import Base
from tahoak.utils.helpers import new_id, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100))
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=lambda: ["USER"])  # USER/BUSINESS_OWNER/ADMIN
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)

    owned_entities = relationship("Entity", back_populates="owner")

    def has_role(self, *roles: str) -> bool:
        held = set(self.roles or [])
        return any(str(getattr(role, "value", role)) in held for role in roles)
