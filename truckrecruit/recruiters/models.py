"""Recruiter profile model (role-specific extension of Profile)."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class Recruiter(Base):
    __tablename__ = "recruiters"

    id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    company_name = Column(String(100), nullable=False)
    company_size = Column(String(50), nullable=True)
    website = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    profile = relationship("Profile", back_populates="recruiter")
    subscription = relationship("Subscription", back_populates="recruiter", uselist=False, cascade="all, delete-orphan")
