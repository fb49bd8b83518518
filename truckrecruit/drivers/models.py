"""Driver profile model (role-specific extension of Profile)."""

import enum
from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class Availability(enum.StrEnum):
    AVAILABLE = "available"
    EMPLOYED = "employed"
    SEEKING = "seeking"


class Driver(Base):
    __tablename__ = "drivers"

    id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True)
    experience_years = Column(Integer, default=0, nullable=False)
    license_types = Column(JSON, default=list)
    twic_card = Column(Boolean, default=False)
    hazmat_endorsement = Column(Boolean, default=False)
    availability = Column(
        SQLEnum(Availability, name="availability_status", values_callable=lambda e: [m.value for m in e]),
        default=Availability.AVAILABLE,
        nullable=False,
    )
    preferred_routes = Column(JSON, default=list)
    equipment_experience = Column(JSON, default=list)
    fit_score = Column(Float, default=0.0, nullable=False)  # 0-10, computed elsewhere
    profile_completion = Column(Integer, default=0, nullable=False)  # percentage
    documents_verified = Column(Boolean, default=False)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    profile = relationship("Profile", back_populates="driver")

    __table_args__ = (
        CheckConstraint("fit_score >= 0 AND fit_score <= 10", name="ck_drivers_fit_score_range"),
        CheckConstraint("profile_completion >= 0 AND profile_completion <= 100", name="ck_drivers_completion_range"),
        Index("idx_drivers_fit_score", "fit_score"),
        Index("idx_drivers_availability", "availability"),
    )
