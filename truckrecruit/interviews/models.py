"""Interview scheduling model."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID

from ..database.base import Base


class InterviewType(enum.StrEnum):
    PHONE = "phone"
    VIDEO = "video"
    IN_PERSON = "in-person"


class InterviewStatus(enum.StrEnum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recruiter_id = Column(UUID(as_uuid=True), ForeignKey("recruiters.id", ondelete="CASCADE"), nullable=False)
    driver_id = Column(UUID(as_uuid=True), ForeignKey("drivers.id", ondelete="CASCADE"), nullable=False)
    application_id = Column(
        UUID(as_uuid=True),
        ForeignKey("applications.id", ondelete="SET NULL"),
        nullable=True,
    )

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=30)
    type = Column(
        SQLEnum(InterviewType, name="interview_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    status = Column(
        SQLEnum(InterviewStatus, name="interview_status", values_callable=lambda e: [m.value for m in e]),
        default=InterviewStatus.SCHEDULED,
        nullable=False,
    )
    meeting_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        Index("idx_interviews_scheduled", "scheduled_at"),
        Index("idx_interviews_recruiter", "recruiter_id"),
        Index("idx_interviews_driver", "driver_id"),
    )
