"""Recruiter subscription model."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Integer
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class SubscriptionType(enum.StrEnum):
    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"
    PAY_PER_CONTACT = "pay-per-contact"


class SubscriptionStatus(enum.StrEnum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    TRIAL = "trial"


# Statuses that may consume quota
CONSUMING_STATUSES = (SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIAL)


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recruiter_id = Column(
        UUID(as_uuid=True),
        ForeignKey("recruiters.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    type = Column(
        SQLEnum(SubscriptionType, name="subscription_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    status = Column(
        SQLEnum(SubscriptionStatus, name="subscription_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    contacts_limit = Column(Integer, nullable=True)  # NULL = unlimited
    contacts_used = Column(Integer, nullable=False, default=0)
    price_monthly = Column(Float, nullable=True)
    current_period_start = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    current_period_end = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    recruiter = relationship("Recruiter", back_populates="subscription")

    __table_args__ = (
        CheckConstraint("contacts_used >= 0", name="ck_subscriptions_used_non_negative"),
        CheckConstraint(
            "contacts_limit IS NULL OR contacts_used <= contacts_limit",
            name="ck_subscriptions_used_within_limit",
        ),
    )
