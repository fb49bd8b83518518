"""Profile model: the identity record shared by every role."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class UserRole(enum.StrEnum):
    DRIVER = "driver"
    RECRUITER = "recruiter"
    ADMIN = "admin"


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    role = Column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    phone = Column(String(50), nullable=True)
    location = Column(String(100), nullable=True)
    profile_image = Column(String(500), nullable=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    driver = relationship("Driver", back_populates="profile", uselist=False, cascade="all, delete-orphan")
    recruiter = relationship("Recruiter", back_populates="profile", uselist=False, cascade="all, delete-orphan")
