"""Value types returned by the contact-unlock operation."""

import enum
from dataclasses import dataclass
from uuid import UUID

from ..subscriptions.models import CONSUMING_STATUSES, SubscriptionStatus


class UnlockStatus(enum.StrEnum):
    UNLOCKED = "unlocked"
    ALREADY_UNLOCKED = "already_unlocked"
    QUOTA_EXCEEDED = "quota_exceeded"
    DRIVER_NOT_FOUND = "driver_not_found"
    NOT_AUTHENTICATED = "not_authenticated"
    NO_SUBSCRIPTION = "no_subscription"
    SUBSCRIPTION_INACTIVE = "subscription_inactive"
    TRANSIENT_FAILURE = "transient_failure"
    INVARIANT_VIOLATION = "invariant_violation"


SUCCESS_STATUSES = frozenset({UnlockStatus.UNLOCKED, UnlockStatus.ALREADY_UNLOCKED})


@dataclass(frozen=True)
class DriverContact:
    driver_id: UUID
    name: str
    phone: str | None
    email: str

    def to_dict(self) -> dict:
        return {"driver_id": str(self.driver_id), "name": self.name, "phone": self.phone, "email": self.email}


@dataclass(frozen=True)
class QuotaSnapshot:
    status: SubscriptionStatus
    contacts_limit: int | None
    contacts_used: int

    @property
    def unlimited(self) -> bool:
        return self.contacts_limit is None

    @property
    def remaining(self) -> int | None:
        if self.contacts_limit is None:
            return None
        return max(self.contacts_limit - self.contacts_used, 0)

    @property
    def can_consume(self) -> bool:
        return self.status in CONSUMING_STATUSES

    @property
    def violated(self) -> bool:
        return self.contacts_limit is not None and self.contacts_used > self.contacts_limit

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "contacts_limit": self.contacts_limit,
            "contacts_used": self.contacts_used,
            "remaining": self.remaining,
            "unlimited": self.unlimited,
        }


@dataclass(frozen=True)
class UnlockResult:
    status: UnlockStatus
    contact: DriverContact | None = None
    quota: QuotaSnapshot | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in SUCCESS_STATUSES

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "status": self.status.value,
            "message": self.message,
            "contact": self.contact.to_dict() if self.contact else None,
            "quota": self.quota.to_dict() if self.quota else None,
        }
