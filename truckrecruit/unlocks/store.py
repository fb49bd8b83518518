"""Backing-store contract for contact unlocks, with Protocol pattern for dependency injection.

Provides SqlUnlockStore (database) and InMemoryUnlockStore (tests, demos).
``unlock`` is the only write and must be atomic: the unlock row and the
usage increment land together or not at all.
"""

import threading
import uuid
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth.models import Profile
from ..drivers.models import Driver
from ..subscriptions.models import CONSUMING_STATUSES, Subscription, SubscriptionStatus
from .models import ContactUnlock
from .results import DriverContact, QuotaSnapshot, UnlockStatus


class UnlockStore(Protocol):
    """Unlock store interface."""

    def get_quota(self, recruiter_id: UUID) -> QuotaSnapshot | None: ...
    def get_driver_contact(self, driver_id: UUID) -> DriverContact | None: ...
    def is_unlocked(self, recruiter_id: UUID, driver_id: UUID) -> bool: ...
    def unlock(self, recruiter_id: UUID, driver_id: UUID) -> UnlockStatus: ...
    def list_unlocked(self, recruiter_id: UUID) -> list[UUID]: ...
    def rollback(self) -> None: ...


class SqlUnlockStore:
    """Database-backed store.

    The unique constraint on (recruiter_id, driver_id) decides idempotence and a
    guarded UPDATE decides the quota, both inside one transaction.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_quota(self, recruiter_id: UUID) -> QuotaSnapshot | None:
        row = self._db.execute(
            select(Subscription.status, Subscription.contacts_limit, Subscription.contacts_used).where(
                Subscription.recruiter_id == recruiter_id
            )
        ).first()
        if row is None:
            return None
        return QuotaSnapshot(
            status=SubscriptionStatus(row.status),
            contacts_limit=row.contacts_limit,
            contacts_used=row.contacts_used or 0,
        )

    def get_driver_contact(self, driver_id: UUID) -> DriverContact | None:
        row = self._db.execute(
            select(Driver.id, Profile.name, Profile.phone, Profile.email)
            .join(Profile, Profile.id == Driver.id)
            .where(Driver.id == driver_id, Profile.is_active.is_(True))
        ).first()
        if row is None:
            return None
        return DriverContact(driver_id=row.id, name=row.name, phone=row.phone, email=row.email)

    def is_unlocked(self, recruiter_id: UUID, driver_id: UUID) -> bool:
        return (
            self._db.execute(
                select(ContactUnlock.id).where(
                    ContactUnlock.recruiter_id == recruiter_id,
                    ContactUnlock.driver_id == driver_id,
                )
            ).first()
            is not None
        )

    def list_unlocked(self, recruiter_id: UUID) -> list[UUID]:
        return list(
            self._db.execute(
                select(ContactUnlock.driver_id)
                .where(ContactUnlock.recruiter_id == recruiter_id)
                .order_by(ContactUnlock.unlocked_at.desc())
            ).scalars()
        )

    def unlock(self, recruiter_id: UUID, driver_id: UUID) -> UnlockStatus:
        db = self._db
        try:
            try:
                db.add(
                    ContactUnlock(
                        id=uuid.uuid4(),
                        recruiter_id=recruiter_id,
                        driver_id=driver_id,
                        unlocked_at=datetime.now(UTC),
                    )
                )
                db.flush()
            except IntegrityError:
                db.rollback()
                if self.is_unlocked(recruiter_id, driver_id):
                    return UnlockStatus.ALREADY_UNLOCKED
                # FK violation: the driver disappeared after the existence check
                return UnlockStatus.DRIVER_NOT_FOUND

            # deactivated between the contact lookup and this transaction
            if self.get_driver_contact(driver_id) is None:
                db.rollback()
                return UnlockStatus.DRIVER_NOT_FOUND

            consumed = db.execute(
                update(Subscription)
                .where(
                    Subscription.recruiter_id == recruiter_id,
                    Subscription.status.in_(CONSUMING_STATUSES),
                    or_(
                        Subscription.contacts_limit.is_(None),
                        Subscription.contacts_used < Subscription.contacts_limit,
                    ),
                )
                .values(contacts_used=Subscription.contacts_used + 1, updated_at=datetime.now(UTC))
                .execution_options(synchronize_session=False)
            ).rowcount

            if consumed != 1:
                db.rollback()
                return self._refusal(recruiter_id)

            db.commit()
            return UnlockStatus.UNLOCKED
        except Exception:
            db.rollback()
            raise

    def rollback(self) -> None:
        self._db.rollback()

    def _refusal(self, recruiter_id: UUID) -> UnlockStatus:
        quota = self.get_quota(recruiter_id)
        if quota is None:
            return UnlockStatus.NO_SUBSCRIPTION
        if not quota.can_consume:
            return UnlockStatus.SUBSCRIPTION_INACTIVE
        return UnlockStatus.QUOTA_EXCEEDED


class InMemoryUnlockStore:
    """Process-local store; a lock makes check-and-increment atomic."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._quotas: dict[UUID, dict] = {}
        self._drivers: dict[UUID, DriverContact] = {}
        self._unlocks: dict[tuple[UUID, UUID], datetime] = {}

    def add_subscription(
        self,
        recruiter_id: UUID,
        contacts_limit: int | None,
        contacts_used: int = 0,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    ) -> None:
        with self._lock:
            self._quotas[recruiter_id] = {
                "status": SubscriptionStatus(status),
                "contacts_limit": contacts_limit,
                "contacts_used": contacts_used,
            }

    def add_driver(self, driver_id: UUID, name: str, email: str, phone: str | None = None) -> None:
        with self._lock:
            self._drivers[driver_id] = DriverContact(driver_id=driver_id, name=name, phone=phone, email=email)

    def get_quota(self, recruiter_id: UUID) -> QuotaSnapshot | None:
        with self._lock:
            q = self._quotas.get(recruiter_id)
            return QuotaSnapshot(**q) if q else None

    def get_driver_contact(self, driver_id: UUID) -> DriverContact | None:
        return self._drivers.get(driver_id)

    def is_unlocked(self, recruiter_id: UUID, driver_id: UUID) -> bool:
        with self._lock:
            return (recruiter_id, driver_id) in self._unlocks

    def list_unlocked(self, recruiter_id: UUID) -> list[UUID]:
        with self._lock:
            pairs = [(at, d) for (r, d), at in self._unlocks.items() if r == recruiter_id]
        return [d for _, d in sorted(pairs, key=lambda p: p[0], reverse=True)]

    def unlock(self, recruiter_id: UUID, driver_id: UUID) -> UnlockStatus:
        with self._lock:
            if (recruiter_id, driver_id) in self._unlocks:
                return UnlockStatus.ALREADY_UNLOCKED
            if driver_id not in self._drivers:
                return UnlockStatus.DRIVER_NOT_FOUND
            q = self._quotas.get(recruiter_id)
            if q is None:
                return UnlockStatus.NO_SUBSCRIPTION
            if q["status"] not in CONSUMING_STATUSES:
                return UnlockStatus.SUBSCRIPTION_INACTIVE
            limit = q["contacts_limit"]
            if limit is not None and q["contacts_used"] >= limit:
                return UnlockStatus.QUOTA_EXCEEDED
            self._unlocks[(recruiter_id, driver_id)] = datetime.now(UTC)
            q["contacts_used"] += 1
            return UnlockStatus.UNLOCKED

    def rollback(self) -> None:
        pass
