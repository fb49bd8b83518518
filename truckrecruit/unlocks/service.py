"""Contact unlock service: quota-gated reveal of a driver's phone and email.

Every outcome is returned as an UnlockResult; store failures never escape.
"""

import logging
from uuid import UUID

from ..database.retry import is_transient, run_with_retry
from .results import DriverContact, QuotaSnapshot, UnlockResult, UnlockStatus
from .store import UnlockStore

logger = logging.getLogger(__name__)

_MESSAGES = {
    UnlockStatus.UNLOCKED: "Contact unlocked.",
    UnlockStatus.ALREADY_UNLOCKED: "Contact already unlocked; no quota used.",
    UnlockStatus.QUOTA_EXCEEDED: (
        "Contact limit reached for this billing period. "
        "Upgrade your plan or buy a pay-per-contact credit to unlock more drivers."
    ),
    UnlockStatus.DRIVER_NOT_FOUND: "Driver not found.",
    UnlockStatus.NOT_AUTHENTICATED: "Recruiter authentication required.",
    UnlockStatus.NO_SUBSCRIPTION: "No subscription found. Choose a plan to start unlocking contacts.",
    UnlockStatus.SUBSCRIPTION_INACTIVE: (
        "Your subscription is not active. Renew or upgrade your plan to unlock contacts."
    ),
    UnlockStatus.TRANSIENT_FAILURE: "The service is temporarily unavailable. Please try again.",
    UnlockStatus.INVARIANT_VIOLATION: "Subscription usage is inconsistent. Support has been notified.",
}


def _result(
    status: UnlockStatus,
    contact: DriverContact | None = None,
    quota: QuotaSnapshot | None = None,
) -> UnlockResult:
    return UnlockResult(status=status, contact=contact, quota=quota, message=_MESSAGES[status])


def _report_violation(recruiter_id: UUID, quota: QuotaSnapshot) -> UnlockResult:
    logger.critical(
        "DATA INTEGRITY: contacts_used=%d exceeds contacts_limit=%s for recruiter_id=%s",
        quota.contacts_used, quota.contacts_limit, recruiter_id,
    )
    return _result(UnlockStatus.INVARIANT_VIOLATION, quota=quota)


def unlock_contact(
    store: UnlockStore,
    recruiter_id: UUID | None,
    driver_id: UUID,
    *,
    attempts: int | None = None,
    delay_seconds: float | None = None,
) -> UnlockResult:
    """Unlock ``driver_id``'s contact details for ``recruiter_id``.

    Repeating an unlock for the same pair succeeds without consuming quota.
    The check-and-consume step is a single atomic store call; transient store
    failures retry it from scratch, first checking whether an earlier attempt
    already landed.
    """
    if not recruiter_id:
        return _result(UnlockStatus.NOT_AUTHENTICATED)

    retried = False

    def _on_retry(attempt: int, exc: BaseException) -> None:
        nonlocal retried
        retried = True
        store.rollback()

    try:
        quota = run_with_retry(
            lambda: store.get_quota(recruiter_id),
            attempts=attempts, delay_seconds=delay_seconds, on_retry=_on_retry,
        )
        if quota is None:
            return _result(UnlockStatus.NO_SUBSCRIPTION)
        if quota.violated:
            return _report_violation(recruiter_id, quota)

        contact = run_with_retry(
            lambda: store.get_driver_contact(driver_id),
            attempts=attempts, delay_seconds=delay_seconds, on_retry=_on_retry,
        )
        if contact is None:
            return _result(UnlockStatus.DRIVER_NOT_FOUND, quota=quota)

        retried = False

        def _attempt() -> UnlockStatus:
            if retried and store.is_unlocked(recruiter_id, driver_id):
                logger.info(
                    "Unlock already recorded before retry: recruiter_id=%s, driver_id=%s",
                    recruiter_id, driver_id,
                )
                return UnlockStatus.ALREADY_UNLOCKED
            return store.unlock(recruiter_id, driver_id)

        status = run_with_retry(
            _attempt, attempts=attempts, delay_seconds=delay_seconds, on_retry=_on_retry,
        )
        final_quota = store.get_quota(recruiter_id) or quota
    except Exception as exc:
        if not is_transient(exc):
            raise
        store.rollback()
        logger.error(
            "Unlock failed after retries: recruiter_id=%s, driver_id=%s: %s",
            recruiter_id, driver_id, exc,
        )
        return _result(UnlockStatus.TRANSIENT_FAILURE)

    if final_quota.violated:
        return _report_violation(recruiter_id, final_quota)

    if status == UnlockStatus.UNLOCKED:
        logger.info(
            "Contact unlocked: recruiter_id=%s, driver_id=%s, used=%d/%s",
            recruiter_id, driver_id, final_quota.contacts_used,
            final_quota.contacts_limit if final_quota.contacts_limit is not None else "unlimited",
        )
    elif status == UnlockStatus.QUOTA_EXCEEDED:
        logger.warning(
            "Quota exceeded: recruiter_id=%s, driver_id=%s, used=%d, limit=%s",
            recruiter_id, driver_id, final_quota.contacts_used, final_quota.contacts_limit,
        )

    if status in (UnlockStatus.UNLOCKED, UnlockStatus.ALREADY_UNLOCKED):
        return _result(status, contact=contact, quota=final_quota)
    return _result(status, quota=final_quota)


def is_contact_unlocked(store: UnlockStore, recruiter_id: UUID, driver_id: UUID) -> bool:
    return run_with_retry(lambda: store.is_unlocked(recruiter_id, driver_id), on_retry=lambda *_: store.rollback())


def get_unlocked_contact(store: UnlockStore, recruiter_id: UUID, driver_id: UUID) -> DriverContact | None:
    """Contact details for a driver this recruiter has already unlocked, else None."""
    if not is_contact_unlocked(store, recruiter_id, driver_id):
        return None
    return store.get_driver_contact(driver_id)


def list_unlocked_drivers(store: UnlockStore, recruiter_id: UUID) -> list[DriverContact]:
    driver_ids = run_with_retry(lambda: store.list_unlocked(recruiter_id), on_retry=lambda *_: store.rollback())
    contacts = []
    for driver_id in driver_ids:
        contact = store.get_driver_contact(driver_id)
        if contact is not None:
            contacts.append(contact)
    return contacts
