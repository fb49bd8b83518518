"""Bounded retry for store operations that are safe to repeat.

Only idempotent reads and single-transaction writes go through here.
Constraint violations are never retried.
"""

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from ..config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_transient(exc: BaseException) -> bool:
    """True for connectivity/timeout failures, False for data errors."""
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, (OperationalError, DisconnectionError, PoolTimeoutError)):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


def run_with_retry(
    operation: Callable[[], T],
    *,
    attempts: int | None = None,
    delay_seconds: float | None = None,
    on_retry: Callable[[int, BaseException], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation``, retrying transient failures with linear backoff.

    ``on_retry(attempt, exc)`` runs before each new attempt, typically to roll
    back the session. The last transient error is re-raised once attempts are
    exhausted; anything non-transient propagates immediately.
    """
    attempts = attempts if attempts is not None else settings.store_retry_attempts
    delay_seconds = delay_seconds if delay_seconds is not None else settings.store_retry_delay_seconds
    attempts = max(attempts, 1)

    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except Exception as exc:
            if not is_transient(exc) or attempt == attempts:
                raise
            wait = delay_seconds * attempt
            logger.warning(
                "Store operation failed (attempt %d/%d), retrying in %.2fs: %s",
                attempt, attempts, wait, exc,
            )
            if on_retry is not None:
                on_retry(attempt, exc)
            sleep(wait)
    raise AssertionError("unreachable")
