"""Periodic database connectivity and latency check."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthSample:
    connected: bool
    latency_ms: float | None
    checked_at: datetime
    error: str | None = None
    slow: bool = False

    @property
    def status(self) -> str:
        if not self.connected:
            return "unreachable"
        return "slow" if self.slow else "ok"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "checked_at": self.checked_at.isoformat(),
            "error": self.error,
        }


class DatabaseHealthMonitor:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        interval: float = 300.0,
        latency_warning_ms: float = 500.0,
    ) -> None:
        self._session_factory = session_factory
        self.interval = interval
        self.latency_warning_ms = latency_warning_ms
        self.last_sample: HealthSample | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def check(self) -> HealthSample:
        """Run ``SELECT 1`` and record connectivity and round-trip latency."""
        db = self._session_factory()
        started = time.perf_counter()
        try:
            db.execute(text("SELECT 1"))
            latency = round((time.perf_counter() - started) * 1000, 1)
            slow = latency > self.latency_warning_ms
            sample = HealthSample(connected=True, latency_ms=latency, checked_at=datetime.now(UTC), slow=slow)
            if slow:
                logger.warning("High database latency: %.1f ms", latency)
        except SQLAlchemyError as exc:
            sample = HealthSample(connected=False, latency_ms=None, checked_at=datetime.now(UTC), error=str(exc))
            logger.error("Database health check failed: %s", exc)
        finally:
            db.close()
        self.last_sample = sample
        return sample

    def _run(self) -> None:
        while not self._stop.is_set():
            self.check()
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="db-health-monitor")
        self._thread.start()
        logger.info("Database health monitor started (every %.0fs)", self.interval)

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=5)
        self._thread = None
