"""Batched analytics event recording.

Events are queued in memory and written in batches by a background thread.
A failed write puts the batch back at the head of the queue for the next flush.
"""

import logging
import threading
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import AnalyticsEvent

logger = logging.getLogger(__name__)

MAX_QUEUED_EVENTS = 1000


class AnalyticsQueue:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        batch_size: int = 10,
        flush_interval: float = 5.0,
        enabled: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self.batch_size = max(batch_size, 1)
        self.flush_interval = flush_interval
        self.enabled = enabled
        self._queue: deque[dict] = deque()
        self._lock = threading.Lock()
        self._flush_lock = threading.Lock()
        self._wake = threading.Event()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def track(self, event_type: str, user_id: UUID | None = None, data: dict | None = None) -> None:
        if not self.enabled:
            return
        event = {
            "user_id": user_id,
            "event_type": event_type,
            "event_data": {**(data or {}), "timestamp": datetime.now(UTC).isoformat()},
            "created_at": datetime.now(UTC),
        }
        with self._lock:
            if len(self._queue) >= MAX_QUEUED_EVENTS:
                self._queue.popleft()
                logger.warning("Analytics queue full, dropping oldest event")
            self._queue.append(event)
            full = len(self._queue) >= self.batch_size
        if full:
            self._wake.set()

    def flush(self) -> int:
        """Write queued events in batches; returns how many were persisted."""
        if not self._flush_lock.acquire(blocking=False):
            return 0
        written = 0
        try:
            while True:
                with self._lock:
                    batch = [self._queue.popleft() for _ in range(min(self.batch_size, len(self._queue)))]
                if not batch:
                    break
                if not self._write(batch):
                    with self._lock:
                        self._queue.extendleft(reversed(batch))
                    break
                written += len(batch)
        finally:
            self._flush_lock.release()
        if written:
            logger.debug("Flushed %d analytics events", written)
        return written

    def _write(self, batch: list[dict]) -> bool:
        db = self._session_factory()
        try:
            db.add_all(AnalyticsEvent(**event) for event in batch)
            db.commit()
            return True
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Analytics flush failed, %d events re-queued: %s", len(batch), exc)
            return False
        finally:
            db.close()

    def _run(self) -> None:
        while not self._stop.is_set():
            self._wake.wait(self.flush_interval)
            self._wake.clear()
            self.flush()

    def start(self) -> None:
        if not self.enabled or self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="analytics-flusher")
        self._thread.start()
        logger.info("Analytics flusher started (batch=%d, interval=%.1fs)", self.batch_size, self.flush_interval)

    def stop(self) -> None:
        """Stop the worker and write whatever is still queued."""
        if self._thread is not None:
            self._stop.set()
            self._wake.set()
            self._thread.join(timeout=self.flush_interval + 5)
            self._thread = None
        self.flush()
