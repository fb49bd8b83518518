"""Tests for batched analytics recording."""

import uuid
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from truckrecruit.analytics.models import AnalyticsEvent
from truckrecruit.analytics.service import AnalyticsQueue


def _failing_factory():
    session = MagicMock()
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))
    return MagicMock(return_value=session)


class TestAnalyticsQueue:
    def test_flush_writes_in_batches(self, db_session, session_factory):
        queue = AnalyticsQueue(session_factory, batch_size=2)
        user_id = uuid.uuid4()
        for i in range(5):
            queue.track("candidate_search", user_id=user_id, data={"page": i})

        assert len(queue) == 5
        assert queue.flush() == 5
        assert len(queue) == 0

        events = db_session.query(AnalyticsEvent).all()
        assert len(events) == 5
        assert {e.event_type for e in events} == {"candidate_search"}
        assert all("timestamp" in e.event_data for e in events)

    def test_failed_batch_is_requeued_in_order(self):
        queue = AnalyticsQueue(_failing_factory(), batch_size=2)
        for name in ("first", "second", "third"):
            queue.track(name)

        assert queue.flush() == 0
        assert len(queue) == 3
        assert [e["event_type"] for e in queue._queue] == ["first", "second", "third"]

    def test_disabled_queue_drops_events(self, session_factory):
        queue = AnalyticsQueue(session_factory, enabled=False)
        queue.track("contact_unlocked")
        assert len(queue) == 0
        queue.start()
        assert queue._thread is None

    def test_oldest_events_dropped_when_full(self, session_factory):
        queue = AnalyticsQueue(session_factory, batch_size=10_000)
        with patch("truckrecruit.analytics.service.MAX_QUEUED_EVENTS", 3):
            for i in range(5):
                queue.track(f"event-{i}")
        assert [e["event_type"] for e in queue._queue] == ["event-2", "event-3", "event-4"]

    def test_stop_flushes_pending_events(self, db_session, session_factory):
        queue = AnalyticsQueue(session_factory, batch_size=100, flush_interval=60)
        queue.start()
        queue.track("login")
        queue.track("logout")
        queue.stop()

        assert len(queue) == 0
        assert db_session.query(AnalyticsEvent).count() == 2

    def test_full_batch_wakes_worker(self, db_session, session_factory):
        queue = AnalyticsQueue(session_factory, batch_size=2, flush_interval=60)
        queue.track("a")
        assert not queue._wake.is_set()
        queue.track("b")
        assert queue._wake.is_set()
