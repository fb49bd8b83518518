"""Tests for the database health monitor."""

import time
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from truckrecruit.monitoring.health import DatabaseHealthMonitor


class TestDatabaseHealthMonitor:
    def test_healthy_database(self, session_factory):
        monitor = DatabaseHealthMonitor(session_factory)
        sample = monitor.check()

        assert sample.connected
        assert sample.status == "ok"
        assert sample.latency_ms is not None
        assert monitor.last_sample is sample
        assert sample.to_dict()["error"] is None

    def test_unreachable_database(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("could not connect"))
        monitor = DatabaseHealthMonitor(MagicMock(return_value=session))

        sample = monitor.check()

        assert not sample.connected
        assert sample.status == "unreachable"
        assert "could not connect" in sample.error
        session.close.assert_called_once()

    def test_slow_query_logs_warning(self, session_factory, caplog):
        monitor = DatabaseHealthMonitor(session_factory, latency_warning_ms=-1)
        with caplog.at_level("WARNING"):
            sample = monitor.check()
        assert "High database latency" in caplog.text
        assert sample.connected
        assert sample.status == "slow"
        assert sample.to_dict()["status"] == "slow"

    def test_start_runs_first_check_and_stop_joins(self, session_factory):
        monitor = DatabaseHealthMonitor(session_factory, interval=3600)
        monitor.start()
        deadline = time.monotonic() + 5
        while monitor.last_sample is None and time.monotonic() < deadline:
            time.sleep(0.01)
        monitor.stop()

        assert monitor.last_sample is not None
        assert monitor._thread is None
