"""
Tests for performance monitoring.
"""

import asyncio
import logging

import pytest

import config
from utils import performance
from utils.performance import PerformanceMonitor, monitor_performance


class RecordingMonitor(PerformanceMonitor):
    """Monitor that keeps the operations it was given."""

    def __init__(self):
        super().__init__()
        self.operations = []

    def record(self, operation, duration):
        self.operations.append(operation)
        super().record(operation, duration)


@pytest.fixture
def recorder(monkeypatch):
    monitor = RecordingMonitor()
    monkeypatch.setattr(performance, "performance_monitor", monitor)
    return monitor


class TestPerformanceMonitor:
    """Test slow-operation logging."""

    def test_default_threshold(self):
        assert PerformanceMonitor().threshold == config.SLOW_OPERATION_SECONDS

    def test_slow_operation_is_logged(self, caplog):
        monitor = PerformanceMonitor(threshold=1.0)
        with caplog.at_level(logging.WARNING, logger="utils.performance"):
            monitor.record("snapshot_upload", 5.0)
        assert "snapshot_upload" in caplog.text
        assert "threshold: 1.0s" in caplog.text

    def test_fast_operation_is_not_a_warning(self, caplog):
        monitor = PerformanceMonitor(threshold=1.0)
        with caplog.at_level(logging.DEBUG, logger="utils.performance"):
            monitor.record("dataset_load", 0.01)
        assert [r.levelno for r in caplog.records] == [logging.DEBUG]


class TestMonitorDecorator:
    """Test the decorator on plain and coroutine functions."""

    def test_sync_function(self, recorder):
        @monitor_performance("test_sync_op")
        def add(a, b):
            return a + b

        assert add(1, 2) == 3
        assert recorder.operations == ["test_sync_op"]

    def test_coroutine_function(self, recorder):
        @monitor_performance("test_async_op")
        async def fetch():
            await asyncio.sleep(0)
            return b"data"

        assert asyncio.run(fetch()) == b"data"
        assert recorder.operations == ["test_async_op"]

    def test_records_failures(self, recorder):
        @monitor_performance("test_failing_op")
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()
        assert recorder.operations == ["test_failing_op"]

    def test_default_name(self, recorder):
        @monitor_performance()
        def unnamed_operation():
            return None

        unnamed_operation()
        assert recorder.operations == ["unnamed_operation"]

    def test_slow_call_is_logged(self, monkeypatch, caplog):
        monkeypatch.setattr(performance, "performance_monitor", PerformanceMonitor(threshold=-1.0))

        @monitor_performance("export_to_json")
        def export():
            return None

        with caplog.at_level(logging.WARNING, logger="utils.performance"):
            export()
        assert "export_to_json" in caplog.text
