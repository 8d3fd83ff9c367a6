"""Tests for the engine call metrics."""

import pytest

from recgate.api.metrics import EngineMetrics


def test_record_call_aggregates_latency():
    metrics = EngineMetrics()

    metrics.record_call("insert_user", 10.0)
    metrics.record_call("insert_user", 30.0, failed=True)

    assert metrics.get_metrics() == {
        "insert_user": {
            "calls": 2,
            "errors": 1,
            "average_latency_ms": 20.0,
            "min_latency_ms": 10.0,
            "max_latency_ms": 30.0,
        }
    }


def test_track_records_failures_and_reraises():
    metrics = EngineMetrics()

    with pytest.raises(ValueError):
        with metrics.track("get_recommend"):
            raise ValueError("engine said no")

    stats = metrics.get_metrics()["get_recommend"]
    assert stats["calls"] == 1
    assert stats["errors"] == 1


def test_reset_clears_metrics():
    metrics = EngineMetrics()
    with metrics.track("insert_item"):
        pass

    metrics.reset()

    assert metrics.get_metrics() == {}
