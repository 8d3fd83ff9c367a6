"""Metrics for engine calls made by the gateway.

Tracks, per engine operation, how many calls were made, how many failed and
how long they took.
"""

import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator


class _OperationStats:
    __slots__ = ("calls", "errors", "total_latency_ms", "min_latency_ms", "max_latency_ms")

    def __init__(self) -> None:
        self.calls = 0
        self.errors = 0
        self.total_latency_ms = 0.0
        self.min_latency_ms = float("inf")
        self.max_latency_ms = 0.0


class EngineMetrics:
    """Thread-safe counters and latency tracking for engine calls.

    One instance is created per application and shared by all handlers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats: Dict[str, _OperationStats] = {}

    def record_call(self, operation: str, latency_ms: float, failed: bool = False) -> None:
        """Record an engine call with its latency.

        Args:
            operation: Engine operation name, e.g. ``insert_user``
            latency_ms: Latency in milliseconds
            failed: Whether the call raised
        """
        with self._lock:
            stats = self._stats.setdefault(operation, _OperationStats())
            stats.calls += 1
            if failed:
                stats.errors += 1
            stats.total_latency_ms += latency_ms
            stats.min_latency_ms = min(stats.min_latency_ms, latency_ms)
            stats.max_latency_ms = max(stats.max_latency_ms, latency_ms)

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """Time the enclosed engine call and record it, failed or not."""
        start = time.perf_counter()
        failed = False
        try:
            yield
        except Exception:
            failed = True
            raise
        finally:
            self.record_call(operation, (time.perf_counter() - start) * 1000, failed=failed)

    def get_metrics(self) -> Dict[str, Dict]:
        """Get current metrics.

        Returns:
            Dictionary keyed by operation, each with:
            - calls: Total number of engine calls
            - errors: Number of calls that raised
            - average_latency_ms: Average latency in milliseconds
            - min_latency_ms: Minimum latency observed
            - max_latency_ms: Maximum latency observed
        """
        with self._lock:
            return {
                operation: {
                    "calls": stats.calls,
                    "errors": stats.errors,
                    "average_latency_ms": round(stats.total_latency_ms / stats.calls, 2),
                    "min_latency_ms": round(stats.min_latency_ms, 2),
                    "max_latency_ms": round(stats.max_latency_ms, 2),
                }
                for operation, stats in self._stats.items()
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._stats.clear()
