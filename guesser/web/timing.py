"""Latency tracking for turns and reasoning calls."""

import logging
import statistics
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Optional

logger = logging.getLogger(__name__)


class LatencyTracker:
    """Rolling latency window per stage."""

    def __init__(self, window_size: int = 100, slow_ms: float = 500.0):
        self.window_size = window_size
        self.slow_ms = slow_ms
        self._metrics: dict[str, deque[float]] = {}

    def record(self, stage: str, duration_ms: float, **metadata):
        """Record a timing measurement."""
        if stage not in self._metrics:
            self._metrics[stage] = deque(maxlen=self.window_size)
        self._metrics[stage].append(duration_ms)

        if duration_ms > self.slow_ms:
            meta_str = f" {metadata}" if metadata else ""
            logger.warning(f"SLOW: {stage} took {duration_ms:.1f}ms{meta_str}")

    def get_stats(self, stage: str) -> dict:
        """Get statistics for a stage."""
        if stage not in self._metrics or not self._metrics[stage]:
            return {}
        data = list(self._metrics[stage])
        return {
            "count": len(data),
            "mean_ms": round(statistics.mean(data), 2),
            "median_ms": round(statistics.median(data), 2),
            "p95_ms": round(sorted(data)[int(len(data) * 0.95)] if len(data) >= 20 else max(data), 2),
            "max_ms": round(max(data), 2),
            "min_ms": round(min(data), 2),
        }

    def get_all_stats(self) -> dict:
        """Get statistics for all tracked stages."""
        return {stage: self.get_stats(stage) for stage in self._metrics}

    def reset(self):
        self._metrics.clear()


# Global tracker instance
_tracker: Optional[LatencyTracker] = None


def get_tracker() -> LatencyTracker:
    """Get or create the global latency tracker."""
    global _tracker
    if _tracker is None:
        _tracker = LatencyTracker()
    return _tracker


@asynccontextmanager
async def timed_async(stage: str, **metadata):
    """Context manager for timing async operations, failed ones included."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        get_tracker().record(stage, duration_ms, **metadata)
