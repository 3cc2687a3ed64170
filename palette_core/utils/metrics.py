"""
Palette Core Metrics Collection
In-process counters and stage timings for conversion and extraction calls.
"""
import time
from collections import defaultdict, deque, Counter
from contextlib import contextmanager
from threading import Lock
from typing import Any, Deque, Dict, Optional, Sequence

import psutil
from loguru import logger

from palette_core.config import config


class MetricsCollector:
    """Simple in-process metrics collector."""

    def __init__(self, window: Optional[int] = None):
        """Initialize metrics collector."""
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        # timing series keep only the most recent `window` samples
        self._window = window or config.METRICS_WINDOW
        self._timings: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=self._window))
        self._peak_memory_mb: float = 0.0
        self._start_time = time.time()

    def increment_extraction_count(self):
        """Increment total extraction request counter."""
        with self._lock:
            self._counters["extraction_requests_total"] += 1

    def increment_fallback_count(self, reason: str):
        """Increment fallback palette counter, labelled by reason."""
        with self._lock:
            self._counters["extraction_fallback_total"] += 1
            self._counters[f"extraction_fallback_total_{reason}"] += 1

    def increment_suppressed_failure(self, error_type: str):
        """Count a failure swallowed at the extraction boundary."""
        with self._lock:
            self._counters["extraction_suppressed_failures_total"] += 1
            self._counters[f"extraction_suppressed_failures_total_{error_type}"] += 1

    def increment_conversion_count(self, target_space: str):
        """Increment conversion counter for a target color space."""
        with self._lock:
            self._counters[f"conversion_total_{target_space}"] += 1

    def record_iterations(self, iterations: int, converged: bool):
        """Record k-means iteration count for one clustering run."""
        with self._lock:
            self._timings["kmeans_iterations"].append(float(iterations))
            if not converged:
                self._counters["kmeans_iteration_cap_reached_total"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def record_memory(self, rss_mb: float):
        """Track peak resident memory seen by the monitor."""
        with self._lock:
            self._peak_memory_mb = max(self._peak_memory_mb, rss_mb)

    def get_counter(self, name: str) -> int:
        """Get a single counter value (0 when never incremented)."""
        with self._lock:
            return self._counters.get(name, 0)

    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics."""
        with self._lock:
            stats = {}
            for operation, series in self._timings.items():
                timings = list(series)
                if timings:
                    stats[operation] = {
                        "count": len(timings),
                        "mean": sum(timings) / len(timings),
                        "min": min(timings),
                        "max": max(timings),
                        "p50": self._percentile(timings, 50),
                        "p95": self._percentile(timings, 95)
                    }
            return stats

    def get_uptime_seconds(self) -> float:
        """Get collector uptime in seconds."""
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "peak_memory_mb": self._peak_memory_mb
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._peak_memory_mb = 0.0
            self._start_time = time.time()

    @staticmethod
    def _percentile(data: Sequence[float], percentile: int) -> float:
        """Calculate percentile of data."""
        if not data:
            return 0.0

        sorted_data = sorted(list(data))
        k = (len(sorted_data) - 1) * percentile / 100
        f = int(k)
        c = k - f

        if f + 1 < len(sorted_data):
            return sorted_data[f] + c * (sorted_data[f + 1] - sorted_data[f])
        else:
            return sorted_data[f]


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, **fields: Any):
    """Context manager timing a pipeline stage and logging its outcome."""
    if not config.METRICS_ENABLED:
        yield
        return

    start_time = time.time()
    start_memory = _rss_mb()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        duration_ms = (time.time() - start_time) * 1000
        memory_mb = max(_rss_mb(), start_memory)

        collector = get_metrics()
        collector.record_timing(operation_name, duration_ms)
        collector.record_memory(memory_mb)

        bound = logger.bind(**fields) if fields else logger
        if error_msg:
            bound.debug(f"Operation {operation_name} failed after {duration_ms:.1f}ms: {error_msg}")
        else:
            bound.debug(f"Operation {operation_name} completed in {duration_ms:.1f}ms "
                        f"(memory: {memory_mb:.1f}MB)")
