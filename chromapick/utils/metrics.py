"""
Chromapick Metrics Collection
In-process counters, stage timings and per-extraction statistics.
"""
import time
from collections import Counter, defaultdict
from threading import Lock
from typing import Any, Dict, List, Optional

import numpy as np


def _summarize(values: List[float]) -> Dict[str, float]:
    """count/mean/min/max/p50/p95 of a series; empty series give {}."""
    if not values:
        return {}
    series = np.asarray(values, dtype=np.float64)
    p50, p95 = np.percentile(series, [50, 95])
    return {
        "count": int(series.size),
        "mean": float(series.mean()),
        "min": float(series.min()),
        "max": float(series.max()),
        "p50": float(p50),
        "p95": float(p95),
    }


class MetricsCollector:
    """Thread-safe metrics for the palette service."""

    def __init__(self):
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._extractions: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()

    def _increment(self, name: str):
        with self._lock:
            self._counters[name] += 1

    def increment_request_count(self):
        self._increment("palette_requests_total")

    def increment_empty_count(self):
        """Count extractions that produced no colors."""
        self._increment("palette_empty_total")

    def increment_swatch_count(self):
        self._increment("palette_swatch_total")

    def increment_failure_count(self, error_type: str):
        self._increment(f"palette_failed_total_{error_type}")

    def record_timing(self, stage: str, duration_ms: float):
        """Record how long a pipeline stage took."""
        with self._lock:
            self._timings[f"{stage}_duration_ms"].append(duration_ms)

    def record_extraction(self, palette_size: int, sampled_pixels: int,
                          accepted_pixels: int, bucket_count: int):
        """
        Record the shape of one finished extraction.

        ``accepted_ratio`` is the share of sampled pixels that survived the
        alpha and white/black filters; a run of low ratios points at inputs
        that are mostly transparent or blown out.
        """
        ratio = accepted_pixels / sampled_pixels if sampled_pixels else 0.0
        with self._lock:
            self._extractions["palette_size"].append(palette_size)
            self._extractions["accepted_ratio"].append(ratio)
            self._extractions["bucket_count"].append(bucket_count)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {name: _summarize(values) for name, values in self._timings.items()}

    def get_extraction_stats(self) -> Dict[str, Dict[str, float]]:
        """Distribution of palette size, accepted-pixel ratio and bucket count."""
        with self._lock:
            return {name: _summarize(values) for name, values in self._extractions.items()}

    def get_summary(self) -> Dict[str, Any]:
        return {
            "uptime_seconds": time.time() - self._start_time,
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "extraction_stats": self.get_extraction_stats()
        }

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._extractions.clear()
            self._start_time = time.time()


_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Process-wide collector, created on first use."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Clear the process-wide collector (tests)."""
    if _metrics is not None:
        _metrics.reset()
