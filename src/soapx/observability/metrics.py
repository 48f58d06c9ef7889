"""In-process transport metrics.

Counters and histograms recorded by the transport executor, exportable in
Prometheus text format for hosts that scrape them.

Metrics:
    soapx_transport_attempts_total{status}: attempts by outcome (success/error)
    soapx_transport_retries_total: attempts after the first one of a call
    soapx_transport_exhausted_total: calls that failed on every attempt
    soapx_transport_request_duration_seconds{status}: wall time of a call

Example:
    >>> from soapx.observability.metrics import get_metrics
    >>> metrics = get_metrics()
    >>> metrics.increment_counter("soapx_transport_attempts_total", {"status": "success"})
    >>> metrics.get_counter("soapx_transport_attempts_total", {"status": "success"})
    1.0
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import ClassVar

LabelKey = tuple[tuple[str, str], ...]

DEFAULT_DURATION_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


@dataclass
class Counter:
    """Monotonically increasing value per label set."""

    name: str
    help_text: str
    values: dict[LabelKey, float] = field(default_factory=dict)

    def increment(self, labels: dict[str, str] | None = None, value: float = 1.0) -> None:
        key = _label_key(labels)
        self.values[key] = self.values.get(key, 0.0) + value


@dataclass
class Histogram:
    """Bucketed distribution per label set (non-cumulative counts internally)."""

    name: str
    help_text: str
    buckets: tuple[float, ...] = DEFAULT_DURATION_BUCKETS
    counts: dict[LabelKey, list[int]] = field(default_factory=dict)
    sums: dict[LabelKey, float] = field(default_factory=dict)
    totals: dict[LabelKey, int] = field(default_factory=dict)

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        key = _label_key(labels)
        bucket_counts = self.counts.setdefault(key, [0] * len(self.buckets))
        for index, bound in enumerate(self.buckets):
            if value <= bound:
                bucket_counts[index] += 1
                break
        self.sums[key] = self.sums.get(key, 0.0) + value
        self.totals[key] = self.totals.get(key, 0) + 1

    def count(self, labels: dict[str, str] | None = None) -> int:
        return self.totals.get(_label_key(labels), 0)

    def clear(self) -> None:
        self.counts.clear()
        self.sums.clear()
        self.totals.clear()


class MetricsCollector:
    """Thread-safe registry of the transport counters and histograms."""

    DEFAULT_COUNTERS: ClassVar[dict[str, str]] = {
        "soapx_transport_attempts_total": "Total number of transport attempts",
        "soapx_transport_retries_total": "Total number of attempts after the first of a call",
        "soapx_transport_exhausted_total": "Total number of calls that exhausted all attempts",
    }

    DEFAULT_HISTOGRAMS: ClassVar[dict[str, str]] = {
        "soapx_transport_request_duration_seconds": "Duration of transport calls in seconds",
    }

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters = {
            name: Counter(name=name, help_text=text) for name, text in self.DEFAULT_COUNTERS.items()
        }
        self._histograms = {
            name: Histogram(name=name, help_text=text)
            for name, text in self.DEFAULT_HISTOGRAMS.items()
        }

    def increment_counter(
        self, name: str, labels: dict[str, str] | None = None, value: float = 1.0
    ) -> None:
        with self._lock:
            if name in self._counters:
                self._counters[name].increment(labels, value)

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            if name in self._histograms:
                self._histograms[name].observe(value, labels)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> float:
        with self._lock:
            counter = self._counters.get(name)
            return counter.values.get(_label_key(labels), 0.0) if counter else 0.0

    def get_histogram_count(self, name: str, labels: dict[str, str] | None = None) -> int:
        with self._lock:
            histogram = self._histograms.get(name)
            return histogram.count(labels) if histogram else 0

    @staticmethod
    def _format_labels(key: LabelKey, extra: str = "") -> str:
        def escape(value: str) -> str:
            return value.replace("\\", "\\\\").replace('"', '\\"')

        parts = [f'{k}="{escape(v)}"' for k, v in key]
        if extra:
            parts.append(extra)
        return "{" + ",".join(parts) + "}" if parts else ""

    def export_prometheus(self) -> str:
        """Render all metrics in the Prometheus text exposition format."""
        lines: list[str] = []
        with self._lock:
            for counter in self._counters.values():
                lines.append(f"# HELP {counter.name} {counter.help_text}")
                lines.append(f"# TYPE {counter.name} counter")
                if not counter.values:
                    lines.append(f"{counter.name} 0")
                for key, value in counter.values.items():
                    lines.append(f"{counter.name}{self._format_labels(key)} {value}")

            for histogram in self._histograms.values():
                lines.append(f"# HELP {histogram.name} {histogram.help_text}")
                lines.append(f"# TYPE {histogram.name} histogram")
                for key, bucket_counts in histogram.counts.items():
                    cumulative = 0
                    for bound, bucket_count in zip(histogram.buckets, bucket_counts):
                        cumulative += bucket_count
                        le = self._format_labels(key, f'le="{bound}"')
                        lines.append(f"{histogram.name}_bucket{le} {cumulative}")
                    total = histogram.totals[key]
                    le = self._format_labels(key, 'le="+Inf"')
                    lines.append(f"{histogram.name}_bucket{le} {total}")
                    lines.append(f"{histogram.name}_sum{self._format_labels(key)} {histogram.sums[key]}")
                    lines.append(f"{histogram.name}_count{self._format_labels(key)} {total}")
        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        with self._lock:
            for counter in self._counters.values():
                counter.values.clear()
            for histogram in self._histograms.values():
                histogram.clear()


_metrics_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics() -> MetricsCollector:
    """Return the process-wide metrics collector."""
    global _metrics_collector
    with _collector_lock:
        if _metrics_collector is None:
            _metrics_collector = MetricsCollector()
        return _metrics_collector


def reset_metrics() -> None:
    """Reset the process-wide collector. Useful for testing."""
    with _collector_lock:
        if _metrics_collector is not None:
            _metrics_collector.reset()
