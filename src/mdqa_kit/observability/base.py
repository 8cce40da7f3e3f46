# src/mdqa_kit/observability/base.py

import threading
from collections import defaultdict
from typing import Protocol


class MetricsHook(Protocol):
    """Sink for pipeline metrics. Implementations must not raise."""

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


class InMemoryMetricsHook:
    """Keeps counters, gauges and latencies in dictionaries.

    Labels are ignored. Thread-safe. Useful for tests and one-off batch reports.
    """

    def __init__(self) -> None:
        self.counters: dict[str, int] = defaultdict(int)
        self.gauges: dict[str, float] = {}
        self.latencies: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            self.latencies[name].append(value_ms)

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            self.counters[name] += value

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        with self._lock:
            self.gauges[name] = value
