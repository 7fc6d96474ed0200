"""
Metrics Collection
Prometheus metrics for design edits, translation and HTTP traffic
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the service.
    """

    def __init__(self) -> None:
        # Engine metrics
        self.commands_total = Counter(
            "shaper_commands_total",
            "Commands processed by the engine",
            ["op", "status"],
        )
        self.apply_duration = Histogram(
            "shaper_apply_duration_seconds",
            "Command list application duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        # Translator metrics
        self.translator_calls_total = Counter(
            "shaper_translator_calls_total",
            "Text-generation calls by outcome",
            ["model", "status"],
        )
        self.translator_duration = Histogram(
            "shaper_translator_duration_seconds",
            "Text-generation call duration in seconds",
            ["model"],
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        # Show data metrics
        self.data_fetches_total = Counter(
            "shaper_data_fetches_total",
            "Show catalog fetches by outcome",
            ["status"],
        )
        self.data_fetch_duration = Histogram(
            "shaper_data_fetch_duration_seconds",
            "Show catalog fetch duration in seconds",
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        # Cache metrics
        self.cache_hits = Counter(
            "shaper_cache_hits_total",
            "Total number of cache hits",
            ["cache_type"],
        )
        self.cache_misses = Counter(
            "shaper_cache_misses_total",
            "Total number of cache misses",
            ["cache_type"],
        )

        # History metrics
        self.history_moves_total = Counter(
            "shaper_history_moves_total",
            "Undo/redo requests by outcome",
            ["direction", "status"],
        )

        # HTTP metrics
        self.http_requests_total = Counter(
            "shaper_http_requests_total",
            "HTTP requests by route and status code",
            ["route", "status"],
        )

        # Error metrics
        self.errors_total = Counter(
            "shaper_errors_total",
            "Total number of errors",
            ["error_type", "component"],
        )

        # System metrics
        self.uptime = Gauge(
            "shaper_uptime_seconds",
            "Service uptime in seconds",
        )
        self.start_time = time.time()

    def record_command(self, op: str, status: str) -> None:
        self.commands_total.labels(op=op, status=status).inc()

    def record_apply(self, duration: float) -> None:
        self.apply_duration.observe(duration)

    def record_translator_call(self, model: str, status: str, duration: float) -> None:
        """Record a text-generation call."""
        self.translator_calls_total.labels(model=model, status=status).inc()
        self.translator_duration.labels(model=model).observe(duration)

    def record_data_fetch(self, status: str, duration: float) -> None:
        self.data_fetches_total.labels(status=status).inc()
        self.data_fetch_duration.observe(duration)

    def record_cache_hit(self, cache_type: str) -> None:
        self.cache_hits.labels(cache_type=cache_type).inc()

    def record_cache_miss(self, cache_type: str) -> None:
        self.cache_misses.labels(cache_type=cache_type).inc()

    def record_history_move(self, direction: str, status: str) -> None:
        self.history_moves_total.labels(direction=direction, status=status).inc()

    def record_http_request(self, route: str, status: int) -> None:
        self.http_requests_total.labels(route=route, status=str(status)).inc()

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def update_uptime(self) -> None:
        self.uptime.set(time.time() - self.start_time)

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]) -> Iterator[None]:
        """Context manager to measure operation duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            callback(time.perf_counter() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        self.update_uptime()
        return generate_latest()


CONTENT_TYPE = CONTENT_TYPE_LATEST

# Global metrics collector instance
metrics_collector = MetricsCollector()
