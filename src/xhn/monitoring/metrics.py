"""
Metrics Collection
Prometheus metrics for document assembly and decoding.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for hypermedia documents.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        # Assembly metrics
        self.documents_total = Counter(
            "xhn_documents_total",
            "Total number of response documents assembled",
            ["status"],
            registry=self.registry,
        )
        self.document_duration = Histogram(
            "xhn_document_duration_seconds",
            "Document assembly duration in seconds",
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=self.registry,
        )

        # Codec metrics
        self.decodes_total = Counter(
            "xhn_decodes_total",
            "Total number of documents decoded",
            ["status"],
            registry=self.registry,
        )

        # Request handling metrics
        self.handled_requests_total = Counter(
            "xhn_handled_requests_total",
            "Total number of incoming requests handled",
            ["affordance"],
            registry=self.registry,
        )

    def record_document(self, status: str, duration: float) -> None:
        """Record an assembled document ('rendered', 'empty' or 'failed')."""
        self.documents_total.labels(status=status).inc()
        self.document_duration.observe(duration)

    def record_decode(self, status: str) -> None:
        """Record a decode outcome ('success', 'invalid' or 'unrecognized')."""
        self.decodes_total.labels(status=status).inc()

    def record_handled_request(self, affordance_id: str) -> None:
        """Record an incoming request serviced by an affordance handler."""
        self.handled_requests_total.labels(affordance=affordance_id).inc()

    def sample(self, name: str, **labels: str) -> float:
        """Current value of a sample, 0.0 when it was never recorded."""
        value = self.registry.get_sample_value(name, labels or None)
        return value if value is not None else 0.0

    def get_metrics(self) -> bytes:
        """Prometheus text exposition of all metrics."""
        return generate_latest(self.registry)

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]) -> Iterator[None]:
        """Context manager to measure operation duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            callback(time.perf_counter() - start)


# Global metrics collector instance
metrics_collector = MetricsCollector()
