"""
Performance Monitoring
Prometheus-based metrics collection for hypermedia documents
"""

from xhn.core.tracing import trace_operation
from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
    "trace_operation",
]
