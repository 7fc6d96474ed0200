"""
Performance Monitoring
Prometheus-based metrics collection
"""

from ..core.tracing import trace_operation, traced
from .metrics import CONTENT_TYPE, MetricsCollector, metrics_collector

__all__ = [
    "CONTENT_TYPE",
    "MetricsCollector",
    "metrics_collector",
    "trace_operation",
    "traced",
]
