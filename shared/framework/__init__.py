"""
Core framework components for the compression service.

Provides environment-driven service settings and Prometheus
metrics collection shared by the service packages.
"""

from .config import ServiceConfig, ObservabilityConfig
from .metrics import MetricsCollector

__all__ = [
    "ServiceConfig",
    "ObservabilityConfig",
    "MetricsCollector",
]
