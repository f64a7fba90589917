"""Observability layer - logging and metrics."""

from profile_rag.observability.logging import identity_context, setup_logging
from profile_rag.observability.metrics import MetricsCollector, get_metrics

__all__ = ["identity_context", "setup_logging", "MetricsCollector", "get_metrics"]
