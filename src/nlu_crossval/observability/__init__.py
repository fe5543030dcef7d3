"""Observability module for logging, tracing and metrics."""

from nlu_crossval.observability.logging import (
    configure_logging,
    get_current_run_id,
    run_context,
)
from nlu_crossval.observability.metrics import MetricsRegistry, get_metrics_registry
from nlu_crossval.observability.tracing import get_tracer, pipeline_span

__all__ = [
    # Tracing
    "get_tracer",
    "pipeline_span",
    # Metrics
    "MetricsRegistry",
    "get_metrics_registry",
    # Logging
    "configure_logging",
    "get_current_run_id",
    "run_context",
]
