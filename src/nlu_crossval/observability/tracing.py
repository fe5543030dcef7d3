"""Tracing utilities built on the OpenTelemetry API."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span, StatusCode


def get_tracer(name: str = "nlu_crossval") -> trace.Tracer:
    """
    Get an OpenTelemetry tracer.

    Without a configured SDK this is the API's no-op tracer.
    """
    return trace.get_tracer(name)


@contextmanager
def pipeline_span(
    stage_name: str,
    run_id: str | None = None,
    **attributes: Any,
) -> Generator[Span, None, None]:
    """
    Context manager for tracing cross-validation stages.

    Args:
        stage_name: Name of the stage (split, train, evaluate).
        run_id: Optional run ID.
        **attributes: Additional span attributes.

    Yields:
        The span object.

    Example:
        with pipeline_span("train", run_id="cv-1", language="en"):
            await engine.train(...)
    """
    tracer = get_tracer("nlu_crossval.pipeline")

    span_attrs: dict[str, Any] = {"pipeline.stage": stage_name}
    if run_id:
        span_attrs["run.id"] = run_id
    span_attrs.update(attributes)

    with tracer.start_as_current_span(
        f"nlu_crossval.{stage_name}",
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span.set_attributes(span_attrs)
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(StatusCode.ERROR)
            raise


def get_current_trace_id() -> str | None:
    """
    Get the current trace ID.

    Returns:
        Trace ID as hex string, or None if not in a trace.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None


def get_current_span_id() -> str | None:
    """
    Get the current span ID.

    Returns:
        Span ID as hex string, or None if not in a span.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.span_id, "016x")
    return None
