"""Tracing helpers shared by the control-plane and data-plane clients."""

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer


def get_tracer(name: str) -> Tracer:
    """Get a tracer for the given module name.

    Args:
        name: Module name, typically __name__.

    Returns:
        A Tracer instance for creating spans.
    """
    return trace.get_tracer(name)


def mark_failed(span: Span, error: BaseException) -> None:
    """Record ``error`` on ``span`` and set its status to ERROR."""
    span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, str(error)))
