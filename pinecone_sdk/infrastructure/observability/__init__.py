"""Observability helpers: OpenTelemetry tracing and structlog integration."""

from pinecone_sdk.infrastructure.observability.setup import (
    init_observability,
    shutdown_observability,
)
from pinecone_sdk.infrastructure.observability.structlog_processor import (
    add_trace_context,
)
from pinecone_sdk.infrastructure.observability.tracing import get_tracer, mark_failed

__all__ = [
    "add_trace_context",
    "get_tracer",
    "init_observability",
    "mark_failed",
    "shutdown_observability",
]
