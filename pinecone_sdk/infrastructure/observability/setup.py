"""Opt-in tracing setup for applications that want spans from the SDK.

The SDK never configures logging or tracing on import. Applications that have
no OpenTelemetry setup of their own can call ``init_observability`` once at
startup; applications that already install a tracer provider do not need it,
since the SDK's spans use whatever provider is global.
"""

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio

from pinecone_sdk.infrastructure.observability.structlog_processor import (
    add_trace_context,
)

_tracer_provider: TracerProvider | None = None
_httpx_instrumented: bool = False
_structlog_patched: bool = False


def init_observability(
    service_name: str,
    service_version: str,
    *,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    sample_rate: float = 1.0,
    instrument_httpx: bool = True,
    add_trace_ids_to_logs: bool = False,
) -> TracerProvider:
    """Install a global tracer provider for control- and data-plane spans.

    Calling it again before ``shutdown_observability`` returns the provider
    installed by the first call.

    Args:
        service_name: Name of the calling service for resource attribution.
        service_version: Version of the calling service.
        otlp_endpoint: OTLP/HTTP collector base URL, e.g.
            ``http://localhost:4318``; spans are exported to ``/v1/traces``.
        console_export: Also print finished spans to stdout.
        sample_rate: Fraction of root traces to sample, 0.0 to 1.0.
        instrument_httpx: Add httpx client spans under each ``control.*``
            span.
        add_trace_ids_to_logs: Insert ``add_trace_context`` into the host's
            existing structlog processor chain, just before its renderer.
            The rest of the host's logging configuration is left alone.

    Returns:
        The installed tracer provider.
    """
    global _tracer_provider, _httpx_instrumented, _structlog_patched

    if _tracer_provider is not None:
        return _tracer_provider

    provider = TracerProvider(
        resource=Resource.create(
            {SERVICE_NAME: service_name, SERVICE_VERSION: service_version}
        ),
        sampler=ParentBasedTraceIdRatio(sample_rate),
    )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint.rstrip('/')}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    _tracer_provider = provider

    if instrument_httpx:
        HTTPXClientInstrumentor().instrument(tracer_provider=provider)
        _httpx_instrumented = True

    if add_trace_ids_to_logs:
        _structlog_patched = _insert_trace_processor()

    return provider


def shutdown_observability() -> None:
    """Flush pending spans and undo what ``init_observability`` changed.

    The global tracer provider itself cannot be unset in OpenTelemetry; it
    stays installed but is shut down.
    """
    global _tracer_provider, _httpx_instrumented, _structlog_patched

    if _httpx_instrumented:
        HTTPXClientInstrumentor().uninstrument()
        _httpx_instrumented = False

    if _structlog_patched:
        _remove_trace_processor()
        _structlog_patched = False

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None


def _insert_trace_processor() -> bool:
    processors = list(structlog.get_config()["processors"])
    if add_trace_context in processors:
        return False

    # The last processor is the renderer; it must stay last.
    processors.insert(max(len(processors) - 1, 0), add_trace_context)
    structlog.configure(processors=processors)
    return True


def _remove_trace_processor() -> None:
    processors = [
        processor
        for processor in structlog.get_config()["processors"]
        if processor is not add_trace_context
    ]
    structlog.configure(processors=processors)
