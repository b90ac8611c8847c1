"""Send a control-plane request and turn failures into SDK errors."""

from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from pinecone_sdk.errors import DeserializationError, classify
from pinecone_sdk.infrastructure.http.protocol import (
    ControlPlaneTransport,
    TransportResponse,
)
from pinecone_sdk.infrastructure.observability import get_tracer, mark_failed

logger = structlog.get_logger()
tracer = get_tracer(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def dispatch(
    transport: ControlPlaneTransport,
    operation: str,
    method: str,
    path: str,
    *,
    json: Any | None = None,
) -> TransportResponse:
    """Execute one request; raise the classified error on a non-2xx status.

    Args:
        transport: Transport that performs the exchange.
        operation: Span/log name of the calling operation, e.g. ``create_index``.
        method: HTTP verb.
        path: Request path.
        json: Optional request body.

    Returns:
        The successful response.

    Raises:
        ResponseError: A subclass chosen by ``classify``.
        TransportError: If the transport could not complete the exchange.
    """
    with tracer.start_as_current_span(f"control.{operation}") as span:
        span.set_attribute("http.method", method)
        span.set_attribute("http.path", path)

        try:
            response = await transport.request(method, path, json=json)
        except Exception as e:
            mark_failed(span, e)
            raise

        span.set_attribute("http.status_code", response.status_code)
        if response.is_success:
            return response

        error = classify(response.status_code, response.body)
        mark_failed(span, error)
        logger.warning(
            "control_plane_error",
            operation=operation,
            status_code=response.status_code,
            error_type=type(error).__name__,
            message=error.message,
        )
        raise error


def parse_body(model: type[ModelT], response: TransportResponse) -> ModelT:
    """Validate a success body against ``model``.

    Raises:
        DeserializationError: If the body is not valid JSON for ``model``.
    """
    try:
        return model.model_validate_json(response.body)
    except ValidationError as e:
        logger.error(
            "control_plane_bad_body",
            model=model.__name__,
            status_code=response.status_code,
            error_count=e.error_count(),
        )
        raise DeserializationError(
            f"Unexpected {model.__name__} payload: {e}"
        ) from e
