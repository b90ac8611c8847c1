"""Exceptions raised by the Pinecone SDK.

Every failure surfaces as exactly one subclass of ``PineconeError`` so callers
can branch with ``except`` clauses instead of parsing messages.
"""

import json


class PineconeError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Control-plane response errors


class ResponseError(PineconeError):
    """Raised when the control plane answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(_extract_message(body))

    def __str__(self) -> str:
        return f"status: {self.status_code} content: {self.body}"


class BadRequestError(ResponseError):
    """The request body included invalid request parameters."""


class UnauthorizedError(ResponseError):
    """Authentication failed, usually because of an invalid API key."""


class ForbiddenError(ResponseError):
    """The request was understood but refused."""


class ActionForbiddenError(ForbiddenError):
    """The action is forbidden, for example by deletion protection."""


class PodQuotaExceededError(ForbiddenError):
    """The project's pod quota would be exceeded."""


class CollectionsQuotaExceededError(ForbiddenError):
    """The project's collections quota would be exceeded."""


class NotFoundError(ResponseError):
    """The requested resource could not be located."""


class IndexNotFoundError(NotFoundError):
    """No index with the given name exists."""


class CollectionNotFoundError(NotFoundError):
    """No collection with the given name exists."""


class InvalidRegionError(NotFoundError):
    """The requested region is not valid."""


class InvalidCloudError(NotFoundError):
    """The requested cloud is not valid."""


class ConflictError(ResponseError):
    """The request conflicts with the current state of a resource."""


class ResourceAlreadyExistsError(ConflictError):
    """A resource with the given name already exists."""


class PreconditionFailedError(ResponseError):
    """A server-side precondition for the request did not hold."""


class PendingCollectionError(PreconditionFailedError):
    """A collection created from this index is still pending."""


class UnprocessableEntityError(ResponseError):
    """The request body could not be deserialized by the server."""


class InternalServerError(ResponseError):
    """The server failed while handling the request."""


class UnknownResponseError(ResponseError):
    """The server answered with a status the SDK does not map."""


# Local errors


class InvalidConfigurationError(PineconeError):
    """Raised when arguments are rejected before any network call."""


class APIKeyMissingError(InvalidConfigurationError):
    """Raised when no API key is passed nor found in the environment."""


class InvalidHeadersError(InvalidConfigurationError):
    """Raised when additional headers are not a JSON object of strings."""


class PineconeTimeoutError(PineconeError):
    """Raised when a resource does not become ready before the deadline."""

    def __init__(self, resource_name: str, timeout_seconds: float) -> None:
        self.resource_name = resource_name
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f'Index "{resource_name}" not ready after {timeout_seconds:g}s'
        )


class PineconeConnectionError(PineconeError):
    """Raised when a data-plane channel cannot be established.

    The underlying cause (malformed endpoint, TLS setup, handshake) is only
    available through ``__cause__``.
    """

    def __init__(self, host: str, reason: str) -> None:
        self.host = host
        super().__init__(f"Failed to connect to {host}: {reason}")


class DataPlaneError(PineconeError):
    """Raised when a data-plane RPC fails.

    The RPC status is reported as-is; it is not mapped onto the
    control-plane error kinds.
    """

    def __init__(self, code: str, details: str | None) -> None:
        self.code = code
        self.details = details or ""
        super().__init__(f"Data plane error: {code}: {self.details}")


class TransportError(PineconeError):
    """Raised when a request could not be sent or its response read."""


class SerializationError(TransportError):
    """Raised when request values cannot be encoded for the wire."""


class DeserializationError(TransportError):
    """Raised when a success response does not match the expected schema."""


def _extract_message(body: str) -> str:
    """Return ``error.message`` from a JSON error body, else the raw body."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(payload.get("message"), str):
            return payload["message"]
    return body
