"""Error taxonomy and response classification."""

from pinecone_sdk.errors.classifier import classify
from pinecone_sdk.errors.exceptions import (
    ActionForbiddenError,
    APIKeyMissingError,
    BadRequestError,
    CollectionNotFoundError,
    CollectionsQuotaExceededError,
    ConflictError,
    DataPlaneError,
    DeserializationError,
    ForbiddenError,
    IndexNotFoundError,
    InternalServerError,
    InvalidCloudError,
    InvalidConfigurationError,
    InvalidHeadersError,
    InvalidRegionError,
    NotFoundError,
    PendingCollectionError,
    PineconeConnectionError,
    PineconeError,
    PineconeTimeoutError,
    PodQuotaExceededError,
    PreconditionFailedError,
    ResourceAlreadyExistsError,
    ResponseError,
    SerializationError,
    TransportError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableEntityError,
)

__all__ = [
    "APIKeyMissingError",
    "ActionForbiddenError",
    "BadRequestError",
    "CollectionNotFoundError",
    "CollectionsQuotaExceededError",
    "ConflictError",
    "DataPlaneError",
    "DeserializationError",
    "ForbiddenError",
    "IndexNotFoundError",
    "InternalServerError",
    "InvalidCloudError",
    "InvalidConfigurationError",
    "InvalidHeadersError",
    "InvalidRegionError",
    "NotFoundError",
    "PendingCollectionError",
    "PineconeConnectionError",
    "PineconeError",
    "PineconeTimeoutError",
    "PodQuotaExceededError",
    "PreconditionFailedError",
    "ResourceAlreadyExistsError",
    "ResponseError",
    "SerializationError",
    "TransportError",
    "UnauthorizedError",
    "UnknownResponseError",
    "UnprocessableEntityError",
    "classify",
]
