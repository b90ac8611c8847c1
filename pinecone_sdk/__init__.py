"""Async Python SDK for the Pinecone vector database."""

from pinecone_sdk.client import PineconeClient
from pinecone_sdk.config import SDK_VERSION, ClientConfig
from pinecone_sdk.errors import (
    DataPlaneError,
    InvalidConfigurationError,
    PineconeConnectionError,
    PineconeError,
    PineconeTimeoutError,
    ResponseError,
)
from pinecone_sdk.modules.control import (
    Cloud,
    CollectionModel,
    DeletionProtection,
    IndexModel,
    Metric,
    WaitPolicy,
)
from pinecone_sdk.modules.data import (
    DeleteAll,
    DeleteByFilter,
    DeleteByIds,
    Index,
    QueryById,
    QueryByVector,
    SparseValues,
    Vector,
)
from pinecone_sdk.modules.inference import EmbedParameters, EmbeddingsList

__version__ = SDK_VERSION

__all__ = [
    "ClientConfig",
    "Cloud",
    "CollectionModel",
    "DataPlaneError",
    "DeleteAll",
    "DeleteByFilter",
    "DeleteByIds",
    "DeletionProtection",
    "EmbedParameters",
    "EmbeddingsList",
    "Index",
    "IndexModel",
    "InvalidConfigurationError",
    "Metric",
    "PineconeClient",
    "PineconeConnectionError",
    "PineconeError",
    "PineconeTimeoutError",
    "QueryById",
    "QueryByVector",
    "ResponseError",
    "SparseValues",
    "Vector",
    "WaitPolicy",
    "__version__",
]
