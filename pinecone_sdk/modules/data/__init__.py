"""Data plane: vector reads and writes over gRPC."""

from pinecone_sdk.modules.data.index import Index
from pinecone_sdk.modules.data.schemas import (
    DeleteAll,
    DeleteByFilter,
    DeleteByIds,
    FetchResponse,
    IndexStats,
    ListResponse,
    NamespaceSummary,
    QueryById,
    QueryByVector,
    QueryResponse,
    ScoredVector,
    SparseValues,
    UpsertResponse,
    Usage,
    Vector,
)

__all__ = [
    "DeleteAll",
    "DeleteByFilter",
    "DeleteByIds",
    "FetchResponse",
    "Index",
    "IndexStats",
    "ListResponse",
    "NamespaceSummary",
    "QueryById",
    "QueryByVector",
    "QueryResponse",
    "ScoredVector",
    "SparseValues",
    "UpsertResponse",
    "Usage",
    "Vector",
]
