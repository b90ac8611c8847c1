"""Conversion between data-plane records and protobuf messages."""

from collections.abc import Mapping
from typing import Any

from google.protobuf import json_format, struct_pb2

from pinecone_sdk.errors import SerializationError
from pinecone_sdk.infrastructure.rpc import messages
from pinecone_sdk.modules.data.schemas import (
    FetchResponse,
    IndexStats,
    ListResponse,
    Metadata,
    NamespaceSummary,
    QueryResponse,
    ScoredVector,
    SparseValues,
    Usage,
    Vector,
)


def to_struct(values: Mapping[str, Any]) -> struct_pb2.Struct:
    """Encode metadata or a filter as a protobuf ``Struct``.

    Raises:
        SerializationError: If a value is not JSON-like (str, number, bool,
            None, list or str-keyed dict).
    """
    struct = struct_pb2.Struct()
    try:
        json_format.ParseDict(dict(values), struct)
    except (json_format.ParseError, TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode metadata: {e}") from e
    return struct


def from_struct(struct: struct_pb2.Struct) -> Metadata:
    return json_format.MessageToDict(struct)


def sparse_to_proto(sparse: SparseValues) -> Any:
    return messages.SparseValues(
        indices=list(sparse.indices), values=list(sparse.values)
    )


def vector_to_proto(vector: Vector) -> Any:
    message = messages.Vector(id=vector.id, values=list(vector.values))
    if vector.sparse_values is not None:
        message.sparse_values.CopyFrom(sparse_to_proto(vector.sparse_values))
    if vector.metadata is not None:
        message.metadata.CopyFrom(to_struct(vector.metadata))
    return message


def _sparse_from_proto(message: Any) -> SparseValues | None:
    if not message.HasField("sparse_values"):
        return None
    return SparseValues(
        indices=list(message.sparse_values.indices),
        values=list(message.sparse_values.values),
    )


def _metadata_from_proto(message: Any) -> Metadata | None:
    if not message.HasField("metadata"):
        return None
    return from_struct(message.metadata)


def _usage_from_proto(message: Any) -> Usage | None:
    if not message.HasField("usage"):
        return None
    return Usage(read_units=message.usage.read_units)


def vector_from_proto(message: Any) -> Vector:
    return Vector(
        id=message.id,
        values=list(message.values),
        sparse_values=_sparse_from_proto(message),
        metadata=_metadata_from_proto(message),
    )


def scored_vector_from_proto(message: Any) -> ScoredVector:
    return ScoredVector(
        id=message.id,
        score=message.score,
        values=list(message.values),
        sparse_values=_sparse_from_proto(message),
        metadata=_metadata_from_proto(message),
    )


def query_response_from_proto(message: Any) -> QueryResponse:
    return QueryResponse(
        matches=[scored_vector_from_proto(match) for match in message.matches],
        namespace=message.namespace,
        usage=_usage_from_proto(message),
    )


def fetch_response_from_proto(message: Any) -> FetchResponse:
    return FetchResponse(
        vectors={key: vector_from_proto(value) for key, value in message.vectors.items()},
        namespace=message.namespace,
        usage=_usage_from_proto(message),
    )


def list_response_from_proto(message: Any) -> ListResponse:
    token = None
    if message.HasField("pagination") and message.pagination.next:
        token = message.pagination.next
    return ListResponse(
        ids=[item.id for item in message.vectors],
        pagination_token=token,
        namespace=message.namespace,
        usage=_usage_from_proto(message),
    )


def index_stats_from_proto(message: Any) -> IndexStats:
    return IndexStats(
        namespaces={
            name: NamespaceSummary(vector_count=summary.vector_count)
            for name, summary in message.namespaces.items()
        },
        dimension=message.dimension,
        index_fullness=message.index_fullness,
        total_vector_count=message.total_vector_count,
    )
