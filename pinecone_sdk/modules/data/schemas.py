"""Records and request shapes for the data plane."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pinecone_sdk.errors import InvalidConfigurationError

Metadata = dict[str, Any]  # JSON-like values, encoded as a protobuf Struct


@dataclass
class SparseValues:
    """Sparse vector as parallel index/value lists."""

    indices: list[int]
    values: list[float]


@dataclass
class Vector:
    """A record stored in an index."""

    id: str
    values: list[float] = field(default_factory=list)
    sparse_values: SparseValues | None = None
    metadata: Metadata | None = None


@dataclass
class ScoredVector:
    """A query match."""

    id: str
    score: float
    values: list[float] = field(default_factory=list)
    sparse_values: SparseValues | None = None
    metadata: Metadata | None = None


@dataclass
class Usage:
    """Read units consumed by an operation."""

    read_units: int = 0


@dataclass
class UpsertResponse:
    upserted_count: int


@dataclass
class QueryResponse:
    matches: list[ScoredVector]
    namespace: str = ""
    usage: Usage | None = None


@dataclass
class FetchResponse:
    vectors: dict[str, Vector]
    namespace: str = ""
    usage: Usage | None = None


@dataclass
class ListResponse:
    """One page of vector ids.

    ``pagination_token`` is None on the last page.
    """

    ids: list[str]
    pagination_token: str | None = None
    namespace: str = ""
    usage: Usage | None = None


@dataclass
class NamespaceSummary:
    vector_count: int


@dataclass
class IndexStats:
    """Statistics returned by ``describe_index_stats``."""

    namespaces: dict[str, NamespaceSummary]
    dimension: int
    index_fullness: float
    total_vector_count: int


# Delete targets. Exactly one of ids, delete-all or filter is sent per call.


@dataclass(frozen=True)
class DeleteByIds:
    ids: tuple[str, ...]

    def __init__(self, ids: Sequence[str]) -> None:
        if isinstance(ids, str):
            raise InvalidConfigurationError("ids must be a sequence of strings")
        if not ids:
            raise InvalidConfigurationError("At least one id must be provided")
        object.__setattr__(self, "ids", tuple(ids))


@dataclass(frozen=True)
class DeleteAll:
    pass


@dataclass(frozen=True)
class DeleteByFilter:
    filter: Mapping[str, Any]


DeleteTarget = DeleteByIds | DeleteAll | DeleteByFilter


# Query targets. A query names either a stored vector or literal values.


@dataclass(frozen=True)
class QueryById:
    id: str

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidConfigurationError("Query id must not be empty")


@dataclass(frozen=True)
class QueryByVector:
    values: tuple[float, ...]
    sparse_values: SparseValues | None = None

    def __init__(
        self, values: Sequence[float], sparse_values: SparseValues | None = None
    ) -> None:
        if not values and sparse_values is None:
            raise InvalidConfigurationError(
                "Query vector must have dense or sparse values"
            )
        object.__setattr__(self, "values", tuple(values))
        object.__setattr__(self, "sparse_values", sparse_values)


QueryTarget = QueryById | QueryByVector
