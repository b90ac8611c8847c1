"""Async handle for reading and writing vectors in one index."""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import grpc
import structlog

from pinecone_sdk.errors import DataPlaneError
from pinecone_sdk.infrastructure.observability import get_tracer, mark_failed
from pinecone_sdk.infrastructure.rpc import (
    ManagedChannel,
    VectorServiceStub,
    messages,
)
from pinecone_sdk.modules.data import codec
from pinecone_sdk.modules.data.schemas import (
    DeleteAll,
    DeleteByFilter,
    DeleteByIds,
    DeleteTarget,
    FetchResponse,
    IndexStats,
    ListResponse,
    QueryById,
    QueryByVector,
    QueryResponse,
    QueryTarget,
    SparseValues,
    UpsertResponse,
    Vector,
)

logger = structlog.get_logger()
tracer = get_tracer(__name__)


class Index:
    """Data-plane operations over one managed channel.

    Every operation sends exactly one RPC. Failures are raised as
    ``DataPlaneError`` carrying the RPC status as reported by the server.
    The handle owns its channel; use it as an async context manager or call
    ``close()`` when done.
    """

    def __init__(
        self, managed: ManagedChannel, stub: VectorServiceStub | None = None
    ) -> None:
        self._managed = managed
        self._stub = stub or VectorServiceStub(managed.channel)

    @property
    def endpoint(self) -> str:
        return self._managed.endpoint

    async def __aenter__(self) -> "Index":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying channel."""
        await self._managed.close()
        logger.debug("data_plane_closed", endpoint=self.endpoint)

    async def _call(
        self,
        operation: str,
        rpc: Callable[[Any], Awaitable[Any]],
        request: Any,
        namespace: str | None = None,
    ) -> Any:
        with tracer.start_as_current_span(f"data.{operation}") as span:
            span.set_attribute("rpc.endpoint", self.endpoint)
            if namespace is not None:
                span.set_attribute("pinecone.namespace", namespace)

            try:
                return await rpc(request)
            except grpc.aio.AioRpcError as e:
                error = DataPlaneError(e.code().name, e.details())
                mark_failed(span, error)
                logger.warning(
                    "data_plane_call_failed",
                    operation=operation,
                    endpoint=self.endpoint,
                    code=error.code,
                    details=error.details,
                )
                raise error from e

    async def upsert(
        self, vectors: Sequence[Vector], namespace: str = ""
    ) -> UpsertResponse:
        """Insert or overwrite vectors.

        No batching is done; callers split large uploads themselves.
        """
        request = messages.UpsertRequest(
            vectors=[codec.vector_to_proto(vector) for vector in vectors],
            namespace=namespace,
        )
        response = await self._call("upsert", self._stub.Upsert, request, namespace)
        return UpsertResponse(upserted_count=response.upserted_count)

    async def query(
        self,
        target: QueryTarget,
        top_k: int,
        *,
        namespace: str = "",
        filter: Mapping[str, Any] | None = None,
        include_values: bool = False,
        include_metadata: bool = False,
    ) -> QueryResponse:
        """Find the ``top_k`` nearest neighbours of a stored or literal vector."""
        request = messages.QueryRequest(
            namespace=namespace,
            top_k=top_k,
            include_values=include_values,
            include_metadata=include_metadata,
        )
        if isinstance(target, QueryById):
            request.id = target.id
        else:
            request.vector.extend(target.values)
            if target.sparse_values is not None:
                request.sparse_vector.CopyFrom(
                    codec.sparse_to_proto(target.sparse_values)
                )
        if filter is not None:
            request.filter.CopyFrom(codec.to_struct(filter))

        response = await self._call("query", self._stub.Query, request, namespace)
        return codec.query_response_from_proto(response)

    async def query_by_id(
        self,
        id: str,
        top_k: int,
        *,
        namespace: str = "",
        filter: Mapping[str, Any] | None = None,
        include_values: bool = False,
        include_metadata: bool = False,
    ) -> QueryResponse:
        """Query with the stored vector ``id`` as the query vector."""
        return await self.query(
            QueryById(id),
            top_k,
            namespace=namespace,
            filter=filter,
            include_values=include_values,
            include_metadata=include_metadata,
        )

    async def query_by_value(
        self,
        values: Sequence[float],
        top_k: int,
        *,
        sparse_values: SparseValues | None = None,
        namespace: str = "",
        filter: Mapping[str, Any] | None = None,
        include_values: bool = False,
        include_metadata: bool = False,
    ) -> QueryResponse:
        """Query with literal dense (and optionally sparse) values."""
        return await self.query(
            QueryByVector(values, sparse_values),
            top_k,
            namespace=namespace,
            filter=filter,
            include_values=include_values,
            include_metadata=include_metadata,
        )

    async def update(
        self,
        id: str,
        *,
        values: Sequence[float] | None = None,
        sparse_values: SparseValues | None = None,
        metadata: Mapping[str, Any] | None = None,
        namespace: str = "",
    ) -> None:
        """Overwrite the values of a vector and merge new metadata into it."""
        request = messages.UpdateRequest(id=id, namespace=namespace)
        if values is not None:
            request.values.extend(values)
        if sparse_values is not None:
            request.sparse_values.CopyFrom(codec.sparse_to_proto(sparse_values))
        if metadata is not None:
            request.set_metadata.CopyFrom(codec.to_struct(metadata))

        await self._call("update", self._stub.Update, request, namespace)

    async def delete(self, target: DeleteTarget, namespace: str = "") -> None:
        """Delete the vectors selected by ``target``."""
        request = messages.DeleteRequest(namespace=namespace)
        if isinstance(target, DeleteByIds):
            request.ids.extend(target.ids)
        elif isinstance(target, DeleteAll):
            request.delete_all = True
        elif isinstance(target, DeleteByFilter):
            request.filter.CopyFrom(codec.to_struct(target.filter))
        else:
            raise TypeError(f"unsupported delete target {type(target).__name__}")

        await self._call("delete", self._stub.Delete, request, namespace)

    async def delete_by_id(self, ids: Sequence[str], namespace: str = "") -> None:
        """Delete vectors by id.

        Raises:
            InvalidConfigurationError: If ``ids`` is empty; nothing is sent.
        """
        await self.delete(DeleteByIds(ids), namespace)

    async def delete_all(self, namespace: str = "") -> None:
        """Delete every vector in ``namespace``."""
        await self.delete(DeleteAll(), namespace)

    async def delete_by_filter(
        self, filter: Mapping[str, Any], namespace: str = ""
    ) -> None:
        """Delete vectors whose metadata matches ``filter``."""
        await self.delete(DeleteByFilter(filter), namespace)

    async def fetch(self, ids: Sequence[str], namespace: str = "") -> FetchResponse:
        """Fetch vectors by id; ids that do not exist are omitted."""
        request = messages.FetchRequest(ids=list(ids), namespace=namespace)
        response = await self._call("fetch", self._stub.Fetch, request, namespace)
        return codec.fetch_response_from_proto(response)

    async def describe_index_stats(
        self, filter: Mapping[str, Any] | None = None
    ) -> IndexStats:
        """Return per-namespace vector counts and index fullness."""
        request = messages.DescribeIndexStatsRequest()
        if filter is not None:
            request.filter.CopyFrom(codec.to_struct(filter))
        response = await self._call(
            "describe_index_stats", self._stub.DescribeIndexStats, request
        )
        return codec.index_stats_from_proto(response)

    async def list(
        self,
        namespace: str = "",
        *,
        prefix: str | None = None,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> ListResponse:
        """List vector ids one page at a time.

        Pass the returned ``pagination_token`` back to get the next page.
        """
        request = messages.ListRequest(namespace=namespace)
        if prefix is not None:
            request.prefix = prefix
        if limit is not None:
            request.limit = limit
        if pagination_token is not None:
            request.pagination_token = pagination_token

        response = await self._call("list", self._stub.List, request, namespace)
        return codec.list_response_from_proto(response)
