"""Tests for data-plane operations."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import grpc
import pytest

from pinecone_sdk.errors import (
    DataPlaneError,
    InvalidConfigurationError,
    PineconeError,
    SerializationError,
    TransportError,
)
from pinecone_sdk.infrastructure.rpc import ManagedChannel, messages
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
from pinecone_sdk.modules.data.codec import to_struct
from tests.grpc_server import FakeVectorServer


def rpc_error(code: grpc.StatusCode, details: str) -> grpc.aio.AioRpcError:
    return grpc.aio.AioRpcError(
        code, grpc.aio.Metadata(), grpc.aio.Metadata(), details=details
    )


@pytest.fixture
def channel() -> MagicMock:
    channel = MagicMock()
    channel.close = AsyncMock()
    return channel


@pytest.fixture
def stub() -> MagicMock:
    stub = MagicMock()
    stub.Upsert = AsyncMock(return_value=messages.UpsertResponse(upserted_count=2))
    stub.Query = AsyncMock(return_value=messages.QueryResponse())
    stub.Update = AsyncMock(return_value=messages.UpdateResponse())
    stub.Delete = AsyncMock(return_value=messages.DeleteResponse())
    stub.Fetch = AsyncMock(return_value=messages.FetchResponse())
    stub.List = AsyncMock(return_value=messages.ListResponse())
    stub.DescribeIndexStats = AsyncMock(
        return_value=messages.DescribeIndexStatsResponse()
    )
    return stub


@pytest.fixture
def index(channel, stub) -> Index:
    return Index(ManagedChannel("https://docs.test:443", channel), stub=stub)


def sent(mock: AsyncMock):
    """Return the request message of the single call to ``mock``."""
    mock.assert_awaited_once()
    return mock.await_args.args[0]


class TestDeleteTargets:
    """Tests for the delete request shapes."""

    def test_empty_id_list_is_rejected(self):
        """DeleteByIds needs at least one id."""
        with pytest.raises(InvalidConfigurationError):
            DeleteByIds([])

    def test_bare_string_is_rejected(self):
        """A single string is not a list of ids."""
        with pytest.raises(InvalidConfigurationError):
            DeleteByIds("abc")

    def test_ids_are_frozen(self):
        """Ids should be stored as a tuple."""
        assert DeleteByIds(["a", "b"]).ids == ("a", "b")

    async def test_delete_by_id_sets_only_ids(self, index, stub):
        """delete_by_id should populate ids only."""
        await index.delete_by_id(["a", "b"], namespace="ns")

        request = sent(stub.Delete)
        assert list(request.ids) == ["a", "b"]
        assert request.delete_all is False
        assert not request.HasField("filter")
        assert request.namespace == "ns"

    async def test_delete_all_sets_only_flag(self, index, stub):
        """delete_all should populate the flag only."""
        await index.delete_all()

        request = sent(stub.Delete)
        assert request.delete_all is True
        assert list(request.ids) == []
        assert not request.HasField("filter")
        assert request.namespace == ""

    async def test_delete_by_filter_sets_only_filter(self, index, stub):
        """delete_by_filter should populate the filter only."""
        await index.delete_by_filter({"genre": {"$eq": "drama"}})

        request = sent(stub.Delete)
        assert request.HasField("filter")
        assert request.filter == to_struct({"genre": {"$eq": "drama"}})
        assert request.delete_all is False
        assert list(request.ids) == []

    async def test_empty_ids_are_rejected_before_dispatch(self, index, stub):
        """Nothing should be sent for an empty id list."""
        with pytest.raises(InvalidConfigurationError):
            await index.delete_by_id([])

        stub.Delete.assert_not_awaited()

    async def test_delete_accepts_target_values(self, index, stub):
        """delete() should accept any of the target shapes."""
        await index.delete(DeleteAll(), "ns")
        await index.delete(DeleteByFilter({"a": 1}), "ns")

        assert stub.Delete.await_count == 2


class TestQuery:
    """Tests for query_by_id and query_by_value."""

    def test_query_targets_validate(self):
        """Empty ids and empty vectors should be rejected."""
        with pytest.raises(InvalidConfigurationError):
            QueryById("")
        with pytest.raises(InvalidConfigurationError):
            QueryByVector([])

    def test_sparse_only_query_is_allowed(self):
        """A sparse vector alone is a valid query."""
        target = QueryByVector([], SparseValues(indices=[1], values=[0.5]))

        assert target.values == ()

    async def test_query_by_id(self, index, stub):
        """query_by_id should send the id and no vector."""
        await index.query_by_id(
            "doc-1", 5, namespace="ns", include_metadata=True
        )

        request = sent(stub.Query)
        assert request.id == "doc-1"
        assert list(request.vector) == []
        assert request.top_k == 5
        assert request.include_metadata is True
        assert request.include_values is False
        assert not request.HasField("filter")

    async def test_query_by_value(self, index, stub):
        """query_by_value should send the vector and no id."""
        await index.query_by_value(
            [0.5, 0.25],
            3,
            sparse_values=SparseValues(indices=[7], values=[1.0]),
            filter={"year": {"$gte": 2020}},
        )

        request = sent(stub.Query)
        assert request.id == ""
        assert list(request.vector) == [0.5, 0.25]
        assert list(request.sparse_vector.indices) == [7]
        assert request.HasField("filter")

    async def test_query_maps_matches(self, index, stub):
        """Matches should be converted to ScoredVector records."""
        match = messages.ScoredVector(id="a", score=0.5, values=[1.0])
        match.metadata.CopyFrom(to_struct({"title": "Dune"}))
        stub.Query.return_value = messages.QueryResponse(
            matches=[match], namespace="ns"
        )

        response = await index.query(QueryById("a"), 1, namespace="ns")

        assert response.namespace == "ns"
        assert response.matches[0].id == "a"
        assert response.matches[0].score == 0.5
        assert response.matches[0].metadata == {"title": "Dune"}
        assert response.matches[0].sparse_values is None


class TestWrites:
    """Tests for upsert and update."""

    async def test_upsert(self, index, stub):
        """upsert should send every vector with its metadata."""
        vectors = [
            Vector(id="a", values=[0.5, 0.5], metadata={"genre": "drama"}),
            Vector(id="b", values=[1.0, 0.0]),
        ]

        response = await index.upsert(vectors, namespace="ns")

        request = sent(stub.Upsert)
        assert [v.id for v in request.vectors] == ["a", "b"]
        assert request.vectors[0].HasField("metadata")
        assert not request.vectors[1].HasField("metadata")
        assert request.namespace == "ns"
        assert response.upserted_count == 2

    async def test_update_sends_only_given_fields(self, index, stub):
        """update should leave unset fields empty."""
        await index.update("a", metadata={"genre": "comedy"})

        request = sent(stub.Update)
        assert request.id == "a"
        assert list(request.values) == []
        assert request.HasField("set_metadata")
        assert not request.HasField("sparse_values")


class TestReads:
    """Tests for fetch, list and describe_index_stats."""

    async def test_fetch(self, index, stub):
        """fetch should map the returned vectors by id."""
        response_message = messages.FetchResponse(namespace="ns")
        response_message.vectors["a"].CopyFrom(messages.Vector(id="a", values=[1.0]))
        stub.Fetch.return_value = response_message

        response = await index.fetch(["a", "missing"], namespace="ns")

        assert list(sent(stub.Fetch).ids) == ["a", "missing"]
        assert list(response.vectors) == ["a"]
        assert response.vectors["a"].values == [1.0]

    async def test_list_pages(self, index, stub):
        """list should return ids and the next page token."""
        response_message = messages.ListResponse(
            vectors=[messages.ListItem(id="doc#1"), messages.ListItem(id="doc#2")]
        )
        response_message.pagination.next = "token-2"
        stub.List.return_value = response_message

        response = await index.list("ns", prefix="doc#", limit=2)

        request = sent(stub.List)
        assert request.prefix == "doc#"
        assert request.limit == 2
        assert request.pagination_token == ""
        assert response.ids == ["doc#1", "doc#2"]
        assert response.pagination_token == "token-2"

    async def test_list_last_page_has_no_token(self, index, stub):
        """An absent pagination message means the last page."""
        response = await index.list()

        assert response.ids == []
        assert response.pagination_token is None

    async def test_describe_index_stats(self, index, stub):
        """Stats should include per-namespace counts."""
        response_message = messages.DescribeIndexStatsResponse(
            dimension=8, total_vector_count=3
        )
        response_message.namespaces["ns"].vector_count = 3
        stub.DescribeIndexStats.return_value = response_message

        stats = await index.describe_index_stats()

        assert stats.dimension == 8
        assert stats.total_vector_count == 3
        assert stats.namespaces["ns"].vector_count == 3


class TestErrors:
    """Tests for RPC failure handling."""

    async def test_rpc_error_becomes_data_plane_error(self, index, stub):
        """RPC failures should keep their status code and details."""
        stub.Query.side_effect = rpc_error(
            grpc.StatusCode.INVALID_ARGUMENT, "Vector dimension 3 does not match 8"
        )

        with pytest.raises(DataPlaneError) as exc_info:
            await index.query_by_value([1.0, 2.0, 3.0], 1)

        assert exc_info.value.code == "INVALID_ARGUMENT"
        assert exc_info.value.details == "Vector dimension 3 does not match 8"
        assert isinstance(exc_info.value.__cause__, grpc.aio.AioRpcError)

    async def test_each_operation_dispatches_once(self, index, stub):
        """A failed call should not be retried."""
        stub.Upsert.side_effect = rpc_error(grpc.StatusCode.UNAVAILABLE, "down")

        with pytest.raises(DataPlaneError):
            await index.upsert([Vector(id="a", values=[1.0])])

        assert stub.Upsert.await_count == 1


class TestLifecycle:
    """Tests for closing the handle."""

    async def test_context_manager_closes_channel(self, index, channel):
        """Leaving the context should close the channel."""
        async with index as handle:
            assert handle.endpoint == "https://docs.test:443"

        channel.close.assert_awaited_once()


class TestAgainstServer:
    """End-to-end tests over a real channel."""

    @pytest.fixture
    async def server(self):
        server = FakeVectorServer()
        await server.start()
        yield server
        await server.stop()

    async def test_query_round_trip(self, server):
        """A query should reach the server and its matches come back."""
        from pinecone_sdk.infrastructure.rpc import connect

        async def answer(request, context):
            return messages.QueryResponse(
                matches=[messages.ScoredVector(id=request.id, score=1.0)],
                namespace=request.namespace,
            )

        server.handlers["Query"] = answer

        async with Index(await connect(server.host, "secret")) as index:
            response = await index.query_by_id("doc-1", 1, namespace="ns")

        assert response.matches[0].id == "doc-1"
        assert response.namespace == "ns"
        assert server.calls[0].metadata["api-key"] == "secret"

    async def test_server_error_is_reported_verbatim(self, server):
        """Server aborts should surface as DataPlaneError."""
        from pinecone_sdk.infrastructure.rpc import connect

        async def reject(request, context):
            await context.abort(grpc.StatusCode.NOT_FOUND, "Namespace not found")

        server.handlers["Fetch"] = reject

        async with Index(await connect(server.host, "secret")) as index:
            with pytest.raises(DataPlaneError) as exc_info:
                await index.fetch(["a"], namespace="missing")

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.details == "Namespace not found"


class TestUnencodableValues:
    """Tests for metadata and filters that cannot be sent."""

    async def test_upsert_with_datetime_metadata(self, index, stub):
        """Non-JSON metadata should fail before dispatch as a serialization error."""
        vectors = [Vector(id="a", values=[0.1], metadata={"t": datetime(2024, 1, 1)})]

        with pytest.raises(SerializationError) as exc_info:
            await index.upsert(vectors)

        assert isinstance(exc_info.value, TransportError)
        stub.Upsert.assert_not_awaited()

    async def test_delete_by_filter_with_set_value(self, index, stub):
        """A set inside a filter should raise an SDK error, not a protobuf one."""
        with pytest.raises(PineconeError):
            await index.delete_by_filter({"a": {1, 2}})

        stub.Delete.assert_not_awaited()

    async def test_query_with_unencodable_filter(self, index, stub):
        """Query filters go through the same encoding."""
        with pytest.raises(SerializationError):
            await index.query_by_id("a", 1, filter={"when": object()})

        stub.Query.assert_not_awaited()

    async def test_update_with_unencodable_metadata(self, index, stub):
        """Update metadata goes through the same encoding."""
        with pytest.raises(SerializationError):
            await index.update("a", metadata={"raw": b"bytes"})

        stub.Update.assert_not_awaited()
