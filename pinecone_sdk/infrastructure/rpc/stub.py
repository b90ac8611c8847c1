"""Client stub for the vector data service."""

import grpc

from pinecone_sdk.infrastructure.rpc import messages


def _unary(
    channel: grpc.aio.Channel, method: str, request_type: type, response_type: type
) -> grpc.aio.UnaryUnaryMultiCallable:
    return channel.unary_unary(
        f"/{messages.SERVICE_NAME}/{method}",
        request_serializer=request_type.SerializeToString,
        response_deserializer=response_type.FromString,
    )


class VectorServiceStub:
    """One awaitable callable per data-plane RPC."""

    def __init__(self, channel: grpc.aio.Channel) -> None:
        self.Upsert = _unary(
            channel, "Upsert", messages.UpsertRequest, messages.UpsertResponse
        )
        self.Delete = _unary(
            channel, "Delete", messages.DeleteRequest, messages.DeleteResponse
        )
        self.Fetch = _unary(
            channel, "Fetch", messages.FetchRequest, messages.FetchResponse
        )
        self.List = _unary(channel, "List", messages.ListRequest, messages.ListResponse)
        self.Query = _unary(
            channel, "Query", messages.QueryRequest, messages.QueryResponse
        )
        self.Update = _unary(
            channel, "Update", messages.UpdateRequest, messages.UpdateResponse
        )
        self.DescribeIndexStats = _unary(
            channel,
            "DescribeIndexStats",
            messages.DescribeIndexStatsRequest,
            messages.DescribeIndexStatsResponse,
        )
