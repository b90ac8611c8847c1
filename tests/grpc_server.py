"""In-process gRPC server speaking the vector data service, for tests."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import grpc

from pinecone_sdk.infrastructure.rpc import messages

Handler = Callable[[Any, grpc.aio.ServicerContext], Any]

_TYPES = {
    "Upsert": (messages.UpsertRequest, messages.UpsertResponse),
    "Delete": (messages.DeleteRequest, messages.DeleteResponse),
    "Fetch": (messages.FetchRequest, messages.FetchResponse),
    "List": (messages.ListRequest, messages.ListResponse),
    "Query": (messages.QueryRequest, messages.QueryResponse),
    "Update": (messages.UpdateRequest, messages.UpdateResponse),
    "DescribeIndexStats": (
        messages.DescribeIndexStatsRequest,
        messages.DescribeIndexStatsResponse,
    ),
}


@dataclass
class Call:
    method: str
    request: Any
    metadata: dict[str, str]


@dataclass
class FakeVectorServer:
    """Records every call and answers with the configured handler."""

    handlers: dict[str, Handler] = field(default_factory=dict)
    calls: list[Call] = field(default_factory=list)
    server: grpc.aio.Server | None = None
    port: int = 0

    def _wrap(self, method: str) -> Handler:
        response_type = _TYPES[method][1]

        async def handle(request: Any, context: grpc.aio.ServicerContext) -> Any:
            metadata = {key: value for key, value in context.invocation_metadata()}
            self.calls.append(Call(method, request, metadata))
            handler = self.handlers.get(method)
            if handler is None:
                return response_type()
            return await handler(request, context)

        return handle

    async def start(self) -> None:
        rpc_handlers = {
            method: grpc.unary_unary_rpc_method_handler(
                self._wrap(method),
                request_deserializer=request_type.FromString,
                response_serializer=response_type.SerializeToString,
            )
            for method, (request_type, response_type) in _TYPES.items()
        }
        self.server = grpc.aio.server()
        self.server.add_generic_rpc_handlers(
            (grpc.method_handlers_generic_handler(messages.SERVICE_NAME, rpc_handlers),)
        )
        self.port = self.server.add_insecure_port("127.0.0.1:0")
        await self.server.start()

    async def stop(self) -> None:
        if self.server is not None:
            await self.server.stop(grace=None)

    @property
    def host(self) -> str:
        return f"http://127.0.0.1:{self.port}"
