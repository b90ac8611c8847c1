"""gRPC transport for the data plane."""

from pinecone_sdk.infrastructure.rpc.channel import (
    ManagedChannel,
    api_key_interceptor,
    connect,
    normalize_host,
)
from pinecone_sdk.infrastructure.rpc.stub import VectorServiceStub

__all__ = [
    "ManagedChannel",
    "VectorServiceStub",
    "api_key_interceptor",
    "connect",
    "normalize_host",
]
