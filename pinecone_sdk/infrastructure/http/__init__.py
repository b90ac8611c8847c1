"""Control-plane HTTP transport."""

from pinecone_sdk.infrastructure.http.dispatch import dispatch, parse_body
from pinecone_sdk.infrastructure.http.httpx_transport import HttpxTransport
from pinecone_sdk.infrastructure.http.protocol import (
    ControlPlaneTransport,
    TransportResponse,
)

__all__ = [
    "ControlPlaneTransport",
    "HttpxTransport",
    "TransportResponse",
    "dispatch",
    "parse_body",
]
