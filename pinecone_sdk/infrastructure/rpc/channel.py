"""Data-plane channel management.

Turns a user-supplied index host into a gRPC endpoint, opens a channel to it
and stamps every outgoing call with the API key.
"""

import asyncio
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import grpc
import structlog

from pinecone_sdk.errors import PineconeConnectionError

logger = structlog.get_logger()

DEFAULT_SCHEME = "https"
DEFAULT_PORT = 443
API_KEY_METADATA_KEY = "api-key"

_HAS_SCHEME = re.compile(r"^[a-zA-Z]+://")
_HAS_PORT = re.compile(r":\d+$")

CallDetailsTransform = Callable[[grpc.aio.ClientCallDetails], grpc.aio.ClientCallDetails]


def has_scheme(host: str) -> bool:
    return _HAS_SCHEME.match(host) is not None


def has_port(host: str) -> bool:
    return _HAS_PORT.search(host) is not None


def normalize_host(host: str) -> str:
    """Add the default scheme and port to ``host`` where missing.

    ``"example.com"`` becomes ``"https://example.com:443"``; an explicit
    scheme or port is kept as given.
    """
    endpoint = host if has_scheme(host) else f"{DEFAULT_SCHEME}://{host}"
    if not has_port(endpoint):
        endpoint = f"{endpoint}:{DEFAULT_PORT}"
    return endpoint


def api_key_interceptor(api_key: str) -> CallDetailsTransform:
    """Return a transform that adds the ``api-key`` metadata to a call.

    An empty key leaves calls untouched.
    """

    def stamp(details: grpc.aio.ClientCallDetails) -> grpc.aio.ClientCallDetails:
        if not api_key:
            return details
        metadata = grpc.aio.Metadata(
            *(details.metadata or ()), (API_KEY_METADATA_KEY, api_key)
        )
        return grpc.aio.ClientCallDetails(
            method=details.method,
            timeout=details.timeout,
            metadata=metadata,
            credentials=details.credentials,
            wait_for_ready=details.wait_for_ready,
        )

    return stamp


class CallDetailsInterceptor(grpc.aio.UnaryUnaryClientInterceptor):
    """Adapts a call-details transform to grpc's interceptor interface."""

    def __init__(self, transform: CallDetailsTransform) -> None:
        self._transform = transform

    async def intercept_unary_unary(
        self,
        continuation: Callable[[grpc.aio.ClientCallDetails, Any], Awaitable[Any]],
        client_call_details: grpc.aio.ClientCallDetails,
        request: Any,
    ) -> Any:
        return await continuation(self._transform(client_call_details), request)


@dataclass
class ManagedChannel:
    """A connected channel that authenticates every call it carries."""

    endpoint: str
    channel: grpc.aio.Channel = field(repr=False)

    async def close(self) -> None:
        await self.channel.close()


def _open_channel(endpoint: str, api_key: str) -> grpc.aio.Channel:
    scheme, _, target = endpoint.partition("://")
    if not target or target.startswith(":"):
        raise ValueError(f"no host in endpoint {endpoint!r}")

    interceptors = [CallDetailsInterceptor(api_key_interceptor(api_key))]
    if scheme == "https":
        return grpc.aio.secure_channel(
            target, grpc.ssl_channel_credentials(), interceptors=interceptors
        )
    if scheme == "http":
        # Plaintext, for local emulators
        return grpc.aio.insecure_channel(target, interceptors=interceptors)
    raise ValueError(f"unsupported scheme {scheme!r}")


async def connect(
    host: str,
    api_key: str,
    *,
    timeout_seconds: float = 10.0,
) -> ManagedChannel:
    """Open an authenticated channel to an index host.

    Args:
        host: Index host, with or without scheme and port.
        api_key: Key attached to every call; empty disables the header.
        timeout_seconds: How long to wait for the channel to become ready.

    Returns:
        The connected channel.

    Raises:
        PineconeConnectionError: If the endpoint is malformed, TLS cannot be
            configured, or the channel does not become ready in time.
    """
    endpoint = normalize_host(host)
    channel: grpc.aio.Channel | None = None

    try:
        channel = _open_channel(endpoint, api_key)
        await asyncio.wait_for(channel.channel_ready(), timeout=timeout_seconds)
    except Exception as e:
        logger.error(
            "data_plane_connect_failed",
            endpoint=endpoint,
            error=str(e),
            error_type=type(e).__name__,
        )
        if channel is not None:
            await channel.close()
        raise PineconeConnectionError(endpoint, str(e) or type(e).__name__) from e

    logger.info("data_plane_connected", endpoint=endpoint)
    return ManagedChannel(endpoint=endpoint, channel=channel)
