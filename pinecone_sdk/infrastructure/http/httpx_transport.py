"""httpx implementation of the control-plane transport."""

from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from pinecone_sdk.errors import TransportError
from pinecone_sdk.infrastructure.http.protocol import TransportResponse

logger = structlog.get_logger()


class HttpxTransport:
    """Control-plane transport backed by a shared ``httpx.AsyncClient``.

    The API key, API version, User-Agent and any additional headers are set
    once as client defaults so every request carries them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str,
        headers: Mapping[str, str] | None = None,
        user_agent: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Controller host, e.g. ``https://api.pinecone.io``.
            api_key: Sent as the ``Api-Key`` header.
            headers: Additional headers for every request.
            user_agent: Value of the ``User-Agent`` header.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        default_headers = {"Api-Key": api_key, **(headers or {})}
        if user_agent:
            default_headers["User-Agent"] = user_agent

        self._timeout = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=default_headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
    ) -> TransportResponse:
        """Send one request and return its status and body."""
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning(
                "control_plane_request_timeout",
                method=method,
                path=path,
                timeout_seconds=self._timeout,
            )
            raise TransportError(
                f"{method} {path} timed out after {self._timeout}s"
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "control_plane_request_failed",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug(
            "control_plane_response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return TransportResponse(status_code=response.status_code, body=response.text)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
