"""Entry point tying configuration, control plane, inference and data plane."""

from collections.abc import Mapping

import structlog

from pinecone_sdk.config import ClientConfig
from pinecone_sdk.infrastructure.http import ControlPlaneTransport, HttpxTransport
from pinecone_sdk.infrastructure.rpc import connect
from pinecone_sdk.modules.control import ControlPlaneService
from pinecone_sdk.modules.data import Index
from pinecone_sdk.modules.inference import InferenceService

logger = structlog.get_logger()


class PineconeClient(ControlPlaneService):
    """Async client for a Pinecone project.

    Index and collection operations are methods of the client itself;
    embeddings live under ``client.inference`` and vector operations on the
    ``Index`` returned by ``await client.index(host)``.

    Example:
        async with PineconeClient() as client:
            await client.create_serverless_index("docs", 1536)
            description = await client.describe_index("docs")
            async with await client.index(description.host) as index:
                await index.upsert([Vector(id="a", values=[0.1] * 1536)])
    """

    def __init__(
        self,
        api_key: str | None = None,
        control_plane_host: str | None = None,
        additional_headers: Mapping[str, str] | None = None,
        source_tag: str | None = None,
        *,
        transport: ControlPlaneTransport | None = None,
    ) -> None:
        """Resolve configuration and build the control-plane transport.

        Args:
            api_key: API key; defaults to ``PINECONE_API_KEY``.
            control_plane_host: Controller URL; defaults to
                ``PINECONE_CONTROLLER_HOST`` or ``https://api.pinecone.io``.
            additional_headers: Headers for every control-plane request;
                default to ``PINECONE_ADDITIONAL_HEADERS``.
            source_tag: Tag identifying the calling integration.
            transport: Transport to use instead of the httpx default.

        Raises:
            APIKeyMissingError: If no API key is available.
            InvalidHeadersError: If the environment headers are malformed.
        """
        self.config = ClientConfig.resolve(
            api_key=api_key,
            control_plane_host=control_plane_host,
            additional_headers=additional_headers,
            source_tag=source_tag,
        )
        if transport is None:
            transport = HttpxTransport(
                self.config.controller_host,
                api_key=self.config.api_key,
                headers=self.config.additional_headers,
                user_agent=self.config.user_agent,
                timeout_seconds=self.config.request_timeout_seconds,
            )
        super().__init__(transport)
        self.inference = InferenceService(transport)

        logger.debug(
            "client_initialized",
            controller_host=self.config.controller_host,
            source_tag=self.config.source_tag,
        )

    async def index(self, host: str) -> Index:
        """Connect to the data plane of the index served at ``host``.

        Args:
            host: Index host as returned by ``describe_index``; scheme and
                port default to ``https`` and 443.

        Raises:
            PineconeConnectionError: If the channel cannot be established.
        """
        managed = await connect(
            host,
            self.config.api_key,
            timeout_seconds=self.config.connect_timeout_seconds,
        )
        return Index(managed)

    async def __aenter__(self) -> "PineconeClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the control-plane transport."""
        await self._transport.aclose()
