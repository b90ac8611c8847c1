"""Text embedding through the hosted inference API."""

from collections.abc import Sequence

import structlog

from pinecone_sdk.infrastructure.http import (
    ControlPlaneTransport,
    dispatch,
    parse_body,
)
from pinecone_sdk.modules.inference.schemas import (
    EmbedInput,
    EmbeddingsList,
    EmbedParameters,
    EmbedRequest,
)

logger = structlog.get_logger()


class InferenceService:
    """Embeds text with models hosted next to the control plane."""

    def __init__(self, transport: ControlPlaneTransport) -> None:
        self._transport = transport

    async def embed(
        self,
        model: str,
        inputs: Sequence[str],
        *,
        parameters: EmbedParameters | None = None,
    ) -> EmbeddingsList:
        """Generate one embedding per input text.

        Args:
            model: Embedding model name, e.g. ``multilingual-e5-large``.
            inputs: Texts to embed.
            parameters: Model-specific parameters such as ``input_type``.

        Returns:
            The embeddings and token usage.

        Raises:
            ResponseError: If the request is rejected, e.g. with
                ``BadRequestError`` for unknown parameters.
        """
        request = EmbedRequest(
            model=model,
            parameters=parameters,
            inputs=[EmbedInput(text=text) for text in inputs],
        )
        logger.debug("embed_started", model=model, input_count=len(request.inputs))

        response = await dispatch(
            self._transport,
            "embed",
            "POST",
            "/embed",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        return parse_body(EmbeddingsList, response)
