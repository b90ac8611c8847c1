"""Schemas for the inference API."""

from pydantic import BaseModel


class EmbedParameters(BaseModel):
    """Model-specific embedding parameters."""

    input_type: str | None = None  # "query" or "passage"
    truncate: str | None = None  # "END" or "NONE"


class EmbedInput(BaseModel):
    text: str


class EmbedRequest(BaseModel):
    model: str
    parameters: EmbedParameters | None = None
    inputs: list[EmbedInput]


class Embedding(BaseModel):
    values: list[float] | None = None


class EmbeddingsUsage(BaseModel):
    total_tokens: int | None = None


class EmbeddingsList(BaseModel):
    """Embeddings returned by ``embed``, one per input, in input order."""

    model: str | None = None
    data: list[Embedding] | None = None
    usage: EmbeddingsUsage | None = None
