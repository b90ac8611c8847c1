"""Inference: hosted embedding models."""

from pinecone_sdk.modules.inference.schemas import (
    Embedding,
    EmbeddingsList,
    EmbeddingsUsage,
    EmbedParameters,
)
from pinecone_sdk.modules.inference.service import InferenceService

__all__ = [
    "EmbedParameters",
    "Embedding",
    "EmbeddingsList",
    "EmbeddingsUsage",
    "InferenceService",
]
