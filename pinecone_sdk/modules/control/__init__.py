"""Control plane: index and collection lifecycle."""

from pinecone_sdk.modules.control.polling import WaitPolicy, wait_until_ready
from pinecone_sdk.modules.control.schemas import (
    Cloud,
    CollectionList,
    CollectionModel,
    DeletionProtection,
    IndexList,
    IndexModel,
    IndexSpec,
    IndexState,
    IndexStatus,
    Metric,
    PodSpec,
    ServerlessSpec,
)
from pinecone_sdk.modules.control.service import ControlPlaneService

__all__ = [
    "Cloud",
    "CollectionList",
    "CollectionModel",
    "ControlPlaneService",
    "DeletionProtection",
    "IndexList",
    "IndexModel",
    "IndexSpec",
    "IndexState",
    "IndexStatus",
    "Metric",
    "PodSpec",
    "ServerlessSpec",
    "WaitPolicy",
    "wait_until_ready",
]
