"""Pydantic schemas for the index and collection management API."""

from enum import Enum

from pydantic import BaseModel, Field


class Metric(str, Enum):
    """Distance metric used for similarity search."""

    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOTPRODUCT = "dotproduct"


class Cloud(str, Enum):
    """Cloud provider hosting a serverless index."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"


class DeletionProtection(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class IndexState(str, Enum):
    """Lifecycle states reported in ``IndexStatus.state``."""

    INITIALIZING = "Initializing"
    INITIALIZATION_FAILED = "InitializationFailed"
    SCALING_UP = "ScalingUp"
    SCALING_DOWN = "ScalingDown"
    SCALING_UP_POD_SIZE = "ScalingUpPodSize"
    SCALING_DOWN_POD_SIZE = "ScalingDownPodSize"
    TERMINATING = "Terminating"
    READY = "Ready"


class ServerlessSpec(BaseModel):
    cloud: Cloud
    region: str


class PodSpecMetadataConfig(BaseModel):
    """Metadata fields to index; all fields are indexed when unset."""

    indexed: list[str] | None = None


class PodSpec(BaseModel):
    environment: str
    pod_type: str
    pods: int = 1
    replicas: int = 1
    shards: int = 1
    metadata_config: PodSpecMetadataConfig | None = None
    source_collection: str | None = None


class IndexSpec(BaseModel):
    """Deployment spec; exactly one of ``serverless`` or ``pod`` is set."""

    serverless: ServerlessSpec | None = None
    pod: PodSpec | None = None


class IndexStatus(BaseModel):
    ready: bool
    state: str  # Values of IndexState; kept open for states added server-side


class IndexModel(BaseModel):
    """Description of an index as returned by the control plane."""

    name: str
    dimension: int
    metric: Metric
    host: str
    deletion_protection: DeletionProtection | None = None
    spec: IndexSpec
    status: IndexStatus


class IndexList(BaseModel):
    indexes: list[IndexModel] = Field(default_factory=list)


class CollectionModel(BaseModel):
    """Description of a collection (a static copy of a pod index)."""

    name: str
    status: str  # Initializing, Ready or Terminating
    environment: str
    size: int | None = None
    dimension: int | None = None
    vector_count: int | None = None


class CollectionList(BaseModel):
    collections: list[CollectionModel] = Field(default_factory=list)


class CreateIndexRequest(BaseModel):
    name: str
    dimension: int
    metric: Metric = Metric.COSINE
    deletion_protection: DeletionProtection = DeletionProtection.DISABLED
    spec: IndexSpec


class ConfigurePodSpec(BaseModel):
    replicas: int | None = None
    pod_type: str | None = None


class ConfigureIndexSpec(BaseModel):
    pod: ConfigurePodSpec


class ConfigureIndexRequest(BaseModel):
    spec: ConfigureIndexSpec | None = None
    deletion_protection: DeletionProtection | None = None


class CreateCollectionRequest(BaseModel):
    name: str
    source: str
