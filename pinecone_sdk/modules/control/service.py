"""Index and collection management over the control plane."""

from collections.abc import Sequence
from functools import partial
from urllib.parse import quote

import structlog

from pinecone_sdk.errors import InvalidConfigurationError, PineconeError
from pinecone_sdk.infrastructure.http import (
    ControlPlaneTransport,
    dispatch,
    parse_body,
)
from pinecone_sdk.modules.control.polling import (
    Clock,
    Sleep,
    WaitPolicy,
    wait_until_ready,
)
from pinecone_sdk.modules.control.schemas import (
    Cloud,
    CollectionList,
    CollectionModel,
    ConfigureIndexRequest,
    ConfigureIndexSpec,
    ConfigurePodSpec,
    CreateCollectionRequest,
    CreateIndexRequest,
    DeletionProtection,
    IndexList,
    IndexModel,
    IndexSpec,
    Metric,
    PodSpec,
    PodSpecMetadataConfig,
    ServerlessSpec,
)

logger = structlog.get_logger()

DEFAULT_WAIT_POLICY = WaitPolicy()


def _name(name: str) -> str:
    return quote(name, safe="")


class ControlPlaneService:
    """Create, describe, configure and delete indexes and collections.

    Each operation makes one request and raises the classified error on
    failure. Nothing is retried; only index creation may follow up with
    readiness polling.
    """

    def __init__(
        self,
        transport: ControlPlaneTransport,
        *,
        sleep: Sleep | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            transport: Transport used for every request.
            sleep: Override for the poller's sleep (tests).
            clock: Override for the poller's monotonic clock (tests).
        """
        self._transport = transport
        self._poll_overrides = {
            key: value
            for key, value in (("sleep", sleep), ("clock", clock))
            if value is not None
        }

    async def create_serverless_index(
        self,
        name: str,
        dimension: int,
        *,
        metric: Metric = Metric.COSINE,
        cloud: Cloud = Cloud.AWS,
        region: str = "us-east-1",
        deletion_protection: DeletionProtection = DeletionProtection.DISABLED,
        wait_policy: WaitPolicy = DEFAULT_WAIT_POLICY,
    ) -> IndexModel:
        """Create a serverless index.

        Args:
            name: Index name.
            dimension: Dimension of the vectors to store.
            metric: Distance metric.
            cloud: Cloud provider.
            region: Cloud region.
            deletion_protection: Whether the index may be deleted.
            wait_policy: Whether and how long to wait for readiness.

        Returns:
            The index as described by the create call.

        Raises:
            ResponseError: If the create call fails (no polling happens).
            PineconeTimeoutError: If the index was created but did not become
                ready in time.
        """
        request = CreateIndexRequest(
            name=name,
            dimension=dimension,
            metric=metric,
            deletion_protection=deletion_protection,
            spec=IndexSpec(serverless=ServerlessSpec(cloud=cloud, region=region)),
        )
        return await self._create_index(request, wait_policy)

    async def create_pod_index(
        self,
        name: str,
        dimension: int,
        *,
        environment: str,
        pod_type: str,
        pods: int = 1,
        replicas: int = 1,
        shards: int = 1,
        metric: Metric = Metric.COSINE,
        deletion_protection: DeletionProtection = DeletionProtection.DISABLED,
        metadata_indexed: Sequence[str] | None = None,
        source_collection: str | None = None,
        wait_policy: WaitPolicy = DEFAULT_WAIT_POLICY,
    ) -> IndexModel:
        """Create a pod-based index.

        Args:
            name: Index name.
            dimension: Dimension of the vectors to store.
            environment: Pod environment, e.g. ``us-east-1-aws``.
            pod_type: Pod type and size, e.g. ``p1.x1``.
            pods: Total number of pods.
            replicas: Number of replicas.
            shards: Number of shards.
            metric: Distance metric.
            deletion_protection: Whether the index may be deleted.
            metadata_indexed: Metadata fields to index; all when None.
            source_collection: Collection to create the index from.
            wait_policy: Whether and how long to wait for readiness.

        Returns:
            The index as described by the create call.

        Raises:
            ResponseError: If the create call fails (no polling happens).
            PineconeTimeoutError: If the index was created but did not become
                ready in time.
        """
        pod = PodSpec(
            environment=environment,
            pod_type=pod_type,
            pods=pods,
            replicas=replicas,
            shards=shards,
            metadata_config=(
                PodSpecMetadataConfig(indexed=list(metadata_indexed))
                if metadata_indexed is not None
                else None
            ),
            source_collection=source_collection,
        )
        request = CreateIndexRequest(
            name=name,
            dimension=dimension,
            metric=metric,
            deletion_protection=deletion_protection,
            spec=IndexSpec(pod=pod),
        )
        return await self._create_index(request, wait_policy)

    async def _create_index(
        self, request: CreateIndexRequest, wait_policy: WaitPolicy
    ) -> IndexModel:
        logger.info("index_create_started", index=request.name)
        response = await dispatch(
            self._transport,
            "create_index",
            "POST",
            "/indexes",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        created = parse_body(IndexModel, response)

        await wait_until_ready(
            request.name,
            wait_policy,
            partial(self._is_ready, request.name),
            **self._poll_overrides,
        )
        return created

    async def _is_ready(self, name: str) -> bool:
        # Failed lookups count as "not ready yet", never as a reason to stop.
        try:
            index = await self.describe_index(name)
        except PineconeError as e:
            logger.debug(
                "index_poll_describe_failed",
                index=name,
                error_type=type(e).__name__,
            )
            return False
        return index.status.ready

    async def describe_index(self, name: str) -> IndexModel:
        """Describe an index.

        Raises:
            IndexNotFoundError: If no index has this name.
        """
        response = await dispatch(
            self._transport, "describe_index", "GET", f"/indexes/{_name(name)}"
        )
        return parse_body(IndexModel, response)

    async def list_indexes(self) -> IndexList:
        """List the indexes in the project."""
        response = await dispatch(self._transport, "list_indexes", "GET", "/indexes")
        return parse_body(IndexList, response)

    async def configure_index(
        self,
        name: str,
        *,
        deletion_protection: DeletionProtection | None = None,
        replicas: int | None = None,
        pod_type: str | None = None,
    ) -> IndexModel:
        """Change the deletion protection, replicas or pod type of an index.

        Args:
            name: Index name.
            deletion_protection: New deletion protection setting.
            replicas: New number of replicas (pod indexes).
            pod_type: New pod type (pod indexes).

        Returns:
            The updated index description.

        Raises:
            InvalidConfigurationError: If no change was requested; no request
                is sent in that case.
        """
        if deletion_protection is None and replicas is None and pod_type is None:
            raise InvalidConfigurationError(
                "At least one of deletion_protection, number of replicas, "
                "or pod type must be provided"
            )

        spec = None
        if replicas is not None or pod_type is not None:
            spec = ConfigureIndexSpec(
                pod=ConfigurePodSpec(replicas=replicas, pod_type=pod_type)
            )
        request = ConfigureIndexRequest(
            spec=spec, deletion_protection=deletion_protection
        )

        response = await dispatch(
            self._transport,
            "configure_index",
            "PATCH",
            f"/indexes/{_name(name)}",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        logger.info("index_configured", index=name)
        return parse_body(IndexModel, response)

    async def delete_index(self, name: str) -> None:
        """Delete an index.

        Raises:
            ActionForbiddenError: If deletion protection is enabled.
            IndexNotFoundError: If no index has this name.
        """
        await dispatch(
            self._transport, "delete_index", "DELETE", f"/indexes/{_name(name)}"
        )
        logger.info("index_deleted", index=name)

    async def create_collection(self, name: str, source: str) -> CollectionModel:
        """Create a collection from the pod index named ``source``."""
        request = CreateCollectionRequest(name=name, source=source)
        response = await dispatch(
            self._transport,
            "create_collection",
            "POST",
            "/collections",
            json=request.model_dump(mode="json"),
        )
        logger.info("collection_created", collection=name, source=source)
        return parse_body(CollectionModel, response)

    async def describe_collection(self, name: str) -> CollectionModel:
        response = await dispatch(
            self._transport,
            "describe_collection",
            "GET",
            f"/collections/{_name(name)}",
        )
        return parse_body(CollectionModel, response)

    async def list_collections(self) -> CollectionList:
        response = await dispatch(
            self._transport, "list_collections", "GET", "/collections"
        )
        return parse_body(CollectionList, response)

    async def delete_collection(self, name: str) -> None:
        await dispatch(
            self._transport,
            "delete_collection",
            "DELETE",
            f"/collections/{_name(name)}",
        )
        logger.info("collection_deleted", collection=name)
