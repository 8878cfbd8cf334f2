"""Workload fetcher - lists workloads of one kind for a (context, namespace) pair."""

from __future__ import annotations

import logging

from kdiff.constants.enums import ResourceKind
from kdiff.controllers.workloads.parsers.image_parser import ImageParseError, parse_image
from kdiff.kube.client import ClusterClient
from kdiff.kube.errors import ClusterError
from kdiff.models.core.workload_info import Container, RawWorkload, WorkloadResource

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A workload listing for one (kind, context, namespace) failed."""

    def __init__(
        self,
        message: str,
        *,
        kind: ResourceKind,
        context: str,
        namespace: str,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.context = context
        self.namespace = namespace


class ImageParseFetchError(FetchError):
    """A container image in the listing could not be parsed."""

    def __init__(
        self,
        parse_error: ImageParseError,
        *,
        kind: ResourceKind,
        context: str,
        namespace: str,
        workload: str,
        container: str,
    ) -> None:
        super().__init__(
            f"{kind.value}/{workload} container {container}: "
            f"invalid image {parse_error.raw!r} ({parse_error})",
            kind=kind,
            context=context,
            namespace=namespace,
        )
        self.parse_error = parse_error
        self.workload = workload
        self.container = container


class WorkloadFetcher:
    """Fetches workloads through the cluster client and parses their images."""

    def __init__(self, cluster_client: ClusterClient) -> None:
        """Initialize with the cluster client.

        Args:
            cluster_client: Async client listing workloads per context
        """
        self._client = cluster_client

    async def fetch(
        self,
        kind: ResourceKind,
        context: str,
        namespace: str,
    ) -> list[WorkloadResource]:
        """Fetch all workloads of ``kind`` in ``namespace`` ("" for all).

        Raises:
            FetchError: When listing fails.
            ImageParseFetchError: When any container image is malformed; no
                partial result is returned.
        """
        try:
            raw_workloads = await self._client.list_workloads(kind, context, namespace)
        except ClusterError as exc:
            raise FetchError(
                str(exc), kind=kind, context=context, namespace=namespace
            ) from exc

        resources = [
            self._to_resource(kind, context, namespace, raw) for raw in raw_workloads
        ]
        logger.debug(
            "Fetched %d %s from %s (namespace=%s)",
            len(resources),
            kind.value,
            context,
            namespace or "all",
        )
        return resources

    @staticmethod
    def _to_resource(
        kind: ResourceKind,
        context: str,
        namespace: str,
        raw: RawWorkload,
    ) -> WorkloadResource:
        containers: list[Container] = []
        for raw_container in raw.containers:
            try:
                image = parse_image(raw_container.image)
            except ImageParseError as exc:
                raise ImageParseFetchError(
                    exc,
                    kind=kind,
                    context=context,
                    namespace=namespace,
                    workload=raw.name,
                    container=raw_container.name,
                ) from exc
            containers.append(Container(name=raw_container.name, image=image))
        return WorkloadResource(
            name=raw.name,
            namespace=raw.namespace or namespace,
            containers=tuple(containers),
        )
