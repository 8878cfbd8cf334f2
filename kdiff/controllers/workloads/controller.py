"""Workloads controller - aggregates workloads across contexts and namespaces."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from kdiff.constants.enums import ResourceKind
from kdiff.controllers.base.base_controller import BaseController
from kdiff.controllers.workloads.fetchers.workload_fetcher import FetchError, WorkloadFetcher
from kdiff.kube.client import ClusterClient
from kdiff.kube.errors import ClusterError
from kdiff.models.aggregation.aggregation_index import (
    AggregationIndex,
    AggregationResult,
    PartialFailure,
)
from kdiff.models.core.context_info import ErrorInfo

logger = logging.getLogger(__name__)

ALL_NAMESPACES = ""


class FetchRequest(NamedTuple):
    """One (kind, context, namespace) fetch of an aggregation."""

    kind: ResourceKind
    context: str
    namespace: str


class WorkloadsController(BaseController):
    """Fans workload fetches out across contexts and folds them into an index."""

    def __init__(
        self,
        cluster_client: ClusterClient,
        max_concurrency: int | None = None,
    ) -> None:
        """Initialize the workloads controller.

        Args:
            cluster_client: Client listing workloads per context
            max_concurrency: Optional cap on simultaneous fetches
        """
        super().__init__(max_concurrency=max_concurrency)
        self._fetcher = WorkloadFetcher(cluster_client)

    @staticmethod
    def plan_requests(
        kinds: Iterable[ResourceKind],
        contexts: Iterable[str],
        namespaces: Iterable[str],
        known_namespaces: Iterable[str] | None = None,
    ) -> list[FetchRequest]:
        """Build the sorted cross-product of fetches for an aggregation.

        Raises:
            ValueError: When kinds, contexts or namespaces is empty.
        """
        kind_set = set(kinds)
        context_set = set(contexts)
        namespace_set = set(namespaces)
        if not kind_set:
            raise ValueError("at least one resource kind is required")
        if not context_set:
            raise ValueError("at least one context is required")
        if not namespace_set:
            raise ValueError("at least one namespace is required")

        known = set(known_namespaces or ())
        if ALL_NAMESPACES in namespace_set or (known and known <= namespace_set):
            namespace_set = {ALL_NAMESPACES}

        return [
            FetchRequest(kind, context, namespace)
            for kind in sorted(kind_set, key=lambda item: item.value)
            for context in sorted(context_set)
            for namespace in sorted(namespace_set)
        ]

    async def aggregate(
        self,
        kinds: Iterable[ResourceKind],
        contexts: Iterable[str],
        namespaces: Iterable[str],
        *,
        known_namespaces: Iterable[str] | None = None,
    ) -> AggregationResult:
        """Fetch every (kind, context, namespace) and build the index.

        Every fetch is dispatched concurrently and awaited before the index
        is touched. Failed fetches are returned as partial failures and add
        nothing to the index.
        """
        requests = self.plan_requests(kinds, contexts, namespaces, known_namespaces)
        fetcher = self._fetcher
        results = await self.gather_results(
            [
                lambda request=request: fetcher.fetch(
                    request.kind, request.context, request.namespace
                )
                for request in requests
            ]
        )

        index = AggregationIndex()
        failures: list[PartialFailure] = []
        for request, result in zip(requests, results):
            if not result.success:
                logger.warning(
                    "Fetch of %s in %s (namespace=%s) failed: %s",
                    request.kind.value,
                    request.context,
                    request.namespace or "all",
                    result.error,
                )
                failures.append(
                    PartialFailure(
                        kind=request.kind,
                        context=request.context,
                        namespace=request.namespace,
                        error=self.failure_info(result.error),
                    )
                )
                continue
            for resource in result.data:
                index.insert(request.kind, request.context, resource)

        logger.info(
            "Aggregated %d resources from %d fetches (%d failed)",
            len(index),
            len(requests),
            len(failures),
        )
        return AggregationResult(index, failures)

    @staticmethod
    def failure_info(error: BaseException | None) -> ErrorInfo:
        """Describe a failed fetch by the cluster error that caused it.

        ``FetchError`` wraps cluster errors; the wrapped class is recorded so
        the failure keeps its cluster error category.
        """
        if error is None:
            return ErrorInfo(type="UnknownError", message="Unknown error")
        if isinstance(error, FetchError) and isinstance(error.__cause__, ClusterError):
            return ErrorInfo.from_exception(error.__cause__)
        return ErrorInfo.from_exception(error)
