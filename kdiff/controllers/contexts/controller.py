"""Contexts controller - context discovery, reachability and namespaces."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from kdiff.constants.timeouts import CONTEXT_PROBE_TIMEOUT
from kdiff.controllers.base.base_controller import BaseController
from kdiff.controllers.contexts.fetchers.version_fetcher import VersionFetcher
from kdiff.kube.client import ReloadableClusterClient
from kdiff.models.core.context_info import ContextProbe, summarize_error_message

logger = logging.getLogger(__name__)


class ContextsController(BaseController):
    """Probes kubeconfig contexts and lists their namespaces."""

    def __init__(
        self,
        cluster_client: ReloadableClusterClient,
        max_concurrency: int | None = None,
    ) -> None:
        """Initialize the contexts controller.

        Args:
            cluster_client: Connection set that is reloaded on every probe
                cycle and used for namespace listing
            max_concurrency: Optional cap on simultaneous namespace listings
        """
        super().__init__(max_concurrency=max_concurrency)
        self._cluster_client = cluster_client

    async def probe_contexts(self, timeout: float = CONTEXT_PROBE_TIMEOUT) -> list[ContextProbe]:
        """Reload the connection set and probe its contexts, ordered by name.

        The kubeconfig is read once per cycle. Probes and the reloaded
        connection set come from that same read, so every context reported
        reachable also has a connection for namespace and workload listing.

        Raises:
            KubeConfigError: When the kubeconfig cannot be read.
        """
        source = await asyncio.to_thread(self._cluster_client.reload)
        return await VersionFetcher(source).probe(source.list_context_names(), timeout)

    async def list_namespaces(self, contexts: Iterable[str]) -> list[str]:
        """Return the sorted union of namespaces across ``contexts``.

        A context that fails to list its namespaces is skipped and recorded as
        a non-fatal warning.
        """
        self._clear_nonfatal_warnings()
        client = self._cluster_client
        names = sorted(set(contexts))
        results = await self.gather_results(
            [lambda name=name: client.list_namespaces(name) for name in names]
        )

        namespaces: set[str] = set()
        for name, result in zip(names, results):
            if not result.success:
                logger.warning("Namespace listing failed for %s: %s", name, result.error)
                self._record_nonfatal_warning(name, summarize_error_message(result.error))
                continue
            namespaces.update(result.data or [])
        return sorted(namespaces)

    @staticmethod
    def reachable_contexts(probes: Iterable[ContextProbe]) -> list[str]:
        """Names of reachable probes, in the order given."""
        return [probe.name for probe in probes if probe.reachable]
