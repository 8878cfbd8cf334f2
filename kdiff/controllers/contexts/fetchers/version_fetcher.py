"""Version fetcher for contexts controller - probes reachability of each context."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from kdiff.constants.timeouts import CONTEXT_PROBE_TIMEOUT
from kdiff.kube.client import ContextSource
from kdiff.models.core.context_info import ContextProbe, ErrorInfo

logger = logging.getLogger(__name__)


class VersionFetcher:
    """Probes contexts by asking each API server for its version."""

    def __init__(self, source: ContextSource) -> None:
        """Initialize with the context source.

        Args:
            source: Lists contexts and resolves fresh connections for them
        """
        self._source = source

    async def probe(
        self,
        contexts: Iterable[str],
        timeout: float = CONTEXT_PROBE_TIMEOUT,
    ) -> list[ContextProbe]:
        """Probe every context concurrently.

        Returns one probe per distinct context, ordered by name, once every
        probe has completed or timed out.
        """
        names = sorted(set(contexts))
        probes = await asyncio.gather(*(self.probe_one(name, timeout) for name in names))
        reachable = sum(1 for probe in probes if probe.reachable)
        logger.info("Probed %d contexts, %d reachable", len(probes), reachable)
        return list(probes)

    async def probe_one(self, name: str, timeout: float = CONTEXT_PROBE_TIMEOUT) -> ContextProbe:
        """Probe a single context through a freshly resolved connection."""
        try:
            handle = self._source.resolve_connection(name, request_timeout=timeout)
            version = await asyncio.wait_for(handle.get_server_version(), timeout)
        except asyncio.TimeoutError:
            logger.warning("Context %s did not answer within %.1fs", name, timeout)
            return ContextProbe(
                name=name,
                reachable=False,
                error=ErrorInfo(
                    type="TimeoutError",
                    message=f"no response within {timeout:g}s",
                ),
            )
        except Exception as exc:
            logger.warning("Context %s is unreachable: %s", name, exc)
            return ContextProbe(
                name=name,
                reachable=False,
                error=ErrorInfo.from_exception(exc),
            )

        logger.debug("Context %s reachable (server %s)", name, version)
        return ContextProbe(name=name, reachable=True, server_version=version)
