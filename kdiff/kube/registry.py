"""Thread-safe registry of per-context client handles."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from kdiff.constants.enums import ResourceKind
from kdiff.kube.client import ClusterHandle, ContextSource, ContextSourceReader
from kdiff.kube.errors import ClusterError, ClusterUnreachableError
from kdiff.models.core.workload_info import RawWorkload

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Owns the context name -> client handle mapping.

    ``reload()`` reads the source once, builds a complete new mapping from
    that read and swaps it in under a lock, so readers only ever see the old
    set or the new set. A call that already looked up its handle keeps using
    it after a swap.
    """

    def __init__(self, reader: ContextSourceReader) -> None:
        self._reader = reader
        self._lock = threading.Lock()
        self._handles: Mapping[str, ClusterHandle] = MappingProxyType({})
        self._errors: Mapping[str, str] = MappingProxyType({})

    @property
    def reader(self) -> ContextSourceReader:
        return self._reader

    def reload(self) -> ContextSource:
        """Read the context source and atomically replace every handle.

        Contexts that fail to resolve are left out and their error is kept
        for ``resolve_errors()``. Returns the source that was read so callers
        can probe exactly the contexts the new handle set came from.

        Raises:
            KubeConfigError: When the source itself cannot be read; the
                current handle set is kept.
        """
        source = self._reader.read()
        handles: dict[str, ClusterHandle] = {}
        errors: dict[str, str] = {}
        for name in sorted(source.list_context_names()):
            try:
                handles[name] = source.resolve_connection(name)
            except ClusterError as exc:
                logger.warning("Unable to resolve context %s: %s", name, exc)
                errors[name] = str(exc)

        snapshot = MappingProxyType(handles)
        with self._lock:
            self._handles = snapshot
            self._errors = MappingProxyType(errors)
        logger.info("Connection registry loaded %d context(s)", len(handles))
        return source

    def snapshot(self) -> Mapping[str, ClusterHandle]:
        with self._lock:
            return self._handles

    def resolve_errors(self) -> Mapping[str, str]:
        with self._lock:
            return self._errors

    def get(self, context: str) -> ClusterHandle:
        handle = self.snapshot().get(context)
        if handle is None:
            reason = self.resolve_errors().get(context, "no connection for context")
            raise ClusterUnreachableError(reason, context)
        return handle

    def context_names(self) -> list[str]:
        return sorted(self.snapshot())

    # ClusterClient interface

    async def list_namespaces(self, context: str) -> list[str]:
        return await self.get(context).list_namespaces()

    async def list_workloads(
        self, kind: ResourceKind, context: str, namespace: str
    ) -> list[RawWorkload]:
        return await self.get(context).list_workloads(kind, namespace)

    async def get_server_version(self, context: str) -> str:
        return await self.get(context).get_server_version()
