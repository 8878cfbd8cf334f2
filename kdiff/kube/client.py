"""Interfaces the comparison engine needs from the cluster access layer."""

from __future__ import annotations

from typing import Protocol

from kdiff.constants.enums import ResourceKind
from kdiff.models.core.workload_info import RawWorkload


class ClusterHandle(Protocol):
    """Client bound to one context."""

    @property
    def context(self) -> str: ...

    async def get_server_version(self) -> str: ...

    async def list_namespaces(self) -> list[str]: ...

    async def list_workloads(self, kind: ResourceKind, namespace: str) -> list[RawWorkload]: ...


class ClusterClient(Protocol):
    """Cluster access keyed by context name."""

    async def list_namespaces(self, context: str) -> list[str]: ...

    async def list_workloads(
        self, kind: ResourceKind, context: str, namespace: str
    ) -> list[RawWorkload]: ...

    async def get_server_version(self, context: str) -> str: ...


class ContextSource(Protocol):
    """Source of context names and fresh connections for them."""

    def list_context_names(self) -> set[str]: ...

    def resolve_connection(
        self, context_name: str, request_timeout: float | None = None
    ) -> ClusterHandle: ...


class ContextSourceReader(Protocol):
    """Reads a consistent context source, e.g. one parse of a kubeconfig."""

    def read(self) -> ContextSource: ...


class ReloadableClusterClient(ClusterClient, Protocol):
    """Cluster client whose connection set is rebuilt from one source read."""

    def reload(self) -> ContextSource: ...


__all__ = [
    "ClusterClient",
    "ClusterHandle",
    "ContextSource",
    "ContextSourceReader",
    "ReloadableClusterClient",
]
