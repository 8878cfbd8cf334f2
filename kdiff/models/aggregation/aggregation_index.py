"""Aggregated multi-context workload index and derived mismatch set."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from kdiff.constants.enums import ResourceKind
from kdiff.models.core.context_info import ErrorInfo
from kdiff.models.core.workload_info import WorkloadResource

logger = logging.getLogger(__name__)

# kind -> resource name -> container name -> context name -> resource
IndexTree = dict[ResourceKind, dict[str, dict[str, dict[str, WorkloadResource]]]]


class PartialFailure(BaseModel):
    """One failed fetch inside an aggregation."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    context: str
    namespace: str
    error: ErrorInfo


class IndexLeaf(NamedTuple):
    """All contexts holding one (kind, resource, container) tuple."""

    kind: ResourceKind
    resource_name: str
    container_name: str
    by_context: dict[str, WorkloadResource]


class AggregationIndex:
    """Workloads indexed by kind, resource name, container name and context.

    Iteration helpers always yield keys in sorted order because fan-in order
    of the fetches that built the index is not deterministic.
    """

    def __init__(self) -> None:
        self._tree: IndexTree = {}

    def insert(self, kind: ResourceKind, context: str, resource: WorkloadResource) -> None:
        """Index every container of ``resource`` under ``context``.

        A resource with the same kind and name already stored for the same
        context is replaced (last write wins).
        """
        containers = self._tree.setdefault(kind, {}).setdefault(resource.name, {})
        for container in resource.containers:
            by_context = containers.setdefault(container.name, {})
            previous = by_context.get(context)
            if previous is not None and previous is not resource:
                logger.debug(
                    "Overwriting %s/%s container %s in context %s (namespace %s -> %s)",
                    kind.value,
                    resource.name,
                    container.name,
                    context,
                    previous.namespace or "-",
                    resource.namespace or "-",
                )
            by_context[context] = resource

    def kinds(self) -> list[ResourceKind]:
        return sorted(self._tree, key=lambda kind: kind.value)

    def resource_names(self, kind: ResourceKind) -> list[str]:
        return sorted(self._tree.get(kind, {}))

    def container_names(self, kind: ResourceKind, resource_name: str) -> list[str]:
        return sorted(self._tree.get(kind, {}).get(resource_name, {}))

    def contexts(self, kind: ResourceKind, resource_name: str, container_name: str) -> dict[str, WorkloadResource]:
        """Return a copy of the context -> resource mapping for one container."""
        return dict(
            self._tree.get(kind, {}).get(resource_name, {}).get(container_name, {})
        )

    def get(
        self,
        kind: ResourceKind,
        resource_name: str,
        container_name: str,
        context: str,
    ) -> WorkloadResource | None:
        return self.contexts(kind, resource_name, container_name).get(context)

    def leaves(self) -> Iterator[IndexLeaf]:
        """Iterate over every (kind, resource, container) tuple in sorted order."""
        for kind in self.kinds():
            for resource_name in self.resource_names(kind):
                for container_name in self.container_names(kind, resource_name):
                    yield IndexLeaf(
                        kind,
                        resource_name,
                        container_name,
                        self.contexts(kind, resource_name, container_name),
                    )

    def context_names(self) -> list[str]:
        """All contexts that contributed at least one resource."""
        return sorted({context for leaf in self.leaves() for context in leaf.by_context})

    def to_sorted_dict(self) -> dict[str, dict[str, dict[str, dict[str, WorkloadResource]]]]:
        """Nested plain-dict copy with every level in sorted key order."""
        return {
            kind.value: {
                resource_name: {
                    container_name: {
                        context: self._tree[kind][resource_name][container_name][context]
                        for context in sorted(self._tree[kind][resource_name][container_name])
                    }
                    for container_name in self.container_names(kind, resource_name)
                }
                for resource_name in self.resource_names(kind)
            }
            for kind in self.kinds()
        }

    def __contains__(self, kind: object) -> bool:
        return kind in self._tree

    def __len__(self) -> int:
        return sum(len(resources) for resources in self._tree.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AggregationIndex):
            return NotImplemented
        return self.to_sorted_dict() == other.to_sorted_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AggregationIndex(kinds={[kind.value for kind in self.kinds()]}, resources={len(self)})"


class AggregationResult(NamedTuple):
    """Outcome of one aggregation: the index plus every failed fetch."""

    index: AggregationIndex
    failures: list[PartialFailure]


@dataclass(frozen=True)
class MismatchSet:
    """Containers whose image differs across contexts, keyed by resource."""

    entries: dict[tuple[ResourceKind, str], frozenset[str]] = field(default_factory=dict)

    def containers(self, kind: ResourceKind, resource_name: str) -> frozenset[str]:
        return self.entries.get((kind, resource_name), frozenset())

    def is_flagged(
        self,
        kind: ResourceKind,
        resource_name: str,
        container_name: str | None = None,
    ) -> bool:
        """Check a resource, or one of its containers, for a mismatch."""
        flagged = self.containers(kind, resource_name)
        if container_name is None:
            return bool(flagged)
        return container_name in flagged

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)
