"""Mismatch detector - flags containers whose image differs across contexts."""

from __future__ import annotations

from kdiff.constants.enums import ResourceKind
from kdiff.controllers.workloads.parsers.image_parser import render_image
from kdiff.models.aggregation.aggregation_index import AggregationIndex, MismatchSet
from kdiff.models.core.image_ref import ImageProjection


def detect_mismatches(index: AggregationIndex, projection: ImageProjection) -> MismatchSet:
    """Compare every container image across the contexts holding it.

    A container is flagged when its images, rendered through ``projection``,
    are not all identical. A container held by a single context is never
    flagged. Only the index is read, so changing the projection never needs
    a new fetch.
    """
    flagged: dict[tuple[ResourceKind, str], set[str]] = {}
    for leaf in index.leaves():
        if len(leaf.by_context) < 2:
            continue
        images: set[str] = set()
        for resource in leaf.by_context.values():
            container = resource.get_container(leaf.container_name)
            if container is not None:
                images.add(render_image(container.image, projection))
        if len(images) != 1:
            flagged.setdefault((leaf.kind, leaf.resource_name), set()).add(leaf.container_name)

    return MismatchSet({key: frozenset(names) for key, names in flagged.items()})
