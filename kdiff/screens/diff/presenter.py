"""Diff screen presenter - comparison state and table row formatting.

The presenter holds the latest aggregation and the display options. It never
talks to a cluster, so projection and filter toggles only recompute rows.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from kdiff.constants.enums import ImageComponent, ResourceKind
from kdiff.constants.values import UNREACHABLE_LABEL
from kdiff.controllers.workloads.diff.mismatch_detector import detect_mismatches
from kdiff.controllers.workloads.parsers.image_parser import render_image
from kdiff.models.aggregation.aggregation_index import (
    AggregationIndex,
    AggregationResult,
    MismatchSet,
    PartialFailure,
)
from kdiff.models.core.context_info import ContextProbe
from kdiff.models.core.image_ref import ImageProjection
from kdiff.screens.diff.config import (
    DIFFERENCES_ONLY_LABEL,
    FIXED_TABLE_COLUMNS,
    TOGGLE_LABELS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffCell:
    """Rendered image of one container in one context."""

    text: str
    mismatch: bool = False


@dataclass(frozen=True)
class DiffRow:
    """One container row of the comparison table.

    ``kind`` and ``resource`` are blank on continuation rows so each kind and
    resource name is printed once.
    """

    kind: str
    resource: str
    container: str
    cells: tuple[DiffCell, ...]

    @property
    def has_mismatch(self) -> bool:
        return any(cell.mismatch for cell in self.cells)


class DiffPresenter:
    """Presenter for DiffScreen and the headless compare command."""

    def __init__(
        self,
        projection: ImageProjection | None = None,
        differences_only: bool = False,
    ) -> None:
        self._projection = projection or ImageProjection.all()
        self._differences_only = differences_only
        self._index = AggregationIndex()
        self._failures: list[PartialFailure] = []
        self._contexts: list[str] = []
        self._mismatches = MismatchSet()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def projection(self) -> ImageProjection:
        return self._projection

    @property
    def differences_only(self) -> bool:
        return self._differences_only

    @property
    def index(self) -> AggregationIndex:
        return self._index

    @property
    def failures(self) -> list[PartialFailure]:
        return list(self._failures)

    @property
    def contexts(self) -> list[str]:
        return list(self._contexts)

    @property
    def mismatches(self) -> MismatchSet:
        return self._mismatches

    def set_result(self, result: AggregationResult, contexts: Iterable[str]) -> None:
        """Replace the displayed aggregation wholesale."""
        self._index = result.index
        self._failures = list(result.failures)
        self._contexts = sorted(set(contexts))
        self._recompute()

    def clear(self) -> None:
        self.set_result(AggregationResult(AggregationIndex(), []), [])

    def toggle_component(self, component: ImageComponent | str) -> ImageProjection:
        """Flip one image component and recompute mismatches without fetching."""
        self._projection = self._projection.toggled(ImageComponent(component))
        self._recompute()
        return self._projection

    def toggle_differences_only(self) -> bool:
        self._differences_only = not self._differences_only
        return self._differences_only

    def _recompute(self) -> None:
        self._mismatches = detect_mismatches(self._index, self._projection)
        logger.debug(
            "Recomputed mismatches: %d flagged resources", len(self._mismatches)
        )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def column_labels(self) -> list[str]:
        return [name for name, _ in FIXED_TABLE_COLUMNS] + self._contexts

    def build_rows(self) -> list[DiffRow]:
        """Build table rows for the current index, options and contexts."""
        rows: list[DiffRow] = []
        for kind in self._index.kinds():
            kind_label = kind.value
            for resource_name in self._index.resource_names(kind):
                if self._differences_only and not self._mismatches.is_flagged(kind, resource_name):
                    continue
                resource_label = resource_name
                for container_name in self._index.container_names(kind, resource_name):
                    mismatch = self._mismatches.is_flagged(kind, resource_name, container_name)
                    cells = tuple(
                        self._cell(kind, resource_name, container_name, context, mismatch)
                        for context in self._contexts
                    )
                    rows.append(DiffRow(kind_label, resource_label, container_name, cells))
                    kind_label = ""
                    resource_label = ""
        return rows

    def _cell(
        self,
        kind: ResourceKind,
        resource_name: str,
        container_name: str,
        context: str,
        mismatch: bool,
    ) -> DiffCell:
        resource = self._index.get(kind, resource_name, container_name, context)
        if resource is None:
            return DiffCell("")
        container = resource.get_container(container_name)
        if container is None:
            return DiffCell("")
        return DiffCell(render_image(container.image, self._projection), mismatch)

    def toggle_states(self) -> list[tuple[str, bool]]:
        """Header toggle labels with their on/off state."""
        states = [
            (label, self._projection.includes(component))
            for component, label in TOGGLE_LABELS.items()
        ]
        states.append((DIFFERENCES_ONLY_LABEL, self._differences_only))
        return states

    def failure_summary(self) -> str:
        """One-line notice for failed fetches, empty when none failed."""
        if not self._failures:
            return ""
        contexts = sorted({failure.context for failure in self._failures})
        first = self._failures[0]
        return (
            f"{len(self._failures)} fetch(es) failed in {', '.join(contexts)}: "
            f"{first.kind.value} in {first.context}: {first.error.message}"
        )

    @staticmethod
    def context_label(probe: ContextProbe) -> str:
        if probe.reachable:
            return probe.name
        return f"{probe.name} {UNREACHABLE_LABEL}"
