"""Diff screen - select contexts, namespaces and kinds, then compare images."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import DataTable, SelectionList, Static
from textual.widgets.selection_list import Selection

from kdiff.constants.enums import FetchState, ResourceKind
from kdiff.constants.values import COLOR_HEADER, MISMATCH_STYLE, NAMESPACE_TIP
from kdiff.controllers.contexts.controller import ContextsController
from kdiff.controllers.workloads.controller import WorkloadsController
from kdiff.keyboard.navigation import (
    DIFF_SCREEN_BINDINGS,
    FOCUS_KEY_HINTS,
    SHORTCUT_KEY_HINTS,
)
from kdiff.models.core.context_info import ContextProbe
from kdiff.models.state.app_settings import AppSettings
from kdiff.screens.diff.config import (
    CONTEXT_COLUMN_WIDTH,
    FIXED_TABLE_COLUMNS,
    ID_CONTEXT_LIST,
    ID_DISPLAY_AREA,
    ID_FOOTER,
    ID_HEADER_KEYS,
    ID_HEADER_TOGGLES,
    ID_KIND_LIST,
    ID_NAMESPACE_LIST,
    KIND_CHOICES,
    PANE_IDS,
    PANE_TITLES,
    TOGGLE_OFF_STYLE,
    TOGGLE_ON_STYLE,
)
from kdiff.screens.diff.presenter import DiffPresenter, DiffRow

logger = logging.getLogger(__name__)

_PROBE_GROUP = "probe"
_NAMESPACE_GROUP = "namespaces"
_AGGREGATE_GROUP = "aggregate"


class DiffScreen(Screen[None]):
    """Single screen of the kdiff TUI."""

    BINDINGS = DIFF_SCREEN_BINDINGS

    DEFAULT_CSS = """
    DiffScreen {
        layout: vertical;
    }

    #diff-header {
        height: 7;
    }

    #header-toggles, #header-keys {
        width: 1fr;
        padding: 0 1;
    }

    #diff-body {
        height: 1fr;
    }

    #selection-panes {
        width: 40;
    }

    #selection-panes SelectionList {
        height: 1fr;
        border: round $primary;
    }

    #display-area {
        width: 1fr;
        border: round $primary;
    }

    #footer-status {
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        contexts_controller: ContextsController,
        workloads_controller: WorkloadsController,
        settings: AppSettings,
    ) -> None:
        super().__init__()
        self._contexts_controller = contexts_controller
        self._workloads_controller = workloads_controller
        self._settings = settings
        self._presenter = DiffPresenter(
            projection=settings.image_projection(),
            differences_only=settings.show_differences_only,
        )
        self._probes: dict[str, ContextProbe] = {}
        self._wanted_contexts: set[str] = set()
        self._known_namespaces: list[str] = []
        self._state = FetchState.IDLE
        self._refresh_timer: Timer | None = None

    @property
    def presenter(self) -> DiffPresenter:
        return self._presenter

    @property
    def state(self) -> FetchState:
        return self._state

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def compose(self) -> ComposeResult:
        with Horizontal(id="diff-header"):
            yield Static(id=ID_HEADER_TOGGLES)
            yield Static(self._key_hints_text(), id=ID_HEADER_KEYS)
        with Horizontal(id="diff-body"):
            with Vertical(id="selection-panes"):
                yield SelectionList[str](id=ID_CONTEXT_LIST)
                yield SelectionList[str](id=ID_NAMESPACE_LIST)
                yield SelectionList[str](
                    *(Selection(kind.value, kind.value) for kind in KIND_CHOICES),
                    id=ID_KIND_LIST,
                )
            yield DataTable(id=ID_DISPLAY_AREA, cursor_type="row", zebra_stripes=True)
        yield Static(NAMESPACE_TIP, id=ID_FOOTER)

    def on_mount(self) -> None:
        for pane_id, title in PANE_TITLES.items():
            self.query_one(f"#{pane_id}").border_title = title
        self._render_header()
        self._render_table()
        self.action_reprobe()
        self._refresh_timer = self.set_interval(
            self._settings.refresh_interval, self._on_refresh_tick
        )

    @staticmethod
    def _key_hints_text() -> Text:
        text = Text()
        for key, description in FOCUS_KEY_HINTS + SHORTCUT_KEY_HINTS:
            text.append(f"{key:>12}  ", style="bold blue")
            text.append(f"{description}\n")
        return text

    # ------------------------------------------------------------------
    # Context probing
    # ------------------------------------------------------------------

    def action_reprobe(self) -> None:
        """Probe every context again and rebuild the context list."""
        self.run_worker(self._probe_contexts(), group=_PROBE_GROUP, exclusive=True)

    def _on_refresh_tick(self) -> None:
        if any(worker.group == _PROBE_GROUP and worker.is_running for worker in self.workers):
            return
        self.action_reprobe()

    async def _probe_contexts(self) -> None:
        try:
            probes = await self._contexts_controller.probe_contexts(self._settings.probe_timeout)
        except Exception as exc:
            logger.exception("Context probing failed")
            self._set_footer(Text(f"Context probing failed: {exc}", style="red"))
            return
        self._apply_probes(probes)

    def _apply_probes(self, probes: list[ContextProbe]) -> None:
        new_probes = {probe.name: probe for probe in probes}
        reachability = {name: probe.reachable for name, probe in new_probes.items()}
        if reachability == {name: probe.reachable for name, probe in self._probes.items()}:
            self._probes = new_probes
            return

        self._probes = new_probes
        context_list = self.query_one(f"#{ID_CONTEXT_LIST}", SelectionList)
        with context_list.prevent(SelectionList.SelectedChanged):
            context_list.clear_options()
            context_list.add_options(
                [
                    Selection(
                        self._presenter.context_label(probe),
                        probe.name,
                        probe.reachable and probe.name in self._wanted_contexts,
                        disabled=not probe.reachable,
                    )
                    for probe in probes
                ]
            )
        logger.info("Context list updated: %s", ", ".join(reachability))
        self._load_namespaces()

    # ------------------------------------------------------------------
    # Selection handling
    # ------------------------------------------------------------------

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        if event.selection_list.id == ID_CONTEXT_LIST:
            self._remember_context_selection()
            self._load_namespaces()
        else:
            self._refresh_display()

    def _remember_context_selection(self) -> None:
        """Track the user's context choice across probe cycles.

        A wanted context that is currently unreachable stays wanted and is
        selected again once a later probe reaches it.
        """
        selected = set(self.query_one(f"#{ID_CONTEXT_LIST}", SelectionList).selected)
        reachable = set(ContextsController.reachable_contexts(self._probes.values()))
        self._wanted_contexts = selected | (self._wanted_contexts - reachable)

    def on_selection_list_selection_highlighted(
        self, event: SelectionList.SelectionHighlighted
    ) -> None:
        if event.selection_list.id != ID_CONTEXT_LIST:
            return
        probe = self._probes.get(event.selection.value)
        if probe is not None and probe.error is not None:
            self._set_footer(Text(probe.error.message, style="red"))
        else:
            self._render_footer()

    def _selected_contexts(self) -> list[str]:
        selected = set(self.query_one(f"#{ID_CONTEXT_LIST}", SelectionList).selected)
        return [
            name
            for name in ContextsController.reachable_contexts(self._probes.values())
            if name in selected
        ]

    def _load_namespaces(self) -> None:
        contexts = self._selected_contexts()
        if not contexts:
            self._replace_namespaces([])
            return
        self.run_worker(
            self._fetch_namespaces(contexts), group=_NAMESPACE_GROUP, exclusive=True
        )

    async def _fetch_namespaces(self, contexts: list[str]) -> None:
        namespaces = await self._contexts_controller.list_namespaces(contexts)
        self._replace_namespaces(namespaces)
        warnings = self._contexts_controller.get_last_nonfatal_warnings()
        if warnings:
            context, message = next(iter(sorted(warnings.items())))
            self._set_footer(Text(f"{context}: {message}", style="red"))

    def _replace_namespaces(self, namespaces: list[str]) -> None:
        namespace_list = self.query_one(f"#{ID_NAMESPACE_LIST}", SelectionList)
        selected = set(namespace_list.selected)
        self._known_namespaces = namespaces
        with namespace_list.prevent(SelectionList.SelectedChanged):
            namespace_list.clear_options()
            namespace_list.add_options(
                [Selection(name, name, name in selected) for name in namespaces]
            )
        self._refresh_display()

    # ------------------------------------------------------------------
    # Display area
    # ------------------------------------------------------------------

    def _refresh_display(self) -> None:
        contexts = self._selected_contexts()
        namespaces = list(self.query_one(f"#{ID_NAMESPACE_LIST}", SelectionList).selected)
        kinds = [
            ResourceKind(value)
            for value in self.query_one(f"#{ID_KIND_LIST}", SelectionList).selected
        ]
        if not (contexts and namespaces and kinds):
            self.workers.cancel_group(self, _AGGREGATE_GROUP)
            self._presenter.clear()
            self._state = FetchState.IDLE
            self._render_table()
            self._render_footer()
            return

        self._state = FetchState.LOADING
        self._set_footer(Text("Loading workloads...", style="italic"))
        self.run_worker(
            self._aggregate(kinds, contexts, namespaces),
            group=_AGGREGATE_GROUP,
            exclusive=True,
        )

    async def _aggregate(
        self,
        kinds: list[ResourceKind],
        contexts: list[str],
        namespaces: list[str],
    ) -> None:
        try:
            result = await self._workloads_controller.aggregate(
                kinds,
                contexts,
                namespaces,
                known_namespaces=self._known_namespaces,
            )
        except Exception as exc:
            logger.exception("Aggregation failed")
            self._state = FetchState.ERROR
            self._set_footer(Text(f"Loading workloads failed: {exc}", style="red"))
            return

        self._presenter.set_result(result, contexts)
        self._state = FetchState.ERROR if result.failures else FetchState.SUCCESS
        self._render_table()
        self._render_footer()

    def _render_table(self) -> None:
        try:
            table = self.query_one(f"#{ID_DISPLAY_AREA}", DataTable)
        except NoMatches:
            return
        table.clear(columns=True)
        for name, width in FIXED_TABLE_COLUMNS:
            table.add_column(Text(name, style=f"bold {COLOR_HEADER}"), width=width)
        for context in self._presenter.contexts:
            table.add_column(Text(context, style=f"bold {COLOR_HEADER}"), width=CONTEXT_COLUMN_WIDTH)
        for row in self._presenter.build_rows():
            table.add_row(*self._row_cells(row))

    @staticmethod
    def _row_cells(row: DiffRow) -> list[Text]:
        cells = [
            Text(row.kind, style=f"bold {COLOR_HEADER}"),
            Text(row.resource),
            Text(row.container, style="dim"),
        ]
        cells.extend(
            Text(cell.text, style=MISMATCH_STYLE if cell.mismatch else "")
            for cell in row.cells
        )
        return cells

    def _render_header(self) -> None:
        text = Text()
        for label, enabled in self._presenter.toggle_states():
            text.append(f"{label}\n", style=TOGGLE_ON_STYLE if enabled else TOGGLE_OFF_STYLE)
        self.query_one(f"#{ID_HEADER_TOGGLES}", Static).update(text)

    def _render_footer(self) -> None:
        summary = self._presenter.failure_summary()
        if summary:
            self._set_footer(Text(summary, style="red"))
        else:
            self._set_footer(NAMESPACE_TIP)

    def _set_footer(self, content: Text | str) -> None:
        try:
            self.query_one(f"#{ID_FOOTER}", Static).update(content)
        except NoMatches:
            return

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_focus_pane(self, index: int) -> None:
        self.query_one(f"#{PANE_IDS[index]}").focus()

    def action_toggle_component(self, component: str) -> None:
        self._presenter.toggle_component(component)
        self._render_header()
        self._render_table()

    def action_toggle_differences_only(self) -> None:
        self._presenter.toggle_differences_only()
        self._render_header()
        self._render_table()

    def action_toggle_select_all(self) -> None:
        focused = self.focused
        if not isinstance(focused, SelectionList):
            return
        enabled = [
            focused.get_option_at_index(index)
            for index in range(focused.option_count)
            if not focused.get_option_at_index(index).disabled
        ]
        if enabled and len(focused.selected) >= len(enabled):
            focused.deselect_all()
        else:
            focused.select_all()
