"""Smoke tests for DiffScreen - composition, bindings and presenter wiring.

Tests using app.run_test() are kept minimal due to Textual testing overhead.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from textual.app import App
from textual.widgets import DataTable, SelectionList

from kdiff.constants.enums import FetchState
from kdiff.keyboard import APP_BINDINGS, DIFF_SCREEN_BINDINGS
from kdiff.models.core.context_info import ContextProbe, ErrorInfo
from kdiff.models.state.app_settings import AppSettings
from kdiff.screens.diff import DiffScreen
from kdiff.screens.diff.config import (
    ID_CONTEXT_LIST,
    ID_DISPLAY_AREA,
    ID_KIND_LIST,
    ID_NAMESPACE_LIST,
    PANE_IDS,
)


def _controllers(probes: list[ContextProbe]) -> tuple[MagicMock, MagicMock]:
    contexts_controller = MagicMock()
    contexts_controller.probe_contexts = AsyncMock(return_value=probes)
    contexts_controller.list_namespaces = AsyncMock(return_value=["default"])
    contexts_controller.get_last_nonfatal_warnings.return_value = {}
    workloads_controller = MagicMock()
    workloads_controller.aggregate = AsyncMock()
    return contexts_controller, workloads_controller


class DiffTestApp(App[None]):
    """Minimal host app pushing a DiffScreen."""

    def __init__(self, screen: DiffScreen) -> None:
        super().__init__()
        self._diff_screen = screen

    def on_mount(self) -> None:
        self.push_screen(self._diff_screen)


class TestDiffScreenBindings:
    """Test DiffScreen keybindings."""

    def test_screen_bindings(self) -> None:
        keys = {binding[0] for binding in DiffScreen.BINDINGS}
        assert {"1", "2", "3", "4", "r", "n", "t", "h", "d"} <= keys

    def test_app_bindings(self) -> None:
        keys = {binding.key for binding in APP_BINDINGS}
        assert {"q", "ctrl+r"} <= keys

    def test_pane_order(self) -> None:
        assert PANE_IDS == [ID_CONTEXT_LIST, ID_NAMESPACE_LIST, ID_KIND_LIST, ID_DISPLAY_AREA]

    def test_bindings_cover_every_pane(self) -> None:
        focus_actions = [action for _, action, _ in DIFF_SCREEN_BINDINGS if action.startswith("focus_pane")]
        assert len(focus_actions) == len(PANE_IDS)


class TestDiffScreenState:
    """Test DiffScreen initial state."""

    def test_screen_can_be_instantiated(self) -> None:
        contexts_controller, workloads_controller = _controllers([])
        screen = DiffScreen(contexts_controller, workloads_controller, AppSettings())

        assert screen.state is FetchState.IDLE
        assert screen.presenter.build_rows() == []

    def test_presenter_uses_settings(self) -> None:
        contexts_controller, workloads_controller = _controllers([])
        settings = AppSettings(show_image_tag=False, show_differences_only=True)
        screen = DiffScreen(contexts_controller, workloads_controller, settings)

        assert screen.presenter.projection.tag is False
        assert screen.presenter.differences_only is True


class TestDiffScreenRuntime:
    """Runtime tests with app.run_test()."""

    @pytest.mark.asyncio
    async def test_mount_probes_and_lists_contexts(self) -> None:
        probes = [
            ContextProbe(name="bad", reachable=False, error=ErrorInfo(type="TimeoutError", message="no response")),
            ContextProbe(name="prod", reachable=True, server_version="1.29"),
        ]
        contexts_controller, workloads_controller = _controllers(probes)
        screen = DiffScreen(contexts_controller, workloads_controller, AppSettings(refresh_interval=60))
        app = DiffTestApp(screen)

        async with app.run_test() as pilot:
            await pilot.pause()
            await app.workers.wait_for_complete()
            await pilot.pause()

            context_list = screen.query_one(f"#{ID_CONTEXT_LIST}", SelectionList)
            assert context_list.option_count == 2
            assert context_list.get_option_at_index(0).disabled is True
            assert context_list.get_option_at_index(1).disabled is False
            assert screen.query_one(f"#{ID_DISPLAY_AREA}", DataTable).row_count == 0
            contexts_controller.probe_contexts.assert_awaited()

    @pytest.mark.asyncio
    async def test_toggle_keys_update_presenter(self) -> None:
        contexts_controller, workloads_controller = _controllers([])
        screen = DiffScreen(contexts_controller, workloads_controller, AppSettings(refresh_interval=60))
        app = DiffTestApp(screen)

        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("d")
            await pilot.press("h")
            await pilot.pause()

            assert screen.presenter.differences_only is True
            assert screen.presenter.projection.digest is True
            workloads_controller.aggregate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_selection_survives_unreachable_cycle(self) -> None:
        reachable = [
            ContextProbe(name="prod", reachable=True, server_version="1.29"),
            ContextProbe(name="staging", reachable=True, server_version="1.29"),
        ]
        contexts_controller, workloads_controller = _controllers(reachable)
        screen = DiffScreen(contexts_controller, workloads_controller, AppSettings(refresh_interval=60))
        app = DiffTestApp(screen)

        async with app.run_test() as pilot:
            await pilot.pause()
            await app.workers.wait_for_complete()
            context_list = screen.query_one(f"#{ID_CONTEXT_LIST}", SelectionList)
            context_list.select("prod")
            await pilot.pause()

            screen._apply_probes(
                [
                    ContextProbe(
                        name="prod",
                        reachable=False,
                        error=ErrorInfo(type="ClusterUnreachableError", message="refused"),
                    ),
                    reachable[1],
                ]
            )
            await pilot.pause()
            assert context_list.selected == []

            screen._apply_probes(reachable)
            await pilot.pause()
            assert context_list.selected == ["prod"]
