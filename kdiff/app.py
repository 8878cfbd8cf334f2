"""Main application class for the kdiff TUI."""

from __future__ import annotations

import logging

from textual.app import App
from textual.binding import Binding

from kdiff.constants import APP_TITLE
from kdiff.controllers.contexts.controller import ContextsController
from kdiff.controllers.workloads.controller import WorkloadsController
from kdiff.keyboard.app import APP_BINDINGS
from kdiff.kube.errors import KubeConfigError
from kdiff.kube.kubeconfig import KubeConfig
from kdiff.kube.registry import ConnectionRegistry
from kdiff.models.state.app_settings import AppSettings
from kdiff.screens.diff.diff_screen import DiffScreen

logger = logging.getLogger(__name__)


class KdiffApp(App[None]):
    """Terminal UI comparing workload images across kubeconfig contexts."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(self, settings: AppSettings | None = None, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.settings = settings or AppSettings()
        self.kubeconfig = KubeConfig(self.settings.kubeconfig)
        self.registry = ConnectionRegistry(self.kubeconfig)
        self.contexts_controller = ContextsController(
            self.registry,
            max_concurrency=self.settings.max_concurrency,
        )
        self.workloads_controller = WorkloadsController(
            self.registry,
            max_concurrency=self.settings.max_concurrency,
        )

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._reload_registry()
        logger.info(
            "Starting %s with kubeconfig %s (%d contexts)",
            APP_TITLE,
            self.settings.kubeconfig,
            len(self.registry.context_names()),
        )
        self.push_screen(
            DiffScreen(
                self.contexts_controller,
                self.workloads_controller,
                self.settings,
            )
        )

    def action_reprobe(self) -> None:
        """Re-read the kubeconfig and re-probe every context."""
        screen = self.screen
        if isinstance(screen, DiffScreen):
            screen.action_reprobe()

    def _reload_registry(self) -> None:
        try:
            self.registry.reload()
        except KubeConfigError as exc:
            logger.error("Unable to load kubeconfig: %s", exc)
            self.notify(str(exc), title="Kubeconfig", severity="error")
