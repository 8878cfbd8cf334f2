"""Command line entry point for kdiff."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from kdiff import __version__
from kdiff.constants.enums import ImageComponent, ResourceKind
from kdiff.constants.values import (
    APP_COMMIT,
    APP_NAME,
    APP_SHORT_DESCRIPTION,
    COLOR_HEADER,
    MISMATCH_STYLE,
)
from kdiff.controllers.workloads.controller import WorkloadsController
from kdiff.kube.errors import KubeConfigError
from kdiff.kube.kubeconfig import KubeConfig
from kdiff.kube.registry import ConnectionRegistry
from kdiff.models.core.image_ref import ImageProjection
from kdiff.models.state.app_settings import LOG_LEVELS, AppSettings, ConfigLoadError
from kdiff.models.state.config_manager import ConfigManager
from kdiff.screens.diff.presenter import DiffPresenter
from kdiff.utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the TUI and its subcommands."""
    parser = argparse.ArgumentParser(prog=APP_NAME, description=APP_SHORT_DESCRIPTION)
    parser.add_argument("-c", "--config", default=None, help="Path to the kdiff config file")
    parser.add_argument("-f", "--kubeconfig", default=None, help="Path to the kubeconfig file")
    parser.add_argument("-L", "--logFile", dest="log_file", default=None, help="Specify the log file")
    parser.add_argument(
        "-l",
        "--logLevel",
        dest="log_level",
        choices=LOG_LEVELS,
        default=None,
        help="Specify a log level",
    )
    parser.add_argument(
        "-r",
        "--refresh",
        dest="refresh_interval",
        type=int,
        default=None,
        help="Specify the refresh rate (in seconds)",
    )

    subparsers = parser.add_subparsers(dest="command")

    version_parser = subparsers.add_parser("version", help="Print version info")
    version_parser.add_argument(
        "-s", "--short", action="store_true", help="Print version info in short format"
    )

    compare_parser = subparsers.add_parser(
        "compare", help="Compare workload images across contexts without the TUI"
    )
    compare_parser.add_argument(
        "-x",
        "--context",
        dest="contexts",
        action="append",
        required=True,
        help="Context to compare (repeatable)",
    )
    compare_parser.add_argument(
        "-k",
        "--kind",
        dest="kinds",
        action="append",
        type=ResourceKind.parse,
        default=None,
        help="Resource kind: Deployment, StatefulSet or DaemonSet (repeatable, default all)",
    )
    compare_parser.add_argument(
        "-n",
        "--namespace",
        dest="namespaces",
        action="append",
        default=None,
        help="Namespace to compare (repeatable, default all namespaces)",
    )
    compare_parser.add_argument("--differences-only", action="store_true")
    compare_parser.add_argument("--hide-registry", action="store_true")
    compare_parser.add_argument("--hide-name", action="store_true")
    compare_parser.add_argument("--hide-tag", action="store_true")
    compare_parser.add_argument("--show-hash", action="store_true")
    return parser


def load_settings(args: argparse.Namespace, console: Console) -> AppSettings:
    """Load settings from file and environment with the command line on top.

    An invalid config file falls back to defaults plus command line values.
    """
    overrides: dict[str, Any] = {
        "kubeconfig": args.kubeconfig,
        "log_file": args.log_file,
        "log_level": args.log_level,
        "refresh_interval": args.refresh_interval,
    }
    try:
        return ConfigManager.load(args.config, overrides=overrides)
    except ConfigLoadError as exc:
        console.print(f"Warning: {exc}; using default settings", style="yellow", markup=False)
    try:
        return AppSettings.model_validate(
            {key: value for key, value in overrides.items() if value is not None}
        )
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid command line settings: {exc}") from exc


def print_version(console: Console, short: bool = False) -> None:
    console.print(f"{APP_NAME}:", markup=False)
    console.print(f"  {'Version':<10}: {__version__}", markup=False)
    if not short:
        console.print(f"  {'Commit':<10}: {APP_COMMIT}", markup=False)


def compare_projection(args: argparse.Namespace, settings: AppSettings) -> ImageProjection:
    """Settings projection with the compare flags applied on top."""
    configured = settings.image_projection()
    hidden = {
        ImageComponent.REGISTRY: args.hide_registry,
        ImageComponent.NAME: args.hide_name,
        ImageComponent.TAG: args.hide_tag,
    }
    selected = [
        component
        for component in ImageComponent
        if configured.includes(component) and not hidden.get(component, False)
    ]
    if args.show_hash and ImageComponent.DIGEST not in selected:
        selected.append(ImageComponent.DIGEST)
    return ImageProjection.only(*selected)


def render_table(presenter: DiffPresenter) -> Table:
    """Render the presenter rows as a rich table."""
    table = Table(header_style=f"bold {COLOR_HEADER}")
    for label in presenter.column_labels():
        table.add_column(label)
    for row in presenter.build_rows():
        table.add_row(
            Text(row.kind, style=f"bold {COLOR_HEADER}"),
            row.resource,
            Text(row.container, style="dim"),
            *(
                Text(cell.text, style=MISMATCH_STYLE if cell.mismatch else "")
                for cell in row.cells
            ),
        )
    return table


def run_compare(args: argparse.Namespace, settings: AppSettings, console: Console) -> int:
    """Aggregate once, print the comparison and report mismatches via exit code."""
    registry = ConnectionRegistry(KubeConfig(settings.kubeconfig))
    try:
        registry.reload()
    except KubeConfigError as exc:
        console.print(f"Error: {exc}", style="red", markup=False)
        return EXIT_USAGE

    controller = WorkloadsController(registry, max_concurrency=settings.max_concurrency)
    kinds = args.kinds or list(ResourceKind)
    namespaces = args.namespaces or [""]
    try:
        result = asyncio.run(controller.aggregate(kinds, args.contexts, namespaces))
    except ValueError as exc:
        console.print(f"Error: {exc}", style="red", markup=False)
        return EXIT_USAGE

    presenter = DiffPresenter(
        projection=compare_projection(args, settings),
        differences_only=args.differences_only,
    )
    presenter.set_result(result, args.contexts)
    console.print(render_table(presenter))
    for failure in result.failures:
        console.print(
            f"Failed to fetch {failure.kind.value} from {failure.context} "
            f"(namespace={failure.namespace or 'all'}): {failure.error.message}",
            style="red",
            markup=False,
        )

    if presenter.mismatches:
        console.print(
            f"{len(presenter.mismatches)} resource(s) with differing images",
            style=MISMATCH_STYLE,
            markup=False,
        )
        return EXIT_MISMATCH
    return EXIT_OK


def run_tui(settings: AppSettings) -> int:
    from kdiff.app import KdiffApp

    KdiffApp(settings).run()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.command == "version":
        print_version(console, short=args.short)
        return EXIT_OK

    try:
        settings = load_settings(args, console)
    except ConfigLoadError as exc:
        console.print(f"Error: {exc}", style="red", markup=False)
        return EXIT_USAGE
    configure_logging(settings.log_file, settings.log_level)
    logger.debug("Settings: %s", settings.model_dump())

    if args.command == "compare":
        return run_compare(args, settings, console)
    return run_tui(settings)


if __name__ == "__main__":
    sys.exit(main())
