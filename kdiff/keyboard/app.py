"""App-level keyboard bindings for KdiffApp.

Quit is a priority binding so it fires while a selection list has focus.
"""

from textual.binding import Binding

APP_BINDINGS: list[Binding] = [
    Binding("q", "app.quit", "Quit", priority=True),
    Binding("ctrl+c", "app.quit", "Quit", show=False, priority=True),
    Binding("ctrl+r", "reprobe", "Re-probe contexts"),
]

__all__ = [
    "APP_BINDINGS",
]
