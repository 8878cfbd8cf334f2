"""Keyboard bindings module.

This module provides all keyboard bindings for the kdiff TUI:

- app: App-level bindings (APP_BINDINGS)
- navigation: Diff screen bindings and key hints
"""

from kdiff.keyboard.app import APP_BINDINGS
from kdiff.keyboard.navigation import (
    DIFF_SCREEN_BINDINGS,
    FOCUS_KEY_HINTS,
    SHORTCUT_KEY_HINTS,
)

__all__ = [
    "APP_BINDINGS",
    "DIFF_SCREEN_BINDINGS",
    "FOCUS_KEY_HINTS",
    "SHORTCUT_KEY_HINTS",
]
