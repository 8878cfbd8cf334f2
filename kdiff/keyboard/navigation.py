"""Screen-specific keyboard bindings."""

from typing import Annotated

from kdiff.constants.enums import ImageComponent

# ============================================================================
# Diff Screen Bindings
# ============================================================================

DIFF_SCREEN_BINDINGS: list[
    Annotated[tuple[str, str, str], "key, action, description"]
] = [
    ("1", "focus_pane(0)", "Contexts"),
    ("2", "focus_pane(1)", "Namespaces"),
    ("3", "focus_pane(2)", "Resource Types"),
    ("4", "focus_pane(3)", "Display Area"),
    ("r", f"toggle_component('{ImageComponent.REGISTRY.value}')", "Registry"),
    ("n", f"toggle_component('{ImageComponent.NAME.value}')", "Name"),
    ("t", f"toggle_component('{ImageComponent.TAG.value}')", "Tag"),
    ("h", f"toggle_component('{ImageComponent.DIGEST.value}')", "Hash"),
    ("d", "toggle_differences_only", "Diff Only"),
    ("a", "toggle_select_all", "Select All"),
]

# Key hints rendered in the screen header.
FOCUS_KEY_HINTS: list[tuple[str, str]] = [
    ("<1>", "Contexts"),
    ("<2>", "Namespaces"),
    ("<3>", "Resource Types"),
    ("<4>", "Display Area"),
]

SHORTCUT_KEY_HINTS: list[tuple[str, str]] = [
    ("<Tab>", "Cycle forward"),
    ("<Shift+Tab>", "Cycle backward"),
    ("<Space>", "Select item"),
    ("<a>", "Select all (toggle)"),
    ("<Ctrl+R>", "Re-probe contexts"),
    ("<q>", "Quit"),
]

__all__ = [
    "DIFF_SCREEN_BINDINGS",
    "FOCUS_KEY_HINTS",
    "SHORTCUT_KEY_HINTS",
]
