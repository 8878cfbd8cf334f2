"""Diff screen configuration - widget IDs, column definitions and labels."""

from __future__ import annotations

from kdiff.constants.enums import ImageComponent, ResourceKind

# =============================================================================
# Widget IDs
# =============================================================================

ID_HEADER_TOGGLES = "header-toggles"
ID_HEADER_KEYS = "header-keys"
ID_CONTEXT_LIST = "context-list"
ID_NAMESPACE_LIST = "namespace-list"
ID_KIND_LIST = "kind-list"
ID_DISPLAY_AREA = "display-area"
ID_FOOTER = "footer-status"

# Focus order for the numeric pane bindings.
PANE_IDS: list[str] = [
    ID_CONTEXT_LIST,
    ID_NAMESPACE_LIST,
    ID_KIND_LIST,
    ID_DISPLAY_AREA,
]

PANE_TITLES: dict[str, str] = {
    ID_CONTEXT_LIST: "Contexts",
    ID_NAMESPACE_LIST: "Namespaces",
    ID_KIND_LIST: "Resource Types",
    ID_DISPLAY_AREA: "Images",
}

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

FIXED_TABLE_COLUMNS: list[tuple[str, int]] = [
    ("Kind", 14),
    ("Name", 32),
    ("Container", 24),
]

CONTEXT_COLUMN_WIDTH = 48

# =============================================================================
# Labels
# =============================================================================

TOGGLE_LABELS: dict[ImageComponent, str] = {
    ImageComponent.REGISTRY: "<r>  Show Image Registry Name",
    ImageComponent.NAME: "<n>  Show Image Name",
    ImageComponent.TAG: "<t>  Show Image Tag",
    ImageComponent.DIGEST: "<h>  Show Image Hash",
}
DIFFERENCES_ONLY_LABEL = "<d>  Show Differences Only"

TOGGLE_ON_STYLE = "green"
TOGGLE_OFF_STYLE = "grey50"

# Resource kinds offered in the kind list, in display order.
KIND_CHOICES: list[ResourceKind] = [
    ResourceKind.DEPLOYMENT,
    ResourceKind.STATEFUL_SET,
    ResourceKind.DAEMON_SET,
]
