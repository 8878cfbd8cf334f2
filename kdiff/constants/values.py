"""Scalar constants for kdiff.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kdiff"
APP_TITLE: Final = "kdiff"
APP_SHORT_DESCRIPTION: Final = (
    "A terminal UI tool for comparing resources across multiple kubernetes clusters."
)
APP_COMMIT: Final = "dev"

# ============================================================================
# Colors (hex strings for Theme compatibility)
# ============================================================================

COLOR_HEADER: Final = "#f5bd07"  # Amber

# ============================================================================
# Environment
# ============================================================================

ENV_PREFIX: Final = "KDIFF_"

# ============================================================================
# Display labels (markup for rich text display)
# ============================================================================

UNREACHABLE_LABEL: Final = "(Unreachable)"
NAMESPACE_TIP: Final = "> Tip: Either select 1-3 namespaces or all of them to reduce API calls."
MISMATCH_STYLE: Final = "bold red"

__all__ = [
    "APP_COMMIT",
    "APP_NAME",
    "APP_SHORT_DESCRIPTION",
    "APP_TITLE",
    "COLOR_HEADER",
    "ENV_PREFIX",
    "MISMATCH_STYLE",
    "NAMESPACE_TIP",
    "UNREACHABLE_LABEL",
]
