"""Default values for settings.

All default values used in the AppSettings model and CLI flags.
"""

import getpass
import tempfile
from pathlib import Path
from typing import Final

# ============================================================================
# Paths
# ============================================================================


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


KUBECONFIG_DEFAULT: Final = str(Path.home() / ".kube" / "config")
CONFIG_FILE_DEFAULT: Final = str(Path.home() / ".config" / "kdiff" / "config.yaml")
LOG_FILE_DEFAULT: Final = str(Path(tempfile.gettempdir()) / f"kdiff-{_current_user()}.log")

# ============================================================================
# Runtime defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "info"
REFRESH_INTERVAL_DEFAULT: Final = 2  # seconds

# ============================================================================
# Display toggles
# ============================================================================

SHOW_IMAGE_REGISTRY_DEFAULT: Final = True
SHOW_IMAGE_NAME_DEFAULT: Final = True
SHOW_IMAGE_TAG_DEFAULT: Final = True
SHOW_IMAGE_HASH_DEFAULT: Final = False
SHOW_DIFFERENCES_ONLY_DEFAULT: Final = False

__all__ = [
    "CONFIG_FILE_DEFAULT",
    "KUBECONFIG_DEFAULT",
    "LOG_FILE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "SHOW_DIFFERENCES_ONLY_DEFAULT",
    "SHOW_IMAGE_HASH_DEFAULT",
    "SHOW_IMAGE_NAME_DEFAULT",
    "SHOW_IMAGE_REGISTRY_DEFAULT",
    "SHOW_IMAGE_TAG_DEFAULT",
]
