"""Limit constants for kdiff.

All limit values and validation ranges.
"""

from typing import Final

# ============================================================================
# Validation limits
# ============================================================================

REFRESH_INTERVAL_MIN: Final = 1
PROBE_TIMEOUT_MIN: Final = 0.1
MAX_CONCURRENCY_MIN: Final = 1

# ============================================================================
# Display limits
# ============================================================================

ERROR_MESSAGE_MAX_LENGTH: Final = 160

__all__ = [
    "ERROR_MESSAGE_MAX_LENGTH",
    "MAX_CONCURRENCY_MIN",
    "PROBE_TIMEOUT_MIN",
    "REFRESH_INTERVAL_MIN",
]
