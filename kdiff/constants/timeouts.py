"""Timeout constants for kdiff.

All timeout values for kubectl requests and context probing.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# Probe timeouts (float, in seconds)
# ============================================================================

CONTEXT_PROBE_TIMEOUT: Final = 2.0

# Extra time granted to the kubectl process beyond its own request timeout
PROBE_PROCESS_GRACE: Final = 1.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "CONTEXT_PROBE_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "PROBE_PROCESS_GRACE",
]
