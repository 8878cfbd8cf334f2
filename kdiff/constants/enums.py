"""All enum definitions for kdiff.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Kubernetes Enums
# =============================================================================


class ResourceKind(str, Enum):
    """Workload kinds that can be compared across contexts."""

    DAEMON_SET = "DaemonSet"
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"

    @property
    def kubectl_resource(self) -> str:
        """Fully-qualified resource name understood by ``kubectl get``."""
        return f"{self.value.lower()}s.apps"

    @classmethod
    def parse(cls, value: str) -> "ResourceKind":
        """Resolve a kind from its display name, case-insensitively."""
        normalized = value.strip().lower()
        for kind in cls:
            if kind.value.lower() == normalized:
                return kind
        raise ValueError(f"Unknown resource kind: {value!r}")


class ImageComponent(str, Enum):
    """Components of an image reference that a projection can select."""

    REGISTRY = "registry"
    NAME = "name"
    TAG = "tag"
    DIGEST = "digest"


# =============================================================================
# Fetch State Enums
# =============================================================================


class FetchState(Enum):
    """Data fetch state values."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
