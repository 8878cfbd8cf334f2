"""Errors raised by the kubectl-backed cluster client and kubeconfig source."""

from __future__ import annotations


class ClusterError(Exception):
    """Base exception for cluster access failures."""

    def __init__(self, message: str, context: str | None = None) -> None:
        super().__init__(message)
        self.context = context


class ClusterUnreachableError(ClusterError):
    """The API server could not be reached or did not answer in time."""


class ClusterAuthError(ClusterError):
    """Credentials were rejected or are missing."""


class ResourceNotFoundError(ClusterError):
    """The requested namespace or resource type does not exist."""


class KubeConfigError(ClusterError):
    """A context cannot be resolved from the kubeconfig."""


_AUTH_TOKENS = (
    "unauthorized",
    "forbidden",
    "you must be logged in",
    "credentials",
    "authentication",
    "certificate signed by unknown authority",
    "x509",
)
_NOT_FOUND_TOKENS = (
    "notfound",
    "not found",
    "doesn't have a resource type",
)


def classify_kubectl_error(stderr: str, context: str | None = None) -> ClusterError:
    """Map kubectl stderr output to the matching ClusterError subclass."""
    message = stderr.strip() or "kubectl command failed"
    lower = message.lower()
    if any(token in lower for token in _AUTH_TOKENS):
        return ClusterAuthError(message, context)
    if any(token in lower for token in _NOT_FOUND_TOKENS):
        return ResourceNotFoundError(message, context)
    return ClusterUnreachableError(message, context)


__all__ = [
    "ClusterAuthError",
    "ClusterError",
    "ClusterUnreachableError",
    "KubeConfigError",
    "ResourceNotFoundError",
    "classify_kubectl_error",
]
