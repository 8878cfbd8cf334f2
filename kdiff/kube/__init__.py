"""Cluster access: kubectl client, kubeconfig context source and handle registry."""

from kdiff.kube.client import (
    ClusterClient,
    ClusterHandle,
    ContextSource,
    ContextSourceReader,
    ReloadableClusterClient,
)
from kdiff.kube.errors import (
    ClusterAuthError,
    ClusterError,
    ClusterUnreachableError,
    KubeConfigError,
    ResourceNotFoundError,
)
from kdiff.kube.kubeconfig import KubeConfig, KubeConfigSnapshot
from kdiff.kube.kubectl import KubectlClient
from kdiff.kube.registry import ConnectionRegistry

__all__ = [
    "ClusterAuthError",
    "ClusterClient",
    "ClusterError",
    "ClusterHandle",
    "ClusterUnreachableError",
    "ConnectionRegistry",
    "ContextSource",
    "ContextSourceReader",
    "KubeConfig",
    "KubeConfigError",
    "KubeConfigSnapshot",
    "KubectlClient",
    "ReloadableClusterClient",
    "ResourceNotFoundError",
]
