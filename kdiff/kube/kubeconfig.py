"""Kubeconfig-backed context source."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from kdiff.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    PROBE_PROCESS_GRACE,
)
from kdiff.kube.errors import KubeConfigError
from kdiff.kube.kubectl import KubectlClient, format_request_timeout

logger = logging.getLogger(__name__)


class KubeConfigSnapshot:
    """Contexts of one kubeconfig read, resolved without touching the file again.

    A context entry whose ``context`` value is not a mapping is listed but
    fails to resolve, so one bad entry never hides the other contexts.
    """

    def __init__(self, path: Path, data: dict[str, Any]) -> None:
        self._path = path
        self._contexts = self._parse_contexts(path, data)
        self._cluster_names = {
            str(entry["name"])
            for entry in self._entries(path, data, "clusters")
            if isinstance(entry, dict) and entry.get("name")
        }

    @staticmethod
    def _entries(path: Path, data: dict[str, Any], key: str) -> list[Any]:
        entries = data.get(key) or []
        if not isinstance(entries, list):
            raise KubeConfigError(f"Kubeconfig {path}: '{key}' must be a list")
        return entries

    @classmethod
    def _parse_contexts(
        cls, path: Path, data: dict[str, Any]
    ) -> dict[str, dict[str, Any] | None]:
        contexts: dict[str, dict[str, Any] | None] = {}
        for entry in cls._entries(path, data, "contexts"):
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            value = entry.get("context") or {}
            if not isinstance(value, dict):
                logger.warning("Context %s in %s is not a mapping", entry["name"], path)
                value = None
            contexts[str(entry["name"])] = value
        return contexts

    @property
    def path(self) -> Path:
        return self._path

    def list_context_names(self) -> set[str]:
        """Return every context name defined in the kubeconfig."""
        return set(self._contexts)

    def resolve_connection(
        self,
        context_name: str,
        request_timeout: float | None = None,
    ) -> KubectlClient:
        """Build a fresh client handle for ``context_name``.

        Args:
            context_name: Context to resolve
            request_timeout: Optional per-request timeout in seconds; when set
                the process timeout is bounded accordingly

        Raises:
            KubeConfigError: When the context is unknown, malformed or
                references a cluster that is not defined.
        """
        if context_name not in self._contexts:
            raise KubeConfigError(f'context "{context_name}" does not exist', context_name)
        context = self._contexts[context_name]
        if context is None:
            raise KubeConfigError(f'context "{context_name}" is not a mapping', context_name)

        cluster_name = context.get("cluster")
        if not cluster_name or cluster_name not in self._cluster_names:
            raise KubeConfigError(
                f'context "{context_name}" references unknown cluster "{cluster_name}"',
                context_name,
            )

        if request_timeout is None:
            return KubectlClient(
                context_name,
                kubeconfig=str(self._path),
                request_timeout=CLUSTER_REQUEST_TIMEOUT,
                command_timeout=KUBECTL_COMMAND_TIMEOUT,
            )
        return KubectlClient(
            context_name,
            kubeconfig=str(self._path),
            request_timeout=format_request_timeout(request_timeout),
            command_timeout=request_timeout + PROBE_PROCESS_GRACE,
        )


class KubeConfig:
    """Reads a kubeconfig file into snapshots of its contexts.

    Every ``read()`` parses the file again so a refreshed cluster list always
    reflects the file on disk.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> KubeConfigSnapshot:
        """Parse the kubeconfig once.

        Raises:
            KubeConfigError: When the file is missing, unreadable or malformed.
        """
        try:
            with self._path.open(encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except FileNotFoundError as exc:
            raise KubeConfigError(f"Kubeconfig not found: {self._path}") from exc
        except (OSError, yaml.YAMLError) as exc:
            raise KubeConfigError(f"Unable to read kubeconfig {self._path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise KubeConfigError(f"Kubeconfig {self._path} must contain a mapping")
        return KubeConfigSnapshot(self._path, data)

    def list_context_names(self) -> set[str]:
        return self.read().list_context_names()

    def resolve_connection(
        self,
        context_name: str,
        request_timeout: float | None = None,
    ) -> KubectlClient:
        return self.read().resolve_connection(context_name, request_timeout=request_timeout)
