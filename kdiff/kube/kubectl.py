"""kubectl-backed client handle bound to a single kubeconfig context."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from kdiff.constants.enums import ResourceKind
from kdiff.constants.timeouts import CLUSTER_REQUEST_TIMEOUT, KUBECTL_COMMAND_TIMEOUT
from kdiff.kube.errors import ClusterUnreachableError, classify_kubectl_error
from kdiff.models.core.workload_info import RawContainer, RawWorkload

logger = logging.getLogger(__name__)


def format_request_timeout(seconds: float) -> str:
    """Format seconds as a kubectl ``--request-timeout`` value."""
    return f"{seconds:g}s"


def _decode(output: bytes | None) -> str:
    return (output or b"").decode("utf-8", errors="replace")


class KubectlClient:
    """Runs kubectl against one context.

    Instances are immutable after construction so a handle can keep serving
    in-flight calls while the registry swaps in a new set of handles.
    """

    def __init__(
        self,
        context: str,
        kubeconfig: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        command_timeout: float = KUBECTL_COMMAND_TIMEOUT,
    ) -> None:
        """Initialize the client handle.

        Args:
            context: Kubeconfig context name
            kubeconfig: Explicit kubeconfig path (kubectl default when None)
            request_timeout: Value for kubectl ``--request-timeout``
            command_timeout: Process-level timeout in seconds
        """
        self._context = context
        self._kubeconfig = kubeconfig
        self._request_timeout = request_timeout
        self._command_timeout = command_timeout

    @property
    def context(self) -> str:
        return self._context

    @property
    def kubeconfig(self) -> str | None:
        return self._kubeconfig

    @property
    def request_timeout(self) -> str:
        return self._request_timeout

    def build_command(self, args: tuple[str, ...]) -> list[str]:
        cmd = ["kubectl"]
        if self._kubeconfig:
            cmd.extend(["--kubeconfig", self._kubeconfig])
        cmd.extend(["--context", self._context])
        cmd.extend(args)
        cmd.append(f"--request-timeout={self._request_timeout}")
        return cmd

    async def run_kubectl(self, args: tuple[str, ...]) -> str:
        """Run a kubectl command as an asyncio subprocess and return stdout.

        The process is killed when the command timeout expires or the
        awaiting task is cancelled.
        """
        cmd = self.build_command(args)
        logger.debug("Running %s", " ".join(cmd))
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ClusterUnreachableError(f"Unable to run kubectl: {exc}", self._context) from exc

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self._command_timeout
            )
        except asyncio.TimeoutError as exc:
            await self._kill(process)
            raise ClusterUnreachableError(
                f"kubectl timed out after {self._command_timeout:g}s", self._context
            ) from exc
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        if process.returncode != 0:
            raise classify_kubectl_error(_decode(stderr), self._context)
        return _decode(stdout)

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()

    async def _get_json(self, args: tuple[str, ...]) -> dict[str, Any]:
        output = await self.run_kubectl(args)
        try:
            data = json.loads(output or "{}")
        except json.JSONDecodeError as exc:
            raise ClusterUnreachableError(
                f"Malformed kubectl output: {exc}", self._context
            ) from exc
        if not isinstance(data, dict):
            raise ClusterUnreachableError("Unexpected kubectl output", self._context)
        return data

    async def get_server_version(self) -> str:
        """Return the API server version as ``<major>.<minor>``."""
        data = await self._get_json(("version", "-o", "json"))
        server = data.get("serverVersion")
        if not isinstance(server, dict):
            raise ClusterUnreachableError("Server version unavailable", self._context)
        return f"{server.get('major', '')}.{server.get('minor', '')}"

    async def list_namespaces(self) -> list[str]:
        data = await self._get_json(("get", "namespaces", "-o", "json"))
        return [
            item.get("metadata", {}).get("name", "")
            for item in data.get("items", [])
            if item.get("metadata", {}).get("name")
        ]

    async def list_workloads(self, kind: ResourceKind, namespace: str) -> list[RawWorkload]:
        """List workloads of ``kind``; an empty namespace means all namespaces."""
        args: list[str] = ["get", kind.kubectl_resource]
        if namespace:
            args.extend(["-n", namespace])
        else:
            args.append("--all-namespaces")
        args.extend(["-o", "json"])
        data = await self._get_json(tuple(args))
        return self.parse_workload_items(data.get("items", []))

    @staticmethod
    def parse_workload_items(items: list[dict[str, Any]]) -> list[RawWorkload]:
        """Convert raw kubectl items into RawWorkload objects."""
        workloads: list[RawWorkload] = []
        for item in items:
            metadata = item.get("metadata", {})
            pod_spec = item.get("spec", {}).get("template", {}).get("spec", {})
            workloads.append(
                RawWorkload(
                    name=metadata.get("name", ""),
                    namespace=metadata.get("namespace", ""),
                    containers=tuple(
                        RawContainer(name=c.get("name", ""), image=c.get("image", ""))
                        for c in pod_spec.get("containers", [])
                    ),
                )
            )
        return workloads

    def __repr__(self) -> str:
        return f"KubectlClient(context={self._context!r}, kubeconfig={self._kubeconfig!r})"
