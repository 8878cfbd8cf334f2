"""Tests for kubectl client handle."""

from __future__ import annotations

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from kdiff.constants.enums import ResourceKind
from kdiff.kube import kubectl as kubectl_module
from kdiff.kube.errors import (
    ClusterAuthError,
    ClusterUnreachableError,
    ResourceNotFoundError,
    classify_kubectl_error,
)
from kdiff.kube.kubectl import KubectlClient, format_request_timeout


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process with canned output."""

    def __init__(
        self,
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
        delay: float = 0.0,
    ) -> None:
        self.stdout = stdout.encode()
        self.stderr = stderr.encode()
        self.exit_code = returncode
        self.delay = delay
        self.returncode: int | None = None
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        await asyncio.sleep(self.delay)
        self.returncode = self.exit_code
        return self.stdout, self.stderr

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        return self.returncode if self.returncode is not None else self.exit_code


class RecordingExec:
    """Replacement for asyncio.create_subprocess_exec returning a canned process."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    async def __call__(self, *cmd: str, **kwargs: Any):
        self.calls.append((list(cmd), kwargs))
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def _use_exec(monkeypatch: pytest.MonkeyPatch, result: Any) -> RecordingExec:
    recording = RecordingExec(result)
    monkeypatch.setattr(kubectl_module.asyncio, "create_subprocess_exec", recording)
    return recording


DEPLOYMENTS_JSON = {
    "items": [
        {
            "metadata": {"name": "web", "namespace": "default"},
            "spec": {
                "template": {
                    "spec": {
                        "containers": [
                            {"name": "app", "image": "nginx:1.21"},
                            {"name": "sidecar", "image": "envoy:1.28"},
                        ]
                    }
                }
            },
        }
    ]
}


class TestKubectlClient:
    """Tests for KubectlClient class."""

    @pytest.fixture
    def client(self) -> KubectlClient:
        return KubectlClient("prod", kubeconfig="/tmp/kubeconfig", request_timeout="5s", command_timeout=6)

    def test_build_command(self, client: KubectlClient) -> None:
        cmd = client.build_command(("get", "namespaces"))
        assert cmd == [
            "kubectl",
            "--kubeconfig",
            "/tmp/kubeconfig",
            "--context",
            "prod",
            "get",
            "namespaces",
            "--request-timeout=5s",
        ]

    def test_build_command_without_kubeconfig(self) -> None:
        cmd = KubectlClient("dev").build_command(("version",))
        assert "--kubeconfig" not in cmd
        assert cmd[-1] == "--request-timeout=30s"

    def test_format_request_timeout(self) -> None:
        assert format_request_timeout(2.0) == "2s"
        assert format_request_timeout(0.5) == "0.5s"

    @pytest.mark.asyncio
    async def test_list_workloads_namespaced(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run = _use_exec(monkeypatch, FakeProcess(stdout=json.dumps(DEPLOYMENTS_JSON)))

        workloads = await client.list_workloads(ResourceKind.DEPLOYMENT, "default")

        cmd, kwargs = run.calls[0]
        assert cmd[5:9] == ["get", "deployments.apps", "-n", "default"]
        assert kwargs["stdout"] == asyncio.subprocess.PIPE
        assert len(workloads) == 1
        assert workloads[0].name == "web"
        assert [c.image for c in workloads[0].containers] == ["nginx:1.21", "envoy:1.28"]

    @pytest.mark.asyncio
    async def test_list_workloads_all_namespaces(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run = _use_exec(monkeypatch, FakeProcess(stdout='{"items": []}'))

        assert await client.list_workloads(ResourceKind.DAEMON_SET, "") == []
        cmd, _ = run.calls[0]
        assert "--all-namespaces" in cmd
        assert "-n" not in cmd
        assert "daemonsets.apps" in cmd

    @pytest.mark.asyncio
    async def test_get_server_version(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        payload = {"serverVersion": {"major": "1", "minor": "29"}}
        _use_exec(monkeypatch, FakeProcess(stdout=json.dumps(payload)))

        assert await client.get_server_version() == "1.29"

    @pytest.mark.asyncio
    async def test_missing_server_version_is_unreachable(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _use_exec(monkeypatch, FakeProcess(stdout="{}"))

        with pytest.raises(ClusterUnreachableError):
            await client.get_server_version()

    @pytest.mark.asyncio
    async def test_list_namespaces(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        payload = {"items": [{"metadata": {"name": "default"}}, {"metadata": {"name": "qa"}}]}
        _use_exec(monkeypatch, FakeProcess(stdout=json.dumps(payload)))

        assert await client.list_namespaces() == ["default", "qa"]

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, monkeypatch: pytest.MonkeyPatch) -> None:
        client = KubectlClient("prod", request_timeout="1s", command_timeout=0.05)
        process = FakeProcess(stdout="{}", delay=5.0)
        _use_exec(monkeypatch, process)

        with pytest.raises(ClusterUnreachableError, match="timed out"):
            await client.list_namespaces()
        assert process.killed is True

    @pytest.mark.asyncio
    async def test_cancellation_kills_process(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        process = FakeProcess(stdout="{}", delay=5.0)
        _use_exec(monkeypatch, process)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(client.get_server_version(), timeout=0.05)
        assert process.killed is True

    @pytest.mark.asyncio
    async def test_missing_kubectl_is_unreachable(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _use_exec(monkeypatch, FileNotFoundError("kubectl"))

        with pytest.raises(ClusterUnreachableError):
            await client.list_namespaces()

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_classified(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _use_exec(
            monkeypatch,
            FakeProcess(stderr="error: You must be logged in to the server", returncode=1),
        )

        with pytest.raises(ClusterAuthError) as exc_info:
            await client.list_namespaces()
        assert exc_info.value.context == "prod"

    @pytest.mark.asyncio
    async def test_malformed_json_is_unreachable(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _use_exec(monkeypatch, FakeProcess(stdout="not json"))

        with pytest.raises(ClusterUnreachableError, match="Malformed"):
            await client.list_namespaces()

    @pytest.mark.asyncio
    async def test_calls_do_not_use_default_executor(
        self, client: KubectlClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Many slow calls run side by side even with a single worker thread."""
        payload = {"serverVersion": {"major": "1", "minor": "30"}}
        _use_exec(monkeypatch, FakeProcess(stdout=json.dumps(payload), delay=0.2))
        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(max_workers=1)
        loop.set_default_executor(executor)
        try:
            versions = await asyncio.wait_for(
                asyncio.gather(*(client.get_server_version() for _ in range(20))),
                timeout=2.0,
            )
        finally:
            executor.shutdown(wait=False)

        assert versions == ["1.30"] * 20

    def test_parse_workload_items_tolerates_missing_fields(self) -> None:
        workloads = KubectlClient.parse_workload_items([{"metadata": {"name": "bare"}}])
        assert workloads[0].name == "bare"
        assert workloads[0].namespace == ""
        assert workloads[0].containers == ()


class TestClassifyKubectlError:
    """Tests for classify_kubectl_error."""

    @pytest.mark.parametrize(
        ("stderr", "expected"),
        [
            ("error: You must be logged in to the server (Unauthorized)", ClusterAuthError),
            ('Error from server (Forbidden): deployments.apps is forbidden', ClusterAuthError),
            ("x509: certificate signed by unknown authority", ClusterAuthError),
            ('Error from server (NotFound): namespaces "nope" not found', ResourceNotFoundError),
            ("error: the server doesn't have a resource type \"foos\"", ResourceNotFoundError),
            ("Unable to connect to the server: dial tcp 10.0.0.1:443: i/o timeout", ClusterUnreachableError),
            ("", ClusterUnreachableError),
        ],
    )
    def test_classification(self, stderr: str, expected: type) -> None:
        error = classify_kubectl_error(stderr, "ctx")
        assert type(error) is expected
        assert error.context == "ctx"
