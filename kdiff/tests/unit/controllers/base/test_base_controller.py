"""Tests for base controller module."""

from __future__ import annotations

import asyncio

import pytest

from kdiff.controllers.base.base_controller import BaseController, WorkerResult


class TestWorkerResult:
    """Tests for WorkerResult dataclass."""

    def test_worker_result_success(self) -> None:
        result = WorkerResult(success=True, data={"key": "value"}, duration_ms=100.0)
        assert result.success is True
        assert result.data == {"key": "value"}
        assert result.error is None
        assert result.duration_ms == 100.0

    def test_worker_result_defaults(self) -> None:
        result = WorkerResult(success=True)
        assert result.data is None
        assert result.error is None
        assert result.duration_ms == 0.0


class TestBaseController:
    """Tests for BaseController class."""

    @pytest.mark.asyncio
    async def test_run_timed_captures_success(self) -> None:
        async def call() -> int:
            return 42

        result = await BaseController.run_timed(call)

        assert result.success is True
        assert result.data == 42
        assert result.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_run_timed_captures_error(self) -> None:
        error = RuntimeError("boom")

        async def call() -> None:
            raise error

        result = await BaseController.run_timed(call)

        assert result.success is False
        assert result.error is error

    @pytest.mark.asyncio
    async def test_gather_results_keeps_dispatch_order(self) -> None:
        controller = BaseController()

        def make(value: int, delay: float):
            async def call() -> int:
                await asyncio.sleep(delay)
                return value

            return call

        results = await controller.gather_results([make(1, 0.03), make(2, 0.0), make(3, 0.01)])

        assert [result.data for result in results] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_gather_results_failure_does_not_cancel_siblings(self) -> None:
        controller = BaseController()

        async def fails() -> None:
            raise ValueError("bad")

        async def succeeds() -> str:
            await asyncio.sleep(0.01)
            return "ok"

        results = await controller.gather_results([fails, succeeds])

        assert [result.success for result in results] == [False, True]
        assert results[1].data == "ok"

    @pytest.mark.asyncio
    async def test_max_concurrency_caps_in_flight_calls(self) -> None:
        controller = BaseController(max_concurrency=2)
        in_flight = 0
        peak = 0

        async def call() -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        await controller.gather_results([call for _ in range(6)])

        assert controller.max_concurrency == 2
        assert peak == 2

    def test_nonfatal_warnings(self) -> None:
        controller = BaseController()
        controller._record_nonfatal_warning("prod", RuntimeError("  slow  "))
        controller._record_nonfatal_warning("staging", "")

        warnings = controller.get_last_nonfatal_warnings()
        assert warnings == {"prod": "slow", "staging": "Unknown warning"}

        controller._clear_nonfatal_warnings()
        assert controller.get_last_nonfatal_warnings() == {}
