"""Base controller with fan-out helpers shared by kdiff controllers.

Controllers are awaited from Textual workers so the UI stays responsive
while kubectl calls are in flight.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class WorkerResult:
    """Result wrapper for one fanned-out operation."""

    success: bool
    data: Any | None = None
    error: Exception | None = None
    duration_ms: float = 0.0


class BaseController:
    """Base controller class with fan-out/fan-in helpers.

    Subclasses dispatch independent cluster calls with ``gather_results`` and
    fold the collected ``WorkerResult`` list once every call has finished.
    """

    def __init__(self, max_concurrency: int | None = None) -> None:
        """Initialize the controller.

        Args:
            max_concurrency: Optional cap on simultaneous calls; unbounded when None
        """
        self._max_concurrency = max_concurrency
        self._nonfatal_warnings: dict[str, str] = {}

    @property
    def max_concurrency(self) -> int | None:
        return self._max_concurrency

    @staticmethod
    async def run_timed(call: Callable[[], Awaitable[T]]) -> WorkerResult:
        """Await ``call`` and capture its outcome instead of raising."""
        start = time.perf_counter()
        try:
            data = await call()
        except Exception as exc:
            return WorkerResult(
                success=False,
                error=exc,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return WorkerResult(
            success=True,
            data=data,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    async def gather_results(
        self, calls: list[Callable[[], Awaitable[Any]]]
    ) -> list[WorkerResult]:
        """Run every call concurrently and return results in dispatch order.

        Returns only after all calls have completed; a failing call never
        cancels its siblings.
        """
        semaphore = (
            asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None
        )

        async def _run(call: Callable[[], Awaitable[Any]]) -> WorkerResult:
            if semaphore is None:
                return await self.run_timed(call)
            async with semaphore:
                return await self.run_timed(call)

        return list(await asyncio.gather(*(_run(call) for call in calls)))

    def get_last_nonfatal_warnings(self) -> dict[str, str]:
        """Return best-effort warnings from the last operation."""
        return dict(self._nonfatal_warnings)

    def _record_nonfatal_warning(self, key: str, error: Exception | str) -> None:
        """Store a warning that should not fail the operation."""
        message = str(error).strip() or "Unknown warning"
        self._nonfatal_warnings[str(key)] = message

    def _clear_nonfatal_warnings(self) -> None:
        self._nonfatal_warnings.clear()
