"""Background liveness sampling for registered dependency checkers.

Each checker gets its own asyncio task that wakes every ``period``
seconds, runs the check and writes the result to the ``dependency_up``
gauge.  Ticks never overlap: when a check overruns its period the missed
ticks are skipped.
"""

import asyncio
import inspect

from http_monitor.core.logging import logger
from http_monitor.core.protocols.dependency_checker import DependencyChecker
from http_monitor.core.protocols.http_metrics import HttpMetrics
from http_monitor.schemas.dependency import DependencyStatus


class DependencyCheckTask:
    """Periodically run one ``DependencyChecker``.

    Returned by ``Monitor.add_dependency_checker``; ``await task.stop()``
    cancels it.
    """

    def __init__(
        self,
        checker: DependencyChecker,
        metrics: HttpMetrics,
        period: float,
        timeout: float | None = None,
    ) -> None:
        if period <= 0:
            raise ValueError("checking period must be positive")
        if timeout is not None and timeout <= 0:
            raise ValueError("check timeout must be positive")

        self._checker = checker
        self._metrics = metrics
        self._period = period
        self._timeout = timeout
        self._task: asyncio.Task | None = None
        self._pending: asyncio.Future | None = None
        self.name = checker.name
        self.logger = logger.with_context(
            operation="dependency_check",
            dependency=self.name,
            period=period,
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the checking loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"dependency-check:{self.name}"
        )
        self.logger.info("Dependency checker started")

    async def stop(self) -> None:
        """Cancel the checking loop. Safe to call when not started."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.logger.info("Dependency checker stopped")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self._period
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            await self.check_once()

            next_tick += self._period
            lag = loop.time() - next_tick
            if lag > 0:
                skipped = int(lag // self._period) + 1
                next_tick += skipped * self._period
                self.logger.debug(f"Check overran its period, skipping {skipped} tick(s)")

    async def check_once(self) -> DependencyStatus:
        """Run the checker once and record the result."""
        status = await self._check()
        self._metrics.set_dependency_up(self.name, status)
        return status

    async def _check(self) -> DependencyStatus:
        try:
            if inspect.iscoroutinefunction(self._checker.check):
                result = await asyncio.wait_for(self._checker.check(), timeout=self._timeout)
            else:
                result = await self._check_in_thread()
            return DependencyStatus(result)
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            self.logger.warning(f"Dependency check timed out after {self._timeout}s")
        except Exception as e:
            self.logger.warning(f"Dependency check failed: {e}")
        return DependencyStatus.DOWN

    async def _check_in_thread(self):
        # A timed out thread cannot be cancelled; no new one starts until it returns.
        if self._pending is not None and not self._pending.done():
            raise RuntimeError("previous check is still running")

        pending = asyncio.get_running_loop().run_in_executor(None, self._checker.check)
        pending.add_done_callback(_consume_result)
        self._pending = pending
        return await asyncio.wait_for(asyncio.shield(pending), timeout=self._timeout)


def _consume_result(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()
