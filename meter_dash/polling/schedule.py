"""Per-view recurring fetch schedule."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Set

from meter_dash.core.logger import get_logger
from meter_dash.domain.periods import Period

logger = get_logger("dashboard.schedule")

FetchAction = Callable[[Period], Awaitable[None]]
Cadence = Callable[[Period], Optional[float]]
Sleep = Callable[[float], Awaitable[None]]


def no_cadence(period: Period) -> Optional[float]:
    """Cadence for views that only fetch when their period changes."""
    return None


class ViewSchedule:
    """Timer for one view, armed with the Period it fetches for.

    ``arm`` cancels the previous timer before adopting the new period, so a
    view never has two timers. Each fetch runs as its own task: canceling the
    timer does not abort requests already sent, and a slow request never
    delays the next tick or another view.
    """

    def __init__(
        self,
        name: str,
        action: FetchAction,
        cadence: Cadence = no_cadence,
        immediate: bool = True,
        sleep: Sleep = asyncio.sleep,
    ):
        self.name = name
        self.period: Optional[Period] = None
        self.generation = 0
        self._action = action
        self._cadence = cadence
        self._immediate = immediate
        self._sleep = sleep
        self._timer: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def armed(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def arm(self, period: Period) -> Optional[asyncio.Task]:
        """Adopt period, fire the immediate fetch and restart the cadence timer.

        Returns the immediate fetch task, if one was dispatched.
        """
        self.cancel()
        self.period = period
        self.generation += 1
        first = self.dispatch() if self._immediate else None
        interval = self._cadence(period)
        if interval is not None:
            self._timer = asyncio.create_task(
                self._tick(interval, self.generation), name=f"{self.name}-timer"
            )
        logger.debug(
            "schedule_armed",
            extra={
                "view": self.name,
                "period": period.value,
                "interval": interval,
                "generation": self.generation,
            },
        )
        return first

    def dispatch(self) -> asyncio.Task:
        assert self.period is not None, "schedule dispatched before being armed"
        task = asyncio.create_task(
            self._action(self.period), name=f"{self.name}-fetch"
        )
        self._inflight.add(task)
        task.add_done_callback(self._on_done)
        return task

    def cancel(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def close(self):
        """Cancel the timer and any fetch still in flight, then wait for them."""
        timer = self._timer
        self.cancel()
        self.generation += 1
        pending = list(self._inflight)
        for task in pending:
            task.cancel()
        if timer is not None:
            pending.append(timer)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _tick(self, interval: float, generation: int):
        while True:
            await self._sleep(interval)
            if generation != self.generation:
                return
            self.dispatch()

    def _on_done(self, task: asyncio.Task):
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "fetch_task_crashed",
                extra={"view": self.name, "error": str(exc)},
                exc_info=(type(exc), exc, exc.__traceback__),
            )
