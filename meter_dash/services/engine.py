from __future__ import annotations

import asyncio
from typing import List, Mapping, Optional

from meter_dash.core.config import settings
from meter_dash.core.logger import get_logger
from meter_dash.domain.models import DashboardSnapshot
from meter_dash.domain.periods import Period, PeriodSlot
from meter_dash.infrastructure.metering.client import MeteringClient
from meter_dash.polling.poller import Poller
from meter_dash.polling.schedule import Sleep
from meter_dash.services.projection import project
from meter_dash.state.selection import PeriodSelection
from meter_dash.state.store import ViewState
from meter_dash.state.window import SlidingWindow

logger = get_logger("dashboard.engine")


class DashboardEngine:
    """Owns selections, view state and every poll timer of one dashboard.

    ``start`` fires the initial round of fetches; ``loading`` stays true until
    all of them have settled, successfully or not. ``stop`` cancels every
    timer and outstanding fetch.
    """

    def __init__(
        self,
        client: MeteringClient,
        default_period: Period | str | None = None,
        window_capacity: Optional[int] = None,
        total_interval: Optional[float] = None,
        total_interval_overrides: Optional[Mapping[str, float]] = None,
        realtime_interval: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.selection = PeriodSelection(default_period or settings.default_period)
        self.state = ViewState(
            realtime_window=SlidingWindow(
                window_capacity or settings.realtime_window_capacity
            )
        )
        self.poller = Poller(
            client,
            self.selection,
            self.state,
            total_interval=total_interval,
            total_interval_overrides=total_interval_overrides,
            realtime_interval=realtime_interval,
            sleep=sleep,
        )
        self.ready_event = asyncio.Event()
        self._loading = True
        self._initial_task: Optional[asyncio.Task] = None

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def running(self) -> bool:
        return self.poller.running

    def start(self):
        logger.info(
            "dashboard_engine_starting",
            extra={"periods": {k: v.value for k, v in self.selection.snapshot().items()}},
        )
        self._loading = True
        self.ready_event.clear()
        initial = self.poller.start()
        self._initial_task = asyncio.create_task(
            self._settle_initial(initial), name="initial-load"
        )

    async def stop(self):
        logger.info("dashboard_engine_stopping")
        if self._initial_task is not None:
            self._initial_task.cancel()
            try:
                await self._initial_task
            except asyncio.CancelledError:  # expected during shutdown
                logger.debug("initial_load_cancelled")
            self._initial_task = None
        await self.poller.stop()

    async def wait_ready(self):
        await self.ready_event.wait()

    def set_period(self, slot: PeriodSlot | str, value: Period | str) -> bool:
        return self.selection.set_period(slot, value)

    def snapshot(self) -> DashboardSnapshot:
        return project(self.state, self.selection, self._loading)

    async def _settle_initial(self, tasks: List[asyncio.Task]):
        await asyncio.gather(*tasks, return_exceptions=True)
        self._loading = False
        self.ready_event.set()
        logger.info("initial_load_complete", extra={"fetches": len(tasks)})
