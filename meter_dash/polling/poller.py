from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from meter_dash.core.config import settings
from meter_dash.core.logger import get_logger
from meter_dash.domain.models import RealtimeSample, SeriesPoint, TotalMetric
from meter_dash.domain.periods import MetricKind, Period, PeriodSlot
from meter_dash.infrastructure.metering.client import MeteringClient
from meter_dash.infrastructure.metering.errors import FetchError
from meter_dash.state.selection import PeriodSelection
from meter_dash.state.store import ViewState

from .metrics import (
    COMMITS_TOTAL,
    FETCH_ERRORS_TOTAL,
    STALE_RESPONSES_TOTAL,
    WINDOW_EVICTIONS_TOTAL,
    WINDOW_SIZE,
)
from .schedule import Sleep, ViewSchedule

logger = get_logger("dashboard.poller")

VOLUME_TOTAL = "volume_total"
MONEY_TOTAL = "money_total"
VOLUME_CHART = "volume_chart"
MONEY_CHART = "money_chart"
REALTIME = "realtime"

# Views whose first fetch gates the initial loading state
INITIAL_VIEWS = (VOLUME_TOTAL, MONEY_TOTAL, VOLUME_CHART, MONEY_CHART)


class Poller:
    """Owns one ViewSchedule per view and commits fetch results to ViewState.

    Every result is tagged with the Period it was requested for and dropped on
    arrival if the governing selection has moved on since.
    """

    def __init__(
        self,
        client: MeteringClient,
        selection: PeriodSelection,
        state: ViewState,
        total_interval: Optional[float] = None,
        total_interval_overrides: Optional[Mapping[str, float]] = None,
        realtime_interval: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._client = client
        self._selection = selection
        self._state = state
        self._total_interval = (
            total_interval
            if total_interval is not None
            else settings.total_poll_interval_seconds
        )
        overrides = (
            total_interval_overrides
            if total_interval_overrides is not None
            else settings.total_poll_interval_overrides
        )
        self._total_overrides = {
            Period.parse(name): float(seconds) for name, seconds in overrides.items()
        }
        self._realtime_interval = (
            realtime_interval
            if realtime_interval is not None
            else settings.realtime_poll_interval_seconds
        )
        self._running = False
        self._unsubscribe: Optional[Callable[[], None]] = None

        self.schedules: Dict[str, ViewSchedule] = {
            VOLUME_TOTAL: ViewSchedule(
                VOLUME_TOTAL, self._fetch_volume_total, self.total_cadence, sleep=sleep
            ),
            MONEY_TOTAL: ViewSchedule(
                MONEY_TOTAL, self._fetch_money_total, self.total_cadence, sleep=sleep
            ),
            VOLUME_CHART: ViewSchedule(
                VOLUME_CHART, self._fetch_volume_chart, sleep=sleep
            ),
            MONEY_CHART: ViewSchedule(MONEY_CHART, self._fetch_money_chart, sleep=sleep),
            REALTIME: ViewSchedule(
                REALTIME,
                self._fetch_realtime,
                lambda _period: self._realtime_interval,
                immediate=False,
                sleep=sleep,
            ),
        }
        self._governed: Dict[PeriodSlot, List[ViewSchedule]] = {
            PeriodSlot.VOLUME: [self.schedules[VOLUME_TOTAL]],
            PeriodSlot.MONEY: [self.schedules[MONEY_TOTAL]],
            PeriodSlot.CHART: [
                self.schedules[VOLUME_CHART],
                self.schedules[MONEY_CHART],
            ],
        }

    @property
    def running(self) -> bool:
        return self._running

    def total_cadence(self, period: Period) -> float:
        return self._total_overrides.get(period, self._total_interval)

    def start(self) -> List[asyncio.Task]:
        """Arm every schedule. Returns the initial fetch tasks of INITIAL_VIEWS."""
        if self._running:
            raise RuntimeError("poller already started")
        self._running = True
        initial: List[asyncio.Task] = []
        for slot, schedules in self._governed.items():
            period = self._selection.get(slot)
            for schedule in schedules:
                task = schedule.arm(period)
                if task is not None:
                    initial.append(task)
        self.schedules[REALTIME].arm(Period.SECOND)
        self._unsubscribe = self._selection.subscribe(self._on_selection_change)
        logger.info(
            "poller_started",
            extra={
                "total_interval": self._total_interval,
                "realtime_interval": self._realtime_interval,
            },
        )
        return initial

    async def stop(self):
        if not self._running:
            return
        self._running = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await asyncio.gather(*(s.close() for s in self.schedules.values()))
        logger.info("poller_stopped")

    def _on_selection_change(self, slot: PeriodSlot, old: Period, new: Period):
        if not self._running:
            return
        for schedule in self._governed[slot]:
            schedule.arm(new)

    # Fetch actions, one per view

    async def _fetch_volume_total(self, period: Period):
        await self._run(
            VOLUME_TOTAL,
            PeriodSlot.VOLUME,
            period,
            lambda: self._client.fetch_total(period),
            self._commit_volume_total,
        )

    async def _fetch_money_total(self, period: Period):
        await self._run(
            MONEY_TOTAL,
            PeriodSlot.MONEY,
            period,
            lambda: self._client.fetch_total(period),
            self._commit_money_total,
        )

    async def _fetch_volume_chart(self, period: Period):
        await self._run(
            VOLUME_CHART,
            PeriodSlot.CHART,
            period,
            lambda: self._client.fetch_series(MetricKind.LITERS, period),
            self._commit_volume_series,
        )

    async def _fetch_money_chart(self, period: Period):
        await self._run(
            MONEY_CHART,
            PeriodSlot.CHART,
            period,
            lambda: self._client.fetch_series(MetricKind.MONEY, period),
            self._commit_money_series,
        )

    async def _fetch_realtime(self, period: Period):
        await self._run(
            REALTIME,
            None,
            period,
            lambda: self._client.fetch_series(MetricKind.LITERS, period),
            self._commit_realtime,
        )

    async def _run(
        self,
        view: str,
        slot: Optional[PeriodSlot],
        period: Period,
        fetch: Callable[[], Awaitable[Any]],
        commit: Callable[[Any], None],
    ):
        try:
            result = await fetch()
        except FetchError as e:
            FETCH_ERRORS_TOTAL.labels(view=view, kind=e.kind).inc()
            logger.warning(
                "fetch_failed",
                extra={
                    "view": view,
                    "period": period.value,
                    "error_kind": e.kind,
                    "error": str(e),
                },
            )
            return

        if not self._running:
            logger.debug("response_after_stop_discarded", extra={"view": view})
            return
        if slot is not None and self._selection.get(slot) is not period:
            STALE_RESPONSES_TOTAL.labels(view=view).inc()
            logger.debug(
                "stale_response_discarded",
                extra={
                    "view": view,
                    "period": period.value,
                    "current": self._selection.get(slot).value,
                },
            )
            return
        commit(result)
        COMMITS_TOTAL.labels(view=view).inc()

    # Commits: each slot of ViewState has exactly one writer below

    def _commit_volume_total(self, metric: TotalMetric):
        self._state.volume_total = metric

    def _commit_money_total(self, metric: TotalMetric):
        self._state.money_total = metric

    def _commit_volume_series(self, points: List[SeriesPoint]):
        self._state.volume_series = points

    def _commit_money_series(self, points: List[SeriesPoint]):
        self._state.money_series = points

    def _commit_realtime(self, points: List[SeriesPoint]):
        if not points:
            return
        window = self._state.realtime_window
        evicted = window.append(RealtimeSample.from_point(points[0]))
        if evicted:
            WINDOW_EVICTIONS_TOTAL.inc(evicted)
        WINDOW_SIZE.set(len(window))
