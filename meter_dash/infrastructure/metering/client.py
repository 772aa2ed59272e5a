"""Async HTTP client for the upstream metering service."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from pydantic import TypeAdapter, ValidationError

from meter_dash.core.config import settings
from meter_dash.core.logger import get_logger
from meter_dash.domain.models import (
    PeriodBucket,
    SeriesPoint,
    TotalMetric,
    TotalResponse,
)
from meter_dash.domain.periods import SERIES_PERIODS, MetricKind, Period

from .errors import DecodeError, NetworkError, ServerError
from .metrics import FETCH_LATENCY_SECONDS, FETCH_REQUESTS_TOTAL

logger = get_logger("dashboard.metering")

TOTAL_ENDPOINT = "/volume-total"
SERIES_ENDPOINT = "/volume-periodo"

_BUCKETS = TypeAdapter(list[PeriodBucket])


class MeteringClient:
    """One request per call, no retries, no shared state.

    Every failure mode is raised as a FetchError subclass so callers only
    need a single except clause to keep their last good value.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.metering_base_url,
            timeout=timeout if timeout is not None else settings.metering_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    async def close(self):
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, endpoint: str, params: Mapping[str, str]) -> Any:
        """Issue a GET and return the decoded JSON body."""
        FETCH_REQUESTS_TOTAL.labels(endpoint=endpoint).inc()
        try:
            with FETCH_LATENCY_SECONDS.labels(endpoint=endpoint).time():
                resp = await self._client.get(endpoint, params=dict(params))
        except httpx.HTTPError as e:
            raise NetworkError(
                f"{type(e).__name__}: {e}", endpoint=endpoint
            ) from e

        if not resp.is_success:
            raise ServerError(
                f"unexpected status {resp.status_code}",
                status_code=resp.status_code,
                endpoint=endpoint,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON body: {e}", endpoint=endpoint) from e

    async def fetch_total(self, period: Period | str) -> TotalMetric:
        period = Period.parse(period)
        payload = await self.fetch(TOTAL_ENDPOINT, {"period": period.value})
        try:
            body = TotalResponse.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(
                f"unexpected total shape: {e.error_count()} errors",
                endpoint=TOTAL_ENDPOINT,
            ) from e
        if body.period != period.value:
            # Attribution always follows the request, never the echo
            logger.debug(
                "total_period_echo_mismatch",
                extra={"requested": period.value, "echoed": body.period},
            )
        return TotalMetric(
            period=period,
            volume_value=body.total_value_float,
            money_value=body.total_value_money,
        )

    async def fetch_series(
        self, kind: MetricKind | str, period: Period | str
    ) -> list[SeriesPoint]:
        kind = MetricKind(kind)
        period = Period.parse(period)
        if period not in SERIES_PERIODS:
            raise ValueError(f"Period {period.value!r} has no series endpoint")
        payload = await self.fetch(
            SERIES_ENDPOINT, {"type": kind.value, "period": period.value}
        )
        try:
            buckets = _BUCKETS.validate_python(payload)
        except ValidationError as e:
            raise DecodeError(
                f"unexpected series shape: {e.error_count()} errors",
                endpoint=SERIES_ENDPOINT,
            ) from e
        return [SeriesPoint(timestamp=b.period, value=b.total_value) for b in buckets]
