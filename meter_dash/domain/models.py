from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .periods import Period


class TotalResponse(BaseModel):
    """Wire shape of GET /volume-total."""

    period: str
    total_value_float: float
    total_value_money: float


class PeriodBucket(BaseModel):
    """One element of the GET /volume-periodo response."""

    period: str = Field(..., description="Bucket timestamp (ISO-like)")
    total_value: float


class TotalMetric(BaseModel):
    """Scalar aggregate attributed to the period it was requested with."""

    model_config = ConfigDict(frozen=True)

    period: Period
    volume_value: float
    money_value: float


class SeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str
    value: float


class RealtimeSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str
    value: float

    @classmethod
    def from_point(cls, point: SeriesPoint) -> "RealtimeSample":
        return cls(timestamp=point.timestamp, value=point.value)


class PeriodSelectionView(BaseModel):
    volume: Period
    money: Period
    chart: Period


class DashboardSnapshot(BaseModel):
    """Render-friendly projection of everything the dashboard shows."""

    loading: bool
    periods: PeriodSelectionView
    volume_total: Optional[TotalMetric] = None
    money_total: Optional[TotalMetric] = None
    volume_series: list[SeriesPoint] = Field(default_factory=list)
    money_series: list[SeriesPoint] = Field(default_factory=list)
    realtime_window: list[RealtimeSample] = Field(default_factory=list)


class PeriodOption(BaseModel):
    value: Period
    label: str


class PeriodUpdate(BaseModel):
    """Body of PUT /periods/{slot}."""

    period: str
