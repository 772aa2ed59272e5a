from enum import Enum


class Period(str, Enum):
    """Aggregation granularity understood by the metering service."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | Period") -> "Period":
        """Return the Period for value, raising ValueError for unknown names."""
        if isinstance(value, Period):
            return value
        try:
            return cls(value.lower())
        except (ValueError, AttributeError):
            raise ValueError(f"Unknown period: {value!r}") from None


class MetricKind(str, Enum):
    """Chart discriminator passed as the `type` query parameter."""

    LITERS = "liters"
    MONEY = "money"


class PeriodSlot(str, Enum):
    """Independently selectable views."""

    VOLUME = "volume"
    MONEY = "money"
    CHART = "chart"


TOTAL_PERIODS: tuple[Period, ...] = tuple(Period)
CHART_PERIODS: tuple[Period, ...] = (
    Period.DAY,
    Period.WEEK,
    Period.MONTH,
    Period.YEAR,
)
# Only the realtime feed queries series at second granularity
SERIES_PERIODS: tuple[Period, ...] = (Period.SECOND,) + CHART_PERIODS

PERIOD_LABELS: dict[Period, str] = {
    Period.SECOND: "Tempo Real",
    Period.MINUTE: "Minuto",
    Period.HOUR: "Hora",
    Period.DAY: "Dia",
    Period.WEEK: "Semana",
    Period.MONTH: "Mês",
    Period.YEAR: "Ano",
}


def allowed_periods(slot: PeriodSlot) -> tuple[Period, ...]:
    if slot is PeriodSlot.CHART:
        return CHART_PERIODS
    return TOTAL_PERIODS
