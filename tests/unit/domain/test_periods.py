import pytest
from meter_dash.domain.periods import (
    CHART_PERIODS,
    PERIOD_LABELS,
    Period,
    PeriodSlot,
    allowed_periods,
)


def test_parse_accepts_names_and_members():
    assert Period.parse("month") is Period.MONTH
    assert Period.parse("MONTH") is Period.MONTH
    assert Period.parse(Period.WEEK) is Period.WEEK


@pytest.mark.parametrize("bad", ["", "fortnight", None, 3])
def test_parse_rejects_unknown(bad):
    with pytest.raises(ValueError):
        Period.parse(bad)


def test_chart_subset():
    assert allowed_periods(PeriodSlot.CHART) == CHART_PERIODS
    assert Period.SECOND not in CHART_PERIODS
    assert set(allowed_periods(PeriodSlot.VOLUME)) == set(Period)


def test_every_period_has_a_label():
    assert set(PERIOD_LABELS) == set(Period)
    assert PERIOD_LABELS[Period.SECOND] == "Tempo Real"
