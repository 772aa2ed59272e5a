import pytest
from meter_dash.domain.periods import Period, PeriodSlot
from meter_dash.state.selection import PeriodSelection


class TestPeriodSelection:
    def test_defaults_to_day(self):
        sel = PeriodSelection()
        assert sel.snapshot() == {
            "volume": Period.DAY,
            "money": Period.DAY,
            "chart": Period.DAY,
        }

    def test_slots_are_independent(self):
        sel = PeriodSelection()
        assert sel.set_period(PeriodSlot.VOLUME, "hour") is True

        assert sel.get("volume") is Period.HOUR
        assert sel.get("money") is Period.DAY
        assert sel.get("chart") is Period.DAY

    def test_listener_notified_on_change(self):
        sel = PeriodSelection()
        seen = []
        sel.subscribe(lambda slot, old, new: seen.append((slot, old, new)))

        sel.set_period("chart", Period.MONTH)

        assert seen == [(PeriodSlot.CHART, Period.DAY, Period.MONTH)]

    def test_same_value_is_noop(self):
        sel = PeriodSelection()
        seen = []
        sel.subscribe(lambda *args: seen.append(args))

        assert sel.set_period("money", "day") is False
        assert sel.get("money") is Period.DAY
        assert seen == []

    def test_unsubscribe_stops_notifications(self):
        sel = PeriodSelection()
        seen = []
        unsubscribe = sel.subscribe(lambda *args: seen.append(args))
        unsubscribe()

        sel.set_period("volume", "year")
        assert seen == []

    def test_total_slots_accept_every_period(self):
        sel = PeriodSelection()
        for period in Period:
            sel.set_period("volume", period)
            assert sel.get("volume") is period

    def test_chart_rejects_fine_grained_periods(self):
        sel = PeriodSelection()
        with pytest.raises(ValueError):
            sel.set_period("chart", "minute")
        assert sel.get("chart") is Period.DAY

    def test_unknown_period_rejected(self):
        sel = PeriodSelection()
        with pytest.raises(ValueError):
            sel.set_period("volume", "fortnight")

    def test_default_must_suit_every_slot(self):
        with pytest.raises(ValueError):
            PeriodSelection(Period.HOUR)
