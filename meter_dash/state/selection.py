from __future__ import annotations

from typing import Callable, Dict, List

from meter_dash.core.logger import get_logger
from meter_dash.domain.periods import Period, PeriodSlot, allowed_periods

logger = get_logger("dashboard.selection")

SelectionListener = Callable[[PeriodSlot, Period, Period], None]


class PeriodSelection:
    """Currently selected Period for each independently configurable view.

    Listeners are called synchronously with ``(slot, old, new)`` only when a
    slot actually changes value.
    """

    def __init__(self, default: Period | str = Period.DAY):
        default = Period.parse(default)
        self._slots: Dict[PeriodSlot, Period] = {}
        for slot in PeriodSlot:
            self._check(slot, default)
            self._slots[slot] = default
        self._listeners: List[SelectionListener] = []

    def get(self, slot: PeriodSlot | str) -> Period:
        return self._slots[PeriodSlot(slot)]

    def set_period(self, slot: PeriodSlot | str, value: Period | str) -> bool:
        """Select a period for slot. Returns True if the selection changed."""
        slot = PeriodSlot(slot)
        period = Period.parse(value)
        self._check(slot, period)
        old = self._slots[slot]
        if old is period:
            return False
        self._slots[slot] = period
        logger.info(
            "period_selected",
            extra={"slot": slot.value, "old": old.value, "new": period.value},
        )
        for listener in list(self._listeners):
            listener(slot, old, period)
        return True

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> Dict[str, Period]:
        return {slot.value: period for slot, period in self._slots.items()}

    @staticmethod
    def _check(slot: PeriodSlot, period: Period):
        if period not in allowed_periods(slot):
            raise ValueError(
                f"Period {period.value!r} is not available for the {slot.value} view"
            )
