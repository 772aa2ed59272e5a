from fastapi import APIRouter, Depends, HTTPException

from meter_dash.api.dependencies import get_engine
from meter_dash.domain.models import PeriodOption, PeriodUpdate
from meter_dash.domain.periods import PERIOD_LABELS, PeriodSlot, allowed_periods
from meter_dash.services.engine import DashboardEngine

router = APIRouter(prefix="/periods")


@router.get("")
async def period_options(engine: DashboardEngine = Depends(get_engine)):
    """Selectable periods per view, with the current selection."""
    selected = engine.selection.snapshot()
    return {
        slot.value: {
            "selected": selected[slot.value],
            "options": [
                PeriodOption(value=p, label=PERIOD_LABELS[p])
                for p in allowed_periods(slot)
            ],
        }
        for slot in PeriodSlot
    }


@router.put("/{slot}")
async def set_period(
    slot: PeriodSlot,
    body: PeriodUpdate,
    engine: DashboardEngine = Depends(get_engine),
):
    try:
        changed = engine.set_period(slot, body.period)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "slot": slot.value,
        "period": engine.selection.get(slot).value,
        "changed": changed,
    }
