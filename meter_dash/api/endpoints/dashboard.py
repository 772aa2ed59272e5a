from fastapi import APIRouter, Depends

from meter_dash.api.dependencies import get_engine
from meter_dash.domain.models import DashboardSnapshot
from meter_dash.services.engine import DashboardEngine

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSnapshot)
async def dashboard(engine: DashboardEngine = Depends(get_engine)):
    return engine.snapshot()
