from fastapi import Request

from meter_dash.services.engine import DashboardEngine


def get_engine(request: Request) -> DashboardEngine:
    return request.app.state.engine  # type: ignore[return-value]
