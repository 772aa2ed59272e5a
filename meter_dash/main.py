from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from meter_dash.api.router import api_router
from meter_dash.core.config import settings
from meter_dash.core.logger import configure_logging, get_logger
from meter_dash.infrastructure.metering.client import MeteringClient
from meter_dash.services.engine import DashboardEngine

# Configure logging once and get service logger
configure_logging()
logger = get_logger("dashboard.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "dashboard_service_starting",
        extra={"metering_base_url": settings.metering_base_url},
    )
    app.state.client = MeteringClient()
    app.state.engine = DashboardEngine(app.state.client)
    app.state.engine.start()
    try:
        yield
    finally:
        logger.info("dashboard_service_stopping")
        await app.state.engine.stop()
        await app.state.client.close()


app = FastAPI(title="Live Metering Dashboard", version="0.1.0", lifespan=lifespan)
app.include_router(api_router)


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def run():
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
