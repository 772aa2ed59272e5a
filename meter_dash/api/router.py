from fastapi import APIRouter

from .endpoints import dashboard, health, periods

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(dashboard.router)
api_router.include_router(periods.router)
