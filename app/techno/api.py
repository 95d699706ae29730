from fastapi import APIRouter

from app.techno.core.config import settings
from app.techno.routers.balances import router as balances_router
from app.techno.routers.health import router as health_router
from app.techno.routers.metrics import router as metrics_router
from app.techno.routers.stores import router as stores_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(stores_router, tags=["warehouse-stores"])
api_router.include_router(balances_router, tags=["warehouse-balances"])
if settings.METRICS_ENABLED:
    api_router.include_router(metrics_router, tags=["ops"])
