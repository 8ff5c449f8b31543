from fastapi import APIRouter
from app.api.endpoints import auth, config, dashboard, days

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(days.router, prefix="/days", tags=["days"])
api_router.include_router(config.router, prefix="/config", tags=["config"])
