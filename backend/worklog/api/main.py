from fastapi import APIRouter

from worklog.api.routes import health, masters, scenarios, tasks

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(masters.router)
api_router.include_router(tasks.router)
api_router.include_router(scenarios.router)
