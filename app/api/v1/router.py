"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import alarms, stats, trigger

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    alarms.router, prefix="/alarms", tags=["Alarms"]
)
api_router.include_router(
    trigger.router, prefix="/trigger", tags=["Active trigger"]
)
api_router.include_router(
    stats.router, prefix="/stats", tags=["Stats"]
)
