"""
Stats endpoints — raw wake-up stats and dashboard summary.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_wake_service
from app.schemas.stats import StatsSummary, UserStats
from app.services.wake_service import WakeService

router = APIRouter()


@router.get("", summary="Get streak, points, badges and wake-up history.", response_model=UserStats, )
def get_stats(service: WakeService = Depends(get_wake_service)):
    return service.get_stats()


@router.get("/summary", summary="Get dashboard metrics (level, best/average time, success rate).",
            response_model=StatsSummary, )
def get_summary(service: WakeService = Depends(get_wake_service)):
    return service.get_summary()
