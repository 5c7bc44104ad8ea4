"""Business logic services."""

from app.services.wake_service import WakeService

__all__ = [
    "WakeService",
]
