"""
Shared API dependencies.

Reusable FastAPI dependencies for engine access.
"""

from fastapi import Request

from app.services.wake_service import WakeService


def get_wake_service(request: Request) -> WakeService:
    """Return the process-wide service created at application startup."""
    return request.app.state.wake_service
