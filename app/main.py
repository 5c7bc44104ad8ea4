"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  The wake service
is created at startup (hydrated from the database) and its scheduler runs
for the lifetime of the application.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.api.v1.router import api_router
from app.core.config import settings
from app.services.wake_service import WakeService, build_wake_service


def create_app(service: Optional[WakeService] = None, scheduler_enabled: bool = settings.SCHEDULER_ENABLED) -> FastAPI:
    """Build the application.

    Args:
        service: Pre-built service (tests); built from settings if ``None``.
        scheduler_enabled: Start the periodic scheduler on startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        wake_service = service or build_wake_service()
        wake_service.load()
        if scheduler_enabled:
            wake_service.start()
        app.state.wake_service = wake_service
        try:
            yield
        finally:
            wake_service.stop()

    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Adaptive wake-up alarm engine.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan)

    # Include API router
    application.include_router(api_router, prefix="/api/v1")

    @application.get("/")
    async def root():
        """Root endpoint - health check."""
        return {
            "message": "WakeWise API",
            "version": settings.VERSION,
            "status": "healthy"
        }

    @application.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        wake_service: WakeService = application.state.wake_service
        return {
            "status": "healthy",
            "service": "wakewise-api",
            "version": settings.VERSION,
            "scheduler_running": wake_service.scheduler.running,
            "trigger_state": wake_service.controller.state.value,
        }

    @application.get("/info")
    async def info():
        return {
            "project name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "authors": settings.AUTHORS,
            "authors emails": settings.AUTHORS_EMAILS,
            "project url": settings.PROJECT_URL
        }

    return application


app = create_app()
