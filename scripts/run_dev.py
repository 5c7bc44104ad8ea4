"""
Development server launcher.

Loads the .env file, then serves the API with uvicorn in reload mode.  The
scheduler thread starts with the application (unless SCHEDULER_ENABLED is
false), so alarms ring in this process and show up in the log.

Usage:
    python scripts/run_dev.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env before the settings module is imported
from dotenv import load_dotenv

load_dotenv()

import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    print("=" * 60)
    print(f"{settings.PROJECT_NAME} (v{settings.VERSION})")
    print("=" * 60)
    print(f"Database:  {settings.DATABASE_URL}")
    print(f"Scheduler: {'on' if settings.SCHEDULER_ENABLED else 'off'}, tick {settings.TICK_SECONDS}s")
    print(f"Snooze re-arm: {'on' if settings.SNOOZE_REARM_ENABLED else 'off'}")
    print()
    print("API:  http://localhost:8000/api/v1")
    print("Docs: http://localhost:8000/docs")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level=settings.LOG_LEVEL.lower())
