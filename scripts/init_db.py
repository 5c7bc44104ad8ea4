"""
Database initialization script.

Creates the ``kv_entries`` table and reports what is already stored under
the ``alarms`` and ``stats`` keys.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.db.init_db import init_db
from app.db.repositories.kv_store import SQLKeyValueStore
from app.db.repositories.state import StateRepository
from app.db.session import engine

if __name__ == "__main__":
    print("=" * 50)
    print("WakeWise Database Initialization")
    print(f"Database: {settings.DATABASE_URL}")
    print("=" * 50)

    try:
        init_db(engine)
    except Exception as e:
        print(f"ERROR: Database initialization failed: {e}")
        sys.exit(1)

    repository = StateRepository(SQLKeyValueStore(engine))
    alarms = repository.load_alarms()
    stats = repository.load_stats()
    print(f"Alarms stored:   {len(alarms)}")
    print(f"Wake-ups stored: {len(stats.wake_up_history)} (streak {stats.streak}, {stats.total_points} points)")
    print("=" * 50)
