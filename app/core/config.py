"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "WakeWise adaptive alarm engine."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["WakeWise developers"]
    AUTHORS_EMAILS: List[str] = []
    PROJECT_URL: str = ""

    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # Database (key-value persistence for the ``alarms`` and ``stats`` keys)
    DATABASE_URL: str = "sqlite:///./wakewise.db"

    # Scheduler
    SCHEDULER_ENABLED: bool = True
    TICK_SECONDS: float = 1.0

    # Trigger lifecycle
    HISTORY_WINDOW: int = 5
    DEFAULT_SNOOZE_MINUTES: int = 5
    FALLBACK_REWARD_POINTS: int = 10
    SNOOZE_REARM_ENABLED: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
