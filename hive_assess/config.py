"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "hive-assess"
    debug: bool = False
    log_level: str = "INFO"

    # Repository → engine hand-off
    history_limit: int = 10

    # Fallback analysis
    fallback_score: int = 70
    default_inspection_interval_days: int = 14

    # Alert dispatch
    dispatch_alerts: bool = True

    model_config = {"env_prefix": "HIVE_"}


settings = Settings()
