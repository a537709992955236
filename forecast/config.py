"""Housing Forecast — Central Configuration via Pydantic Settings."""

import os
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Service Hub (remote housing API) ──
    service_hub_base_url: str = "http://localhost:5000"
    user_api_base_url: Optional[str] = None
    room_api_base_url: Optional[str] = None
    batch_api_base_url: Optional[str] = None
    fetch_timeout_seconds: float = 30.0

    # ── Database ──
    database_url: str = ""

    # ── Poller ──
    poller_enabled: bool = True
    poll_interval_seconds: float = 300.0
    delete_on_fetch_failure: bool = False  # True = treat a failed fetch as "remote is empty"

    # ── App ──
    log_level: str = "INFO"
    scheduler_enabled: bool = True
    snapshot_hour: int = 1  # Daily snapshot at 1 AM UTC

    @property
    def effective_database_url(self) -> str:
        """Return PostgreSQL URL if set, otherwise fall back to SQLite."""
        if self.database_url:
            return self.database_url
        # Vercel has a read-only filesystem; use /tmp for SQLite
        if os.environ.get("VERCEL"):
            return "sqlite:////tmp/forecast.db"
        return "sqlite:///./forecast.db"

    def api_base_for(self, model: str) -> str:
        """Base URL serving ``/api/{model}``, honouring per-model overrides."""
        override = {
            "users": self.user_api_base_url,
            "rooms": self.room_api_base_url,
            "batches": self.batch_api_base_url,
        }.get(model)
        return (override or self.service_hub_base_url).rstrip("/")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
