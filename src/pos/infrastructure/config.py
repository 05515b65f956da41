"""Terminal configuration.

Read from environment variables prefixed ``POS_`` and, when present, a
``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from pos.application.display_sync import DEFAULT_CHANNEL_NAME


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POS_",
        env_file=".env",
        extra="ignore",
    )

    # Backend
    api_url: str = "http://localhost:8080"
    http_timeout: float = 10.0

    # Session (normally written by the login screen)
    token: str | None = None
    username: str = "User"
    role: str = "cashier"

    # Scanner and checkout timing
    scan_gap_ms: int = 50
    print_delay: float = 0.5

    # Customer display
    channel_name: str = DEFAULT_CHANNEL_NAME

    # Receipt
    store_name: str = "Nine mini mart"
    store_address: str = ""
    store_phone: str = ""
    receipt_dir: Path | None = None

    log_level: str = "INFO"

    @property
    def scan_gap_seconds(self) -> float:
        return self.scan_gap_ms / 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()
