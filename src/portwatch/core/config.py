"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Detection
    freshness_window_seconds: float = Field(default=5.0, ge=0.0, le=300.0)
    process_cache_ttl_seconds: float = Field(default=30.0, ge=0.0, le=3600.0)
    process_cache_max_size: int = Field(default=1000, ge=1, le=100_000)
    type_presets_file: Path | None = Field(default=None)

    # Dashboard
    refresh_interval_seconds: float = Field(default=2.0, ge=0.5, le=60.0)
    kill_grace_period_ms: int = Field(default=200, ge=0, le=10_000)
    confirm_kill: bool = Field(default=False)
    key_bindings: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Shortcut name to key names, e.g. {'kill': ['x', 'K']}",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "text"] = Field(default="text")
    log_file: Path | None = Field(default=None)

    def get_dashboard_log_file(self) -> Path:
        """Log file used while curses owns the terminal."""
        if self.log_file:
            return self.log_file
        return Path.home() / ".cache" / "portwatch" / "portwatch.log"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
