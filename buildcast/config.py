"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and BUILDCAST_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildcastConfig(BaseSettings):
    """buildcast settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDCAST_LOG_LEVEL=DEBUG
        export BUILDCAST_EVENT_LOG_PATH=/var/log/buildcast/events.jsonl

    Or via .env file::

        BUILDCAST_ENVIRONMENT=production
        BUILDCAST_CONSOLE_LISTENER=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDCAST_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "WARNING"
    debug: bool = False

    # Listeners attached by the CLI
    event_log_path: Path | None = None  # JSON-lines listener target
    console_listener: bool = True

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` when debug is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level.upper()


# Module-level singleton — import as `from buildcast.config import config`
config = BuildcastConfig()
