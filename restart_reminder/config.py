"""Application configuration settings."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

JAMF_HELPER_PATH = Path(
    "/Library/Application Support/JAMF/bin/jamfHelper.app/Contents/MacOS/jamfHelper"
)
LOGO_PATH = Path("/Library/Application Support/JAMF/JamfCustomApps/logo.png")
FALLBACK_LOGO_PATH = Path(
    "/System/Library/CoreServices/CoreTypes.bundle/Contents/Resources/AlertNoteIcon.icns"
)


class Settings(BaseSettings):
    """Central application configuration, fixed for the lifetime of a run."""

    model_config = SettingsConfigDict(env_prefix="RESTART_REMINDER_", frozen=True)

    debug: bool = Field(False, description="Simulate restarts and echo trace lines to stderr")

    max_days: int = Field(7, ge=0, description="Uptime threshold in whole days")
    defer_limit: int = Field(3, ge=0, description="Number of deferrals before a forced restart")
    timeout_seconds: int = Field(180, ge=1, description="Timeout for the restart prompt")
    countdown_interval_seconds: int = Field(10, ge=1, description="Redraw interval of the forced countdown")
    save_grace_seconds: int = Field(180, ge=1, description="Grace window to save work before restarting")
    notice_timeout_seconds: int = Field(60, ge=1, description="Timeout for confirmation and error notices")
    presenter_grace_seconds: int = Field(30, ge=0, description="Extra time allowed for the presenter to exit")

    log_file: Path = Field(default=Path("/tmp/uptime_checker.log"), description="Append-only log file")
    defer_file: Path = Field(default=Path("/tmp/uptime_defer_count.txt"), description="Persisted defer counter")
    presenter_path: Path = Field(default=JAMF_HELPER_PATH, description="Dialog presenter executable")
    icon_path: Path = Field(default=LOGO_PATH, description="Icon shown in every dialog")
    fallback_icon_path: Path = Field(default=FALLBACK_LOGO_PATH, description="Icon used when icon_path is missing")

    restart_command: List[str] = Field(
        default_factory=lambda: ["/sbin/shutdown", "-r", "now"],
        description="Privileged command that restarts the host",
    )
    required_platform: str = Field("Darwin", description="Value of platform.system() this tool supports")

    @field_validator("log_file", "defer_file", "presenter_path", "icon_path", "fallback_icon_path", mode="before")
    @classmethod
    def _ensure_path(cls, value: Path | str) -> Path:
        return Path(value)

    @field_validator("restart_command")
    @classmethod
    def _ensure_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("restart_command must not be empty")
        return value

    @model_validator(mode="after")
    def _check_countdown(self) -> "Settings":
        if self.countdown_interval_seconds > self.timeout_seconds:
            raise ValueError("countdown_interval_seconds cannot exceed timeout_seconds")
        return self

    def with_overrides(self, **changes: object) -> "Settings":
        """Return a copy of the settings with ``changes`` applied."""

        return self.model_copy(update=changes)


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
