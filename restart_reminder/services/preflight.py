"""Startup checks run before any uptime logic."""
from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import Callable

from restart_reminder import exceptions
from restart_reminder.config import Settings

logger = logging.getLogger(__name__)


def ensure_state_writable(path: Path) -> None:
    logger.debug("Checking defer file permissions")
    try:
        path.touch(exist_ok=True)
    except OSError as exc:
        raise exceptions.state_path_unwritable(path, hint=str(exc)) from exc
    if not os.access(path, os.W_OK):
        raise exceptions.state_path_unwritable(path)


def ensure_platform(required: str, system: Callable[[], str] = platform.system) -> None:
    logger.debug("Verifying OS")
    current = system()
    if current != required:
        raise exceptions.unsupported_platform(current, required)


def ensure_presenter(path: Path) -> None:
    logger.debug("Checking jamfHelper")
    if not path.is_file() or not os.access(path, os.X_OK):
        raise exceptions.presenter_unavailable(path)


def resolve_icon(settings: Settings) -> Path:
    """Return the icon to show, falling back when the custom logo is missing."""

    if settings.icon_path.is_file():
        return settings.icon_path
    logger.warning("Logo file not found at %s. Using default icon.", settings.icon_path)
    logger.debug("Falling back to %s", settings.fallback_icon_path)
    return settings.fallback_icon_path


def run_preflight(settings: Settings, system: Callable[[], str] = platform.system) -> Settings:
    """Check that this host can run the reminder.

    Returns the settings with the effective icon resolved. Raises
    ``PreconditionFailure`` on the first failed check.
    """

    ensure_state_writable(settings.defer_file)
    ensure_platform(settings.required_platform, system)
    ensure_presenter(settings.presenter_path)
    return settings.with_overrides(icon_path=resolve_icon(settings))


__all__ = ["ensure_platform", "ensure_presenter", "ensure_state_writable", "resolve_icon", "run_preflight"]
