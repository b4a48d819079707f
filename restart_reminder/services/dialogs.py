"""Catalogue of the dialogs shown during a run."""
from __future__ import annotations

from restart_reminder.config import Settings
from restart_reminder.models.dialog import DialogRequest, WindowType

RESTART_TITLE = "Restart Reminder"
RESTART_HEADING = "Your Mac Needs Attention"
RESTART_NOW = "Restart Now"
DEFER = "Defer"

RESTART_NOW_BUTTON = 1
DEFER_BUTTON = 2


def format_remaining(seconds: int) -> str:
    """Format ``seconds`` as ``M:SS``."""

    minutes, seconds = divmod(max(0, seconds), 60)
    return f"{minutes}:{seconds:02d}"


def _minutes(seconds: int) -> int:
    return max(1, round(seconds / 60))


def offer_choice(settings: Settings, uptime_days: int, remaining_defers: int) -> DialogRequest:
    description = (
        f"Your Mac has been running for {uptime_days} days (over {settings.max_days} days). "
        "A restart is recommended to maintain performance. "
        f"You can defer {remaining_defers} more time(s) before a forced restart. "
        "Please save all work before restarting."
    )
    return DialogRequest(
        window_type=WindowType.HUD,
        title=RESTART_TITLE,
        heading=RESTART_HEADING,
        description=description,
        buttons=[RESTART_NOW, DEFER],
        default_button=DEFER_BUTTON,
        icon=settings.icon_path,
        timeout_seconds=settings.timeout_seconds,
    )


def countdown(
    settings: Settings,
    uptime_days: int,
    defer_count: int,
    remaining_seconds: int,
    tick_seconds: int,
) -> DialogRequest:
    description = (
        f"Your Mac has been running for {uptime_days} days (over {settings.max_days} days). "
        f"You have deferred the restart {defer_count} times. You must restart now. "
        "Please save all work before proceeding. "
        f"This prompt will time out in {format_remaining(remaining_seconds)} minutes."
    )
    return DialogRequest(
        window_type=WindowType.HUD,
        title=RESTART_TITLE,
        heading=RESTART_HEADING,
        description=description,
        buttons=[RESTART_NOW],
        default_button=RESTART_NOW_BUTTON,
        icon=settings.icon_path,
        timeout_seconds=tick_seconds,
    )


def deferral_confirmation(settings: Settings, remaining_defers: int) -> DialogRequest:
    description = (
        f"You have {max(0, remaining_defers)} deferral(s) remaining. "
        f"After {settings.defer_limit} deferrals, you will be required to restart."
    )
    return DialogRequest(
        window_type=WindowType.HUD,
        title="Restart Deferred",
        heading="Reminder",
        description=description,
        buttons=["OK"],
        icon=settings.icon_path,
        timeout_seconds=settings.notice_timeout_seconds,
    )


def save_prompt(settings: Settings) -> DialogRequest:
    minutes = _minutes(settings.save_grace_seconds)
    description = (
        f"Your Mac will restart in {minutes} minute(s). Please save all open documents now. "
        f"Click '{RESTART_NOW}' to proceed immediately or wait for the automatic restart."
    )
    return DialogRequest(
        window_type=WindowType.HUD,
        title="Restart Imminent",
        heading="Save Your Work",
        description=description,
        buttons=[RESTART_NOW],
        default_button=RESTART_NOW_BUTTON,
        icon=settings.icon_path,
        timeout_seconds=settings.save_grace_seconds,
    )


def error(settings: Settings, message: str) -> DialogRequest:
    return DialogRequest(
        window_type=WindowType.UTILITY,
        title="Error",
        description=message,
        buttons=["OK"],
        icon=settings.icon_path,
        timeout_seconds=settings.notice_timeout_seconds,
    )


__all__ = [
    "DEFER_BUTTON",
    "RESTART_NOW_BUTTON",
    "countdown",
    "deferral_confirmation",
    "error",
    "format_remaining",
    "offer_choice",
    "save_prompt",
]
