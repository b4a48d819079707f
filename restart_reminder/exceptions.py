"""Domain-specific exceptions and error payload helpers."""
from __future__ import annotations

from pathlib import Path
from typing import Dict


def build_error_payload(error_code: str, message: str, hint: str | None = None) -> Dict[str, str]:
    """Return a standardized error payload."""

    payload: Dict[str, str] = {"error_code": error_code, "message": message}
    if hint:
        payload["hint"] = hint
    return payload


class ReminderError(RuntimeError):
    """Base error with standardized payload."""

    exit_code: int = 1

    def __init__(self, *, error_code: str, message: str, hint: str | None = None) -> None:
        self.error_code = error_code
        self.message = message
        self.hint = hint
        super().__init__(message)

    def to_payload(self) -> Dict[str, str]:
        """Return the serialized payload for the error."""

        return build_error_payload(self.error_code, self.message, self.hint)


class PreconditionFailure(ReminderError):
    """The host cannot run the reminder at all."""


class UptimeUnavailable(ReminderError):
    """The boot time of the host could not be determined."""


class PersistWriteFailure(ReminderError):
    """A best-effort write to local state failed."""

    exit_code = 0


class RestartFailure(ReminderError):
    """The restart command was refused or could not be launched."""

    exit_code = 0


def unsupported_platform(system: str, required: str) -> PreconditionFailure:
    return PreconditionFailure(
        error_code="UNSUPPORTED_PLATFORM",
        message=f"This tool is intended for {required} only (running on {system or 'unknown'}).",
    )


def presenter_unavailable(path: Path, hint: str | None = None) -> PreconditionFailure:
    return PreconditionFailure(
        error_code="PRESENTER_UNAVAILABLE",
        message=f"jamfHelper not found or not executable at {path}.",
        hint=hint,
    )


def state_path_unwritable(path: Path, hint: str | None = None) -> PreconditionFailure:
    return PreconditionFailure(
        error_code="STATE_PATH_UNWRITABLE",
        message=f"Cannot write to {path}. Ensure directory is writable or run with sufficient privileges.",
        hint=hint,
    )


def uptime_unavailable(hint: str | None = None) -> UptimeUnavailable:
    return UptimeUnavailable(
        error_code="UPTIME_UNAVAILABLE",
        message="Failed to retrieve system boot time.",
        hint=hint,
    )


def persist_write_failed(path: Path, hint: str | None = None) -> PersistWriteFailure:
    return PersistWriteFailure(
        error_code="PERSIST_WRITE_FAILED",
        message=f"Failed to update {path}.",
        hint=hint,
    )


def restart_failed(hint: str | None = None) -> RestartFailure:
    return RestartFailure(
        error_code="RESTART_FAILED",
        message="Restart failed or requires higher privileges.",
        hint=hint,
    )


__all__ = [
    "ReminderError",
    "PreconditionFailure",
    "UptimeUnavailable",
    "PersistWriteFailure",
    "RestartFailure",
    "unsupported_platform",
    "presenter_unavailable",
    "state_path_unwritable",
    "uptime_unavailable",
    "persist_write_failed",
    "restart_failed",
    "build_error_payload",
]
