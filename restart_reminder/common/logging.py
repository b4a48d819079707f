"""Structured logging helpers."""
from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

_LOG_FORMAT = "%(message)s"
_DEBUG_FORMAT = "DEBUG: %(message)s"
_RUN_ID: ContextVar[str | None] = ContextVar("run_id", default=None)

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    """Return an ISO-8601 timestamp with millisecond precision."""

    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")


def set_run_id(run_id: str | None) -> Token[str | None]:
    """Bind the run identifier into the logging context."""

    return _RUN_ID.set(run_id)


def reset_run_id(token: Token[str | None]) -> None:
    """Reset the run identifier context to a previous token."""

    _RUN_ID.reset(token)


def get_run_id() -> str | None:
    """Return the current run identifier, if any."""

    return _RUN_ID.get()


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "timestamp": getattr(record, "timestamp", _timestamp()),
        }
        run_id = getattr(record, "run_id", None) or get_run_id()
        if run_id:
            payload["run_id"] = run_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_json_"):
                payload[key[6:]] = value
        return json.dumps(payload, ensure_ascii=False, default=str)


def _open_log_file(path: Path) -> logging.Handler | None:
    try:
        return logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError:
        return None


def configure_logging(log_file: Path, *, debug: bool = False) -> None:
    """Configure application-wide JSON logging.

    Entries are appended to ``log_file`` and mirrored to stdout. When the log
    file cannot be opened the entries go to stderr only and a single warning
    is emitted. Debug mode adds a ``DEBUG:`` trace stream on stderr.
    """

    formatter = JsonLogFormatter(_LOG_FORMAT)

    file_handler = _open_log_file(log_file)
    fallback = file_handler is None
    if file_handler is None:
        file_handler = logging.StreamHandler(stream=sys.stderr)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    handlers = [file_handler]
    if not fallback:
        console = logging.StreamHandler(stream=sys.stdout)
        console.setLevel(logging.INFO)
        console.setFormatter(formatter)
        handlers.append(console)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in handlers:
        root.addHandler(handler)

    if debug:
        trace = logging.StreamHandler(stream=sys.stderr)
        trace.setLevel(logging.DEBUG)
        trace.setFormatter(logging.Formatter(_DEBUG_FORMAT))
        root.addHandler(trace)

    if fallback:
        logger.warning("Failed to write to %s, logging to console only", log_file)


def json_log(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Emit a structured JSON log entry with optional payload fields."""

    extras = {f"_json_{key}": value for key, value in fields.items()}
    extras.setdefault("timestamp", _timestamp())
    run_id = get_run_id()
    if run_id:
        extras.setdefault("run_id", run_id)
    logger.log(level, message, extra=extras)


@contextmanager
def scoped_run_id(run_id: str | None) -> Iterator[None]:
    """Context manager that temporarily binds a run identifier."""

    token = set_run_id(run_id)
    try:
        yield
    finally:
        reset_run_id(token)


__all__ = [
    "JsonLogFormatter",
    "configure_logging",
    "get_run_id",
    "json_log",
    "reset_run_id",
    "scoped_run_id",
    "set_run_id",
]
