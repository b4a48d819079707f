"""Persistence of the restart deferral counter."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from restart_reminder import exceptions

logger = logging.getLogger(__name__)


class DeferStore(Protocol):
    """Small state store holding the number of deferrals used so far."""

    def get(self) -> int:
        ...

    def increment(self) -> int:
        ...

    def reset(self) -> None:
        ...


class FileDeferStore:
    """Keep the defer count as an ASCII decimal in a local file.

    Reads are tolerant: a missing, empty or corrupt record counts as zero.
    Writes raise ``PersistWriteFailure`` so callers can decide to carry on
    with the in-memory value.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> int:
        try:
            raw = self._path.read_text(encoding="ascii").strip()
        except FileNotFoundError:
            return 0
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Unreadable defer record at %s treated as 0: %s", self._path, exc)
            return 0

        if not raw.isdigit():
            if raw:
                logger.warning("Corrupt defer record %r at %s treated as 0", raw, self._path)
            return 0
        try:
            count = int(raw)
        except ValueError:
            logger.warning("Oversized defer record at %s treated as 0", self._path)
            return 0
        logger.debug("Defer count retrieved: %d", count)
        return count

    def increment(self) -> int:
        count = self.get() + 1
        try:
            self._path.write_text(f"{count}\n", encoding="ascii")
        except OSError as exc:
            raise exceptions.persist_write_failed(self._path, hint=str(exc)) from exc
        logger.debug("Defer count incremented to %d", count)
        return count

    def reset(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise exceptions.persist_write_failed(self._path, hint=str(exc)) from exc
        logger.debug("Defer count reset")


class InMemoryDeferStore:
    """Defer store kept in process memory."""

    def __init__(self, count: int = 0) -> None:
        self._count = max(0, count)

    def get(self) -> int:
        return self._count

    def increment(self) -> int:
        self._count += 1
        return self._count

    def reset(self) -> None:
        self._count = 0


__all__ = ["DeferStore", "FileDeferStore", "InMemoryDeferStore"]
