"""Host uptime queries."""
from __future__ import annotations

import logging
import math
import time
from typing import Callable

import psutil

from restart_reminder import exceptions

SECONDS_PER_DAY = 86400

logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    # psutil errors do not always format cleanly with str()
    if exc.args:
        return " ".join(str(arg) for arg in exc.args)
    return type(exc).__name__


class UptimeReader:
    """Compute whole days elapsed since the host last booted."""

    def __init__(
        self,
        boot_time: Callable[[], float] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._boot_time = boot_time or psutil.boot_time
        self._clock = clock or time.time

    def _query_boot_time(self) -> float:
        try:
            value = self._boot_time()
        except (psutil.Error, OSError, RuntimeError) as exc:
            raise exceptions.uptime_unavailable(hint=_describe(exc)) from exc

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise exceptions.uptime_unavailable(hint=f"Boot time is not numeric: {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise exceptions.uptime_unavailable(hint=f"Boot time is out of range: {value!r}")
        return float(value)

    def read_days(self) -> int:
        """Return uptime in whole days, raising ``UptimeUnavailable`` on failure."""

        boot = self._query_boot_time()
        elapsed = self._clock() - boot
        days = max(0, int(elapsed // SECONDS_PER_DAY))
        logger.debug("Uptime calculated as %d days (boot time %.0f)", days, boot)
        return days


__all__ = ["SECONDS_PER_DAY", "UptimeReader"]
