"""Host restart, real or simulated."""
from __future__ import annotations

import logging
import subprocess
from typing import Callable

from restart_reminder import exceptions
from restart_reminder.common.logging import json_log
from restart_reminder.config import Settings, get_settings
from restart_reminder.models.status import RestartOutcome, RestartStatus
from restart_reminder.services.defer_store import DeferStore

logger = logging.getLogger(__name__)


class RestartExecutor:
    """Restart the host and clear the defer counter once it has been done."""

    def __init__(
        self,
        store: DeferStore,
        settings: Settings | None = None,
        runner: Callable[..., subprocess.CompletedProcess] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._store = store
        self._runner = runner or subprocess.run

    def restart(self) -> RestartOutcome:
        if self._settings.debug:
            logger.info("Restart simulated (actual restart bypassed in debug mode).")
            self._reset_store()
            outcome = RestartOutcome(status=RestartStatus.SIMULATED)
        else:
            outcome = self._run_restart_command()

        json_log(logger, logging.INFO, "restart.outcome", status=outcome.status.value, detail=outcome.detail)
        return outcome

    def _run_restart_command(self) -> RestartOutcome:
        command = list(self._settings.restart_command)
        logger.debug("Running restart command %s", command)
        try:
            completed = self._runner(command, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except OSError as exc:
            return self._failed(exceptions.restart_failed(hint=str(exc)))

        if completed.returncode != 0:
            stderr = completed.stderr.strip() if isinstance(completed.stderr, str) else ""
            return self._failed(
                exceptions.restart_failed(hint=stderr or f"{command[0]} exited with status {completed.returncode}")
            )

        logger.info("Restart initiated successfully.")
        self._reset_store()
        return RestartOutcome(status=RestartStatus.RESTARTED)

    def _failed(self, error: exceptions.RestartFailure) -> RestartOutcome:
        json_log(logger, logging.ERROR, "restart.failed", error=error.to_payload())
        return RestartOutcome(status=RestartStatus.FAILED, detail=error.hint or error.message)

    def _reset_store(self) -> None:
        try:
            self._store.reset()
        except exceptions.PersistWriteFailure as exc:
            json_log(logger, logging.WARNING, "defer.reset_failed", error=exc.to_payload())


__all__ = ["RestartExecutor"]
