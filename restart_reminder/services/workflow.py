"""Restart reminder workflow: prompt, defer, count down and restart."""
from __future__ import annotations

import logging
import time
from typing import Callable, List

from restart_reminder import exceptions
from restart_reminder.common.logging import json_log
from restart_reminder.config import Settings, get_settings
from restart_reminder.models.status import (
    RestartOutcome,
    RestartStatus,
    RunOutcome,
    WorkflowResult,
    WorkflowState,
)
from restart_reminder.services import dialogs
from restart_reminder.services.defer_store import DeferStore
from restart_reminder.services.notifier import Notifier
from restart_reminder.services.restart import RestartExecutor

logger = logging.getLogger(__name__)

RESTART_ERROR_MESSAGE = "Unable to restart. Please try again or contact IT."

_RESTART_OUTCOMES = {
    RestartStatus.RESTARTED: RunOutcome.RESTARTED,
    RestartStatus.SIMULATED: RunOutcome.SIMULATED,
    RestartStatus.FAILED: RunOutcome.RESTART_FAILED,
}


class RestartWorkflow:
    """Decide whether to prompt for a restart and drive the user through it.

    A run is short and synchronous: every dialog blocks until the user answers
    or its timeout fires, and the forced countdown is a bounded sequence of
    such dialogs. The defer count is read fresh on every run.
    """

    def __init__(
        self,
        notifier: Notifier,
        store: DeferStore,
        executor: RestartExecutor,
        settings: Settings | None = None,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._notifier = notifier
        self._store = store
        self._executor = executor
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep
        self._states: List[WorkflowState] = []

    def _enter(self, state: WorkflowState) -> None:
        self._states.append(state)
        logger.debug("Workflow state -> %s", state.value)

    def run(self, uptime_days: int) -> WorkflowResult:
        settings = self._settings
        self._states = []
        self._enter(WorkflowState.IDLE)
        self._enter(WorkflowState.EVALUATE)

        if uptime_days <= settings.max_days:
            self._enter(WorkflowState.NO_ACTION_NEEDED)
            logger.info(
                "System uptime is %d days, no restart needed (threshold: %d days).",
                uptime_days,
                settings.max_days,
            )
            return self._finish(RunOutcome.NO_ACTION, uptime_days)

        logger.info("System uptime is %d days, exceeds %d-day threshold.", uptime_days, settings.max_days)
        defer_count = self._store.get()
        logger.debug(
            "Defer count: %d, Remaining defers: %d", defer_count, settings.defer_limit - defer_count
        )

        if defer_count >= settings.defer_limit:
            logger.debug("Forcing restart with countdown (defer limit reached)")
            ticks: List[int] = []
            pressed = self._force_countdown(uptime_days, defer_count, ticks)
            if pressed:
                logger.info("User chose to restart now.")
            else:
                logger.info("Prompt timed out after %d minutes.", settings.timeout_seconds // 60)
            restart = self._save_and_restart(forced=not pressed)
            return self._finish(
                _RESTART_OUTCOMES[restart.status],
                uptime_days,
                defer_count=defer_count,
                countdown_ticks=ticks,
                restart=restart,
            )

        return self._offer_choice(uptime_days, defer_count)

    def _offer_choice(self, uptime_days: int, defer_count: int) -> WorkflowResult:
        settings = self._settings
        self._enter(WorkflowState.OFFER_CHOICE)
        remaining = settings.defer_limit - defer_count
        choice = self._notifier.show(dialogs.offer_choice(settings, uptime_days, remaining))

        if choice.button == dialogs.RESTART_NOW_BUTTON:
            logger.info("User chose to restart now.")
            restart = self._save_and_restart(forced=False)
            return self._finish(
                _RESTART_OUTCOMES[restart.status], uptime_days, defer_count=defer_count, restart=restart
            )

        if choice.button == dialogs.DEFER_BUTTON:
            used = defer_count + 1
            logger.info("User chose to defer restart (defer %d of %d).", used, settings.defer_limit)
            try:
                self._store.increment()
            except exceptions.PersistWriteFailure as exc:
                json_log(logger, logging.WARNING, "defer.increment_failed", error=exc.to_payload())
            self._notifier.show(dialogs.deferral_confirmation(settings, settings.defer_limit - used))
            return self._finish(
                RunOutcome.DEFERRED, uptime_days, defer_count=defer_count, defer_count_after=used
            )

        logger.info("Prompt timed out or was cancelled after %d minutes.", settings.timeout_seconds // 60)
        return self._finish(RunOutcome.DISMISSED, uptime_days, defer_count=defer_count)

    def _force_countdown(self, uptime_days: int, defer_count: int, ticks: List[int]) -> bool:
        """Redraw the countdown dialog until the button is pressed or time runs out.

        Returns True when the user pressed "Restart Now".
        """

        settings = self._settings
        self._enter(WorkflowState.FORCE_COUNTDOWN)
        total = settings.timeout_seconds
        interval = settings.countdown_interval_seconds
        logger.debug("Starting countdown prompt for %d seconds", total)

        start = self._clock()
        elapsed = 0
        while elapsed < total:
            remaining = total - elapsed
            tick = min(interval, remaining)
            ticks.append(remaining)
            request = dialogs.countdown(settings, uptime_days, defer_count, remaining, tick)

            started = self._clock()
            choice = self._notifier.show(request)
            if choice.button == dialogs.RESTART_NOW_BUTTON:
                logger.debug("User chose Restart Now during countdown")
                return True

            spent = self._clock() - started
            if spent < tick:
                self._sleep(tick - spent)
            # Dialogs can overrun their tick; elapsed tracks the clock and never decreases.
            elapsed = max(elapsed + tick, int(self._clock() - start))
            logger.debug("Countdown update - %d seconds remaining", total - elapsed)

        logger.debug("Countdown completed, timed out after %d seconds", total)
        return False

    def _save_and_restart(self, *, forced: bool) -> RestartOutcome:
        settings = self._settings
        self._enter(WorkflowState.SAVE_PROMPT)
        logger.debug("Displaying %d-second save prompt", settings.save_grace_seconds)
        self._notifier.show(dialogs.save_prompt(settings))

        self._enter(WorkflowState.RESTARTING)
        if forced:
            logger.info("Forcing restart after timeout and save prompt (defer limit reached).")
        else:
            logger.info("Initiating restart after save prompt.")
        outcome = self._executor.restart()
        if not outcome.succeeded:
            self._notifier.show(dialogs.error(settings, RESTART_ERROR_MESSAGE))
        return outcome

    def _finish(
        self,
        outcome: RunOutcome,
        uptime_days: int,
        *,
        defer_count: int | None = None,
        defer_count_after: int | None = None,
        countdown_ticks: List[int] | None = None,
        restart: RestartOutcome | None = None,
    ) -> WorkflowResult:
        self._enter(WorkflowState.DONE)
        if defer_count_after is None and defer_count is not None:
            defer_count_after = 0 if restart is not None and restart.succeeded else defer_count
        result = WorkflowResult(
            outcome=outcome,
            uptime_days=uptime_days,
            defer_count=defer_count,
            defer_count_after=defer_count_after,
            states=list(self._states),
            countdown_ticks=countdown_ticks or [],
            restart=restart,
        )
        json_log(
            logger,
            logging.INFO,
            "workflow.complete",
            outcome=outcome.value,
            uptime_days=uptime_days,
            defer_count=defer_count,
            defer_count_after=defer_count_after,
            states=[state.value for state in result.states],
        )
        return result


__all__ = ["RESTART_ERROR_MESSAGE", "RestartWorkflow"]
