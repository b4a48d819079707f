"""Command-line entrypoint for the restart reminder."""
from __future__ import annotations

import argparse
import logging
import sys
import uuid
from typing import Sequence

from restart_reminder import exceptions
from restart_reminder.common.logging import configure_logging, json_log, scoped_run_id
from restart_reminder.config import Settings, get_settings
from restart_reminder.services import dialogs
from restart_reminder.services.defer_store import FileDeferStore
from restart_reminder.services.notifier import JamfHelperNotifier, Notifier
from restart_reminder.services.preflight import run_preflight
from restart_reminder.services.restart import RestartExecutor
from restart_reminder.services.uptime import UptimeReader
from restart_reminder.services.workflow import RestartWorkflow

UPTIME_ERROR_MESSAGE = "Unable to check system uptime. Please contact IT."

logger = logging.getLogger("restart_reminder")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restart-reminder",
        description="Prompt the user to restart once the Mac has been up for too long.",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="simulate the restart and echo trace lines to stderr",
    )
    return parser


def _log_error(event: str, error: exceptions.ReminderError) -> None:
    json_log(logger, logging.ERROR, event, error=error.to_payload())


def execute(
    settings: Settings,
    *,
    notifier: Notifier | None = None,
    uptime: UptimeReader | None = None,
) -> int:
    """Run preflight, read uptime and drive the workflow. Returns the exit code."""

    try:
        settings = run_preflight(settings)
    except exceptions.PreconditionFailure as exc:
        _log_error("preflight.failed", exc)
        return exc.exit_code

    notifier = notifier or JamfHelperNotifier(settings)
    uptime = uptime or UptimeReader()

    logger.debug("Calculating uptime")
    try:
        uptime_days = uptime.read_days()
    except exceptions.UptimeUnavailable as exc:
        _log_error("uptime.failed", exc)
        notifier.show(dialogs.error(settings, UPTIME_ERROR_MESSAGE))
        return exc.exit_code

    store = FileDeferStore(settings.defer_file)
    workflow = RestartWorkflow(
        notifier=notifier,
        store=store,
        executor=RestartExecutor(store, settings),
        settings=settings,
    )
    workflow.run(uptime_days)
    logger.debug("Script completed")
    return 0


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.debug:
        settings = settings.with_overrides(debug=True)

    configure_logging(settings.log_file, debug=settings.debug)
    with scoped_run_id(uuid.uuid4().hex):
        try:
            return execute(settings)
        except exceptions.PreconditionFailure as exc:
            _log_error("presenter.failed", exc)
            return exc.exit_code


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
