"""Dialog presentation through jamfHelper."""
from __future__ import annotations

import logging
import subprocess
from typing import Callable, List, Protocol

from restart_reminder import exceptions
from restart_reminder.config import Settings, get_settings
from restart_reminder.models.dialog import DialogChoice, DialogRequest

logger = logging.getLogger(__name__)

# jamfHelper prints 0 for button 1 and 2 for button 2. Everything else,
# including 239 for a cancelled window, means no button was chosen.
_BUTTON_CODES = {"0": 1, "2": 2}


class Notifier(Protocol):
    """Anything that can show a dialog and report the user's choice."""

    def show(self, request: DialogRequest) -> DialogChoice:
        ...


def build_command(presenter: str, request: DialogRequest) -> List[str]:
    """Return the presenter argument vector for ``request``."""

    command = [presenter, "-windowType", request.window_type.value, "-title", request.title]
    if request.heading:
        command += ["-heading", request.heading]
    command += ["-description", request.description]
    for index, label in enumerate(request.buttons, start=1):
        command += [f"-button{index}", label]
    if request.default_button is not None:
        command += ["-defaultButton", str(request.default_button)]
    if request.cancel_button is not None:
        command += ["-cancelButton", str(request.cancel_button)]
    command += ["-icon", str(request.icon), "-timeout", str(request.timeout_seconds)]
    return command


def parse_choice(output: str | None) -> DialogChoice:
    """Translate presenter output into a dialog choice."""

    button = _BUTTON_CODES.get((output or "").strip())
    if button is None:
        return DialogChoice.timed_out()
    return DialogChoice.pressed(button)


class JamfHelperNotifier:
    """Show blocking dialogs by running the jamfHelper executable."""

    def __init__(
        self,
        settings: Settings | None = None,
        runner: Callable[..., subprocess.CompletedProcess] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._runner = runner or subprocess.run

    def show(self, request: DialogRequest) -> DialogChoice:
        presenter = self._settings.presenter_path
        command = build_command(str(presenter), request)
        limit = request.timeout_seconds + self._settings.presenter_grace_seconds
        logger.debug("Showing dialog %r (timeout %ss)", request.title, request.timeout_seconds)

        try:
            completed = self._runner(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=limit,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Dialog %r did not close within %ss", request.title, limit)
            return DialogChoice.timed_out()
        except OSError as exc:
            raise exceptions.presenter_unavailable(presenter, hint=str(exc)) from exc

        choice = parse_choice(completed.stdout)
        logger.debug(
            "Dialog %r returned %r (exit %s)",
            request.title,
            "timeout" if choice.is_timeout else choice.button,
            completed.returncode,
        )
        return choice


__all__ = ["Notifier", "JamfHelperNotifier", "build_command", "parse_choice"]
