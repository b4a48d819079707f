import logging
import platform
import sys
from pathlib import Path
from typing import Callable, Iterable, List

import pytest

# Ensure the application package is importable when tests run from the repository root.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from restart_reminder import config
from restart_reminder.models.dialog import DialogChoice, DialogRequest


class ScriptedNotifier:
    """Notifier double that replays scripted choices and records every request."""

    def __init__(self, choices: Iterable[DialogChoice] = ()) -> None:
        self._choices = list(choices)
        self.requests: List[DialogRequest] = []

    def show(self, request: DialogRequest) -> DialogChoice:
        self.requests.append(request)
        if self._choices:
            return self._choices.pop(0)
        return DialogChoice.timed_out()

    @property
    def titles(self) -> List[str]:
        return [request.title for request in self.requests]


class FakeRunner:
    """Stand-in for ``subprocess.run`` returning a fixed result."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "", error: Exception | None = None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.error = error
        self.calls: List[tuple] = []

    def __call__(self, command, **kwargs):
        import subprocess

        self.calls.append((command, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(command, self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch, tmp_path):
    presenter = tmp_path / "jamfHelper"
    presenter.write_text("#!/bin/sh\necho 0\n")
    presenter.chmod(0o755)
    icon = tmp_path / "logo.png"
    icon.write_bytes(b"\x89PNG")

    monkeypatch.setenv("RESTART_REMINDER_DEBUG", "false")
    monkeypatch.setenv("RESTART_REMINDER_LOG_FILE", str(tmp_path / "uptime_checker.log"))
    monkeypatch.setenv("RESTART_REMINDER_DEFER_FILE", str(tmp_path / "uptime_defer_count.txt"))
    monkeypatch.setenv("RESTART_REMINDER_PRESENTER_PATH", str(presenter))
    monkeypatch.setenv("RESTART_REMINDER_ICON_PATH", str(icon))
    monkeypatch.setenv("RESTART_REMINDER_FALLBACK_ICON_PATH", str(tmp_path / "AlertNoteIcon.icns"))
    monkeypatch.setenv("RESTART_REMINDER_REQUIRED_PLATFORM", platform.system())

    config.get_settings.cache_clear()

    settings = config.get_settings()

    yield settings

    config.get_settings.cache_clear()


@pytest.fixture
def settings(_reset_settings):
    return _reset_settings


@pytest.fixture
def debug_settings(settings):
    return settings.with_overrides(debug=True)


@pytest.fixture
def make_notifier() -> Callable[..., ScriptedNotifier]:
    def _make(*choices: DialogChoice) -> ScriptedNotifier:
        return ScriptedNotifier(choices)

    return _make


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
