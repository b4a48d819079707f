import logging
from pathlib import Path

from conftest import FakeRunner
from restart_reminder import exceptions
from restart_reminder.models.status import RestartStatus
from restart_reminder.services.defer_store import InMemoryDeferStore
from restart_reminder.services.restart import RestartExecutor


class BrokenResetStore(InMemoryDeferStore):
    def reset(self) -> None:
        raise exceptions.persist_write_failed(Path("/tmp/uptime_defer_count.txt"), hint="read-only")


def test_debug_restart_is_simulated(debug_settings, fake_runner, caplog):
    store = InMemoryDeferStore(3)
    executor = RestartExecutor(store, debug_settings, runner=fake_runner)

    with caplog.at_level(logging.INFO):
        outcome = executor.restart()

    assert outcome.status is RestartStatus.SIMULATED
    assert outcome.succeeded
    assert fake_runner.calls == []
    assert store.get() == 0
    assert "Restart simulated" in caplog.text


def test_successful_restart_resets_counter(settings, fake_runner):
    store = InMemoryDeferStore(3)
    executor = RestartExecutor(store, settings, runner=fake_runner)

    outcome = executor.restart()

    assert outcome.status is RestartStatus.RESTARTED
    assert fake_runner.calls[0][0] == ["/sbin/shutdown", "-r", "now"]
    assert store.get() == 0


def test_refused_restart_keeps_counter(settings):
    runner = FakeRunner(returncode=1, stderr="shutdown: NOT super-user\n")
    store = InMemoryDeferStore(3)
    executor = RestartExecutor(store, settings, runner=runner)

    outcome = executor.restart()

    assert outcome.status is RestartStatus.FAILED
    assert not outcome.succeeded
    assert "NOT super-user" in outcome.detail
    assert store.get() == 3
    assert len(runner.calls) == 1


def test_missing_restart_binary_is_a_failure(settings):
    runner = FakeRunner(error=FileNotFoundError("/sbin/shutdown"))
    store = InMemoryDeferStore(1)

    outcome = RestartExecutor(store, settings, runner=runner).restart()

    assert outcome.status is RestartStatus.FAILED
    assert store.get() == 1


def test_reset_failure_does_not_change_outcome(settings, fake_runner, caplog):
    executor = RestartExecutor(BrokenResetStore(3), settings, runner=fake_runner)

    with caplog.at_level(logging.WARNING):
        outcome = executor.restart()

    assert outcome.status is RestartStatus.RESTARTED
    assert "defer.reset_failed" in caplog.text
