import json
import logging

from restart_reminder.common.logging import configure_logging, get_run_id, json_log, scoped_run_id


def test_entries_are_appended_as_timestamped_json(tmp_path, capsys):
    log_file = tmp_path / "uptime_checker.log"
    log_file.write_text('{"message": "earlier run"}\n')
    configure_logging(log_file)
    logger = logging.getLogger("restart_reminder.test")

    with scoped_run_id("run-1"):
        json_log(logger, logging.INFO, "workflow.complete", outcome="deferred")

    lines = log_file.read_text().splitlines()
    assert json.loads(lines[0])["message"] == "earlier run"
    entry = json.loads(lines[-1])
    assert entry["message"] == "workflow.complete"
    assert entry["outcome"] == "deferred"
    assert entry["run_id"] == "run-1"
    assert entry["timestamp"]
    assert "workflow.complete" in capsys.readouterr().out


def test_run_id_is_scoped():
    assert get_run_id() is None
    with scoped_run_id("abc"):
        assert get_run_id() == "abc"
    assert get_run_id() is None


def test_unwritable_log_file_falls_back_to_console(tmp_path, capsys):
    configure_logging(tmp_path / "missing" / "uptime_checker.log")
    logging.getLogger("restart_reminder.test").info("still logged")

    captured = capsys.readouterr()
    assert captured.err.count("logging to console only") == 1
    assert captured.err.count("still logged") == 1
    assert captured.out == ""


def test_debug_lines_stay_out_of_log_file(tmp_path, capsys):
    log_file = tmp_path / "uptime_checker.log"
    configure_logging(log_file, debug=True)
    logging.getLogger("restart_reminder.test").debug("verbose trace")

    assert "verbose trace" not in log_file.read_text()
    assert "DEBUG: verbose trace" in capsys.readouterr().err
