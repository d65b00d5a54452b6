import json
import logging
import sys
from pathlib import Path

from composite_state.utils import JsonFormatter, configure_logging, get_logger


def test_configure_logging_uses_env_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    configure_logging()
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_tees_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    configure_logging("INFO", log_file=str(log_file))
    get_logger("composite_state.test").info("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello file" in log_file.read_text()


def test_json_formatter_output() -> None:
    record = logging.LogRecord("composite_state", logging.INFO, __file__, 1, "value=%d", (3,), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["name"] == "composite_state"
    assert payload["message"] == "value=3"


def test_configure_logging_custom_stream(capsys) -> None:
    configure_logging("INFO", stream=sys.stderr)
    get_logger("composite_state.test").info("to stderr")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert "to stderr" not in captured.out
