import json
import logging
import sys

import pytest
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from usageopt.utils import get_program_invocation, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_cli(root_logger):
    setup_logging(mode="cli")
    (handler,) = root_logger.handlers
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING


def test_setup_logging_mode_from_environment(root_logger, monkeypatch):
    monkeypatch.setenv("USAGEOPT_LOG_MODE", "json")
    setup_logging(console_log_level=logging.INFO)
    (handler,) = root_logger.handlers
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.level == logging.INFO


def test_setup_logging_json_file(root_logger, tmp_path):
    log_file = tmp_path / "usageopt.log"
    setup_logging(mode="json", log_filename=str(log_file), json_log_to_file=True)
    assert len(root_logger.handlers) == 2

    logging.getLogger("usageopt").warning("Unknown option: %s", "x")
    record = json.loads(log_file.read_text(encoding="UTF-8").splitlines()[-1])
    assert record["name"] == "usageopt"
    assert record["levelname"] == "WARNING"
    assert record["message"] == "Unknown option: x"


def test_setup_logging_invalid_mode(root_logger):
    with pytest.raises(ValueError, match="Invalid log mode"):
        setup_logging(mode="xml")


def test_get_program_invocation(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["/nonexistent/usageopt/__main__.py"])
    assert get_program_invocation() == "python -m usageopt"
    monkeypatch.setattr(sys, "argv", ["/nonexistent/calc.py"])
    assert get_program_invocation() == "/nonexistent/calc.py"
