"""Tests for CLI logging setup and the JSON line formatter."""

from __future__ import annotations

import json
import logging

import pytest

from inventory_tracker.config import LoggingConfig
from inventory_tracker.utils.logging import JsonLineFormatter, configure_logging


@pytest.fixture
def configure():
    """``configure_logging`` that removes its handlers again after the test."""
    root = logging.getLogger()
    saved_level = root.level
    installed: list[logging.Handler] = []

    def _configure(config: LoggingConfig) -> logging.Logger:
        configure_logging(config)
        installed[:] = root.handlers
        return root

    yield _configure
    for handler in installed:
        handler.close()
        root.removeHandler(handler)
    root.setLevel(saved_level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "inventory_tracker.ledger", logging.INFO, __file__, 1, "Added item %d", (4,), None
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields_and_extras():
    payload = json.loads(JsonLineFormatter().format(_record(item_id=4)))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "inventory_tracker.ledger"
    assert payload["msg"] == "Added item 4"
    assert payload["item_id"] == 4
    assert payload["ts"].endswith("Z")
    assert "args" not in payload


def test_configure_logging_writes_log_file(tmp_path, configure):
    log_file = tmp_path / "logs" / "tracker.log"
    root = configure(LoggingConfig(level="debug", log_file=str(log_file), json_format=True))

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    logging.getLogger("inventory_tracker.test").info("restocked", extra={"item_id": 9})
    for handler in root.handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["item_id"] == 9


def test_blank_log_file_means_stdout_only(configure):
    root = configure(LoggingConfig(level="WARNING", log_file=""))
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
