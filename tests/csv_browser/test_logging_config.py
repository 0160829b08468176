from __future__ import annotations

import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from csv_browser.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_is_default(monkeypatch):
    monkeypatch.delenv("CSV_BROWSER_LOG_FORMAT", raising=False)
    configure_logging()

    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, jsonlogger.JsonFormatter)


def test_json_output_carries_extra_fields(monkeypatch):
    monkeypatch.delenv("CSV_BROWSER_LOG_FORMAT", raising=False)
    configure_logging()
    (handler,) = logging.getLogger().handlers

    record = logging.LogRecord("csv_browser.test", logging.INFO, __file__, 1, "Table loaded", None, None)
    record.n_records = 12
    payload = json.loads(handler.formatter.format(record))

    assert payload["message"] == "Table loaded"
    assert payload["n_records"] == 12


def test_env_selects_plain_format_and_level(monkeypatch):
    monkeypatch.setenv("CSV_BROWSER_LOG_FORMAT", "plain")
    monkeypatch.setenv("CSV_BROWSER_LOG_LEVEL", "debug")
    configure_logging()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        configure_logging(force_format="xml")
