from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-request access lines from the dev server drown out table events
NOISY_LOGGERS = ("werkzeug",)


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv("CSV_BROWSER_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
        level: Union[int, str, None] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the browser.

    Format selection:
        1) force_format argument ("json" or "plain") if provided
        2) env var CSV_BROWSER_LOG_FORMAT
        3) default = "json"

    Level selection:
        1) level argument (int or name)
        2) env var CSV_BROWSER_LOG_LEVEL
        3) default = INFO

    Structured fields passed through ``extra=`` (source, n_records, error, ...)
    become JSON keys in json mode and are dropped in plain mode.
    """
    format_mode = (force_format or os.getenv("CSV_BROWSER_LOG_FORMAT", "json")).lower()
    if format_mode not in ("json", "plain"):
        raise ValueError(f"Unknown log format: {format_mode!r} (expected 'json' or 'plain')")

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    if format_mode == "plain":
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    if os.getenv("DEBUG", "0") != "1":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
