from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from csv_browser.config.model import DEFAULT_PAGE_SIZE_OPTIONS, GlobalConfig
from csv_browser.core.exceptions import ConfigError
from csv_browser.core.parser import ParseConfig

logger = logging.getLogger(__name__)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    Relative ``default_csv_file`` paths are resolved relative to ``root``.

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if a value has the wrong type or range.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open(encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{global_path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    return config_from_dict(raw, root)


def config_from_dict(raw: Dict[str, Any], root: Path) -> GlobalConfig:
    page_size = _positive_int(raw, "page_size", 25)
    options = raw.get("page_size_options", DEFAULT_PAGE_SIZE_OPTIONS)
    if not isinstance(options, list) or not all(_is_positive_int(o) for o in options) or not options:
        raise ConfigError("page_size_options must be a non-empty list of positive integers")
    options = sorted(set(options))
    if page_size not in options:
        options = sorted(set(options) | {page_size})

    parse_raw = raw.get("parse", {})
    if not isinstance(parse_raw, dict):
        raise ConfigError("parse must be an object")
    try:
        parse = ParseConfig.from_dict(parse_raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid parse options: {e}") from e
    if parse.chunk_size <= 0:
        raise ConfigError(f"parse.chunk_size must be a positive integer, got {parse.chunk_size!r}")

    return GlobalConfig(
        ui_title=str(raw.get("ui_title", "CSV Search Browser")),
        subtitle=str(raw.get("subtitle", "Search, sort and export tabular data")),
        default_csv_file=_resolve_path(raw.get("default_csv_file"), root),
        page_size=page_size,
        page_size_options=options,
        max_upload_bytes=_positive_int(raw, "max_upload_bytes", 50 * 1024 * 1024),
        export_filename=str(raw.get("export_filename", "filtered_data.csv")),
        preferences_key=str(raw.get("preferences_key", "csv_browser.preferences")),
        parse=parse,
    )


def _resolve_path(value: Any, root: Path) -> Optional[Path]:
    # Absolute paths are used as-is; relative ones are resolved against the config root.
    if value in (None, ""):
        return None
    path = Path(str(value))
    if path.is_absolute():
        return path
    return (root / path).resolve()


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _positive_int(raw: Dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    if not _is_positive_int(value):
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value
