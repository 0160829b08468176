from __future__ import annotations

import json

import pytest

from csv_browser.config.io import load_global_config
from csv_browser.core.exceptions import ConfigError


def _write_config(root, data):
    root.mkdir(parents=True, exist_ok=True)
    (root / "global.json").write_text(json.dumps(data))
    return root


def test_load_global_config_defaults(tmp_path):
    cfg = load_global_config(_write_config(tmp_path / "config", {}))

    assert cfg.ui_title == "CSV Search Browser"
    assert cfg.page_size == 25
    assert cfg.page_size_options == [10, 25, 50, 100, 250]
    assert cfg.max_upload_bytes == 50 * 1024 * 1024
    assert cfg.export_filename == "filtered_data.csv"
    assert cfg.default_csv_file is None
    assert cfg.parse.delimiter == ","


def test_relative_default_file_resolves_against_config_root(tmp_path):
    root = _write_config(tmp_path / "config", {"default_csv_file": "../data/default.csv"})

    cfg = load_global_config(root)

    assert cfg.default_csv_file == (tmp_path / "data" / "default.csv").resolve()


def test_parse_options_and_page_size(tmp_path):
    root = _write_config(
        tmp_path / "config",
        {"page_size": 30, "page_size_options": [50, 10], "parse": {"delimiter": ";", "infer_types": False}},
    )

    cfg = load_global_config(root)

    assert cfg.page_size_options == [10, 30, 50]
    assert cfg.parse.delimiter == ";"
    assert cfg.parse.infer_types is False


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


@pytest.mark.parametrize(
    "data",
    [
        {"page_size": 0},
        {"page_size": "25"},
        {"page_size_options": []},
        {"max_upload_bytes": -1},
        {"parse": "comma"},
        {"parse": {"chunk_size": "many"}},
        {"parse": {"chunk_size": 0}},
        {"parse": {"has_header": "false"}},
        {"parse": {"infer_types": 0}},
        {"parse": {"delimiter": 59}},
    ],
)
def test_bad_values_raise_config_error(tmp_path, data):
    with pytest.raises(ConfigError):
        load_global_config(_write_config(tmp_path / "config", data))


def test_invalid_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{nope")

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)
