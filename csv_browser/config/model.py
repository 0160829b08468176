from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from csv_browser.core.parser import ParseConfig

DEFAULT_PAGE_SIZE_OPTIONS = [10, 25, 50, 100, 250]


@dataclass
class GlobalConfig:
    """
    Application-wide settings loaded from global.json.

    - default_csv_file: dataset shown at start-up (None disables it)
    - page_size / page_size_options: initial rows per page and the length menu
    - max_upload_bytes: uploads above this size are rejected before parsing
    - export_filename: name offered for the filtered download
    - preferences_key: key of the preference snapshot in browser storage
    - parse: dialect and inference options shared by loading and export
    """
    ui_title: str = "CSV Search Browser"
    subtitle: str = "Search, sort and export tabular data"
    default_csv_file: Optional[Path] = None
    page_size: int = 25
    page_size_options: List[int] = field(default_factory=lambda: list(DEFAULT_PAGE_SIZE_OPTIONS))
    max_upload_bytes: int = 50 * 1024 * 1024
    export_filename: str = "filtered_data.csv"
    preferences_key: str = "csv_browser.preferences"
    parse: ParseConfig = field(default_factory=ParseConfig)
