from __future__ import annotations

__all__ = ["IDs", "column_id", "column_index"]


class IDs:
    class Store:
        DATA_VERSION = "data-version"
        PREFERENCES = "view-preferences"

    class Control:
        # Loading
        UPLOAD = "csv-upload"
        STATUS_ALERT = "status-alert"

        # Table controls
        SEARCH_INPUT = "search-input"
        PAGE_SIZE_SELECT = "page-size-select"
        COLUMN_CHECKLIST = "column-checklist"

        # Table
        TABLE = "csv-data-table"
        TABLE_INFO = "table-info"

        # Export
        EXPORT_BTN = "export-btn"
        DOWNLOAD = "export-download"


def column_id(index: int) -> str:
    """DataTable column id for a header position (names may repeat, so ids are positional)."""
    return f"c{index}"


def column_index(col_id: str) -> int:
    if not col_id or not col_id.startswith("c"):
        raise ValueError(f"Not a column id: {col_id!r}")
    return int(col_id[1:])
