from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import dash_bootstrap_components as dbc
from dash import html

from csv_browser.core.exceptions import CsvBrowserError, LoadError, ParseError
from csv_browser.core.store import TabularStore
from csv_browser.core.view_engine import Page, project
from csv_browser.core.view_state import SortKey, ViewState
from csv_browser.ui.ids import column_id, column_index
from csv_browser.validation.errors import ValidationError

TABLE_FONT = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'


# -------------------------------------------------------------------------
# DataTable <-> view state
# -------------------------------------------------------------------------

def sort_key_from_sort_by(sort_by: Optional[List[Dict[str, Any]]], n_columns: int) -> Optional[SortKey]:
    """Translate DataTable ``sort_by`` (single sort mode) into a SortKey."""
    if not sort_by:
        return None
    first = sort_by[0]
    try:
        index = column_index(first.get("column_id", ""))
    except ValueError:
        return None
    if not 0 <= index < n_columns:
        return None
    return SortKey(column=index, descending=first.get("direction") == "desc")


def sort_by_from_sort_key(sort_key: Optional[SortKey]) -> List[Dict[str, str]]:
    if sort_key is None:
        return []
    return [{"column_id": column_id(sort_key.column), "direction": "desc" if sort_key.descending else "asc"}]


def visible_indices_from_values(values: Optional[Sequence[Any]], n_columns: int) -> List[int]:
    indices = set()
    for value in values or []:
        try:
            index = int(value)
        except (TypeError, ValueError):
            continue
        if 0 <= index < n_columns:
            indices.add(index)
    return sorted(indices)


def view_state_from_controls(
    n_columns: int,
    page_size: Optional[int],
    visible_values: Optional[Sequence[Any]],
    sort_by: Optional[List[Dict[str, Any]]],
    default_page_size: int,
) -> ViewState:
    """Rebuild the persisted part of the view state straight from the control values."""
    visible = set(visible_indices_from_values(visible_values, n_columns))
    return ViewState(
        page_size=page_size if isinstance(page_size, int) and page_size > 0 else default_page_size,
        column_visibility=[i in visible for i in range(n_columns)],
        sort_key=sort_key_from_sort_by(sort_by, n_columns),
    )


# -------------------------------------------------------------------------
# Rendering
# -------------------------------------------------------------------------

def column_options(store: TabularStore) -> List[Dict[str, Any]]:
    return [
        {"label": name or f"(column {i + 1})", "value": i}
        for i, name in enumerate(store.header)
    ]


def table_columns(store: TabularStore, visible: Sequence[int]) -> List[Dict[str, str]]:
    return [{"name": store.header[i], "id": column_id(i)} for i in visible]


def table_rows(page: Page, visible: Sequence[int]) -> List[Dict[str, Any]]:
    """
    DataTable records for one page. Every row keeps its store position
    under the reserved ``_row`` key.
    """
    data: List[Dict[str, Any]] = []
    for row in page.rows:
        cells = project(row.record, visible)
        item: Dict[str, Any] = {column_id(i): cell.display() for i, cell in zip(visible, cells)}
        item["_row"] = row.index
        data.append(item)
    return data


def error_message(error: Exception) -> Tuple[str, str]:
    """Human-readable (message, alert colour) for an error shown to the user."""
    if isinstance(error, ParseError):
        details = "; ".join(issue.describe() for issue in error.issues[:5])
        return f"Error parsing CSV file: {details}", "danger"
    if isinstance(error, LoadError):
        return f"Error loading CSV file: {error}", "danger"
    if isinstance(error, ValidationError):
        return error.user_message, "warning"
    if isinstance(error, CsvBrowserError):
        return str(error), "danger"
    return "Unexpected error while loading the CSV file.", "danger"


def status_alert(message: str, color: str = "info") -> Any:
    if not message:
        return None
    return dbc.Alert(
        [html.I(className="fas fa-info-circle me-2"), message],
        color=color,
        className="mt-3 mb-0",
        dismissable=False,
    )
