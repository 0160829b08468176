from __future__ import annotations

from csv_browser.core.exceptions import LoadError, ParseError, ParseIssue
from csv_browser.core.session import BrowserSession
from csv_browser.core.view_state import SortKey
from csv_browser.ui.helpers import (
    column_options,
    error_message,
    sort_by_from_sort_key,
    sort_key_from_sort_by,
    status_alert,
    table_columns,
    table_rows,
    view_state_from_controls,
    visible_indices_from_values,
)
from csv_browser.ui.ids import column_id, column_index
from csv_browser.validation.errors import ValidationError, ValidationIssue

CSV = "name,qty,note\nWidget,3,\nGadget,10,spare\n"


def _session() -> BrowserSession:
    session = BrowserSession()
    session.load_text(CSV)
    return session


def test_column_ids_round_trip():
    assert column_id(4) == "c4"
    assert column_index("c4") == 4


def test_sort_by_translation():
    assert sort_key_from_sort_by([{"column_id": "c1", "direction": "desc"}], 3) == SortKey(1, True)
    assert sort_key_from_sort_by([{"column_id": "c9", "direction": "asc"}], 3) is None
    assert sort_key_from_sort_by([{"column_id": "bogus"}], 3) is None
    assert sort_key_from_sort_by([], 3) is None
    assert sort_by_from_sort_key(SortKey(2)) == [{"column_id": "c2", "direction": "asc"}]
    assert sort_by_from_sort_key(None) == []


def test_visible_indices_ignore_junk():
    assert visible_indices_from_values([2, "0", None, 7, 2], 3) == [0, 2]


def test_view_state_from_controls():
    state = view_state_from_controls(3, None, [1], [{"column_id": "c0", "direction": "asc"}], 25)

    assert state.page_size == 25
    assert state.column_visibility == [False, True, False]
    assert state.sort_key == SortKey(0)


def test_table_rows_use_display_forms():
    session = _session()
    page = session.current_page()
    visible = session.visible_columns()

    rows = table_rows(page, visible)

    assert rows[0] == {"c0": "Widget", "c1": "3", "c2": "", "_row": 0}
    assert [c["name"] for c in table_columns(session.store, visible)] == ["name", "qty", "note"]


def test_column_options_label_unnamed_columns():
    session = BrowserSession()
    session.load_text("a,,c\n1,2,3\n")

    labels = [o["label"] for o in column_options(session.store)]

    assert labels == ["a", "(column 2)", "c"]


def test_error_messages():
    parse_msg, parse_color = error_message(ParseError([ParseIssue(row=3, column=None, reason="Expected 2 fields, saw 3")]))
    load_msg, _ = error_message(LoadError("bad bytes"))
    val_msg, val_color = error_message(ValidationError([ValidationIssue("TABLE_EMPTY", "No data found in the CSV file.")]))

    assert parse_msg.startswith("Error parsing CSV file:")
    assert parse_color == "danger"
    assert load_msg == "Error loading CSV file: bad bytes"
    assert val_msg == "No data found in the CSV file."
    assert val_color == "warning"


def test_status_alert_empty_message():
    assert status_alert("") is None
    assert status_alert("Loaded 2 records from the CSV file.") is not None
