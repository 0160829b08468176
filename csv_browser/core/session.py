from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Sequence

from csv_browser.core.exceptions import LoadError
from csv_browser.core.parser import Header, ParseConfig, Record, parse_text
from csv_browser.core.preferences import PreferenceSnapshot
from csv_browser.core.serializer import serialize
from csv_browser.core.store import TabularStore
from csv_browser.core.view_engine import Page, ViewEngine
from csv_browser.core.view_state import DEFAULT_PAGE_SIZE, SortKey, ViewState
from csv_browser.validation.errors import ValidationError, ValidationIssue
from csv_browser.validation.table_validation import validate_table

if TYPE_CHECKING:
    from csv_browser.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Owns the single active table and its view configuration.

    - store: the loaded TabularStore (empty until the first load succeeds)
    - state: the ViewState applied to it

    Loading is atomic: the new store and a fresh state are swapped in
    together only after decoding, parsing and validation all succeed.
    """

    def __init__(
        self,
        parse_config: Optional[ParseConfig] = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        preferences: Optional[PreferenceService] = None,
        engine: Optional[ViewEngine] = None,
    ) -> None:
        if default_page_size <= 0:
            raise ValueError("default_page_size must be positive")
        self.parse_config = parse_config or ParseConfig()
        self.default_page_size = default_page_size
        self.preferences = preferences
        self.engine = engine or ViewEngine()

        self.store: TabularStore = TabularStore.empty()
        self.state: ViewState = ViewState.for_columns(0, default_page_size)
        self.source: Optional[str] = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    def load_bytes(
        self,
        data: bytes,
        *,
        source: str = "upload",
    ) -> TabularStore:
        if data is None:
            raise LoadError(f"No data received from {source}.")
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.warning("Undecodable input", extra={"source": source, "error": str(e)})
            raise LoadError(f"'{source}' is not valid UTF-8 text.") from e
        return self.load_text(text, source=source)

    def load_text(
        self,
        text: str,
        *,
        source: str = "text",
    ) -> TabularStore:
        parsed = parse_text(text, self.parse_config)
        validate_table(parsed)

        store = TabularStore.from_parsed(parsed)
        state = ViewState.for_columns(store.column_count, self.default_page_size)
        if self.preferences is not None:
            state = self.preferences.restore(state, store.column_count)

        # Swap only after everything above succeeded
        self.store, self.state, self.source = store, state, source

        logger.info(
            "Table loaded",
            extra={"source": source, "n_records": store.row_count, "n_columns": store.column_count},
        )
        return store

    @property
    def has_data(self) -> bool:
        return not self.store.is_empty

    def load_message(self) -> str:
        return f"Loaded {self.store.row_count:,} records from the CSV file."

    # -------------------------------------------------------------------------
    # View state mutation
    # -------------------------------------------------------------------------
    def set_query(self, query: Optional[str]) -> None:
        query = query or ""
        if query != self.state.query:
            self.state = replace(self.state, query=query, page_index=0)

    def set_sort(self, column: int, descending: bool = False) -> None:
        self._check_column(column, "VIEW_SORT_COLUMN")
        self.state = replace(self.state, sort_key=SortKey(column, descending), page_index=0)

    def clear_sort(self) -> None:
        self.state = replace(self.state, sort_key=None, page_index=0)

    def toggle_sort(self, column: int) -> SortKey:
        """Ascending on a new column, then flip direction on repeated clicks."""
        current = self.state.sort_key
        descending = current is not None and current.column == column and not current.descending
        self.set_sort(column, descending)
        return self.state.sort_key

    def set_page(self, page_index: int) -> None:
        self.state = replace(self.state, page_index=int(page_index))

    def next_page(self) -> None:
        self.set_page(self.current_page().page_index + 1)

    def prev_page(self) -> None:
        self.set_page(max(self.current_page().page_index - 1, 0))

    def set_page_size(self, page_size: int) -> None:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValidationError(
                [ValidationIssue("VIEW_PAGE_SIZE", f"Page size must be a positive integer, got {page_size!r}.")]
            )
        if page_size != self.state.page_size:
            self.state = replace(self.state, page_size=page_size, page_index=0)

    def set_column_visible(self, column: int, visible: bool) -> None:
        self._check_column(column, "VIEW_COLUMN")
        visibility = list(self.state.column_visibility)
        visibility[column] = bool(visible)
        self.state = replace(self.state, column_visibility=visibility)

    def set_visible_columns(self, columns: Sequence[int]) -> None:
        wanted = set()
        for column in columns:
            self._check_column(column, "VIEW_COLUMN")
            wanted.add(column)
        visibility = [i in wanted for i in range(self.store.column_count)]
        self.state = replace(self.state, column_visibility=visibility)

    def _check_column(self, column: int, code: str) -> None:
        if isinstance(column, bool) or not isinstance(column, int) or not 0 <= column < self.store.column_count:
            raise ValidationError(
                [ValidationIssue(code, f"Column {column!r} does not exist (table has {self.store.column_count} columns).")]
            )

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------
    def current_page(self) -> Page:
        page = self.engine.compute_page(self.store, self.state)
        if page.page_index != self.state.page_index:
            self.state = replace(self.state, page_index=page.page_index)
        return page

    def visible_columns(self) -> List[int]:
        return self.state.visible_columns()

    def visible_header(self) -> Header:
        return tuple(self.store.header[i] for i in self.visible_columns())

    def filtered_records(self) -> List[Record]:
        """Every matching record in display order, ignoring pagination."""
        return [self.store[i] for i in self.engine.filtered_indices(self.store, self.state)]

    def export_text(self) -> str:
        if not self.has_data:
            raise ValidationError.single("EXPORT_EMPTY", "There is no table loaded to export.")
        return serialize(
            self.store.header,
            self.filtered_records(),
            columns=self.visible_columns(),
            delimiter=self.parse_config.delimiter,
            quote_char=self.parse_config.quote_char,
        )

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------
    def snapshot(self) -> PreferenceSnapshot:
        return PreferenceSnapshot.from_view_state(self.state)

    def apply_snapshot(self, snapshot: Optional[PreferenceSnapshot]) -> None:
        if snapshot is None:
            return
        self.state = snapshot.apply_to(self.state, self.store.column_count)

    def save_preferences(self) -> None:
        if self.preferences is not None:
            self.preferences.save(self.state)

    def restore_preferences(self) -> None:
        if self.preferences is not None:
            self.apply_snapshot(self.preferences.load())
