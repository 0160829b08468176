from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from csv_browser.core.parser import Record
from csv_browser.core.store import TabularStore
from csv_browser.core.view_state import SortKey, ViewState
from csv_browser.validation.errors import ValidationError, ValidationIssue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRow:
    """A row on a page, tagged with its position in the store."""
    index: int
    record: Record


@dataclass(frozen=True)
class Page:
    rows: List[PageRow] = field(default_factory=list)
    total_matching: int = 0
    total_rows: int = 0
    page_index: int = 0
    page_size: int = 25
    page_count: int = 0

    @property
    def start(self) -> int:
        """1-based position of the first row shown (0 when empty)."""
        if not self.rows:
            return 0
        return self.page_index * self.page_size + 1

    @property
    def end(self) -> int:
        if not self.rows:
            return 0
        return self.start + len(self.rows) - 1

    @property
    def is_filtered(self) -> bool:
        return self.total_matching != self.total_rows

    def info_text(self) -> str:
        if self.total_matching == 0:
            text = "Showing 0 to 0 of 0 entries"
        else:
            text = f"Showing {self.start:,} to {self.end:,} of {self.total_matching:,} entries"
        if self.is_filtered:
            text += f" (filtered from {self.total_rows:,} total entries)"
        return text


def page_count_for(n_rows: int, page_size: int) -> int:
    return math.ceil(n_rows / page_size) if n_rows > 0 else 0


def clamp_page_index(page_index: int, n_rows: int, page_size: int) -> int:
    last = max(page_count_for(n_rows, page_size) - 1, 0)
    return max(0, min(page_index, last))


def project(record: Record, columns: Optional[Sequence[int]]) -> Record:
    """Cells of ``record`` restricted to ``columns`` (all when None)."""
    if columns is None:
        return record
    return tuple(record[i] for i in columns)


class ViewEngine:
    """
    Derives the filtered, sorted, paginated projection of a store.

    Every call recomputes filter -> sort -> paginate from scratch.
    Column visibility is never consulted here: it only affects which
    cells a caller renders or exports.
    """

    def filtered_indices(self, store: TabularStore, state: ViewState) -> List[int]:
        """Store indices of every matching row, in display order (no pagination)."""
        self.validate(store, state)
        matches = self._filter(store, state.query)
        return self._sort(store, matches, state.sort_key)

    def compute_page(self, store: TabularStore, state: ViewState) -> Page:
        ordered = self.filtered_indices(store, state)
        n = len(ordered)
        page_index = clamp_page_index(state.page_index, n, state.page_size)

        start = page_index * state.page_size
        rows = [PageRow(index=i, record=store[i]) for i in ordered[start:start + state.page_size]]

        return Page(
            rows=rows,
            total_matching=n,
            total_rows=store.row_count,
            page_index=page_index,
            page_size=state.page_size,
            page_count=page_count_for(n, state.page_size),
        )

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------
    @staticmethod
    def validate(store: TabularStore, state: ViewState) -> None:
        issues: list[ValidationIssue] = []
        if state.page_size <= 0:
            issues.append(ValidationIssue("VIEW_PAGE_SIZE", f"Page size must be positive, got {state.page_size}."))
        if state.sort_key is not None and not 0 <= state.sort_key.column < store.column_count:
            issues.append(
                ValidationIssue(
                    "VIEW_SORT_COLUMN",
                    f"Sort column {state.sort_key.column} does not exist "
                    f"(table has {store.column_count} columns).",
                )
            )
        if issues:
            raise ValidationError(issues)

    @staticmethod
    def _filter(store: TabularStore, query: str) -> List[int]:
        needle = (query or "").lower()
        if not needle.strip():
            return list(range(store.row_count))
        return [
            i for i in range(store.row_count)
            if any(needle in text for text in store.search_text(i))
        ]

    @staticmethod
    def _sort(store: TabularStore, indices: List[int], sort_key: Optional[SortKey]) -> List[int]:
        if sort_key is None:
            return indices
        col = sort_key.column
        # sorted() stays stable with reverse=True, so duplicates keep input order
        return sorted(
            indices,
            key=lambda i: store[i][col].sort_key(),
            reverse=sort_key.descending,
        )
