from __future__ import annotations

from typing import Dict, Iterator, Optional, Sequence, Tuple

from csv_browser.core.parser import Header, ParsedTable, Record


class TabularStore:
    """
    Immutable holder for one loaded table.

    - header: column names, positional (names may repeat)
    - records: parsed rows, each as wide as the header

    The store trusts the parser's width guarantee and never re-validates
    it. There is no mutation API; loading new data means building a new
    store.
    """

    def __init__(self, header: Sequence[str], records: Sequence[Record]) -> None:
        self._header: Header = tuple(header)
        self._records: Tuple[Record, ...] = tuple(records)

        # Lowercased display strings per row, filled lazily by search_text()
        self._search_cache: Dict[int, Tuple[str, ...]] = {}

    @classmethod
    def from_parsed(cls, parsed: ParsedTable) -> TabularStore:
        return cls(parsed.header, parsed.records)

    @classmethod
    def empty(cls) -> TabularStore:
        return cls((), ())

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------
    @property
    def header(self) -> Header:
        return self._header

    @property
    def row_count(self) -> int:
        return len(self._records)

    @property
    def column_count(self) -> int:
        return len(self._header)

    @property
    def is_empty(self) -> bool:
        return not self._records

    def row(self, index: int) -> Record:
        if index < 0 or index >= len(self._records):
            raise IndexError(f"Row {index} out of range (0..{len(self._records) - 1})")
        return self._records[index]

    def __getitem__(self, index: int) -> Record:
        return self.row(index)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def records(self) -> Tuple[Record, ...]:
        return self._records

    def search_text(self, index: int) -> Tuple[str, ...]:
        cached: Optional[Tuple[str, ...]] = self._search_cache.get(index)
        if cached is None:
            cached = tuple(cell.display().lower() for cell in self.row(index))
            self._search_cache[index] = cached
        return cached

    def __repr__(self) -> str:
        return f"TabularStore(columns={self.column_count}, rows={self.row_count})"
