from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class CsvBrowserError(Exception):
    """Base exception for all csv_browser errors"""
    pass


class ConfigError(CsvBrowserError):
    """Invalid or inconsistent global.json"""
    pass


@dataclass(frozen=True)
class ParseIssue:
    """
    One problem found while tokenising delimited text.

    - row: 1-based line number in the input (None when unknown)
    - column: 1-based field position (None when the whole row is at fault)
    - reason: human readable description
    """
    row: Optional[int]
    column: Optional[int]
    reason: str

    def describe(self) -> str:
        where = []
        if self.row is not None:
            where.append(f"row {self.row}")
        if self.column is not None:
            where.append(f"column {self.column}")
        prefix = ", ".join(where)
        return f"{prefix}: {self.reason}" if prefix else self.reason


class ParseError(CsvBrowserError):
    """Malformed delimited text. Carries every issue the tokeniser reported."""

    def __init__(self, issues: List[ParseIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(i.describe() for i in self.issues))


class LoadError(CsvBrowserError):
    """Input bytes unavailable, corrupt or not decodable as text"""
    pass


class PreferenceError(CsvBrowserError):
    """Stored preference snapshot is corrupt or has an unknown schema"""
    pass
