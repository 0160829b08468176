from __future__ import annotations

from csv_browser.core.parser import ParsedTable
from csv_browser.validation.errors import ValidationError


def validate_table(parsed: ParsedTable) -> None:
    """
    Reject tables that parsed cleanly but have nothing to show.
    The caller keeps its current table and may ask for another file.
    """
    # A header-only file and an empty file read the same to the user
    if not parsed.header or not parsed.records:
        raise ValidationError.single("TABLE_EMPTY", "No data found in the CSV file.")
