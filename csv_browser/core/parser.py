from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from csv_browser.core.cells import Cell, infer_cell
from csv_browser.core.exceptions import ParseError, ParseIssue

logger = logging.getLogger(__name__)

Header = Tuple[str, ...]
Record = Tuple[Cell, ...]

_FIELD_COUNT_RE = re.compile(r"Expected (\d+) fields in line (\d+), saw (\d+)")
_EOF_IN_STRING_RE = re.compile(r"EOF inside string starting at row (\d+)")


@dataclass(frozen=True)
class ParseConfig:
    """
    Options for turning delimited text into a header and records.

    - has_header: first non-skipped line holds the column names
    - infer_types: infer integer/float/boolean per cell (else text only)
    - skip_blank_lines: drop empty lines instead of emitting all-null rows
    - delimiter / quote_char: dialect (RFC-4180 style double-quote escaping)
    - chunk_size: rows handed to the tokeniser per chunk
    """

    has_header: bool = True
    infer_types: bool = True
    skip_blank_lines: bool = True
    delimiter: str = ","
    quote_char: str = '"'
    chunk_size: int = 10_000

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ParseConfig:
        """
        Build from the ``parse`` block of global.json.

        :raises TypeError: if a value has the wrong JSON type ("false" is not a boolean).
        """
        data = data or {}
        defaults = cls()
        values: Dict[str, Any] = {}
        for name, expected in _FIELD_TYPES.items():
            value = data.get(name, getattr(defaults, name))
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise TypeError(f"{name} must be of type {expected.__name__}, got {value!r}")
            values[name] = value
        return cls(**values)


_FIELD_TYPES = {
    "has_header": bool,
    "infer_types": bool,
    "skip_blank_lines": bool,
    "delimiter": str,
    "quote_char": str,
    "chunk_size": int,
}


@dataclass(frozen=True)
class ParsedTable:
    header: Header = ()
    records: List[Record] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records


def parse_text(
    text: str,
    config: Optional[ParseConfig] = None,
    progress: Optional[Callable[[int], None]] = None,
) -> ParsedTable:
    """
    Parse delimited text into (header, records).

    Rows shorter than the first row are padded with null cells. Rows
    longer than the first row, and malformed or unterminated quoted fields,
    abort the whole parse with a ParseError; nothing partial is returned.

    Chunks are consumed strictly in input order, so the result is the
    same as a single pass. ``progress`` receives the running row count
    after each chunk.
    """
    config = config or ParseConfig()
    _check_dialect(config)

    if text == "" or text.strip("\r\n") == "" and config.skip_blank_lines:
        return ParsedTable()

    _check_quoting(text, config)

    rows: List[Tuple[Any, ...]] = []
    try:
        reader = pd.read_csv(
            io.StringIO(text),
            sep=config.delimiter,
            quotechar=config.quote_char,
            doublequote=True,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=config.skip_blank_lines,
            engine="c",
            chunksize=config.chunk_size,
        )
        with reader:
            for chunk in reader:
                rows.extend(chunk.itertuples(index=False, name=None))
                if progress is not None:
                    progress(len(rows))
    except pd.errors.EmptyDataError:
        return ParsedTable()
    except pd.errors.ParserError as e:
        issues = _issues_from_parser_error(e)
        logger.warning(
            "Delimited text rejected",
            extra={"issues": [i.describe() for i in issues]},
        )
        raise ParseError(issues) from e

    if not rows:
        return ParsedTable()

    width = len(rows[0])
    if config.has_header:
        header = tuple(_header_token(t) for t in rows[0])
        body = rows[1:]
    else:
        header = tuple(f"Column {i + 1}" for i in range(width))
        body = rows

    records = [_to_record(row, width, config.infer_types) for row in body]

    logger.debug(
        "Parsed delimited text",
        extra={"n_columns": width, "n_records": len(records)},
    )
    return ParsedTable(header=header, records=records)


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------

def _check_dialect(config: ParseConfig) -> None:
    issues: List[ParseIssue] = []
    if len(config.delimiter) != 1:
        issues.append(ParseIssue(None, None, f"delimiter must be a single character, got {config.delimiter!r}"))
    if len(config.quote_char) != 1:
        issues.append(ParseIssue(None, None, f"quote character must be a single character, got {config.quote_char!r}"))
    if config.delimiter == config.quote_char:
        issues.append(ParseIssue(None, None, "delimiter and quote character must differ"))
    if config.chunk_size <= 0:
        issues.append(ParseIssue(None, None, "chunk size must be positive"))
    if issues:
        raise ParseError(issues)


def _check_quoting(text: str, config: ParseConfig) -> None:
    # pandas joins text after a closing quote onto the field ("Gad"get -> Gadget)
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=config.delimiter,
        quotechar=config.quote_char,
        doublequote=True,
        strict=True,
    )
    try:
        for _ in reader:
            pass
    except csv.Error as e:
        issue = ParseIssue(row=reader.line_num, column=None, reason=f"malformed quoted field ({e})")
        logger.warning("Delimited text rejected", extra={"issues": [issue.describe()]})
        raise ParseError([issue]) from e


def _header_token(raw: Any) -> str:
    if raw is None or (isinstance(raw, float) and raw != raw):
        return ""
    return str(raw).strip()


def _to_record(row: Tuple[Any, ...], width: int, infer_types: bool) -> Record:
    cells = [infer_cell(v, infer_types) for v in row[:width]]
    if len(cells) < width:
        cells.extend([Cell.null()] * (width - len(cells)))
    return tuple(cells)


def _issues_from_parser_error(error: Exception) -> List[ParseIssue]:
    message = str(error)

    m = _FIELD_COUNT_RE.search(message)
    if m:
        expected, line, saw = (int(g) for g in m.groups())
        return [
            ParseIssue(
                row=line,
                column=expected + 1,
                reason=f"expected {expected} fields, saw {saw}",
            )
        ]

    m = _EOF_IN_STRING_RE.search(message)
    if m:
        # pandas reports the row 0-based
        return [
            ParseIssue(
                row=int(m.group(1)) + 1,
                column=None,
                reason="unterminated quoted field",
            )
        ]

    return [ParseIssue(row=None, column=None, reason=message.strip() or "malformed input")]
