from __future__ import annotations

import csv
from typing import Iterable, Optional, Sequence

import pandas as pd

from csv_browser.core.parser import Record
from csv_browser.core.view_engine import project

LINE_TERMINATOR = "\r\n"


def serialize(
    header: Sequence[str],
    records: Iterable[Record],
    *,
    columns: Optional[Sequence[int]] = None,
    delimiter: str = ",",
    quote_char: str = '"',
) -> str:
    """
    Write header + records as delimited text.

    Fields holding the delimiter, the quote character or a line break are
    quoted and embedded quotes are doubled, so the output parses back to
    the same table. ``columns`` limits the output to those header positions.
    """
    names = list(project(tuple(header), columns))
    if not names:
        return ""

    rows = [[cell.display() for cell in project(record, columns)] for record in records]
    df = pd.DataFrame(rows, columns=range(len(names)), dtype=object)
    df.columns = names

    return df.to_csv(
        index=False,
        header=True,
        sep=delimiter,
        quotechar=quote_char,
        quoting=csv.QUOTE_MINIMAL,
        doublequote=True,
        lineterminator=LINE_TERMINATOR,
    )
