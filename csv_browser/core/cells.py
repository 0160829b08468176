from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


class CellKind(Enum):
    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"


# Ordering between kinds. Integers and floats share a rank so they compare numerically.
_KIND_RANK = {
    CellKind.NULL: 0,
    CellKind.INTEGER: 1,
    CellKind.FLOAT: 1,
    CellKind.BOOLEAN: 2,
    CellKind.TEXT: 3,
}


@dataclass(frozen=True)
class Cell:
    """
    A single typed value inside a Record.

    The kind is inferred per cell, so two cells of the same column
    can carry different kinds.
    """

    kind: CellKind
    value: Union[None, int, float, bool, str] = None

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def null(cls) -> Cell:
        return _NULL

    @classmethod
    def integer(cls, value: int) -> Cell:
        return cls(CellKind.INTEGER, int(value))

    @classmethod
    def floating(cls, value: float) -> Cell:
        return cls(CellKind.FLOAT, float(value))

    @classmethod
    def boolean(cls, value: bool) -> Cell:
        return cls(CellKind.BOOLEAN, bool(value))

    @classmethod
    def text(cls, value: str) -> Cell:
        return cls(CellKind.TEXT, str(value))

    @classmethod
    def from_python(cls, value: Any) -> Cell:
        """Wrap a plain Python value (None, bool, int, float, str)."""
        if value is None:
            return _NULL
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.floating(value)
        return cls.text(str(value))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------
    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    @property
    def is_numeric(self) -> bool:
        return self.kind in (CellKind.INTEGER, CellKind.FLOAT)

    def display(self) -> str:
        """String form used for searching, rendering and export."""
        if self.kind is CellKind.NULL:
            return ""
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.FLOAT:
            return repr(self.value)
        return str(self.value)

    def sort_key(self) -> Tuple[int, Any]:
        rank = _KIND_RANK[self.kind]
        if self.kind is CellKind.NULL:
            return (rank, 0)
        return (rank, self.value)

    def __str__(self) -> str:
        return self.display()


_NULL = Cell(CellKind.NULL, None)


def infer_cell(raw: Any, infer_types: bool = True) -> Cell:
    """
    Turn one raw token into a Cell.

    An empty token is always null. With inference enabled the stripped
    token is tried as integer, then float, then boolean, falling back to
    the original (unstripped) text.
    """
    if raw is None:
        return _NULL
    if isinstance(raw, float) and raw != raw:
        # NaN padding from the tokeniser
        return _NULL

    token = str(raw)
    if token == "":
        return _NULL
    if not infer_types:
        return Cell.text(token)

    stripped = token.strip()
    if _INT_RE.match(stripped):
        return Cell.integer(int(stripped))
    if _FLOAT_RE.match(stripped):
        return Cell.floating(float(stripped))

    lowered = stripped.lower()
    if lowered == "true":
        return Cell.boolean(True)
    if lowered == "false":
        return Cell.boolean(False)

    return Cell.text(token)
