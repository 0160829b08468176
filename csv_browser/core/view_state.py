from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_PAGE_SIZE = 25


@dataclass(frozen=True)
class SortKey:
    column: int
    descending: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "descending": self.descending}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional[SortKey]:
        if not data:
            return None
        return cls(column=int(data["column"]), descending=bool(data.get("descending", False)))


@dataclass
class ViewState:
    """
    Current search/sort/page/visibility selection for the loaded table.

    Fields:

    - query: free-text search, matched against every column
    - sort_key: column + direction, or None for input order
    - page_index: 0-based page, clamped by the view engine
    - page_size: rows per page, always positive
    - column_visibility: one flag per header position

    """

    query: str = ""
    sort_key: Optional[SortKey] = None
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    column_visibility: List[bool] = field(default_factory=list)

    @classmethod
    def for_columns(cls, n_columns: int, page_size: int = DEFAULT_PAGE_SIZE) -> ViewState:
        return cls(page_size=page_size, column_visibility=[True] * n_columns)

    def visible_columns(self) -> List[int]:
        return [i for i, shown in enumerate(self.column_visibility) if shown]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["sort_key"] = self.sort_key.to_dict() if self.sort_key else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewState:
        return cls(
            query=str(data.get("query", "")),
            sort_key=SortKey.from_dict(data.get("sort_key")),
            page_index=int(data.get("page_index", 0)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
            column_visibility=[bool(v) for v in data.get("column_visibility", [])],
        )
