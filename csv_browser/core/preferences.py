from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from csv_browser.core.exceptions import PreferenceError
from csv_browser.core.view_state import SortKey, ViewState

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class PreferenceSnapshot:
    """
    The part of a ViewState that survives reloads.

    It is stored without reference to any particular header, so it is
    always applied defensively against whatever table is loaded.
    """

    page_size: Optional[int] = None
    column_visibility: List[bool] = field(default_factory=list)
    sort_key: Optional[SortKey] = None
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def from_view_state(cls, state: ViewState) -> PreferenceSnapshot:
        return cls(
            page_size=state.page_size,
            column_visibility=list(state.column_visibility),
            sort_key=state.sort_key,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "page_size": self.page_size,
            "column_visibility": list(self.column_visibility),
            "sort_key": self.sort_key.to_dict() if self.sort_key else None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> PreferenceSnapshot:
        """Strict decoding; anything unexpected raises PreferenceError."""
        if not isinstance(data, dict):
            raise PreferenceError("Preference snapshot must be a JSON object.")

        version = data.get("schema_version")
        if version != SCHEMA_VERSION:
            raise PreferenceError(f"Unsupported preference schema version: {version!r}")

        page_size = data.get("page_size")
        if page_size is not None and (isinstance(page_size, bool) or not isinstance(page_size, int)):
            raise PreferenceError("page_size must be an integer or null.")

        visibility = data.get("column_visibility", [])
        if not isinstance(visibility, list) or not all(isinstance(v, bool) for v in visibility):
            raise PreferenceError("column_visibility must be a list of booleans.")

        raw_sort = data.get("sort_key")
        sort_key: Optional[SortKey] = None
        if raw_sort is not None:
            if not isinstance(raw_sort, dict):
                raise PreferenceError("sort_key must be an object or null.")
            column = raw_sort.get("column")
            descending = raw_sort.get("descending", False)
            if isinstance(column, bool) or not isinstance(column, int) or not isinstance(descending, bool):
                raise PreferenceError("sort_key must hold an integer column and a boolean direction.")
            sort_key = SortKey(column=column, descending=descending)

        return cls(
            page_size=page_size,
            column_visibility=list(visibility),
            sort_key=sort_key,
            schema_version=version,
        )

    def apply_to(self, state: ViewState, n_columns: int) -> ViewState:
        """
        Return a copy of ``state`` overridden by this snapshot.

        - visibility entries past the last column are ignored
        - a sort key naming a missing column is dropped
        - a non-positive page size is ignored
        """
        visibility = (list(state.column_visibility) + [True] * n_columns)[:n_columns]
        for i, shown in enumerate(self.column_visibility[:n_columns]):
            visibility[i] = shown

        page_size = state.page_size
        if self.page_size is not None and self.page_size > 0:
            page_size = self.page_size

        sort_key = state.sort_key
        if self.sort_key is not None:
            sort_key = self.sort_key if 0 <= self.sort_key.column < n_columns else None

        return replace(
            state,
            page_size=page_size,
            column_visibility=visibility,
            sort_key=sort_key,
            page_index=0,
        )
