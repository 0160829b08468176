from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output

from csv_browser.ui.helpers import (
    sort_key_from_sort_by,
    table_columns,
    table_rows,
    visible_indices_from_values,
)
from csv_browser.ui.ids import IDs
from csv_browser.validation.errors import ValidationError

if TYPE_CHECKING:
    from csv_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_table_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    @app.callback(
        Output(IDs.Control.TABLE, "data"),
        Output(IDs.Control.TABLE, "columns"),
        Output(IDs.Control.TABLE, "page_count"),
        Output(IDs.Control.TABLE, "page_current"),
        Output(IDs.Control.TABLE, "page_size"),
        Output(IDs.Control.TABLE_INFO, "children"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Input(IDs.Control.COLUMN_CHECKLIST, "value"),
        Input(IDs.Control.TABLE, "sort_by"),
        Input(IDs.Control.TABLE, "page_current"),
        Input(IDs.Store.DATA_VERSION, "data"),
    )
    def render_table(query, page_size, visible_values, sort_by, page_current, _version):
        """
        Push the control values into the session and render the current page.
        Any change recomputes filter -> sort -> paginate in full.
        """
        triggered = dash.ctx.triggered_id

        with ctx.lock:
            session = ctx.session
            n_columns = session.store.column_count

            try:
                session.set_query(query)
                if isinstance(page_size, int) and page_size > 0:
                    session.set_page_size(page_size)
                session.set_visible_columns(visible_indices_from_values(visible_values, n_columns))

                sort_key = sort_key_from_sort_by(sort_by, n_columns)
                if sort_key != session.state.sort_key:
                    if sort_key is None:
                        session.clear_sort()
                    else:
                        session.set_sort(sort_key.column, sort_key.descending)

                if triggered == IDs.Control.TABLE and page_current is not None:
                    session.set_page(page_current)

                page = session.current_page()
            except ValidationError as e:
                logger.warning("Invalid view change ignored", extra={"error": str(e)})
                raise dash.exceptions.PreventUpdate

            visible = session.visible_columns()
            columns = table_columns(session.store, visible)
            data = table_rows(page, visible)

        return (
            data,
            columns,
            page.page_count,
            page.page_index,
            page.page_size,
            page.info_text(),
        )
