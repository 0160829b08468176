from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, dcc, exceptions

from csv_browser.services.preference_service import PreferenceService
from csv_browser.services.storage import InMemoryKeyValueStore
from csv_browser.ui.helpers import view_state_from_controls
from csv_browser.ui.ids import IDs
from csv_browser.validation.errors import ValidationError

if TYPE_CHECKING:
    from csv_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_io_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # 1. Export the full filtered set (not just the page)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD, "data"),
        Input(IDs.Control.EXPORT_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def export_filtered_data(n_clicks):
        if not n_clicks:
            raise exceptions.PreventUpdate

        with ctx.lock:
            try:
                text = ctx.session.export_text()
            except ValidationError as e:
                logger.warning("Export skipped", extra={"error": str(e)})
                raise exceptions.PreventUpdate

        return dcc.send_string(text, ctx.global_config.export_filename, type="text/csv")

    # ---------------------------------------------------------
    # 2. Persist page size / visibility / sort in the browser
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.PREFERENCES, "data"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Input(IDs.Control.COLUMN_CHECKLIST, "value"),
        Input(IDs.Control.TABLE, "sort_by"),
        State(IDs.Store.PREFERENCES, "data"),
        prevent_initial_call=True,
    )
    def save_preferences(page_size, visible_values, sort_by, preferences_data):
        with ctx.lock:
            n_columns = ctx.session.store.column_count
        if n_columns == 0:
            raise exceptions.PreventUpdate

        state = view_state_from_controls(
            n_columns,
            page_size,
            visible_values,
            sort_by,
            default_page_size=ctx.global_config.page_size,
        )
        storage = InMemoryKeyValueStore(dict(preferences_data or {}))
        PreferenceService(storage, key=ctx.global_config.preferences_key).save(state)
        return storage.to_dict()
