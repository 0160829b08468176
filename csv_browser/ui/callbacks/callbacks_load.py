from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State

from csv_browser.core.exceptions import CsvBrowserError
from csv_browser.services.dataset_service import decode_upload
from csv_browser.services.preference_service import PreferenceService
from csv_browser.services.storage import InMemoryKeyValueStore
from csv_browser.ui.helpers import column_options, error_message, sort_by_from_sort_key, status_alert
from csv_browser.ui.ids import IDs
from csv_browser.validation.errors import ValidationError

if TYPE_CHECKING:
    from csv_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_load_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # 1. Upload -> parse -> replace the active table
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data"),
        Output(IDs.Control.STATUS_ALERT, "children"),
        Input(IDs.Control.UPLOAD, "contents"),
        State(IDs.Control.UPLOAD, "filename"),
        State(IDs.Store.DATA_VERSION, "data"),
        prevent_initial_call=True,
    )
    def load_uploaded_file(contents, filename, version):
        if not contents:
            raise dash.exceptions.PreventUpdate

        try:
            data = decode_upload(contents, filename or "", ctx.global_config.max_upload_bytes)
            with ctx.lock:
                ctx.session.load_bytes(data, source=filename)
                message = ctx.session.load_message()
        except (CsvBrowserError, ValidationError) as e:
            # The previous table stays active
            logger.warning("Upload rejected", extra={"upload_filename": filename, "error": str(e)})
            text, color = error_message(e)
            return dash.no_update, status_alert(text, color)

        return (version or 0) + 1, status_alert(message, "info")

    # ---------------------------------------------------------
    # 2. New table (or page reload) -> reset controls, restore preferences
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.COLUMN_CHECKLIST, "options"),
        Output(IDs.Control.COLUMN_CHECKLIST, "value"),
        Output(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Output(IDs.Control.TABLE, "sort_by"),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Store.DATA_VERSION, "data"),
        State(IDs.Store.PREFERENCES, "data"),
    )
    def sync_controls_with_table(_version, preferences_data):
        prefs = PreferenceService(
            InMemoryKeyValueStore(dict(preferences_data or {})),
            key=ctx.global_config.preferences_key,
        )

        with ctx.lock:
            session = ctx.session
            session.apply_snapshot(prefs.load())
            state = session.state
            options = column_options(session.store)

        return (
            options,
            state.visible_columns(),
            state.page_size,
            sort_by_from_sort_key(state.sort_key),
            state.query,
        )
