from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from csv_browser.config.io import load_global_config
from csv_browser.config.model import GlobalConfig
from csv_browser.core.exceptions import CsvBrowserError
from csv_browser.core.session import BrowserSession
from csv_browser.services.dataset_service import read_default_dataset
from csv_browser.ui.callbacks.callbacks_io import register_io_callbacks
from csv_browser.ui.callbacks.callbacks_load import register_load_callbacks
from csv_browser.ui.callbacks.callbacks_table import register_table_callbacks
from csv_browser.ui.context import AppContext
from csv_browser.ui.helpers import error_message
from csv_browser.ui.layout.build_layout import build_layout
from csv_browser.validation.errors import ValidationError

logger = logging.getLogger(__name__)

FONT_AWESOME = "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.1/css/all.min.css"


def build_context(config_root: Path, global_config: Optional[GlobalConfig] = None) -> AppContext:
    """
    Load config, create the session and try to show the default dataset.

    A default dataset that cannot be loaded is reported in the status line;
    the app still starts with an empty table.
    """
    global_config = global_config or load_global_config(config_root)

    session = BrowserSession(
        parse_config=global_config.parse,
        default_page_size=global_config.page_size,
    )
    ctx = AppContext(
        config_root=config_root,
        global_config=global_config,
        session=session,
        status_message="Upload a CSV file to get started.",
    )

    default_file = global_config.default_csv_file
    if default_file is None:
        return ctx

    try:
        data = read_default_dataset(default_file)
        session.load_bytes(data, source=default_file.name)
    except (CsvBrowserError, ValidationError) as e:
        logger.error(
            "Default dataset failed to load",
            extra={"path": str(default_file), "error": str(e)},
        )
        ctx.status_message, ctx.status_color = error_message(e)
    else:
        ctx.status_message = session.load_message()

    return ctx


def create_dash_app(config_root: Path | str | None = None) -> Dash:
    if config_root is None:
        config_root = os.getenv("CSV_BROWSER_CONFIG_ROOT", "config")
    config_root = Path(config_root)

    ctx = build_context(config_root)

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY, FONT_AWESOME],
        assets_folder=str(assets_path),
    )
    app.title = ctx.global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_load_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    return app
