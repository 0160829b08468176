from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from csv_browser.ui.ids import IDs
from csv_browser.ui.layout.build_load_panel import build_load_panel
from csv_browser.ui.layout.build_navbar import build_navbar
from csv_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from csv_browser.ui.context import AppContext


def build_layout(ctx: AppContext) -> dbc.Container:
    cfg = ctx.global_config

    return dbc.Container(
        fluid=True,
        className="csvb-root",
        children=[
            build_navbar(cfg),

            # App-level stores
            dcc.Store(id=IDs.Store.DATA_VERSION, data=0),
            # Preferences live in the browser's localStorage (per origin, survives reloads)
            dcc.Store(id=IDs.Store.PREFERENCES, storage_type="local"),

            dbc.Row(
                [
                    dbc.Col(
                        build_load_panel(ctx.status_message, ctx.status_color),
                        md=3,
                    ),
                    dbc.Col(
                        build_table_panel(cfg.page_size, cfg.page_size_options),
                        md=9,
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
