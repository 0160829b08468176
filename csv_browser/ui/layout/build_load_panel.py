from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from csv_browser.ui.helpers import status_alert
from csv_browser.ui.ids import IDs


def build_load_panel(status_message: str, status_color: str) -> dbc.Card:
    """
    Upload area plus the status line that reports the last load.
    """
    upload = dcc.Upload(
        id=IDs.Control.UPLOAD,
        children=html.Div(
            [
                html.I(className="fas fa-file-csv me-2"),
                "Drag and drop or ",
                html.A("select a CSV file"),
            ]
        ),
        accept=".csv,text/csv",
        multiple=False,
        className="csvb-upload",
        style={
            "borderWidth": "1px",
            "borderStyle": "dashed",
            "borderRadius": "6px",
            "textAlign": "center",
            "padding": "18px",
        },
    )

    return dbc.Card(
        [
            dbc.CardHeader("Load data"),
            dbc.CardBody(
                [
                    upload,
                    html.Div(
                        status_alert(status_message, status_color),
                        id=IDs.Control.STATUS_ALERT,
                    ),
                ]
            ),
        ],
        className="mt-3",
    )
