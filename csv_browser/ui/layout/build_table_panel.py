from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from csv_browser.ui.helpers import TABLE_FONT
from csv_browser.ui.ids import IDs


def build_controls_row(page_size: int, page_size_options: List[int]) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                dbc.InputGroup(
                    [
                        dbc.InputGroupText(html.I(className="fas fa-search")),
                        dbc.Input(
                            id=IDs.Control.SEARCH_INPUT,
                            type="search",
                            placeholder="Search records...",
                            debounce=True,
                            value="",
                        ),
                    ]
                ),
                md=6,
            ),
            dbc.Col(
                html.Div(
                    [
                        html.Span("Show", className="me-2"),
                        dcc.Dropdown(
                            id=IDs.Control.PAGE_SIZE_SELECT,
                            options=[{"label": str(n), "value": n} for n in page_size_options],
                            value=page_size,
                            clearable=False,
                            style={"width": "90px"},
                        ),
                        html.Span("entries", className="ms-2"),
                    ],
                    className="d-flex align-items-center",
                ),
                md=3,
            ),
            dbc.Col(
                dbc.Button(
                    [html.I(className="fas fa-file-csv me-1"), "Export filtered"],
                    id=IDs.Control.EXPORT_BTN,
                    color="primary",
                    outline=True,
                    size="sm",
                ),
                md=3,
                className="d-flex justify-content-end align-items-center",
            ),
        ],
        className="gx-3 mb-3",
    )


def build_table_panel(page_size: int, page_size_options: List[int]) -> dbc.Card:
    """
    Search box, page length menu, column toggles and the data table.

    Filtering, sorting and paging all run server-side, so the DataTable
    uses custom sort/page actions and only ever holds the current page.
    """
    table = dash_table.DataTable(
        id=IDs.Control.TABLE,
        data=[],
        columns=[],
        page_action="custom",
        page_current=0,
        page_size=page_size,
        page_count=0,
        sort_action="custom",
        sort_mode="single",
        sort_by=[],
        filter_action="none",

        # ---- FONT + LOOK & FEEL ----
        style_table={"overflowX": "auto"},
        style_as_list_view=True,
        style_cell={
            "fontFamily": TABLE_FONT,
            "fontSize": "12px",
            "padding": "6px 8px",
            "border": "none",
            "textAlign": "left",
            "minWidth": "80px",
            "maxWidth": "260px",
            "whiteSpace": "nowrap",
            "overflow": "hidden",
            "textOverflow": "ellipsis",
        },
        style_header={
            "fontFamily": TABLE_FONT,
            "fontSize": "12px",
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
        style_data={"borderBottom": "1px solid #e5e7eb"},
        style_data_conditional=[
            {"if": {"row_index": "odd"}, "backgroundColor": "#fafafa"},
        ],
    )

    column_toggles = html.Details(
        [
            html.Summary("Columns", className="mb-2"),
            dbc.Checklist(
                id=IDs.Control.COLUMN_CHECKLIST,
                options=[],
                value=[],
                inline=True,
                switch=True,
            ),
        ],
        className="mb-3",
    )

    return dbc.Card(
        [
            dbc.CardHeader([html.I(className="fas fa-table me-2"), "Data Table"]),
            dbc.CardBody(
                [
                    build_controls_row(page_size, page_size_options),
                    column_toggles,
                    table,
                    html.Div(id=IDs.Control.TABLE_INFO, className="text-muted small mt-2"),
                    dcc.Download(id=IDs.Control.DOWNLOAD),
                ]
            ),
        ],
        className="mt-3",
    )
