# components/layout.py
from __future__ import annotations

from typing import Any, Dict, List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from tracker.data_model import INCOME_FORM, FieldDefinition
from tracker.engine.progress import ALLOCATION_COLUMNS, format_currency, format_months, format_percent

ADD_PAYMENT_ID = "add-client-btn"
SAVE_ID = "save-btn"
EXPORT_ID = "export-btn"
UPLOAD_ID = "import-upload"
DOWNLOAD_ID = "export-download"
LOCAL_STORE_ID = "local-store"
STATE_STORE_ID = "tracker-state"
STATUS_ID = "status-text"
SUMMARY_ID = "summary-stats"
MRR_PROGRESS_ID = "mrr-progress"
OVERALL_PROGRESS_ID = "overall-progress"
TARGETS_ID = "target-cards"
ALLOCATION_TABLE_ID = "allocation-table"


def input_id(field: str) -> str:
    return "income-" + field.replace("_", "-")


INPUT_IDS = [input_id(f.field) for f in INCOME_FORM.fields]
FIELD_BY_INPUT_ID = {input_id(f.field): f.field for f in INCOME_FORM.fields}


def _income_input(definition: FieldDefinition):
    return dbc.Input(
        id=input_id(definition.field),
        type="number",
        min=0,
        value=None,
        placeholder=definition.placeholder,
    )


def _allocation_table():
    columns = []
    for name in ALLOCATION_COLUMNS:
        col_def = {"name": name, "id": name}
        if name != "Target":
            col_def["type"] = "numeric"
        columns.append(col_def)
    return dash_table.DataTable(
        id=ALLOCATION_TABLE_ID,
        data=[],
        columns=columns,
        editable=False,
        style_table={"height": "auto", "overflowY": "visible"},
        style_header={"backgroundColor": "#222", "color": "#eee", "fontWeight": "bold"},
        style_data={"backgroundColor": "#111", "color": "#eee"},
        fill_width=True,
    )


def build_income_card():
    one_time, retainer, secondary = INCOME_FORM.fields
    return dbc.Card(
        [
            html.H4("Client Acquisition", className="card-title"),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Label(one_time.label),
                            dbc.InputGroup(
                                [
                                    _income_input(one_time),
                                    dbc.Button("Add Client", id=ADD_PAYMENT_ID, color="success"),
                                ]
                            ),
                        ],
                        md=6,
                    ),
                    dbc.Col([dbc.Label(retainer.label), _income_input(retainer)], md=6),
                ]
            ),
            html.Hr(),
            html.H5(f"SaaS Revenue ({secondary.help})"),
            dbc.Label(secondary.label),
            _income_input(secondary),
        ],
        body=True,
        className="mb-4",
    )


def build_persistence_card():
    return dbc.Card(
        [
            dbc.Row(
                [
                    dbc.Col(dbc.Button("Save", id=SAVE_ID, color="primary", className="w-100"), md=4),
                    dbc.Col(dbc.Button("Export", id=EXPORT_ID, color="secondary", className="w-100"), md=4),
                    dbc.Col(
                        dcc.Upload(
                            id=UPLOAD_ID,
                            children=dbc.Button("Import", color="secondary", className="w-100"),
                            accept=".json,application/json",
                            multiple=False,
                        ),
                        md=4,
                    ),
                ]
            ),
            html.P("", id=STATUS_ID, className="mt-2 mb-0 text-muted"),
            dcc.Download(id=DOWNLOAD_ID),
        ],
        body=True,
        className="mb-4",
    )


def build_layout():
    return dbc.Container(
        [
            dcc.Store(id=LOCAL_STORE_ID, storage_type="local"),
            dcc.Store(id=STATE_STORE_ID, storage_type="memory"),
            html.H1("Luxury Car Progress Tracker", className="text-center my-4"),
            build_income_card(),
            build_persistence_card(),
            dbc.Card(
                [
                    html.Div(id=SUMMARY_ID),
                    html.H5("MRR Progress", className="mt-3"),
                    html.Div(id=MRR_PROGRESS_ID),
                ],
                body=True,
                className="mb-4",
            ),
            dbc.Card(
                [html.H4("Overall Progress", className="card-title"), html.Div(id=OVERALL_PROGRESS_ID)],
                body=True,
                className="mb-4",
            ),
            html.Div(id=TARGETS_ID, className="mb-4"),
            dbc.Card([html.H5("Allocation"), _allocation_table()], body=True, className="mb-4"),
        ],
        fluid=False,
    )


def _stat(title: str, value: str):
    return dbc.Col(
        dbc.Card([html.Small(title, className="text-muted"), html.H3(value)], body=True, className="text-center"),
        md=4,
    )


def render_summary(summary: Dict[str, Any]):
    return dbc.Row(
        [
            _stat("MRR Target", format_currency(summary["mrrTarget"])),
            _stat("Current MRR", format_currency(summary["monthlyIncome"])),
            _stat("Months to Goal", format_months(summary["monthsToGoal"])),
        ]
    )


def render_mrr_progress(summary: Dict[str, Any]):
    return [
        dbc.Progress(value=summary["mrrProgress"], color="success"),
        html.P(
            f"{format_percent(summary['mrrProgress'])} of target MRR "
            f"({format_currency(summary['monthlyIncome'])} / {format_currency(summary['mrrTarget'])})",
            className="mt-2 text-center text-muted",
        ),
    ]


def render_overall_progress(summary: Dict[str, Any]):
    return [
        html.Div(
            [
                html.Span(format_currency(summary["accumulatedTotal"])),
                html.Span(format_currency(summary["totalTargetCost"])),
            ],
            className="d-flex justify-content-between mb-2",
        ),
        dbc.Progress(value=summary["overallProgress"], color="info"),
        html.P(f"{format_percent(summary['overallProgress'])} Complete", className="mt-2 text-center text-muted"),
    ]


def render_targets(summary: Dict[str, Any]):
    cards: List[Any] = []
    for row in summary["targets"]:
        cards.append(
            dbc.Col(
                dbc.Card(
                    [
                        html.H5(row["Target"]),
                        html.P(format_currency(row["Price"]), className="text-muted mb-1"),
                        html.Small(
                            f"Saving {format_currency(row['Funded'])} of {format_currency(row['Cost'])}",
                            className="d-block text-muted mb-3",
                        ),
                        dbc.Progress(value=row["Progress (%)"]),
                        html.P(f"{format_percent(row['Progress (%)'])} Complete", className="mt-2 text-center text-muted"),
                    ],
                    body=True,
                ),
                md=4,
            )
        )
    return dbc.Row(cards)


__all__ = [
    "ADD_PAYMENT_ID",
    "ALLOCATION_TABLE_ID",
    "DOWNLOAD_ID",
    "EXPORT_ID",
    "FIELD_BY_INPUT_ID",
    "INPUT_IDS",
    "LOCAL_STORE_ID",
    "MRR_PROGRESS_ID",
    "OVERALL_PROGRESS_ID",
    "SAVE_ID",
    "STATE_STORE_ID",
    "STATUS_ID",
    "SUMMARY_ID",
    "TARGETS_ID",
    "UPLOAD_ID",
    "build_layout",
    "input_id",
    "render_mrr_progress",
    "render_overall_progress",
    "render_summary",
    "render_targets",
]
