"""Dash layout: control sidebar on the left, scatter and rate curves on the right."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dash import dcc, html

from ..config import CLICK_GRID_SIZE
from . import theme

if TYPE_CHECKING:
    from .app import ServerState

_PANEL_STYLE = {
    "padding": "10px",
    "backgroundColor": theme.PANEL_BG,
    "borderRadius": "4px",
    "marginBottom": "10px",
}

_INPUT_STYLE = {
    "width": "110px",
    "padding": "4px",
    "borderRadius": "4px",
    "border": f"1px solid {theme.BORDER}",
}


def state_options(labels: list[int]) -> list[dict]:
    return [{"label": f"State {s}", "value": s} for s in labels]


def zoom_placeholder(max_value: float) -> str:
    return f"0-{max_value:.2f}"


def status_text(n_active: int, n_total: int) -> str:
    if n_total == 0:
        return "No samples loaded"
    if n_active < n_total:
        return f"{n_active:,} / {n_total:,} samples"
    return f"Loaded {n_total:,} samples"


def build_layout(state: ServerState) -> html.Div:
    """Return the complete app layout."""
    return html.Div(
        className="app-container",
        style={"display": "flex", "fontFamily": theme.FONT_STACK, "color": theme.TEXT},
        children=[
            # ── Sidebar ──
            html.Div(
                className="left-sidebar",
                style={"width": theme.SIDEBAR_WIDTH, "padding": "12px", "flexShrink": 0},
                children=[
                    html.H3("Threshold Explorer"),
                    _data_panel(state),
                    _threshold_panel(),
                    _metrics_panel(),
                    _zoom_panel(state),
                ],
            ),
            # ── Main area ──
            html.Div(
                className="main-area",
                style={"flex": "1", "padding": "12px"},
                children=[
                    dcc.Graph(
                        id="scatter-graph",
                        clear_on_unhover=True,
                        config={"displayModeBar": False},
                        style={"height": "600px"},
                    ),
                    html.Div(
                        className="stat-graphs",
                        style={"display": "flex", "justifyContent": "space-evenly"},
                        children=[
                            _sweep_block("cpm"),
                            _sweep_block("intensity"),
                        ],
                    ),
                ],
            ),
            dcc.Store(id="figure-trigger", data=0),
            dcc.Download(id="download-results"),
        ],
    )


def _data_panel(state: ServerState) -> html.Div:
    store = state.store
    return html.Div(
        style=_PANEL_STYLE,
        children=[
            dcc.Upload(
                id="upload-data",
                accept=".txt,.tsv",
                children=html.Button("Upload Data", className="btn-primary"),
            ),
            html.Div(
                "Accepts .txt or .tsv files with columns: name, cpm, intensity, state",
                style={"fontSize": "11px", "color": theme.MUTED, "marginTop": "6px"},
            ),
            html.Div(
                id="status-bar",
                style={"marginTop": "6px"},
                children=status_text(len(store), len(store)),
            ),
            html.Label("States", style={"marginTop": "8px", "display": "block"}),
            dcc.Dropdown(
                id="state-filter",
                options=state_options(store.state_labels()),
                value=list(state.state_filter),
                multi=True,
                placeholder="All states",
            ),
        ],
    )


def _threshold_panel() -> html.Div:
    return html.Div(
        style=_PANEL_STYLE,
        children=[
            html.H4("Threshold", style={"margin": "0 0 10px 0"}),
            _labelled_input("CPM:", dcc.Input(
                id="threshold-cpm-input", type="number", debounce=True,
                placeholder="0", style=_INPUT_STYLE,
            )),
            _labelled_input("Intensity:", dcc.Input(
                id="threshold-intensity-input", type="number", debounce=True,
                placeholder="0", style=_INPUT_STYLE,
            )),
            html.Button("Clear", id="threshold-clear-btn", className="btn-danger"),
            html.Div(
                f"Clicks on empty plot area snap to a {CLICK_GRID_SIZE}x{CLICK_GRID_SIZE} "
                "grid; type values for an exact threshold.",
                id="threshold-hint",
                style={"fontSize": "11px", "color": theme.MUTED, "marginTop": "6px"},
            ),
        ],
    )


def _metrics_panel() -> html.Div:
    return html.Div(
        style=_PANEL_STYLE,
        children=[
            html.H4("Metrics", style={"margin": "0 0 10px 0"}),
            html.Div(id="metrics-panel", children="No threshold set"),
            html.Button(
                "Download", id="download-btn", className="btn-info",
                style={"marginTop": "10px"},
            ),
        ],
    )


def _zoom_panel(state: ServerState) -> html.Div:
    store = state.store
    return html.Div(
        style=_PANEL_STYLE,
        children=[
            html.H4("Zoom Between", style={"margin": "0 0 10px 0"}),
            _labelled_input("CPM:", dcc.Input(
                id="zoom-cpm-input", type="text",
                placeholder=zoom_placeholder(store.max_value("cpm")), style=_INPUT_STYLE,
            )),
            _labelled_input("Intensity:", dcc.Input(
                id="zoom-intensity-input", type="text",
                placeholder=zoom_placeholder(store.max_value("intensity")), style=_INPUT_STYLE,
            )),
            html.Button("Apply Zoom", id="zoom-apply-btn", className="btn-primary"),
            html.Button(
                "Reset Selection", id="zoom-reset-btn", className="btn-warning",
                style={"marginLeft": "6px"},
            ),
            html.Div(id="zoom-message", style={"fontSize": "11px", "marginTop": "6px"}),
        ],
    )


def _sweep_block(axis: str) -> html.Div:
    return html.Div(
        style={"flex": "1"},
        children=[
            html.H4(id=f"{axis}-sweep-title"),
            dcc.Graph(id=f"{axis}-sweep-graph", config={"displayModeBar": False}),
        ],
    )


def _labelled_input(label: str, component) -> html.Div:
    return html.Div(
        style={"display": "flex", "alignItems": "center", "gap": "8px", "marginBottom": "8px"},
        children=[html.Label(label, style={"width": "70px"}), component],
    )
