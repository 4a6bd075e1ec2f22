"""All Dash callbacks for the threshold explorer app.

Every callback that changes the server state bumps ``figure-trigger``; the
figure callbacks listen to it and recompute the derived views from scratch.
"""

from __future__ import annotations

import logging

from dash import Input, Output, State, callback_context, dcc, html, no_update
from dash.exceptions import PreventUpdate

from ..config import EXPORT_FILENAME
from ..errors import SampleFormatError
from ..io import decode_upload, export_classification, parse_samples_text
from ..state import HoverPoint, ThresholdPoint
from . import theme
from .figures import build_scatter_figure, build_sweep_figure, sweep_title
from .layout import state_options, status_text, zoom_placeholder

logger = logging.getLogger(__name__)


def _triggered_id() -> str:
    ctx = callback_context
    if not ctx.triggered:
        raise PreventUpdate
    return ctx.triggered[0]["prop_id"].split(".")[0]


def _event_point(event_data):
    """``(x, y)`` of the first point in a click/hover payload, or ``None``."""
    if not event_data:
        return None
    points = event_data.get("points") or []
    if not points:
        return None
    x, y = points[0].get("x"), points[0].get("y")
    if x is None or y is None:
        return None
    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        return None


def register(app):
    """Register all callbacks on the Dash app instance."""

    # ------------------------------------------------------------------ #
    #  Dataset upload
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("status-bar", "children", allow_duplicate=True),
        Output("state-filter", "options"),
        Output("state-filter", "value"),
        Output("zoom-cpm-input", "placeholder"),
        Output("zoom-intensity-input", "placeholder"),
        Output("threshold-cpm-input", "value", allow_duplicate=True),
        Output("threshold-intensity-input", "value", allow_duplicate=True),
        Output("zoom-cpm-input", "value", allow_duplicate=True),
        Output("zoom-intensity-input", "value", allow_duplicate=True),
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("upload-data", "contents"),
        State("upload-data", "filename"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_upload(contents, filename, trigger):
        from .app import state
        if state is None or not contents:
            raise PreventUpdate

        try:
            store = parse_samples_text(decode_upload(contents))
        except SampleFormatError as exc:
            logger.warning("Rejected upload %s: %s", filename, exc)
            message = html.Span(f"Could not load {filename}: {exc}", style={"color": theme.ERROR})
            return (message,) + (no_update,) * 9

        state.load(store)
        return (
            status_text(len(store), len(store)),
            state_options(store.state_labels()),
            [],
            zoom_placeholder(store.max_value("cpm")),
            zoom_placeholder(store.max_value("intensity")),
            # typed values belong to the previous dataset
            None, None, None, None,
            (trigger or 0) + 1,
        )

    # ------------------------------------------------------------------ #
    #  State-label filter
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("state-filter", "value"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_state_filter(selected, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate
        state.update_filter(selected)
        return (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Threshold: click, typed input, clear
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("scatter-graph", "clickData"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_click(click_data, trigger):
        from .app import state
        point = _event_point(click_data)
        if state is None or point is None:
            raise PreventUpdate
        state.reference.set_threshold(ThresholdPoint(cpm=point[0], intensity=point[1]))
        return (trigger or 0) + 1

    @app.callback(
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("threshold-cpm-input", "value"),
        Input("threshold-intensity-input", "value"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_threshold_input(cpm_value, intensity_value, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        trigger_id = _triggered_id()
        if trigger_id == "threshold-cpm-input":
            axis, value = "cpm", cpm_value
        else:
            axis, value = "intensity", intensity_value
        if value is None or not state.reference.set_threshold_component(axis, value):
            raise PreventUpdate
        return (trigger or 0) + 1

    @app.callback(
        Output("threshold-cpm-input", "value", allow_duplicate=True),
        Output("threshold-intensity-input", "value", allow_duplicate=True),
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("threshold-clear-btn", "n_clicks"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_clear_threshold(n_clicks, trigger):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate
        state.reference.clear_threshold()
        return None, None, (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Zoom
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("zoom-message", "children"),
        Output("zoom-cpm-input", "value", allow_duplicate=True),
        Output("zoom-intensity-input", "value", allow_duplicate=True),
        Output("figure-trigger", "data", allow_duplicate=True),
        Input("zoom-apply-btn", "n_clicks"),
        Input("zoom-reset-btn", "n_clicks"),
        State("zoom-cpm-input", "value"),
        State("zoom-intensity-input", "value"),
        State("figure-trigger", "data"),
        prevent_initial_call=True,
    )
    def on_zoom(apply_clicks, reset_clicks, cpm_text, intensity_text, trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        trigger_id = _triggered_id()
        if trigger_id == "zoom-reset-btn":
            state.reference.set_zoom(None)
            return "", None, None, (trigger or 0) + 1

        if not state.reference.set_zoom_text(cpm_text or "", intensity_text or ""):
            message = html.Span(
                'Invalid input format. Expected format: "min-max"',
                style={"color": theme.ERROR},
            )
            return message, no_update, no_update, no_update
        return "", no_update, no_update, (trigger or 0) + 1

    # ------------------------------------------------------------------ #
    #  Scatter + metrics
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("scatter-graph", "figure"),
        Output("metrics-panel", "children"),
        Output("status-bar", "children"),
        Output("threshold-cpm-input", "placeholder"),
        Output("threshold-intensity-input", "placeholder"),
        Input("figure-trigger", "data"),
    )
    def update_main(trigger):
        from .app import state
        if state is None:
            raise PreventUpdate

        views = state.views()
        fig = build_scatter_figure(views, state.color_map)
        status = status_text(len(views.subset), len(state.store))

        threshold = views.threshold
        if threshold is None:
            return fig, "No threshold set", status, "0", "0"
        return (
            fig,
            _metrics_children(views),
            status,
            f"{threshold.cpm:.2f}",
            f"{threshold.intensity:.2f}",
        )

    # ------------------------------------------------------------------ #
    #  Sweep curves (also follow the hover point)
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("cpm-sweep-graph", "figure"),
        Output("intensity-sweep-graph", "figure"),
        Output("cpm-sweep-title", "children"),
        Output("intensity-sweep-title", "children"),
        Input("figure-trigger", "data"),
        Input("scatter-graph", "hoverData"),
    )
    def update_sweeps(trigger, hover_data):
        from .app import state
        if state is None:
            raise PreventUpdate

        ctx = callback_context
        if ctx.triggered and ctx.triggered[0]["prop_id"].startswith("scatter-graph."):
            point = _event_point(hover_data)
            state.reference.set_hover(
                None if point is None else HoverPoint(cpm=point[0], intensity=point[1])
            )
            if state.reference.threshold is None:
                raise PreventUpdate

        views = state.views()
        return (
            build_sweep_figure(views, "cpm"),
            build_sweep_figure(views, "intensity"),
            sweep_title(views, "cpm"),
            sweep_title(views, "intensity"),
        )

    # ------------------------------------------------------------------ #
    #  Download
    # ------------------------------------------------------------------ #

    @app.callback(
        Output("download-results", "data"),
        Input("download-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def on_download(n_clicks):
        from .app import state
        if state is None or not n_clicks:
            raise PreventUpdate

        text = export_classification(state.filtered, state.reference.threshold)
        if text is None:
            raise PreventUpdate
        return dcc.send_string(text, EXPORT_FILENAME)


def _metrics_children(views) -> html.Div:
    """Metrics panel: quadrant counts followed by one line per metric."""
    counts = views.counts
    lines = views.metrics.summary().split("\n")
    return html.Div(
        className="metrics-text",
        children=[
            html.Div(
                f"TP {counts.tp}  FP {counts.fp}  TN {counts.tn}  FN {counts.fn}",
                style={"color": theme.MUTED, "marginBottom": "4px"},
            ),
            *[html.Div(line) for line in lines],
        ],
    )
