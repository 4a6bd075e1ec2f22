"""Build the scatter and sweep figures from the derived views."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..config import CLICK_GRID_SIZE
from ..samples import check_axis
from ..visualization.colors import StateColorMap
from ..visualization.curves import add_hover_guide, add_sweep_curves
from ..visualization.density import add_marginal_density
from . import theme

if TYPE_CHECKING:
    from ..views import DerivedViews

AXIS_TITLES = {"cpm": "CPM", "intensity": "Intensity"}


def build_scatter_figure(
    views: DerivedViews,
    color_map: StateColorMap,
    *,
    opacity: float = 0.6,
    point_size: int = 6,
) -> go.Figure:
    """Scatter of the active subset with marginal sparklines.

    Layout is a 2x2 grid: cpm sparkline on top, the scatter bottom-left and
    the intensity sparkline on the right.  The threshold point, when set, is
    drawn as a dashed crosshair.
    """
    fig = make_subplots(
        rows=2,
        cols=2,
        shared_xaxes=True,
        shared_yaxes=True,
        column_widths=[0.85, 0.15],
        row_heights=[0.15, 0.85],
        horizontal_spacing=0.01,
        vertical_spacing=0.01,
    )

    cpm_lo, cpm_hi = sorted(views.cpm_domain)
    int_lo, int_hi = sorted(views.intensity_domain)

    _add_click_layer(fig, (cpm_lo, cpm_hi), (int_lo, int_hi))

    subset = views.subset
    if len(subset):
        states = subset.states
        color_values, mapping = color_map(states)
        fig.add_trace(
            go.Scattergl(
                x=subset.values("cpm"),
                y=subset.values("intensity"),
                mode="markers",
                name="Samples",
                showlegend=False,
                text=subset.names,
                marker=dict(size=point_size, opacity=opacity, color=color_values),
                hovertemplate="%{text}<br>CPM %{x:.2f}<br>Intensity %{y:.2f}<extra></extra>",
            ),
            row=2,
            col=1,
        )
        # Legend traces
        for label, color in mapping.items():
            fig.add_trace(
                go.Scattergl(
                    x=[None], y=[None],
                    mode="markers",
                    marker=dict(size=10, color=color),
                    name=f"State {label}",
                    showlegend=True,
                ),
                row=2,
                col=1,
            )

    add_marginal_density(fig, views.cpm_histogram, orientation="h", row=1, col=1)
    add_marginal_density(fig, views.intensity_histogram, orientation="v", row=2, col=2)

    if views.threshold is not None:
        line = dict(color=theme.REFERENCE_LINE, width=1, dash="dash")
        fig.add_vline(x=views.threshold.cpm, line=line, row=2, col=1)
        fig.add_hline(y=views.threshold.intensity, line=line, row=2, col=1)

    fig.update_xaxes(range=[cpm_lo, cpm_hi], row=2, col=1, title_text=AXIS_TITLES["cpm"])
    fig.update_yaxes(range=[int_lo, int_hi], row=2, col=1, title_text=AXIS_TITLES["intensity"])
    fig.update_xaxes(
        showspikes=True, spikemode="across", spikethickness=1,
        spikedash="dash", spikecolor=theme.HOVER_LINE,
    )
    fig.update_yaxes(
        showspikes=True, spikemode="across", spikethickness=1,
        spikedash="dash", spikecolor=theme.HOVER_LINE,
    )
    fig.update_xaxes(showticklabels=False, row=2, col=2)
    fig.update_yaxes(showticklabels=False, row=1, col=1)

    fig.update_layout(_base_layout(_uirevision(views)))
    return fig


def build_sweep_figure(views: DerivedViews, axis: str) -> go.Figure:
    """Rates along *axis* with the other axis held at the threshold."""
    axis = check_axis(axis)
    fig = go.Figure()
    curve = views.curve_for(axis)

    if curve is None:
        fig.add_annotation(
            text="Click the scatter plot or type a threshold",
            showarrow=False,
            xref="paper", yref="paper", x=0.5, y=0.5,
            font=dict(color=theme.MUTED),
        )
    else:
        add_sweep_curves(fig, curve)
        if views.hover is not None:
            add_hover_guide(fig, views.hover.value(axis), views.domain(axis))

    lo, hi = sorted(views.domain(axis))
    layout = _base_layout(_uirevision(views))
    layout.update(
        height=300,
        xaxis=dict(title=f"{AXIS_TITLES[axis]} Threshold", range=[lo, hi], showgrid=False),
        yaxis=dict(range=[0, 1], showgrid=False),
        hovermode="x unified",
    )
    fig.update_layout(layout)
    return fig


def sweep_title(views: DerivedViews, axis: str) -> str:
    """Heading above a sweep figure, naming the fixed reference value."""
    axis = check_axis(axis)
    if views.threshold is None:
        return f"{AXIS_TITLES[axis]} Rates"
    if axis == "cpm":
        return f"CPM Rates at Intensity {views.threshold.intensity:.2f}"
    return f"Intensity Rates at CPM {views.threshold.cpm:.2f}"


def _add_click_layer(fig: go.Figure, x_range, y_range) -> None:
    """Transparent heatmap so clicks and hovers register anywhere in the plot."""
    if x_range[0] >= x_range[1] or y_range[0] >= y_range[1]:
        return
    xs = np.linspace(x_range[0], x_range[1], CLICK_GRID_SIZE)
    ys = np.linspace(y_range[0], y_range[1], CLICK_GRID_SIZE)
    fig.add_trace(
        go.Heatmap(
            x=xs,
            y=ys,
            z=np.zeros((len(ys), len(xs))),
            opacity=0,
            showscale=False,
            hoverinfo="none",
            name="click-layer",
        ),
        row=2,
        col=1,
    )


def _uirevision(views: DerivedViews) -> str:
    # Pan/zoom survives redraws until the active domain changes
    return f"{views.cpm_domain}|{views.intensity_domain}"


def _base_layout(uirevision: str) -> dict:
    """Return common layout kwargs."""
    return dict(
        uirevision=uirevision,
        hovermode="closest",
        paper_bgcolor=theme.BACKGROUND,
        plot_bgcolor=theme.BACKGROUND,
        font=dict(family=theme.FONT_STACK, size=11, color=theme.TEXT),
        margin=dict(l=50, r=10, t=10, b=40),
        legend=dict(font=dict(size=10), bgcolor="rgba(0,0,0,0)", borderwidth=0),
    )
