"""Marginal density sparklines for plotly subplot figures."""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from ..histogram import HistogramBin
from .colors import rgba

SPARKLINE_COLOR = "#999999"


def add_marginal_density(
    fig: go.Figure,
    bins: Sequence[HistogramBin],
    *,
    orientation: str = "h",
    row: int = 1,
    col: int = 1,
    color: str = SPARKLINE_COLOR,
    opacity: float = 0.5,
) -> None:
    """Add a filled, smoothed histogram outline to one subplot of *fig*.

    Parameters
    ----------
    fig : plotly Figure
        Built with :func:`plotly.subplots.make_subplots`.
    bins : sequence of HistogramBin
        Bins from :func:`threshold_explorer.histogram.histogram`.
    orientation : str
        ``"h"`` draws counts upward along a horizontal axis (top margin);
        ``"v"`` draws counts rightward along a vertical axis (right margin).
    row, col : int
        Target subplot.
    """
    if not bins:
        return

    centers = [b.center for b in bins]
    counts = [b.count for b in bins]
    if orientation == "h":
        x, y, fill = centers, counts, "tozeroy"
    elif orientation == "v":
        x, y, fill = counts, centers, "tozerox"
    else:
        raise ValueError(f"Invalid orientation '{orientation}'. Choose 'h' or 'v'.")

    fig.add_trace(
        go.Scatter(
            x=x,
            y=y,
            mode="lines",
            line=dict(color=color, width=1, shape="spline"),
            fill=fill,
            fillcolor=rgba(color, opacity),
            showlegend=False,
            hoverinfo="skip",
        ),
        row=row,
        col=col,
    )
