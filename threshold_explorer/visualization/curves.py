"""Sweep-curve traces for metric-vs-threshold figures."""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from ..classification import METRIC_LABELS
from ..sweep import SweepCurve
from .colors import METRIC_COLORS

# The four rates shown by default, as in the rates legend
DEFAULT_CURVE_METRICS = ("fnr", "fpr", "recall", "specificity")

_SHORT_LABELS = {
    "fnr": "FNR",
    "fpr": "FPR",
    "recall": "TPR",
    "specificity": "TNR",
}


def add_sweep_curves(
    fig: go.Figure,
    curve: SweepCurve,
    metrics: Sequence[str] = DEFAULT_CURVE_METRICS,
) -> None:
    """Add one smoothed line per metric in *metrics* to *fig*."""
    xs = curve.xs()
    for metric in metrics:
        label = _SHORT_LABELS.get(metric, METRIC_LABELS.get(metric, metric))
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=curve.series(metric),
                mode="lines",
                name=label,
                line=dict(color=METRIC_COLORS.get(metric, "gray"), width=1.5,
                          shape="spline"),
                hovertemplate=f"{label} %{{y:.3f}} at %{{x:.2f}}<extra></extra>",
            )
        )


def add_hover_guide(fig: go.Figure, value: float | None, domain: Sequence[float]) -> None:
    """Add a dashed vertical guide at *value* when it lies inside *domain*."""
    if value is None:
        return
    lo, hi = min(domain), max(domain)
    if not lo <= value <= hi:
        return
    fig.add_vline(x=value, line=dict(color="#999999", width=1, dash="dash"))
