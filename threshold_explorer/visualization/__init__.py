"""Plotly helpers for the threshold explorer figures."""

from .colors import METRIC_COLORS, STATE_PALETTE, StateColorMap, hex_to_rgb, rgba
from .curves import DEFAULT_CURVE_METRICS, add_hover_guide, add_sweep_curves
from .density import add_marginal_density

__all__ = [
    "StateColorMap",
    "STATE_PALETTE",
    "METRIC_COLORS",
    "hex_to_rgb",
    "rgba",
    "add_marginal_density",
    "add_sweep_curves",
    "add_hover_guide",
    "DEFAULT_CURVE_METRICS",
]
