"""Colours for sample state labels and derived-metric curves."""

from __future__ import annotations

from typing import Sequence, Tuple

import pandas as pd
from matplotlib import colors as mcolors

# Colour for samples without a state label
DEFAULT_POINT_COLOR = "#377eb8"

STATE_PALETTE = (
    "#377eb8",  # blue
    "#e41a1c",  # red
    "#4daf4a",  # green
    "#984ea3",  # purple
    "#ff7f00",  # orange
    "#a65628",  # brown
    "#f781bf",  # pink
)

METRIC_COLORS = {
    "fnr": "#ff6b6b",
    "fpr": "#4ecdc4",
    "recall": "#45b7d1",
    "specificity": "#96ceb4",
    "accuracy": "#586E75",
    "precision": "#B58900",
    "f1": "#6C71C4",
    "mcc": "#D33682",
}


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert a hex colour string (e.g. ``'#1f77b4'``) to ``(R, G, B)``."""
    try:
        rgb_float = mcolors.to_rgb(hex_color)
        return tuple(int(round(c * 255)) for c in rgb_float)
    except ValueError:
        return (0, 0, 0)


def rgba(hex_color: str, alpha: float) -> str:
    """Return a CSS ``rgba(...)`` string for *hex_color* at *alpha*."""
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r},{g},{b},{alpha})"


class StateColorMap:
    """Maps integer state labels to a fixed cyclic palette.

    A state ``s`` gets ``STATE_PALETTE[s % len(STATE_PALETTE)]``; missing
    states and state ``0`` use :data:`DEFAULT_POINT_COLOR`.
    """

    def __init__(self, palette: Sequence[str] = STATE_PALETTE,
                 default: str = DEFAULT_POINT_COLOR) -> None:
        self._palette = tuple(palette)
        self._default = default

    def color_for(self, state) -> str:
        if state is None or pd.isna(state) or int(state) == 0:
            return self._default
        return self._palette[int(state) % len(self._palette)]

    def __call__(self, states: pd.Series) -> Tuple[list[str], dict[int, str]]:
        """Map *states* to colours.

        Returns
        -------
        color_values : list[str]
            One colour per element of *states*.
        mapping : dict[int, str]
            Colour of every distinct non-missing state.
        """
        color_values = [self.color_for(s) for s in states]
        labels = sorted(int(s) for s in states.dropna().unique())
        return color_values, {s: self.color_for(s) for s in labels}
