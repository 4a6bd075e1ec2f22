"""Configuration constants and run-time settings for the threshold explorer."""

from __future__ import annotations

from dataclasses import dataclass

# Number of equal-width buckets for the metric-vs-threshold curves
DEFAULT_SWEEP_BUCKETS = 40
# Number of equal-width buckets for the marginal density sparklines
DEFAULT_HISTOGRAM_BUCKETS = 30
# Cells per axis of the invisible click grid over the scatter plot; clicks
# away from a sample snap to the nearest cell center
CLICK_GRID_SIZE = 200

# Columns of the input table
REQUIRED_COLUMNS = ("name", "cpm", "intensity")
OPTIONAL_COLUMNS = ("state",)

# Quadrant codes written by the classification exporter
QUADRANT_CODES = {
    "tp": 1,
    "fp": 2,
    "tn": 3,
    "fn": 4,
}

EXPORT_COLUMNS = ("name", "state")
EXPORT_FILENAME = "threshold_results.tsv"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8050


@dataclass(frozen=True)
class ExplorerSettings:
    """Tunable bucket counts for the derived views."""

    sweep_buckets: int = DEFAULT_SWEEP_BUCKETS
    histogram_buckets: int = DEFAULT_HISTOGRAM_BUCKETS

    def __post_init__(self) -> None:
        for name in ("sweep_buckets", "histogram_buckets"):
            value = getattr(self, name)
            if int(value) != value or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
