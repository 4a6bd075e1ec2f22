"""Interactive two-axis threshold classification explorer."""

from .classification import (
    METRIC_NAMES,
    ConfusionCounts,
    MetricsVector,
    classify,
    derive_metrics,
    quadrant_codes,
)
from .config import ExplorerSettings
from .errors import SampleFormatError, ThresholdExplorerError, ZoomValidationError
from .histogram import HistogramBin, histogram
from .io import (
    classification_table,
    export_classification,
    parse_samples_text,
    read_samples,
    write_classification,
)
from .samples import AXES, Sample, SampleStore, other_axis
from .state import HoverPoint, ReferenceState, ThresholdPoint, ZoomBounds, parse_range
from .sweep import SweepCurve, SweepPoint, sweep
from .views import DerivedViews, recompute
from .zoom import active_domain, active_subset

__all__ = [
    # samples
    "Sample",
    "SampleStore",
    "AXES",
    "other_axis",
    # state
    "ReferenceState",
    "ThresholdPoint",
    "HoverPoint",
    "ZoomBounds",
    "parse_range",
    # classification
    "ConfusionCounts",
    "MetricsVector",
    "METRIC_NAMES",
    "classify",
    "quadrant_codes",
    "derive_metrics",
    # sweep / histogram / zoom
    "SweepCurve",
    "SweepPoint",
    "sweep",
    "HistogramBin",
    "histogram",
    "active_domain",
    "active_subset",
    # views
    "DerivedViews",
    "recompute",
    # io
    "parse_samples_text",
    "read_samples",
    "classification_table",
    "export_classification",
    "write_classification",
    # config / errors
    "ExplorerSettings",
    "ThresholdExplorerError",
    "SampleFormatError",
    "ZoomValidationError",
]
