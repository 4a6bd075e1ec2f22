"""Single recomputation entry point for every derived view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .classification import ConfusionCounts, MetricsVector, classify, derive_metrics
from .config import ExplorerSettings
from .histogram import HistogramBin, histogram
from .samples import SampleStore, check_axis
from .state import HoverPoint, ReferenceState, ThresholdPoint
from .sweep import SweepCurve, sweep
from .zoom import active_domain, active_subset


@dataclass(frozen=True)
class DerivedViews:
    """Everything the interface draws, for one (store, state) pair.

    Threshold-dependent fields are ``None`` while no threshold is set.
    """

    subset: SampleStore
    cpm_domain: Tuple[float, float]
    intensity_domain: Tuple[float, float]
    cpm_histogram: Tuple[HistogramBin, ...]
    intensity_histogram: Tuple[HistogramBin, ...]
    threshold: Optional[ThresholdPoint] = None
    hover: Optional[HoverPoint] = None
    counts: Optional[ConfusionCounts] = None
    metrics: Optional[MetricsVector] = None
    cpm_curve: Optional[SweepCurve] = None
    intensity_curve: Optional[SweepCurve] = None

    def domain(self, axis: str) -> Tuple[float, float]:
        return getattr(self, f"{check_axis(axis)}_domain")

    def histogram_for(self, axis: str) -> Tuple[HistogramBin, ...]:
        return getattr(self, f"{check_axis(axis)}_histogram")

    def curve_for(self, axis: str) -> Optional[SweepCurve]:
        return getattr(self, f"{check_axis(axis)}_curve")


def recompute(
    store: SampleStore,
    state: ReferenceState,
    settings: ExplorerSettings | None = None,
) -> DerivedViews:
    """Recompute all derived views from scratch.

    Pure: no caching, and identical inputs give equal outputs.
    """
    settings = settings or ExplorerSettings()
    state = state.snapshot()

    subset = active_subset(store, state)
    cpm_domain = active_domain(store, state, "cpm")
    intensity_domain = active_domain(store, state, "intensity")

    views = dict(
        subset=subset,
        cpm_domain=cpm_domain,
        intensity_domain=intensity_domain,
        cpm_histogram=tuple(
            histogram(subset, "cpm", cpm_domain, settings.histogram_buckets)
        ),
        intensity_histogram=tuple(
            histogram(subset, "intensity", intensity_domain, settings.histogram_buckets)
        ),
        threshold=state.threshold,
        hover=state.hover,
    )

    threshold = state.threshold
    if threshold is not None:
        counts = classify(subset, threshold)
        views.update(
            counts=counts,
            metrics=derive_metrics(counts),
            # each curve sweeps one axis with the other held at the threshold
            cpm_curve=sweep(
                subset, "cpm", threshold.intensity, cpm_domain, settings.sweep_buckets
            ),
            intensity_curve=sweep(
                subset, "intensity", threshold.cpm, intensity_domain, settings.sweep_buckets
            ),
        )

    return DerivedViews(**views)
