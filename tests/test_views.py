"""Tests for the recompute entry point."""

import math

import pytest

from threshold_explorer import (
    ConfusionCounts,
    ExplorerSettings,
    HoverPoint,
    ThresholdPoint,
    ZoomBounds,
    recompute,
)


def test_without_threshold_only_distributions_are_computed(quadrant_store, reference):
    views = recompute(quadrant_store, reference)

    assert views.subset is quadrant_store
    assert views.cpm_domain == (0.0, 5.0)
    assert len(views.cpm_histogram) == 30
    assert len(views.intensity_histogram) == 30
    assert views.counts is None
    assert views.metrics is None
    assert views.cpm_curve is None and views.intensity_curve is None


def test_threshold_drives_counts_and_both_curves(quadrant_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=3, intensity=3))
    views = recompute(quadrant_store, reference)

    assert views.counts == ConfusionCounts(tp=1, fp=1, tn=1, fn=1)
    assert views.metrics.accuracy == 0.5
    assert len(views.cpm_curve) == 40
    assert views.cpm_curve.axis == "cpm"
    assert views.cpm_curve.fixed_value == 3.0
    assert views.intensity_curve.axis == "intensity"
    assert views.curve_for("intensity") is views.intensity_curve


def test_zoom_restricts_every_view(quadrant_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=3, intensity=3))
    reference.set_zoom(ZoomBounds(cpm=(0, 3), intensity=(0, 3)))
    views = recompute(quadrant_store, reference)

    assert len(views.subset) == 1
    assert views.counts.total == 1
    assert views.domain("cpm") == (0.0, 3.0)
    assert sum(b.count for b in views.histogram_for("cpm")) == 1
    assert views.cpm_curve.points[-1].x1 == pytest.approx(3.0)
    assert all(p.counts.total == 1 for p in views.intensity_curve.points)


def test_empty_subset_is_not_fatal(quadrant_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=3, intensity=3))
    reference.set_zoom(ZoomBounds(cpm=(50, 60), intensity=(50, 60)))
    views = recompute(quadrant_store, reference)

    assert views.counts == ConfusionCounts()
    assert all(math.isfinite(v) for v in views.metrics.as_dict().values())
    assert all(b.count == 0 for b in views.cpm_histogram)


def test_settings_control_bucket_counts(random_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=5, intensity=2))
    views = recompute(random_store, reference, ExplorerSettings(sweep_buckets=10, histogram_buckets=5))

    assert len(views.cpm_curve) == 10
    assert len(views.intensity_histogram) == 5


def test_hover_is_carried_through(random_store, reference):
    reference.set_hover(HoverPoint(cpm=1.5, intensity=0.5))
    assert recompute(random_store, reference).hover == HoverPoint(cpm=1.5, intensity=0.5)


def test_recompute_is_deterministic(random_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=5, intensity=2))
    reference.set_zoom(ZoomBounds(cpm=(1, 20), intensity=(0.5, 6)))

    assert recompute(random_store, reference) == recompute(random_store, reference)


def test_later_state_changes_do_not_leak_into_earlier_views(random_store, reference):
    reference.set_threshold(ThresholdPoint(cpm=5, intensity=2))
    views = recompute(random_store, reference)
    reference.set_threshold(ThresholdPoint(cpm=50, intensity=20))

    assert views.threshold == ThresholdPoint(cpm=5, intensity=2)


@pytest.mark.parametrize("kwargs", [{"sweep_buckets": 0}, {"histogram_buckets": -3}, {"sweep_buckets": 2.5}])
def test_settings_validation(kwargs):
    with pytest.raises(ValueError):
        ExplorerSettings(**kwargs)
