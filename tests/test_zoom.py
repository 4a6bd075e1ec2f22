"""Tests for the active domain and active subset."""

import pytest

from threshold_explorer import (
    ReferenceState,
    SampleStore,
    ZoomBounds,
    active_domain,
    active_subset,
    histogram,
)


def test_without_zoom_the_full_store_is_active(quadrant_store, reference):
    assert active_subset(quadrant_store, reference) is quadrant_store
    assert active_domain(quadrant_store, reference, "cpm") == (0.0, 5.0)
    assert active_domain(quadrant_store, reference, "intensity") == (0.0, 5.0)


def test_zoom_keeps_only_samples_inside_the_rectangle(quadrant_store, reference):
    reference.set_zoom(ZoomBounds(cpm=(0, 3), intensity=(0, 3)))
    subset = active_subset(quadrant_store, reference)

    assert [s.name for s in subset] == ["low"]
    assert active_domain(quadrant_store, reference, "cpm") == (0.0, 3.0)

    bins = histogram(subset, "cpm", active_domain(quadrant_store, reference, "cpm"))
    occupied = [b for b in bins if b.count]
    assert len(occupied) == 1
    assert occupied[0].count == 1
    assert occupied[0].x0 <= 1.0 <= occupied[0].x1


def test_zoom_bounds_are_inclusive(quadrant_store, reference):
    reference.set_zoom(ZoomBounds(cpm=(1, 5), intensity=(5, 5)))
    names = [s.name for s in active_subset(quadrant_store, reference)]
    assert names == ["high", "int_only"]


def test_zoom_excluding_everything_gives_empty_subset(quadrant_store, reference):
    reference.set_zoom(ZoomBounds(cpm=(100, 200), intensity=(100, 200)))
    assert len(active_subset(quadrant_store, reference)) == 0


def test_set_then_clear_zoom_restores_original_views(random_store, reference):
    before_subset = active_subset(random_store, reference)
    before_domain = active_domain(random_store, reference, "cpm")

    reference.set_zoom(ZoomBounds(cpm=(1, 5), intensity=(1, 2)))
    assert len(active_subset(random_store, reference)) < len(random_store)
    reference.set_zoom(None)

    assert active_subset(random_store, reference) == before_subset
    assert active_domain(random_store, reference, "cpm") == before_domain


def test_subset_preserves_store_order(random_store, reference):
    reference.set_zoom(ZoomBounds(cpm=(2, 10), intensity=(1, 5)))
    names = [s.name for s in active_subset(random_store, reference)]
    indices = [int(n.split("_")[1]) for n in names]
    assert indices == sorted(indices)


def test_empty_store_domain_is_zero(empty_store):
    assert active_domain(empty_store, ReferenceState(), "intensity") == (0.0, 0.0)


def test_domain_ignores_nan():
    store = SampleStore.from_records(
        [
            {"name": "a", "cpm": 4.0, "intensity": 1.0},
            {"name": "b", "cpm": float("nan"), "intensity": 2.0},
        ]
    )
    assert active_domain(store, ReferenceState(), "cpm") == (0.0, 4.0)


def test_unknown_axis(quadrant_store, reference):
    with pytest.raises(ValueError):
        active_domain(quadrant_store, reference, "area")
