"""Active domain and active subset derived from the zoom bounds."""

from __future__ import annotations

from typing import Tuple

from .samples import SampleStore, check_axis
from .state import ReferenceState


def active_domain(store: SampleStore, state: ReferenceState, axis: str) -> Tuple[float, float]:
    """Range of *axis* that every view is drawn and binned over.

    The zoom range when one is set, otherwise ``(0, max value)`` over the
    store (``(0.0, 0.0)`` for an empty store).
    """
    axis = check_axis(axis)
    if state.zoom is not None:
        return state.zoom.range_for(axis)
    return (0.0, store.max_value(axis))


def active_subset(store: SampleStore, state: ReferenceState) -> SampleStore:
    """Samples inside the zoom rectangle, inclusive at both ends.

    Without zoom bounds the store itself is returned.
    """
    if state.zoom is None:
        return store

    cpm_lo, cpm_hi = state.zoom.cpm
    int_lo, int_hi = state.zoom.intensity
    cpm = store.values("cpm")
    intensity = store.values("intensity")
    mask = (cpm >= cpm_lo) & (cpm <= cpm_hi) & (intensity >= int_lo) & (intensity <= int_hi)
    return store.subset(mask)
