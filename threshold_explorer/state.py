"""Shared interactive reference state.

The reference state is the single mutable input of every derived view: the
threshold point picked by the analyst, the transient hover point under the
pointer, and the optional zoom rectangle.  All other structures are
recomputed from ``(SampleStore, ReferenceState)``.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Mapping, Sequence, Union

from .errors import ZoomValidationError
from .samples import check_axis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Point:
    cpm: float
    intensity: float

    def value(self, axis: str) -> float:
        return getattr(self, check_axis(axis))


@dataclass(frozen=True)
class ThresholdPoint(_Point):
    """Reference decision boundary ``(cpm, intensity)``."""

    def with_value(self, axis: str, value: float) -> "ThresholdPoint":
        return dataclasses.replace(self, **{check_axis(axis): float(value)})


@dataclass(frozen=True)
class HoverPoint(_Point):
    """Position of the pointer over the scatter plot."""


def _coerce_range(axis: str, bounds) -> tuple[float, float]:
    if isinstance(bounds, str):
        raise ZoomValidationError(f"{axis} range must be a pair of numbers, got {bounds!r}")
    try:
        values = list(bounds)
    except TypeError:
        raise ZoomValidationError(
            f"{axis} range must be a pair of numbers, got {bounds!r}"
        ) from None
    if len(values) != 2:
        raise ZoomValidationError(
            f"{axis} range must have exactly two values, got {len(values)}"
        )
    coerced = []
    for v in values:
        if isinstance(v, bool):
            raise ZoomValidationError(f"{axis} range contains a non-numeric value: {v!r}")
        try:
            f = float(v)
        except (TypeError, ValueError):
            raise ZoomValidationError(
                f"{axis} range contains a non-numeric value: {v!r}"
            ) from None
        if not math.isfinite(f):
            raise ZoomValidationError(f"{axis} range contains a non-finite value: {v!r}")
        coerced.append(f)
    return coerced[0], coerced[1]


def parse_range(text: str) -> tuple[float, float]:
    """Parse a ``"<min>-<max>"`` range string.

    The dash is the separator, so negative bounds cannot be written.

    Raises
    ------
    ZoomValidationError
        If *text* does not split into exactly two numeric tokens.
    """
    if not isinstance(text, str):
        raise ZoomValidationError(f"Range must be text of the form 'min-max', got {text!r}")
    tokens = text.split("-")
    if len(tokens) != 2:
        raise ZoomValidationError(
            f"Invalid range '{text}'. Expected format: \"min-max\""
        )
    return _coerce_range("zoom", [t.strip() for t in tokens])


@dataclass(frozen=True)
class ZoomBounds:
    """Rectangular restriction of both axes, inclusive at both ends."""

    cpm: tuple[float, float]
    intensity: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cpm", _coerce_range("cpm", self.cpm))
        object.__setattr__(self, "intensity", _coerce_range("intensity", self.intensity))

    @classmethod
    def from_text(cls, cpm_text: str, intensity_text: str) -> "ZoomBounds":
        return cls(cpm=parse_range(cpm_text), intensity=parse_range(intensity_text))

    def range_for(self, axis: str) -> tuple[float, float]:
        return getattr(self, check_axis(axis))


ZoomInput = Union[ZoomBounds, Mapping[str, Sequence[float]], None]


@dataclass
class ReferenceState:
    """Threshold, hover and zoom for the active dataset.

    There is one writer (the interactive session).  Setters are independent:
    none of them clears another field.  :meth:`reset_all` is the only implicit
    reset and is called when a new dataset is loaded.
    """

    threshold: ThresholdPoint | None = None
    hover: HoverPoint | None = None
    zoom: ZoomBounds | None = None

    # ------------------------------------------------------------------ #
    #  Threshold
    # ------------------------------------------------------------------ #

    def set_threshold(self, point: ThresholdPoint) -> None:
        if not isinstance(point, ThresholdPoint):
            point = ThresholdPoint(cpm=float(point.cpm), intensity=float(point.intensity))
        self.threshold = point
        logger.debug("Threshold set to (%s, %s)", point.cpm, point.intensity)

    def set_threshold_component(self, axis: str, value) -> bool:
        """Update one coordinate of the threshold from typed input.

        When no threshold is set, the other coordinate starts at ``0.0``.
        Returns ``False`` and leaves the state unchanged if *value* is not a
        finite number.
        """
        axis = check_axis(axis)
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric %s threshold %r", axis, value)
            return False
        if not math.isfinite(number):
            logger.warning("Ignoring non-finite %s threshold %r", axis, value)
            return False

        base = self.threshold or ThresholdPoint(cpm=0.0, intensity=0.0)
        self.set_threshold(base.with_value(axis, number))
        return True

    def clear_threshold(self) -> None:
        self.threshold = None
        logger.debug("Threshold cleared")

    # ------------------------------------------------------------------ #
    #  Hover
    # ------------------------------------------------------------------ #

    def set_hover(self, point: HoverPoint | None) -> None:
        self.hover = point

    # ------------------------------------------------------------------ #
    #  Zoom
    # ------------------------------------------------------------------ #

    def set_zoom(self, bounds: ZoomInput) -> bool:
        """Replace the zoom bounds; ``None`` restores the full data range.

        Mappings with ``cpm`` and ``intensity`` pairs are validated first.
        Invalid bounds are logged and rejected, keeping the previous value.
        """
        if bounds is None:
            self.zoom = None
            logger.debug("Zoom cleared")
            return True
        if not isinstance(bounds, ZoomBounds):
            try:
                bounds = ZoomBounds(cpm=bounds["cpm"], intensity=bounds["intensity"])
            except (KeyError, TypeError) as exc:
                logger.warning("Rejected zoom bounds %r: %s", bounds, exc)
                return False
            except ZoomValidationError as exc:
                logger.warning("Rejected zoom bounds: %s", exc)
                return False
        self.zoom = bounds
        logger.debug("Zoom set to cpm=%s intensity=%s", bounds.cpm, bounds.intensity)
        return True

    def set_zoom_text(self, cpm_text: str, intensity_text: str) -> bool:
        """Apply zoom bounds typed as ``"min-max"`` for both axes.

        Both ranges are applied or neither is.
        """
        try:
            bounds = ZoomBounds.from_text(cpm_text, intensity_text)
        except ZoomValidationError as exc:
            logger.warning("Rejected zoom input: %s", exc)
            return False
        return self.set_zoom(bounds)

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def reset_all(self) -> None:
        """Clear threshold, hover and zoom (new dataset loaded)."""
        self.threshold = None
        self.hover = None
        self.zoom = None
        logger.debug("Reference state reset")

    def snapshot(self) -> "ReferenceState":
        """Return an independent copy for a recomputation."""
        return dataclasses.replace(self)
