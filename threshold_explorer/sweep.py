"""Metric-vs-threshold curves along one axis.

For a primary axis the domain is cut into equal-width buckets ``[x0, x1)``.
Each bucket's lower edge ``x0`` acts as the threshold on the primary axis
while the orthogonal axis is held at a fixed reference value.  Note that the
sweep uses inclusive comparisons (``>=``), unlike the strict ``>`` of the
point classification in :mod:`.classification`.

Counting uses sorted primary values and :func:`numpy.searchsorted`, so a
curve costs ``O(n log n + buckets)`` rather than one scan per bucket.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd

from .classification import METRIC_NAMES, ConfusionCounts, MetricsVector, derive_metrics
from .config import DEFAULT_SWEEP_BUCKETS
from .samples import Axis, SampleStore, check_axis, other_axis


@dataclass(frozen=True)
class SweepPoint:
    """Counts and metrics with the threshold at the lower edge of a bucket."""

    x: float
    x0: float
    x1: float
    counts: ConfusionCounts
    metrics: MetricsVector


@dataclass(frozen=True)
class SweepCurve:
    """Ordered sweep results for one axis, ascending by bucket center."""

    axis: Axis
    fixed_value: float
    points: Tuple[SweepPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def xs(self) -> np.ndarray:
        return np.array([p.x for p in self.points], dtype=float)

    def series(self, metric: str) -> np.ndarray:
        """Values of *metric* along the curve."""
        if metric not in METRIC_NAMES:
            raise ValueError(f"Unknown metric '{metric}'. Choose one of {', '.join(METRIC_NAMES)}.")
        return np.array([getattr(p.metrics, metric) for p in self.points], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """One row per bucket with edges, counts and every metric."""
        rows = []
        for p in self.points:
            row = {"x": p.x, "x0": p.x0, "x1": p.x1}
            row.update(p.counts.as_dict())
            row.update(p.metrics.as_dict())
            rows.append(row)
        columns = ["x", "x0", "x1", "tp", "fp", "tn", "fn", *METRIC_NAMES]
        return pd.DataFrame(rows, columns=columns)


def bucket_edges(domain: Tuple[float, float], bucket_count: int) -> np.ndarray:
    """Return ``bucket_count + 1`` equally spaced edges over *domain*.

    A reversed domain is swapped; a zero-width domain gives identical edges.
    """
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be at least 1, got {bucket_count}")
    lo, hi = float(domain[0]), float(domain[1])
    if lo > hi:
        lo, hi = hi, lo
    return np.linspace(lo, hi, int(bucket_count) + 1)


def _count_below(sorted_values: np.ndarray, n_nan: int, edges: np.ndarray) -> np.ndarray:
    # NaN never satisfies ``value >= x0``, so it always counts as below
    return np.searchsorted(sorted_values, edges, side="left") + n_nan


def sweep(
    samples: SampleStore,
    axis: str,
    fixed_value: float,
    domain: Tuple[float, float],
    bucket_count: int = DEFAULT_SWEEP_BUCKETS,
) -> SweepCurve:
    """Sweep the threshold along *axis* with the other axis fixed.

    Parameters
    ----------
    samples : SampleStore
        The active subset.
    axis : str
        ``"cpm"`` or ``"intensity"``, the axis being swept.
    fixed_value : float
        Reference value of the orthogonal axis.
    domain : (float, float)
        Range to cut into buckets.
    bucket_count : int
        Number of buckets.

    Returns
    -------
    SweepCurve
        With ``x0`` the bucket's lower edge and ``v`` the orthogonal value,
        a sample is TP if ``primary >= x0`` and ``v >= fixed_value``, FP if
        ``primary >= x0`` and ``v < fixed_value``, FN if ``primary < x0`` and
        ``v >= fixed_value``, TN otherwise.
    """
    axis = check_axis(axis)
    edges = bucket_edges(domain, bucket_count)
    lower = edges[:-1]

    primary = samples.values(axis)
    secondary = samples.values(other_axis(axis))
    positive = secondary >= fixed_value

    pos_values = primary[positive]
    neg_values = primary[~positive]
    pos_nan = int(np.isnan(pos_values).sum())
    neg_nan = int(np.isnan(neg_values).sum())
    pos_sorted = np.sort(pos_values[~np.isnan(pos_values)])
    neg_sorted = np.sort(neg_values[~np.isnan(neg_values)])

    fn = _count_below(pos_sorted, pos_nan, lower)
    tp = len(pos_values) - fn
    tn = _count_below(neg_sorted, neg_nan, lower)
    fp = len(neg_values) - tn

    points = []
    for i in range(len(lower)):
        counts = ConfusionCounts(tp=int(tp[i]), fp=int(fp[i]), tn=int(tn[i]), fn=int(fn[i]))
        x0, x1 = float(edges[i]), float(edges[i + 1])
        points.append(
            SweepPoint(
                x=(x0 + x1) / 2,
                x0=x0,
                x1=x1,
                counts=counts,
                metrics=derive_metrics(counts),
            )
        )
    return SweepCurve(axis=axis, fixed_value=float(fixed_value), points=tuple(points))
