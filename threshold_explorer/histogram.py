"""Binned sample counts for the marginal distribution sparklines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .config import DEFAULT_HISTOGRAM_BUCKETS
from .samples import SampleStore, check_axis
from .sweep import bucket_edges


@dataclass(frozen=True)
class HistogramBin:
    x0: float
    x1: float
    count: int

    @property
    def center(self) -> float:
        return (self.x0 + self.x1) / 2


def histogram(
    samples: SampleStore,
    axis: str,
    domain: Tuple[float, float],
    bucket_count: int = DEFAULT_HISTOGRAM_BUCKETS,
) -> List[HistogramBin]:
    """Count samples per equal-width bucket of *domain* along *axis*.

    Buckets are half-open ``[x0, x1)`` except the last, which is closed on the
    right.  Values outside *domain* and NaN are not counted.
    """
    values = samples.values(check_axis(axis))
    values = values[np.isfinite(values)]
    edges = bucket_edges(domain, bucket_count)
    lo, hi = edges[0], edges[-1]

    if lo == hi:
        # numpy widens a zero-width range, keep the requested edges instead
        counts = np.zeros(len(edges) - 1, dtype=np.int64)
        counts[-1] = int((values == lo).sum())
    else:
        counts, _ = np.histogram(values, bins=edges)

    return [
        HistogramBin(x0=float(edges[i]), x1=float(edges[i + 1]), count=int(counts[i]))
        for i in range(len(counts))
    ]
