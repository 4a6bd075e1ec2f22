"""Point classification against a threshold and the derived metrics."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np

from .config import QUADRANT_CODES
from .samples import SampleStore

METRIC_NAMES = (
    "accuracy",
    "precision",
    "recall",
    "specificity",
    "fpr",
    "fnr",
    "f1",
    "mcc",
)

METRIC_LABELS = {
    "accuracy": "Accuracy",
    "precision": "Precision",
    "recall": "Recall (TPR)",
    "specificity": "Specificity (TNR)",
    "fpr": "False Positive Rate",
    "fnr": "False Negative Rate",
    "f1": "F1 Score",
    "mcc": "MCC",
}

# Metrics shown as a percentage; the rest as a plain two-decimal number
_PERCENT_METRICS = frozenset({"accuracy", "precision", "recall", "specificity", "fpr", "fnr"})


@dataclass(frozen=True)
class ConfusionCounts:
    """Aggregate quadrant counts of a binary classification."""

    tp: int = 0
    fp: int = 0
    tn: int = 0
    fn: int = 0

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class MetricsVector:
    """Rates derived from :class:`ConfusionCounts`.

    Every rate lies in ``[0, 1]``; ``mcc`` lies in ``[-1, 1]``.
    """

    accuracy: float = 0.0
    precision: float = 0.0
    recall: float = 0.0
    specificity: float = 0.0
    fpr: float = 0.0
    fnr: float = 0.0
    f1: float = 0.0
    mcc: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def summary(self) -> str:
        """Return the metrics panel text, one metric per line."""
        lines = []
        for name in METRIC_NAMES:
            value = getattr(self, name)
            if name in _PERCENT_METRICS:
                lines.append(f"{METRIC_LABELS[name]}: {value * 100:.2f}%")
            else:
                lines.append(f"{METRIC_LABELS[name]}: {value:.2f}")
        return "\n".join(lines)


def quadrant_codes(samples: SampleStore, threshold) -> np.ndarray:
    """Per-sample quadrant code relative to *threshold*, in store order.

    ``1`` = TP (both above), ``2`` = FP (cpm above only), ``3`` = TN,
    ``4`` = FN (intensity above only).  "Above" is strict, so a sample
    lying on a threshold line counts as below it.
    """
    cpm_above = samples.values("cpm") > threshold.cpm
    int_above = samples.values("intensity") > threshold.intensity

    codes = np.full(len(samples), QUADRANT_CODES["tn"], dtype=np.int64)
    codes[cpm_above & int_above] = QUADRANT_CODES["tp"]
    codes[cpm_above & ~int_above] = QUADRANT_CODES["fp"]
    codes[~cpm_above & int_above] = QUADRANT_CODES["fn"]
    return codes


def classify(samples: SampleStore, threshold) -> ConfusionCounts:
    """Count the samples in each quadrant of *threshold*.

    An empty store yields all-zero counts.
    """
    tally = np.bincount(quadrant_codes(samples, threshold), minlength=5)
    return ConfusionCounts(
        tp=int(tally[QUADRANT_CODES["tp"]]),
        fp=int(tally[QUADRANT_CODES["fp"]]),
        tn=int(tally[QUADRANT_CODES["tn"]]),
        fn=int(tally[QUADRANT_CODES["fn"]]),
    )


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def derive_metrics(counts: ConfusionCounts) -> MetricsVector:
    """Map confusion counts to the metrics vector.

    A ratio whose denominator is zero is ``0``.  For MCC the square-root
    argument is floored to ``1`` when it is zero, which makes MCC ``0``
    whenever a row or column of the matrix is empty.
    """
    tp, fp, tn, fn = int(counts.tp), int(counts.fp), int(counts.tn), int(counts.fn)

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    mcc_denominator = (tp + fp) * (tp + fn) * (tn + fp) * (tn + fn)
    if mcc_denominator == 0:
        mcc_denominator = 1
    mcc = (tp * tn - fp * fn) / math.sqrt(mcc_denominator)

    return MetricsVector(
        accuracy=_ratio(tp + tn, tp + fp + tn + fn),
        precision=precision,
        recall=recall,
        specificity=_ratio(tn, tn + fp),
        fpr=_ratio(fp, fp + tn),
        fnr=_ratio(fn, tp + fn),
        f1=_ratio(2 * precision * recall, precision + recall),
        # float rounding can push a perfect score a hair past 1
        mcc=min(1.0, max(-1.0, mcc)),
    )
