"""Tests for point classification and the metrics deriver."""

import math

import numpy as np
import pytest
from sklearn.metrics import confusion_matrix, matthews_corrcoef

from threshold_explorer import (
    METRIC_NAMES,
    ConfusionCounts,
    SampleStore,
    ThresholdPoint,
    classify,
    derive_metrics,
    quadrant_codes,
)


def test_one_sample_per_quadrant(quadrant_store):
    counts = classify(quadrant_store, ThresholdPoint(cpm=3, intensity=3))

    assert counts == ConfusionCounts(tp=1, fp=1, tn=1, fn=1)
    assert derive_metrics(counts).accuracy == 0.5


def test_threshold_below_everything_is_all_true_positive(quadrant_store):
    counts = classify(quadrant_store, ThresholdPoint(cpm=0, intensity=0))
    metrics = derive_metrics(counts)

    assert counts == ConfusionCounts(tp=4, fp=0, tn=0, fn=0)
    assert metrics.recall == 1.0
    assert metrics.specificity == 0.0


def test_empty_store_gives_zero_counts_and_finite_metrics(empty_store):
    counts = classify(empty_store, ThresholdPoint(cpm=1, intensity=1))
    metrics = derive_metrics(counts)

    assert counts == ConfusionCounts()
    assert metrics.accuracy == 0.0
    assert metrics.mcc == 0.0


def test_samples_on_the_threshold_line_count_as_below():
    store = SampleStore.from_records(
        [
            {"name": "on_both", "cpm": 3, "intensity": 3},
            {"name": "on_cpm", "cpm": 3, "intensity": 4},
            {"name": "on_int", "cpm": 4, "intensity": 3},
        ]
    )
    codes = quadrant_codes(store, ThresholdPoint(cpm=3, intensity=3))

    assert codes.tolist() == [3, 4, 2]


def test_counts_cover_every_sample(random_store):
    for cpm, intensity in [(0, 0), (5, 2), (12.5, 3.3), (1e6, 1e6)]:
        counts = classify(random_store, ThresholdPoint(cpm=cpm, intensity=intensity))
        assert counts.total == len(random_store)


def test_codes_agree_with_counts(random_store):
    threshold = ThresholdPoint(cpm=7.5, intensity=2.7)
    codes = quadrant_codes(random_store, threshold)
    counts = classify(random_store, threshold)

    assert np.count_nonzero(codes == 1) == counts.tp
    assert np.count_nonzero(codes == 2) == counts.fp
    assert np.count_nonzero(codes == 3) == counts.tn
    assert np.count_nonzero(codes == 4) == counts.fn


def test_counts_match_sklearn_confusion_matrix(random_store):
    threshold = ThresholdPoint(cpm=7.5, intensity=2.7)
    y_pred = random_store.values("cpm") > threshold.cpm
    y_true = random_store.values("intensity") > threshold.intensity

    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[False, True]).ravel()
    counts = classify(random_store, threshold)

    assert counts == ConfusionCounts(tp=tp, fp=fp, tn=tn, fn=fn)
    metrics = derive_metrics(counts)
    assert metrics.mcc == pytest.approx(matthews_corrcoef(y_true, y_pred))


def test_metric_formulas():
    metrics = derive_metrics(ConfusionCounts(tp=30, fp=10, tn=50, fn=10))

    assert metrics.accuracy == pytest.approx(0.8)
    assert metrics.precision == pytest.approx(0.75)
    assert metrics.recall == pytest.approx(0.75)
    assert metrics.specificity == pytest.approx(50 / 60)
    assert metrics.fpr == pytest.approx(10 / 60)
    assert metrics.fnr == pytest.approx(0.25)
    assert metrics.f1 == pytest.approx(0.75)
    expected_mcc = (30 * 50 - 10 * 10) / math.sqrt(40 * 40 * 60 * 60)
    assert metrics.mcc == pytest.approx(expected_mcc)


@pytest.mark.parametrize(
    "counts",
    [
        ConfusionCounts(),
        ConfusionCounts(tp=5),
        ConfusionCounts(fp=5),
        ConfusionCounts(tn=5),
        ConfusionCounts(fn=5),
        ConfusionCounts(tp=3, tn=2),
        ConfusionCounts(fp=3, fn=2),
        ConfusionCounts(tp=1, fp=0, tn=0, fn=7),
    ],
)
def test_degenerate_counts_stay_finite_and_in_range(counts):
    metrics = derive_metrics(counts)

    for name in METRIC_NAMES:
        value = getattr(metrics, name)
        assert math.isfinite(value), name
        if name == "mcc":
            assert -1.0 <= value <= 1.0
        else:
            assert 0.0 <= value <= 1.0, name


def test_perfect_and_inverted_classifiers_hit_mcc_bounds():
    assert derive_metrics(ConfusionCounts(tp=3, tn=2)).mcc == pytest.approx(1.0)
    assert derive_metrics(ConfusionCounts(fp=3, fn=2)).mcc == pytest.approx(-1.0)


def test_summary_formats_rates_as_percentages():
    text = derive_metrics(ConfusionCounts(tp=1, fp=1, tn=1, fn=1)).summary()

    assert "Accuracy: 50.00%" in text
    assert "F1 Score: 0.50" in text
    assert "MCC: 0.00" in text
    assert len(text.splitlines()) == len(METRIC_NAMES)


def test_classify_is_idempotent(random_store):
    threshold = ThresholdPoint(cpm=4, intensity=2)
    assert classify(random_store, threshold) == classify(random_store, threshold)
