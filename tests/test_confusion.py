"""
test_confusion.py
=================
Unit tests for the confusion matrix and its derived rates.

Run with:  pytest tests/test_confusion.py -v
"""

import math
import numpy as np
import pytest
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fuzzrules.confusion import ConfusionMatrix


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def binary_cm():
    """50 / 5 / 10 / 100 after a few clamped removals."""
    cm = ConfusionMatrix(2)
    cm.add_count(0, 0, 50)
    for _ in range(5):
        cm.add_count(0, 1)
    cm.add_count(1, 0, 100)
    cm.sub_count(1, 0, 100000)
    cm.sub_count(1, 0, 100000)
    cm.add_count(1, 0, 10)
    cm.add_count(1, 1, 100)
    return cm


# ---------------------------------------------------------------------------
# Accumulation
# ---------------------------------------------------------------------------

class TestAccumulation:
    def test_counts(self, binary_cm):
        cm = binary_cm
        assert cm.count == 165
        assert cm[0, 0] == 50 and cm[0, 1] == 5
        assert cm[1, 0] == 10 and cm[1, 1] == 100

    def test_sub_clamps_at_zero(self):
        cm = ConfusionMatrix(3)
        cm.add_count(2, 1, 4)
        cm.sub_count(2, 1, 10)
        assert cm[2, 1] == 0
        assert cm.count == 0
        assert cm.empty()

    def test_negative_n(self):
        cm = ConfusionMatrix(2)
        with pytest.raises(ValueError):
            cm.add_count(0, 0, -1)

    def test_invalid_dim(self):
        with pytest.raises(ValueError):
            ConfusionMatrix(0)

    def test_ids_out_of_range(self):
        cm = ConfusionMatrix(2)
        with pytest.raises(IndexError):
            cm.add_count(-1, 0)
        with pytest.raises(IndexError):
            cm.sub_count(0, 2)
        with pytest.raises(IndexError):
            cm[1, -1]
        assert cm.empty() and not cm.as_array().any()

    def test_from_labels_rejects_negative_ids(self):
        with pytest.raises(IndexError):
            ConfusionMatrix.from_labels([-1, 0], [0, 0], 2)
        with pytest.raises(IndexError):
            ConfusionMatrix.from_labels([0], [3], 2)
        assert ConfusionMatrix.from_labels([], [], 2).empty()

    def test_from_labels_matches_add_count(self):
        rng = np.random.default_rng(42)
        pred = rng.integers(0, 3, 200)
        obs = rng.integers(0, 3, 200)
        cm = ConfusionMatrix(3)
        for p, o in zip(pred, obs):
            cm.add_count(int(p), int(o))
        assert ConfusionMatrix.from_labels(pred, obs, 3) == cm
        assert ConfusionMatrix.from_labels(pred, obs, 3).count == 200


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

class TestRates:
    def test_per_category(self, binary_cm):
        cm = binary_cm
        assert cm.true_positives(1) == 100
        assert cm.false_positives(1) == 10
        assert cm.false_negatives(1) == 5
        assert cm.true_negatives(1) == 50
        assert cm.true_positives(0) == 50
        assert cm.false_positives(0) == 5

    def test_accuracy(self, binary_cm):
        assert binary_cm.accuracy() == pytest.approx(150 / 165)
        assert binary_cm.accuracy(1) == pytest.approx(150 / 165)

    def test_tss(self, binary_cm):
        cm = binary_cm
        expected = (100 * 50 - 10 * 5) / (105 * 60)
        assert cm.tss(1) == pytest.approx(expected)
        assert cm.tss(1) == pytest.approx(cm.sensitivity(1) + cm.specificity(1) - 1)

    def test_precision_recall_f1(self, binary_cm):
        cm = binary_cm
        assert cm.precision(1) == pytest.approx(100 / 110)
        assert cm.recall(1) == pytest.approx(100 / 105)
        assert cm.f1(1) == pytest.approx(200 / 215)

    def test_perfect_classifier(self):
        cm = ConfusionMatrix.from_labels([0, 0, 1, 1], [0, 0, 1, 1], 2)
        assert cm.tss(1) == pytest.approx(1.0)
        assert cm.accuracy() == 1.0

    def test_empty_is_nan(self):
        cm = ConfusionMatrix(2)
        assert math.isnan(cm.accuracy())
        assert math.isnan(cm.tss(1))
        assert math.isnan(cm.precision(0))

    def test_single_class_tss_is_nan(self):
        """No observed negatives: the TSS denominator vanishes."""
        cm = ConfusionMatrix.from_labels([1, 0, 1], [1, 1, 1], 2)
        assert math.isnan(cm.tss(1))
