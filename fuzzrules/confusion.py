"""
confusion.py
============
Confusion matrix over an arbitrary number of categories and the rates derived
from it.

Implements:
  - add_count / sub_count accumulation (cells never go negative, ids outside
    [0, dim) raise IndexError)
  - per-category tp / fp / fn / tn
  - accuracy, true skill statistic, precision, recall, specificity, F1

The matrix is indexed ``(predicted, observed)``.  Every rate whose denominator
is zero evaluates to ``nan``; nothing here raises on an empty matrix.

Reference
---------
Allouche, O., Tsoar, A. & Kadmon, R. (2006). Assessing the accuracy of species
distribution models: prevalence, kappa and the true skill statistic (TSS).
Journal of Applied Ecology, 43(6), 1223–1232.
"""

from __future__ import annotations

import numpy as np
from typing import Optional


def _ratio(num: float, den: float) -> float:
    """num / den, or nan when den is zero."""
    return float(num) / float(den) if den != 0 else float("nan")


class ConfusionMatrix:
    """
    Square count matrix indexed by (predicted, observed) category.

    Parameters
    ----------
    dim : int
        Number of categories (≥ 1).
    """

    def __init__(self, dim: int):
        if dim < 1:
            raise ValueError(f"dim must be ≥ 1, got {dim}")
        self._cells = np.zeros((dim, dim), dtype=np.int64)
        self._count = 0

    @classmethod
    def from_labels(cls, predicted, observed, dim: int) -> "ConfusionMatrix":
        """Accumulate parallel arrays of predicted and observed categories."""
        predicted = np.asarray(predicted, dtype=np.intp)
        observed = np.asarray(observed, dtype=np.intp)
        if predicted.shape != observed.shape:
            raise ValueError("predicted and observed must have the same shape")
        cm = cls(dim)
        if predicted.size and (min(predicted.min(), observed.min()) < 0
                               or max(predicted.max(), observed.max()) >= dim):
            raise IndexError(f"category ids must lie in [0, {dim})")
        np.add.at(cm._cells, (predicted, observed), 1)
        cm._count = int(predicted.size)
        return cm

    # -- accumulation -------------------------------------------------------

    def _check(self, predicted: int, observed: int) -> None:
        dim = self.dim
        if not (0 <= predicted < dim and 0 <= observed < dim):
            raise IndexError(f"cell ({predicted}, {observed}) outside a {dim}x{dim} matrix")

    def add_count(self, predicted: int, observed: int, n: int = 1) -> None:
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        self._check(predicted, observed)
        self._cells[predicted, observed] += n
        self._count += n

    def sub_count(self, predicted: int, observed: int, n: int = 1) -> None:
        """Remove up to ``n`` counts from a cell, clamping it at zero."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        self._check(predicted, observed)
        removed = min(int(self._cells[predicted, observed]), n)
        self._cells[predicted, observed] -= removed
        self._count -= removed

    # -- shape --------------------------------------------------------------

    @property
    def dim(self) -> int:
        return self._cells.shape[0]

    @property
    def count(self) -> int:
        return self._count

    def empty(self) -> bool:
        return self._count == 0

    def __getitem__(self, key) -> int:
        predicted, observed = key
        self._check(predicted, observed)
        return int(self._cells[predicted, observed])

    def as_array(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConfusionMatrix):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"ConfusionMatrix(dim={self.dim}, count={self._count})"

    def __str__(self) -> str:
        return str(self._cells)

    # -- per-category counts -----------------------------------------------

    def true_positives(self, c: int) -> int:
        return int(self._cells[c, c])

    def false_positives(self, c: int) -> int:
        """Predicted ``c`` but observed something else (row sum minus diagonal)."""
        return int(self._cells[c, :].sum() - self._cells[c, c])

    def false_negatives(self, c: int) -> int:
        """Observed ``c`` but predicted something else (column sum minus diagonal)."""
        return int(self._cells[:, c].sum() - self._cells[c, c])

    def true_negatives(self, c: int) -> int:
        return self._count - (self.false_positives(c) + self.false_negatives(c)
                              + self.true_positives(c))

    # -- rates --------------------------------------------------------------

    def accuracy(self, c: Optional[int] = None) -> float:
        """
        Overall accuracy, or the one-vs-rest accuracy of category ``c``.

            accuracy()  = trace / total
            accuracy(c) = (tp + tn) / total
        """
        if c is None:
            return _ratio(np.trace(self._cells), self._count)
        return _ratio(self.true_positives(c) + self.true_negatives(c), self._count)

    def tss(self, c: int) -> float:
        """
        True skill statistic of category ``c``.

            TSS = (tp·tn - fp·fn) / ((tp + fn)(fp + tn))

        Equal to sensitivity + specificity - 1; ranges over [-1, 1].
        """
        tp, tn = self.true_positives(c), self.true_negatives(c)
        fp, fn = self.false_positives(c), self.false_negatives(c)
        return _ratio(tp * tn - fp * fn, (tp + fn) * (fp + tn))

    def precision(self, c: int) -> float:
        tp = self.true_positives(c)
        return _ratio(tp, tp + self.false_positives(c))

    def recall(self, c: int) -> float:
        tp = self.true_positives(c)
        return _ratio(tp, tp + self.false_negatives(c))

    sensitivity = recall

    def specificity(self, c: int) -> float:
        tn = self.true_negatives(c)
        return _ratio(tn, tn + self.false_positives(c))

    def f1(self, c: int) -> float:
        tp = self.true_positives(c)
        return _ratio(2 * tp, 2 * tp + self.false_positives(c) + self.false_negatives(c))
