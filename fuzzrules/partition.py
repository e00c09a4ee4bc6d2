"""
partition.py
============
Piecewise-linear membership functions and equally spaced fuzzy partitions.

Implements:
  - Slope    : linear ramp between two plateaus
  - Triangle : two slopes joined at an apex
  - make_triangles : n equally spaced sets covering [begin, end]
  - make_labels    : linguistic labels ("is low", "is average", ...)

Membership functions are small frozen dataclasses rather than closures so that
an interpretation can be pickled and shipped to worker processes.  They are
vectorised: a scalar input returns a float, an array returns an ndarray.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from typing import Callable, List, Tuple, Union

ArrayLike = Union[float, np.ndarray]
MembershipFunction = Callable[[ArrayLike], ArrayLike]


# ---------------------------------------------------------------------------
# Membership functions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Slope:
    """
    Linear ramp from ``before`` (x < begin) to ``after`` (x ≥ end).

        µ(x) = before · (1 - (x - begin)/L) + after · (1 - (end - x)/L),
        L = end - begin
    """
    begin: float
    end: float
    before: float
    after: float

    def __post_init__(self):
        if not self.end > self.begin:
            raise ValueError(f"Slope requires begin < end, got [{self.begin}, {self.end}]")

    def __call__(self, x: ArrayLike) -> ArrayLike:
        x = np.asarray(x, float)
        length = self.end - self.begin
        ramp = (self.before * (1.0 - (x - self.begin) / length)
                + self.after * (1.0 - (self.end - x) / length))
        out = np.where(x < self.begin, self.before,
                       np.where(x >= self.end, self.after, ramp))
        return float(out) if out.ndim == 0 else out


@dataclass(frozen=True)
class Triangle:
    """Two slopes meeting at ``apex``; flat outside [begin, end]."""
    begin: float
    apex: float
    end: float
    before: float
    apex_value: float
    after: float
    _left: Slope = field(init=False, repr=False, compare=False)
    _right: Slope = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not (self.begin < self.apex < self.end):
            raise ValueError(
                f"Triangle requires begin < apex < end, "
                f"got ({self.begin}, {self.apex}, {self.end})"
            )
        object.__setattr__(self, "_left",
                           Slope(self.begin, self.apex, self.before, self.apex_value))
        object.__setattr__(self, "_right",
                           Slope(self.apex, self.end, self.apex_value, self.after))

    def __call__(self, x: ArrayLike) -> ArrayLike:
        x = np.asarray(x, float)
        out = np.where(x < self.apex, self._left(x), self._right(x))
        return float(out) if out.ndim == 0 else out


def make_slope(begin: float, end: float, before: float, after: float) -> Slope:
    """Linear ramp: ``before`` left of ``begin``, ``after`` from ``end`` on."""
    return Slope(float(begin), float(end), float(before), float(after))


def make_triangle(begin: float, apex: float, end: float,
                  before: float, apex_value: float, after: float) -> Triangle:
    """Triangle with value ``apex_value`` at ``apex``."""
    return Triangle(float(begin), float(apex), float(end),
                    float(before), float(apex_value), float(after))


def make_triangles(n: int, begin: float, end: float,
                   floor: float = 0.0, ceil: float = 1.0) -> List[MembershipFunction]:
    """
    ``n`` equally spaced triangular sets covering [begin, end].

    Parameters
    ----------
    n : int
        Number of sets.  Fewer than two gives an empty list.
    begin, end : float
        Domain of the variable.
    floor, ceil : float
        Membership at the base and at the apex of every set.

    Returns
    -------
    list
        A descending slope, ``n - 2`` interior triangles and an ascending
        slope.  With step = (end - begin)/(n - 1), set i peaks at
        begin + i·step and reaches ``floor`` one step away on each side.
    """
    if n < 2:
        return []
    if not end > begin:
        raise ValueError(f"empty domain [{begin}, {end}]")
    step = (end - begin) / (n - 1)
    sets: List[MembershipFunction] = [make_slope(begin, begin + step, ceil, floor)]
    for i in range(n - 2):
        sets.append(make_triangle(begin + i * step,
                                  begin + (i + 1) * step,
                                  begin + (i + 2) * step,
                                  floor, ceil, floor))
    sets.append(make_slope(end - step, end, floor, ceil))
    return sets


_LABELS = {
    2: ["is low", "is high"],
    3: ["is low", "is average", "is high"],
    4: ["is very low", "is low", "is high", "is very high"],
    5: ["is very low", "is low", "is average", "is high", "is very high"],
    6: ["is very low", "is low", "is low-average",
        "is average-high", "is high", "is very high"],
    7: ["is very low", "is low", "is low-average", "is average",
        "is average-high", "is high", "is very high"],
}


def make_labels(n: int) -> List[str]:
    """
    Linguistic labels for an ``n``-set partition.

    Fixed wording up to seven sets; beyond that ``is low0``, ``is low1``, ...,
    an ``is average`` when ``n`` is odd, then ``is high0``, ``is high1``, ...
    """
    if n < 2:
        return []
    if n in _LABELS:
        return list(_LABELS[n])
    half = n // 2
    labels = [f"is low{i}" for i in range(half)]
    if n % 2 == 1:
        labels.append("is average")
    labels.extend(f"is high{i}" for i in range(half))
    return labels


# ---------------------------------------------------------------------------
# Partition container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FuzzyPartition:
    """
    Ordered membership functions of one input variable plus their labels.

    Parameters
    ----------
    name : str
        Display name of the partition.
    sets : sequence of callables
        Membership functions, one per fuzzy set.
    labels : sequence of str
        Linguistic label of each set, parallel to ``sets``.
    """
    name: str
    sets: Tuple[MembershipFunction, ...]
    labels: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "sets", tuple(self.sets))
        object.__setattr__(self, "labels", tuple(self.labels))
        if len(self.sets) != len(self.labels):
            raise ValueError(
                f"partition {self.name!r}: {len(self.sets)} sets but "
                f"{len(self.labels)} labels"
            )

    def __len__(self) -> int:
        return len(self.sets)

    def membership(self, set_id: int, x: ArrayLike) -> ArrayLike:
        """Degree of ``x`` in set ``set_id``."""
        return self.sets[set_id](x)

    def degrees(self, x: ArrayLike) -> np.ndarray:
        """Membership of ``x`` in every set, shape (n_sets,) + shape(x)."""
        return np.stack([np.asarray(f(x), float) for f in self.sets])


def make_partition(name: str, n: int, begin: float, end: float,
                   floor: float = 0.0, ceil: float = 1.0) -> FuzzyPartition:
    """``n`` triangular sets over [begin, end] with their default labels."""
    return FuzzyPartition(name, make_triangles(n, begin, end, floor, ceil), make_labels(n))
