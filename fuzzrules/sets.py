"""
sets.py
=======
Merge-based operations on ordered sets and maps.

Implements:
  - set_union / set_intersection / set_difference and their ``_size`` variants
  - set_empty_intersection, tanimoto, tanimoto_distance
  - set_intersection_split_union : keep the intersection, each other element
    with probability 1/2
  - map_intersection_split_union : same over map keys; a shared key takes its
    value from either map with probability 1/2

Inputs are iterables of mutually comparable elements (duplicates ignored);
set results are ascending lists and map results are dicts in ascending key
order.  Every operation is a single linear merge over the sorted inputs.
"""

from __future__ import annotations

import numpy as np
from typing import Dict, Iterable, List, Mapping, Tuple, TypeVar

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def _ordered(xs: Iterable[T]) -> List[T]:
    return sorted(set(xs))


# ---------------------------------------------------------------------------
# Set algebra
# ---------------------------------------------------------------------------

def set_union(xs: Iterable[T], ys: Iterable[T]) -> List[T]:
    xs, ys = _ordered(xs), _ordered(ys)
    out: List[T] = []
    i = j = 0
    while i < len(xs) and j < len(ys):
        if xs[i] < ys[j]:
            out.append(xs[i])
            i += 1
        elif ys[j] < xs[i]:
            out.append(ys[j])
            j += 1
        else:
            out.append(xs[i])
            i += 1
            j += 1
    out.extend(xs[i:])
    out.extend(ys[j:])
    return out


def set_intersection(xs: Iterable[T], ys: Iterable[T]) -> List[T]:
    xs, ys = _ordered(xs), _ordered(ys)
    out: List[T] = []
    i = j = 0
    while i < len(xs) and j < len(ys):
        if xs[i] < ys[j]:
            i += 1
        elif ys[j] < xs[i]:
            j += 1
        else:
            out.append(xs[i])
            i += 1
            j += 1
    return out


def set_difference(xs: Iterable[T], ys: Iterable[T]) -> List[T]:
    """Elements of ``xs`` not in ``ys``."""
    xs, ys = _ordered(xs), _ordered(ys)
    out: List[T] = []
    i = j = 0
    while i < len(xs) and j < len(ys):
        if xs[i] < ys[j]:
            out.append(xs[i])
            i += 1
        elif ys[j] < xs[i]:
            j += 1
        else:
            i += 1
            j += 1
    out.extend(xs[i:])
    return out


def set_union_size(xs: Iterable[T], ys: Iterable[T]) -> int:
    return len(set_union(xs, ys))


def set_intersection_size(xs: Iterable[T], ys: Iterable[T]) -> int:
    return len(set_intersection(xs, ys))


def set_difference_size(xs: Iterable[T], ys: Iterable[T]) -> int:
    return len(set_difference(xs, ys))


def set_empty_intersection(xs: Iterable[T], ys: Iterable[T]) -> bool:
    return set_intersection_size(xs, ys) == 0


def tanimoto(xs: Iterable[T], ys: Iterable[T]) -> float:
    """
    Tanimoto (Jaccard) similarity |X ∩ Y| / |X ∪ Y|.

    Zero when either set is empty.
    """
    xs, ys = _ordered(xs), _ordered(ys)
    if not xs or not ys:
        return 0.0
    inter = set_intersection_size(xs, ys)
    return inter / (len(xs) + len(ys) - inter)


def tanimoto_distance(xs: Iterable[T], ys: Iterable[T]) -> float:
    return 1.0 - tanimoto(xs, ys)


# ---------------------------------------------------------------------------
# Randomised recombination
# ---------------------------------------------------------------------------

def set_intersection_split_union(xs: Iterable[T], ys: Iterable[T],
                                 rng: np.random.Generator) -> List[T]:
    """
    Intersection of ``xs`` and ``ys`` plus each element found in only one of
    them with independent probability 1/2.
    """
    xs, ys = _ordered(xs), _ordered(ys)
    out: List[T] = []
    i = j = 0
    while i < len(xs) and j < len(ys):
        if xs[i] < ys[j]:
            if rng.random() < 0.5:
                out.append(xs[i])
            i += 1
        elif ys[j] < xs[i]:
            if rng.random() < 0.5:
                out.append(ys[j])
            j += 1
        else:
            out.append(xs[i])
            i += 1
            j += 1
    for x in xs[i:]:
        if rng.random() < 0.5:
            out.append(x)
    for y in ys[j:]:
        if rng.random() < 0.5:
            out.append(y)
    return sorted(out)


def map_intersection_split_union(xs: Mapping[K, V], ys: Mapping[K, V],
                                 rng: np.random.Generator) -> Dict[K, V]:
    """
    Randomised union of two maps.

    Parameters
    ----------
    xs, ys : mapping
        Parent maps with mutually comparable keys.
    rng : np.random.Generator
        Source of the coin flips.

    Returns
    -------
    dict
        Every key present in both parents, valued from ``xs`` or ``ys`` with
        probability 1/2 each, plus every key present in only one parent with
        independent probability 1/2.  Keys are in ascending order.
    """
    xs_items: List[Tuple[K, V]] = sorted(xs.items(), key=lambda kv: kv[0])
    ys_items: List[Tuple[K, V]] = sorted(ys.items(), key=lambda kv: kv[0])
    out: Dict[K, V] = {}
    i = j = 0
    while i < len(xs_items) and j < len(ys_items):
        kx, vx = xs_items[i]
        ky, vy = ys_items[j]
        if kx < ky:
            if rng.random() < 0.5:
                out[kx] = vx
            i += 1
        elif ky < kx:
            if rng.random() < 0.5:
                out[ky] = vy
            j += 1
        else:
            out[kx] = vx if rng.random() < 0.5 else vy
            i += 1
            j += 1
    for k, v in xs_items[i:]:
        if rng.random() < 0.5:
            out[k] = v
    for k, v in ys_items[j:]:
        if rng.random() < 0.5:
            out[k] = v
    return dict(sorted(out.items(), key=lambda kv: kv[0]))
