"""
test_sets.py
============
Unit tests for the ordered set/map operations and randomised recombination.

Run with:  pytest tests/test_sets.py -v
"""

import numpy as np
import pytest
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fuzzrules.sets import (
    set_union, set_intersection, set_difference,
    set_union_size, set_intersection_size, set_difference_size,
    set_empty_intersection, tanimoto, tanimoto_distance,
    set_intersection_split_union, map_intersection_split_union,
)


# ---------------------------------------------------------------------------
# Set algebra
# ---------------------------------------------------------------------------

class TestSetAlgebra:
    def test_against_builtin_sets(self):
        rng = np.random.default_rng(42)
        for _ in range(50):
            xs = set(rng.integers(0, 20, 8).tolist())
            ys = set(rng.integers(0, 20, 8).tolist())
            assert set_union(xs, ys) == sorted(xs | ys)
            assert set_intersection(xs, ys) == sorted(xs & ys)
            assert set_difference(xs, ys) == sorted(xs - ys)
            assert set_union_size(xs, ys) == len(xs | ys)
            assert set_intersection_size(xs, ys) == len(xs & ys)
            assert set_difference_size(xs, ys) == len(xs - ys)
            assert set_empty_intersection(xs, ys) == (not xs & ys)

    def test_duplicates_ignored(self):
        assert set_union([3, 1, 1], [1, 2]) == [1, 2, 3]

    def test_tanimoto(self):
        assert tanimoto([1, 2, 3], [2, 3, 4]) == pytest.approx(0.5)
        assert tanimoto([1], [1]) == 1.0
        assert tanimoto([], [1, 2]) == 0.0
        assert tanimoto_distance([1, 2], [3]) == 1.0


# ---------------------------------------------------------------------------
# Randomised recombination
# ---------------------------------------------------------------------------

class TestSplitUnion:
    def test_bounds(self):
        """Intersection ⊆ result ⊆ union, ascending."""
        rng = np.random.default_rng(42)
        xs, ys = [1, 2, 3, 5, 8], [2, 3, 4, 8, 9]
        for _ in range(100):
            out = set_intersection_split_union(xs, ys, rng)
            assert {2, 3, 8} <= set(out) <= {1, 2, 3, 4, 5, 8, 9}
            assert out == sorted(out)

    def test_exclusive_elements_half_the_time(self):
        rng = np.random.default_rng(42)
        hits = sum(1 in set_intersection_split_union([1, 2], [2], rng)
                   for _ in range(4000))
        assert hits / 4000 == pytest.approx(0.5, abs=0.04)

    def test_identical_inputs(self):
        rng = np.random.default_rng(0)
        assert set_intersection_split_union([1, 2, 3], [3, 2, 1], rng) == [1, 2, 3]

    def test_deterministic_given_seed(self):
        a = set_intersection_split_union(range(10), range(5, 15), np.random.default_rng(7))
        b = set_intersection_split_union(range(10), range(5, 15), np.random.default_rng(7))
        assert a == b


class TestMapSplitUnion:
    def test_shared_keys_always_kept(self):
        rng = np.random.default_rng(42)
        xs = {1: "a", 2: "b", 4: "d"}
        ys = {2: "B", 3: "C", 4: "D"}
        for _ in range(100):
            out = map_intersection_split_union(xs, ys, rng)
            assert {2, 4} <= set(out) <= {1, 2, 3, 4}
            assert out[2] in ("b", "B") and out[4] in ("d", "D")
            assert list(out) == sorted(out)
            if 1 in out:
                assert out[1] == "a"
            if 3 in out:
                assert out[3] == "C"

    def test_shared_value_from_either_parent(self):
        rng = np.random.default_rng(42)
        picks = [map_intersection_split_union({0: "x"}, {0: "y"}, rng)[0]
                 for _ in range(4000)]
        assert picks.count("x") / 4000 == pytest.approx(0.5, abs=0.04)

    def test_empty(self):
        rng = np.random.default_rng(0)
        assert map_intersection_split_union({}, {}, rng) == {}
