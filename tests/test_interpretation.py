"""
test_interpretation.py
======================
Unit tests for the shared classifier vocabulary and dataset fuzzification.

Run with:  pytest tests/test_interpretation.py -v
"""

import numpy as np
import pytest
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fuzzrules.data import TabularData
from fuzzrules.interpretation import Interpretation
from fuzzrules.partition import make_partition
from fuzzrules.truth import Godel, Lukasiewicz


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def interp():
    it = Interpretation(["Small", "Large"], "Gödel")
    it.add_triangular_sets("x", 3)
    it.add_triangular_sets("y", 2, 0.0, 10.0)
    return it


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_vocabulary(self, interp):
        assert interp.logic is Godel
        assert interp.num_inputs() == 2
        assert interp.input_names == ("x", "y")
        assert interp.num_partitions(0) == 3
        assert interp.num_partitions(1) == 2
        assert interp.partition_name(0) == "3 triangles"
        assert interp.label(0, 1) == "is average"
        assert interp.category_name(1) == "Large"
        assert interp.membership(1, 1, 5.0) == pytest.approx(0.5)

    def test_default_logic(self):
        assert Interpretation(["a"]).logic is Lukasiewicz

    def test_rejects_boolean(self):
        with pytest.raises(ValueError):
            Interpretation(["a", "b"], "Boolean")

    def test_rejects_no_categories(self):
        with pytest.raises(ValueError):
            Interpretation([])

    def test_rejects_single_set(self, interp):
        with pytest.raises(ValueError):
            interp.add_triangular_sets("z", 1)

    def test_frozen(self, interp):
        assert interp.freeze() is interp and interp.frozen
        with pytest.raises(RuntimeError):
            interp.add_partition("z", make_partition("z", 2, 0.0, 1.0))


class TestBodyMassPartition:
    def test_three_triangles(self):
        it = Interpretation(["a", "b"], "Łukasiewicz")
        it.add_triangular_sets("BodyMass", 3, 0.0, 500.0)
        assert it.membership(0, 0, 0.0) == 1.0
        assert it.membership(0, 0, 125.0) == pytest.approx(0.5)
        assert it.membership(0, 0, 250.0) == 0.0
        assert it.membership(0, 1, 0.0) == 0.0
        assert it.membership(0, 1, 250.0) == 1.0
        assert it.membership(0, 1, 500.0) == 0.0


class TestCheckRule:
    def test_valid(self, interp):
        interp.check_rule(((0, 2), (1, 1)), 1)

    @pytest.mark.parametrize("antecedent,category", [
        (((0, 3),), 0),
        (((2, 0),), 0),
        (((0, 0),), 2),
        (((-1, 0),), 0),
    ])
    def test_out_of_range(self, interp, antecedent, category):
        with pytest.raises(IndexError):
            interp.check_rule(antecedent, category)


# ---------------------------------------------------------------------------
# Fuzzification
# ---------------------------------------------------------------------------

class TestFuzzify:
    def test_shapes_and_values(self, interp):
        data = TabularData(np.array([[0.0, 0.0], [0.25, 10.0], [1.0, 2.5]]),
                           [0, 1, 1], ("x", "y"))
        f = interp.fuzzify(data)
        assert f.nrows == 3
        assert f.degrees[0].shape == (3, 3)
        assert f.degrees[1].shape == (2, 3)
        assert np.allclose(f.degrees[0][:, 1], [0.5, 0.5, 0.0])
        assert np.allclose(f.degrees[1][:, 2], [0.75, 0.25])
        assert np.array_equal(f.y, [0, 1, 1])

    def test_too_few_columns(self, interp):
        data = TabularData(np.zeros((2, 1)), [0, 1], ("x",))
        with pytest.raises(ValueError):
            interp.fuzzify(data)

    def test_str(self, interp):
        text = str(interp)
        assert "0: x [3 triangles: is low, is average, is high]" in text
        assert "Logic: Gödel-Dummett" in text
