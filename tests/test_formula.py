"""
test_formula.py
===============
Unit tests for formula trees: rendering, rewriting and evaluation.

Run with:  pytest tests/test_formula.py -v
"""

import pytest
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fuzzrules.formula import (
    Atom, Binary, BinaryKind, Quantifier, QuantifierKind, Unary, UnaryKind,
    atoms, delta, eliminate_double_negation, equiv, evaluate, show, weak_and, weak_or,
)
from fuzzrules.truth import Boolean, Godel, Lukasiewicz, Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def abc():
    return Atom("a"), Atom("b"), Atom("c")


# ---------------------------------------------------------------------------
# Construction and rendering
# ---------------------------------------------------------------------------

class TestShow:
    def test_operators(self, abc):
        a, b, c = abc
        assert str(~a) == "¬a"
        assert str(a & b) == "a ⊗ b"
        assert str(a | b) == "a ⊕ b"
        assert str(a >> b) == "a ⇒ b"
        assert str(a ^ b) == "a ⊻ b"
        assert str(weak_and(a, b)) == "a ∧ b"
        assert str(weak_or(a, b)) == "a ∨ b"
        assert str(equiv(a, b)) == "a ⇔ b"
        assert str(delta(a)) == "Δa"

    def test_minimal_parentheses(self, abc):
        a, b, c = abc
        assert show((a & b) | c) == "a ⊗ b ⊕ c"
        assert show(a & (b | c)) == "a ⊗ (b ⊕ c)"
        assert show(~(a & b)) == "¬(a ⊗ b)"
        assert show(a >> (b >> c)) == "a ⇒ (b ⇒ c)"
        assert show((a >> b) >> c) == "a ⇒ b ⇒ c"
        assert show(~~a) == "¬¬a"

    def test_quantifier(self, abc):
        a, b, _ = abc
        q = Quantifier("x", a & b, QuantifierKind.EXISTENTIAL)
        assert show(q) == "∃ x: a ⊗ b"
        assert show(~q) == "¬(∃ x: a ⊗ b)"
        assert show(Quantifier("x", a, QuantifierKind.UNIQUE)) == "∃! x: a"

    def test_hashable(self, abc):
        a, b, _ = abc
        assert len({a & b, Atom("a") & Atom("b"), a | b}) == 2

    def test_atoms(self, abc):
        a, b, c = abc
        assert atoms((a & b) >> ~a) == frozenset({"a", "b"})


# ---------------------------------------------------------------------------
# Rewriting
# ---------------------------------------------------------------------------

class TestDoubleNegation:
    def test_removes_pairs(self, abc):
        a, b, _ = abc
        assert eliminate_double_negation(~~a) == a
        assert eliminate_double_negation(~~~a) == ~a
        assert eliminate_double_negation(~~(a & ~~b)) == a & b

    def test_keeps_delta(self, abc):
        a, _, _ = abc
        f = ~delta(~a)
        assert eliminate_double_negation(f) == f

    def test_inside_quantifier(self, abc):
        a, _, _ = abc
        q = Quantifier("x", ~~a)
        assert eliminate_double_negation(q) == Quantifier("x", a)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_lukasiewicz(self, abc):
        a, b, _ = abc
        v = {"a": 0.6, "b": 0.7}
        assert evaluate(a & b, v, Lukasiewicz) == pytest.approx(0.3)
        assert evaluate(a >> b, v, Lukasiewicz) == 1.0
        assert evaluate(a ^ b, v, Lukasiewicz) == pytest.approx(0.1)
        assert evaluate(~(a | b), v, Lukasiewicz) == 0.0

    def test_godel_and_product(self, abc):
        a, b, _ = abc
        v = {"a": 0.8, "b": 0.4}
        assert evaluate(a >> b, v, Godel) == pytest.approx(0.4)
        assert evaluate(a >> b, v, Product) == pytest.approx(0.5)
        assert evaluate(weak_or(a, b), v, Product) == pytest.approx(0.8)

    def test_delta(self, abc):
        a, _, _ = abc
        assert evaluate(delta(a), {"a": 1.0}, Lukasiewicz) == 1.0
        assert evaluate(delta(a), {"a": 0.99}, Lukasiewicz) == 0.0

    def test_boolean_tautology(self, abc):
        a, b, _ = abc
        f = (a & (a >> b)) >> b
        for x in (0.0, 1.0):
            for y in (0.0, 1.0):
                assert evaluate(f, {"a": x, "b": y}, Boolean) == 1.0

    def test_missing_atom(self, abc):
        a, b, _ = abc
        with pytest.raises(KeyError):
            evaluate(a & b, {"a": 1.0}, Lukasiewicz)

    def test_quantifier_rejected(self, abc):
        a, _, _ = abc
        with pytest.raises(ValueError):
            evaluate(Quantifier("x", a), {"a": 1.0}, Lukasiewicz)
