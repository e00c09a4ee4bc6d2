"""
test_clauses.py
===============
Unit tests for clauses and the weighted clausal knowledge base.

Run with:  pytest tests/test_clauses.py -v
"""

import math
import pytest
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fuzzrules.clauses import ClausalKB, Clause


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rule():
    """b ∧ c → a"""
    return Clause({"a"}, {"b", "c"})


@pytest.fixture
def kb(rule):
    k = ClausalKB()
    k.tell(Clause({"a"}))                    # hard fact
    k.tell(rule, 2.5)
    k.tell(Clause(set(), {"a", "d"}), 1.0)   # query ¬a ∨ ¬d
    return k


# ---------------------------------------------------------------------------
# Clause
# ---------------------------------------------------------------------------

class TestClause:
    def test_kinds(self, rule):
        assert rule.is_rule() and rule.is_horn() and rule.is_definite()
        assert not rule.is_fact() and not rule.is_query()
        assert Clause({"a"}).is_fact()
        assert Clause(body={"a"}).is_query()
        assert not Clause({"a", "b"}).is_horn()

    def test_sizes(self, rule):
        assert (rule.size(), rule.head_size(), rule.body_size()) == (3, 1, 2)
        assert Clause().empty()
        assert Clause({"a"}, {"a"}).count("a") == 2

    def test_satisfied(self, rule):
        assert rule.satisfied({"a"})
        assert rule.satisfied({"b"})
        assert not rule.satisfied({"b", "c"})
        assert not Clause().satisfied({"a"})

    def test_edits(self, rule):
        assert rule.flip("b") == Clause({"a", "b"}, {"c"})
        assert rule.without("c") == Clause({"a"}, {"b"})
        assert rule.with_head("d").head == frozenset({"a", "d"})
        assert rule.with_body("a").is_tautology()

    def test_str(self, rule):
        assert str(rule) == "a ∨ ¬b ∨ ¬c"
        assert str(Clause()) == "□"


# ---------------------------------------------------------------------------
# Knowledge base
# ---------------------------------------------------------------------------

class TestClausalKB:
    def test_starts_empty(self):
        k = ClausalKB()
        assert k.size() == 0 and k.size_hard() == 0 and k.size_prob() == 0
        assert k.empty()

    def test_sizes(self, kb):
        assert (kb.size(), kb.size_hard(), kb.size_prob()) == (3, 1, 2)
        assert len(kb) == 3

    def test_tell_rejects(self, kb, rule):
        assert not kb.tell(rule, 1.0)
        assert not kb.tell(Clause({"x"}), 0.0)
        assert not kb.tell(Clause({"x"}), -1.0)
        assert not kb.tell(Clause({"x"}), float("nan"))
        assert kb.size() == 3

    def test_infinite_weight_is_hard(self):
        k = ClausalKB()
        assert k.tell(Clause({"x"}), math.inf)
        assert k.has_hard(Clause({"x"}))

    def test_weights(self, kb, rule):
        assert kb[rule] == 2.5
        assert kb.get_weight(Clause({"a"})) == math.inf
        assert kb[Clause({"zzz"})] == 0.0

    def test_untell(self, kb, rule):
        assert kb.untell(rule)
        assert not kb.has(rule)
        assert not kb.untell(rule)
        assert kb.untell(Clause({"a"}))
        assert kb.size() == 1

    def test_update(self, kb, rule):
        assert kb.update(rule, 4.0) and kb[rule] == 4.0
        assert not kb.update(rule, -1.0)
        assert not kb.update(rule, float("nan"))
        assert kb.update(rule, math.inf) and kb.has_hard(rule)
        q = Clause(set(), {"a", "d"})
        assert kb.update(q, 0.0) and not kb.has(q)
        assert not kb.update(Clause({"a"}), 1.0)

    def test_hard_prob_moves(self, kb, rule):
        assert kb.to_hard(rule) and kb.has_hard(rule)
        assert kb.to_prob(rule, 3.0) and kb[rule] == 3.0
        assert not kb.to_prob(rule, 1.0)
        assert not kb.to_prob(Clause({"a"}), 0.0)

    def test_listing(self, kb, rule):
        assert set(kb.hard_clauses()) == {Clause({"a"})}
        assert dict(kb.prob_clauses()) == {rule: 2.5, Clause(set(), {"a", "d"}): 1.0}
        kb.to_hard(rule)
        assert set(kb.hard_clauses()) == {Clause({"a"}), rule}
        assert rule not in dict(kb.prob_clauses())

    def test_cost(self, kb):
        assert kb.evaluate_hard({"a"})
        assert kb.cost({"a"}) == 0.0
        assert kb.cost({"a", "b", "c"}) == 0.0
        assert kb.cost({"a", "d"}) == pytest.approx(1.0)
        assert kb.cost({"b", "c"}) == math.inf
        assert not kb.evaluate_hard(set())
