"""
classifier.py
=============
Fuzzy rule-based classifier.

A classifier is a set of rules ``IF x_i is A_ij AND ... THEN category`` over a
shared ``Interpretation``.  Rules are stored as a map antecedent → category, so
adding a rule whose antecedent is already present overwrites its category.

Implements:
  - rule store : add / remove / query, uniform random sampling
  - evaluate   : strong conjunction of literal memberships per rule, weak
                 disjunction (max) per category, index of the maximum
  - evaluate_all / predict : the same decision for a whole dataset, vectorised
                 over rows
  - complexity : Σ (|antecedent| + 1)
  - human-readable rule listing
"""

from __future__ import annotations

import bisect
import numpy as np
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from .confusion import ConfusionMatrix
from .data import TabularData
from .interpretation import FuzzifiedData, Interpretation

Antecedent = Tuple[Tuple[int, int], ...]
AntecedentLike = Union[Antecedent, Mapping[int, int], Iterable[Tuple[int, int]]]


class Rule(NamedTuple):
    antecedent: Antecedent
    category: int


# Returned when sampling from an empty classifier; check ``rule.antecedent``.
EMPTY_RULE = Rule((), 0)


def make_antecedent(literals: AntecedentLike) -> Antecedent:
    """
    Canonical antecedent: (variable, fuzzy set) pairs sorted by variable.

    ``literals`` is a mapping variable → set or an iterable of pairs; when a
    variable appears twice in an iterable, the last pair wins.
    """
    items = literals.items() if isinstance(literals, Mapping) else literals
    by_var: Dict[int, int] = {}
    for var, s in items:
        by_var[int(var)] = int(s)
    return tuple(sorted(by_var.items()))


class Classifier:
    """
    Map from antecedents to categories bound to one ``Interpretation``.

    Parameters
    ----------
    interpretation : Interpretation
        Shared vocabulary; frozen by this constructor.
    rules : mapping or iterable of (antecedent, category), optional
        Initial rules, inserted with ``add_rule``.
    """

    def __init__(self, interpretation: Interpretation,
                 rules: Optional[Union[Mapping, Iterable[Tuple[AntecedentLike, int]]]] = None):
        self._i = interpretation.freeze()
        self._rules: Dict[Antecedent, int] = {}
        self._keys: List[Antecedent] = []   # sorted antecedents
        items = rules.items() if isinstance(rules, Mapping) else (rules or ())
        for antecedent, category in items:
            self.add_rule(antecedent, category)

    # -- rule store ---------------------------------------------------------

    def add_rule(self, antecedent: AntecedentLike, category: int) -> bool:
        """
        Insert a rule, overwriting the category of an existing antecedent.

        Returns False (and leaves the classifier unchanged) for an empty
        antecedent.

        Raises
        ------
        IndexError
            If a variable, fuzzy set or category id is outside the
            interpretation.
        """
        a = make_antecedent(antecedent)
        if not a:
            return False
        category = int(category)
        self._i.check_rule(a, category)
        if a not in self._rules:
            bisect.insort(self._keys, a)
        self._rules[a] = category
        return True

    def rmv_rule(self, antecedent: AntecedentLike) -> bool:
        """Remove the rule with this antecedent; return whether one was present."""
        a = make_antecedent(antecedent)
        if a not in self._rules:
            return False
        del self._rules[a]
        del self._keys[bisect.bisect_left(self._keys, a)]
        return True

    def has_antecedent(self, antecedent: AntecedentLike) -> bool:
        return make_antecedent(antecedent) in self._rules

    def has_rule(self, antecedent: AntecedentLike, category: int) -> bool:
        return self._rules.get(make_antecedent(antecedent)) == category

    def category(self, antecedent: AntecedentLike) -> Optional[int]:
        return self._rules.get(make_antecedent(antecedent))

    def get_random_rule(self, rng: np.random.Generator) -> Rule:
        """Uniformly sampled rule, or ``EMPTY_RULE`` when there is none."""
        if not self._keys:
            return EMPTY_RULE
        a = self._keys[int(rng.integers(len(self._keys)))]
        return Rule(a, self._rules[a])

    def pop_random_rule(self, rng: np.random.Generator) -> Rule:
        """Like ``get_random_rule`` but removes the rule."""
        if not self._keys:
            return EMPTY_RULE
        a = self._keys.pop(int(rng.integers(len(self._keys))))
        return Rule(a, self._rules.pop(a))

    # -- size ---------------------------------------------------------------

    def empty(self) -> bool:
        return not self._rules

    def size(self) -> int:
        return len(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def complexity(self) -> int:
        """Σ over rules of (number of literals + 1)."""
        return sum(len(a) + 1 for a in self._rules)

    def __iter__(self) -> Iterator[Rule]:
        """Rules in ascending antecedent order."""
        return iter([Rule(a, self._rules[a]) for a in self._keys])

    def rules(self) -> Dict[Antecedent, int]:
        return {a: self._rules[a] for a in self._keys}

    @property
    def interpretation(self) -> Interpretation:
        return self._i

    def copy(self) -> "Classifier":
        """Independent rule set over the same interpretation."""
        other = Classifier(self._i)
        other._rules = dict(self._rules)
        other._keys = list(self._keys)
        return other

    def signature(self) -> Tuple[Rule, ...]:
        """Rules as a hashable tuple, comparable across interpretation copies."""
        return tuple(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Classifier):
            return NotImplemented
        return self._i is other._i and self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self.signature())

    # -- evaluation ---------------------------------------------------------

    def evaluate(self, row) -> int:
        """
        Predict the category of one input vector.

        Each rule's activation is the strong conjunction, starting from the
        unit truth value, of the memberships of its literals.  A category's
        truth is the weak disjunction of the activations of its rules,
        starting from zero.  The first category with the largest truth wins.
        """
        logic = self._i.logic
        truths = [logic.truth(logic.zero)] * self._i.num_categories()
        for a, c in self._rules.items():
            activation = logic.truth(logic.unit)
            for var, s in a:
                degree = logic.truth(self._i.membership(var, s, row[var]))
                activation = activation.strong_and(degree)
            truths[c] = truths[c].weak_or(activation)
        best = 0
        for c in range(1, len(truths)):
            if truths[best] < truths[c]:
                best = c
        return best

    def activations(self, data: Union[TabularData, FuzzifiedData]) -> np.ndarray:
        """(n_categories, n_rows) aggregated truth of every category."""
        f = self._fuzzified(data)
        logic = self._i.logic
        n = f.nrows
        acc = np.full((self._i.num_categories(), n), logic.zero)
        for a, c in self._rules.items():
            activation = np.full(n, logic.unit)
            for var, s in a:
                activation = logic.strong_conjunction(activation, f.degrees[var][s])
            acc[c] = logic.weak_disjunction(acc[c], activation)
        return acc

    def predict(self, data: Union[TabularData, FuzzifiedData]) -> np.ndarray:
        """Category of every row; ties go to the lowest category id."""
        return np.argmax(self.activations(data), axis=0)

    def evaluate_all(self, data: Union[TabularData, FuzzifiedData]) -> ConfusionMatrix:
        """Confusion matrix of the predictions against the observed categories."""
        f = self._fuzzified(data)
        return ConfusionMatrix.from_labels(self.predict(f), f.y, self._i.num_categories())

    def _fuzzified(self, data: Union[TabularData, FuzzifiedData]) -> FuzzifiedData:
        return data if isinstance(data, FuzzifiedData) else self._i.fuzzify(data)

    # -- printing -----------------------------------------------------------

    def format_rule(self, rule: Tuple[AntecedentLike, int]) -> str:
        """``If <var> <label> and ... then <category>``; empty for a null rule."""
        antecedent, category = rule
        a = make_antecedent(antecedent)
        if not a:
            return ""
        literals = " and ".join(f"{self._i.input_name(var)} {self._i.label(var, s)}"
                                for var, s in a)
        return f"If {literals} then {self._i.category_name(category)}"

    def __str__(self) -> str:
        return "\n".join(self.format_rule(r) for r in self)

    def __repr__(self) -> str:
        return f"Classifier(rules={len(self)}, complexity={self.complexity()})"
