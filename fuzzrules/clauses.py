"""
clauses.py
==========
Clauses and weighted clausal knowledge bases.

A clause ``a ∨ b ∨ ¬c ∨ ¬d`` is stored as a head {a, b} (positive atoms) and
a body {c, d} (negated atoms), i.e. the rule ``c ∧ d → a ∨ b``.

Implements:
  - Clause        : immutable head/body pair with the usual Horn predicates
  - ClausalKB     : hard clauses plus clauses with a positive finite weight
  - cost          : penalty of an interpretation (set of true atoms)

A weight of ``inf`` marks a hard clause; an interpretation violating a hard
clause costs ``inf``, otherwise the weights of the violated clauses add up.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Hashable, Iterable, Iterator, Set, Tuple


@dataclass(frozen=True)
class Clause:
    head: FrozenSet[Hashable] = frozenset()
    body: FrozenSet[Hashable] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "head", frozenset(self.head))
        object.__setattr__(self, "body", frozenset(self.body))

    def head_size(self) -> int:
        return len(self.head)

    def body_size(self) -> int:
        return len(self.body)

    def size(self) -> int:
        return len(self.head) + len(self.body)

    def empty(self) -> bool:
        return self.size() == 0

    def count(self, atom: Hashable) -> int:
        """Number of literals over ``atom`` (0, 1 or 2)."""
        return (atom in self.head) + (atom in self.body)

    def is_fact(self) -> bool:
        return len(self.head) == 1 and not self.body

    def is_rule(self) -> bool:
        return len(self.head) == 1 and bool(self.body)

    def is_query(self) -> bool:
        return not self.head and bool(self.body)

    def is_horn(self) -> bool:
        return len(self.head) <= 1

    def is_definite(self) -> bool:
        return len(self.head) == 1

    def is_tautology(self) -> bool:
        return not self.head.isdisjoint(self.body)

    def with_head(self, atom: Hashable) -> "Clause":
        return Clause(self.head | {atom}, self.body)

    def with_body(self, atom: Hashable) -> "Clause":
        return Clause(self.head, self.body | {atom})

    def without(self, atom: Hashable) -> "Clause":
        """Drop both literals over ``atom``."""
        return Clause(self.head - {atom}, self.body - {atom})

    def flip(self, atom: Hashable) -> "Clause":
        """Swap the sign of the literal(s) over ``atom``."""
        head = (self.head - {atom}) | ({atom} & self.body)
        body = (self.body - {atom}) | ({atom} & self.head)
        return Clause(head, body)

    def satisfied(self, true_atoms: AbstractSet[Hashable]) -> bool:
        return not self.head.isdisjoint(true_atoms) or not self.body <= true_atoms

    def __str__(self) -> str:
        literals = [str(a) for a in sorted(self.head, key=str)]
        literals += ["¬" + str(a) for a in sorted(self.body, key=str)]
        return " ∨ ".join(literals) if literals else "□"


def _valid_weight(weight: float) -> bool:
    return not math.isnan(weight) and weight > 0


class ClausalKB:
    """
    Clausal knowledge base with hard and weighted clauses.

    A clause lives in at most one of the two stores.  Weights are strictly
    positive; ``inf`` means hard.

    Examples
    --------
    >>> kb = ClausalKB()
    >>> kb.tell(Clause({"a"}, {"b"}), 2.0)
    True
    >>> kb.cost({"b"})
    2.0
    """

    def __init__(self):
        self._hard: Set[Clause] = set()
        self._prob: Dict[Clause, float] = {}

    # -- membership ---------------------------------------------------------

    def has(self, c: Clause) -> bool:
        return c in self._hard or c in self._prob

    def has_hard(self, c: Clause) -> bool:
        return c in self._hard

    def has_prob(self, c: Clause) -> bool:
        return c in self._prob

    def __contains__(self, c: Clause) -> bool:
        return self.has(c)

    # -- insertion / removal ------------------------------------------------

    def tell(self, c: Clause, weight: float = math.inf) -> bool:
        """
        Add ``c`` with ``weight`` (hard by default).

        Returns False, leaving the base untouched, when ``c`` is already
        present or the weight is NaN, zero or negative.
        """
        if self.has(c) or not _valid_weight(weight):
            return False
        if math.isinf(weight):
            self._hard.add(c)
        else:
            self._prob[c] = float(weight)
        return True

    def untell(self, c: Clause) -> bool:
        return self.untell_hard(c) or self.untell_prob(c)

    def untell_hard(self, c: Clause) -> bool:
        if c not in self._hard:
            return False
        self._hard.remove(c)
        return True

    def untell_prob(self, c: Clause) -> bool:
        return self._prob.pop(c, None) is not None

    def update(self, c: Clause, weight: float) -> bool:
        """
        Change the weight of a weighted clause.

        A weight of 0 removes the clause and ``inf`` makes it hard.
        """
        if c not in self._prob or math.isnan(weight) or weight < 0:
            return False
        if weight == 0:
            del self._prob[c]
        elif math.isinf(weight):
            del self._prob[c]
            self._hard.add(c)
        else:
            self._prob[c] = float(weight)
        return True

    def to_hard(self, c: Clause) -> bool:
        if c not in self._prob:
            return False
        del self._prob[c]
        self._hard.add(c)
        return True

    def to_prob(self, c: Clause, weight: float) -> bool:
        if c not in self._hard or not _valid_weight(weight) or math.isinf(weight):
            return False
        self._hard.remove(c)
        self._prob[c] = float(weight)
        return True

    # -- queries ------------------------------------------------------------

    def get_weight(self, c: Clause) -> float:
        if c in self._hard:
            return math.inf
        return self._prob.get(c, 0.0)

    def __getitem__(self, c: Clause) -> float:
        return self.get_weight(c)

    def hard_clauses(self) -> Iterator[Clause]:
        return iter(self._hard)

    def prob_clauses(self) -> Iterator[Tuple[Clause, float]]:
        return iter(self._prob.items())

    def evaluate_hard(self, true_atoms: Iterable[Hashable]) -> bool:
        """True when every hard clause is satisfied."""
        true_atoms = frozenset(true_atoms)
        return all(c.satisfied(true_atoms) for c in self._hard)

    def cost(self, true_atoms: Iterable[Hashable]) -> float:
        true_atoms = frozenset(true_atoms)
        if not self.evaluate_hard(true_atoms):
            return math.inf
        return sum((w for c, w in self._prob.items() if not c.satisfied(true_atoms)), 0.0)

    def size_hard(self) -> int:
        return len(self._hard)

    def size_prob(self) -> int:
        return len(self._prob)

    def size(self) -> int:
        return len(self._hard) + len(self._prob)

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        return self.size() == 0

    def __str__(self) -> str:
        lines = [f"inf: {c}" for c in sorted(self._hard, key=str)]
        lines += [f"{w:g}: {c}" for c, w in sorted(self._prob.items(), key=lambda kv: str(kv[0]))]
        return "\n".join(lines)
