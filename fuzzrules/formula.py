"""
formula.py
==========
Propositional and first-order formula trees.

A formula is one of four immutable node types:

  Atom        a named proposition
  Unary       ¬ (negation) or Δ (delta) applied to a formula
  Binary      ⊗ ∧ ⊕ ∨ ⇒ ⇔ ⊻ joining two formulas
  Quantifier  ∀ ∃ ∃! binding a variable in a formula

Implements:
  - operator sugar: ``~a``, ``a & b`` (⊗), ``a | b`` (⊕), ``a ^ b`` (⊻),
    ``a >> b`` (⇒)
  - show : unicode rendering with the fewest parentheses the precedence
           table allows
  - eliminate_double_negation
  - evaluate : truth degree of a quantifier-free formula under a truth family

Nodes are hashable dataclasses, so formulas can be stored in sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Type, Union

from .truth import Logic


class UnaryKind(Enum):
    NEGATION = "negation"
    DELTA = "delta"


class BinaryKind(Enum):
    CONJUNCTION = "conjunction"
    WEAK_CONJUNCTION = "weak_conjunction"
    DISJUNCTION = "disjunction"
    WEAK_DISJUNCTION = "weak_disjunction"
    IMPLICATION = "implication"
    EQUIVALENCE = "equivalence"
    EX_DISJUNCTION = "ex_disjunction"


class QuantifierKind(Enum):
    UNIVERSAL = "universal"
    EXISTENTIAL = "existential"
    UNIQUE = "unique"


UNARY_PRECEDENCE = 12

BINARY_PRECEDENCE: Dict[BinaryKind, int] = {
    BinaryKind.CONJUNCTION     : 9,
    BinaryKind.WEAK_CONJUNCTION: 9,
    BinaryKind.DISJUNCTION     : 7,
    BinaryKind.WEAK_DISJUNCTION: 7,
    BinaryKind.IMPLICATION     : 5,
    BinaryKind.EQUIVALENCE     : 3,
    BinaryKind.EX_DISJUNCTION  : 1,
}

UNICODE: Dict[Enum, str] = {
    UnaryKind.NEGATION          : "¬",
    UnaryKind.DELTA             : "Δ",
    BinaryKind.CONJUNCTION      : "⊗",
    BinaryKind.WEAK_CONJUNCTION : "∧",
    BinaryKind.DISJUNCTION      : "⊕",
    BinaryKind.WEAK_DISJUNCTION : "∨",
    BinaryKind.IMPLICATION      : "⇒",
    BinaryKind.EQUIVALENCE      : "⇔",
    BinaryKind.EX_DISJUNCTION   : "⊻",
    QuantifierKind.UNIVERSAL    : "∀",
    QuantifierKind.EXISTENTIAL  : "∃",
    QuantifierKind.UNIQUE       : "∃!",
}


class _Connectives:
    """Operator sugar shared by every node type."""

    def __invert__(self) -> "Unary":
        return Unary(self, UnaryKind.NEGATION)

    def __and__(self, other: "Formula") -> "Binary":
        return Binary(self, other, BinaryKind.CONJUNCTION)

    def __or__(self, other: "Formula") -> "Binary":
        return Binary(self, other, BinaryKind.DISJUNCTION)

    def __xor__(self, other: "Formula") -> "Binary":
        return Binary(self, other, BinaryKind.EX_DISJUNCTION)

    def __rshift__(self, other: "Formula") -> "Binary":
        return Binary(self, other, BinaryKind.IMPLICATION)

    def __str__(self) -> str:
        return show(self)


@dataclass(frozen=True, eq=True)
class Atom(_Connectives):
    name: str


@dataclass(frozen=True, eq=True)
class Unary(_Connectives):
    child: "Formula"
    kind: UnaryKind = UnaryKind.NEGATION


@dataclass(frozen=True, eq=True)
class Binary(_Connectives):
    lhs: "Formula"
    rhs: "Formula"
    kind: BinaryKind


@dataclass(frozen=True, eq=True)
class Quantifier(_Connectives):
    variable: str
    child: "Formula"
    kind: QuantifierKind = QuantifierKind.UNIVERSAL


Formula = Union[Atom, Unary, Binary, Quantifier]


def weak_and(lhs: Formula, rhs: Formula) -> Binary:
    return Binary(lhs, rhs, BinaryKind.WEAK_CONJUNCTION)


def weak_or(lhs: Formula, rhs: Formula) -> Binary:
    return Binary(lhs, rhs, BinaryKind.WEAK_DISJUNCTION)


def equiv(lhs: Formula, rhs: Formula) -> Binary:
    return Binary(lhs, rhs, BinaryKind.EQUIVALENCE)


def delta(child: Formula) -> Unary:
    return Unary(child, UnaryKind.DELTA)


# ---------------------------------------------------------------------------
# Traversals
# ---------------------------------------------------------------------------

def show(f: Formula, symbols: Mapping[Enum, str] = UNICODE) -> str:
    """
    Render ``f``; binary connectives associate to the left.

    >>> a, b, c = Atom("a"), Atom("b"), Atom("c")
    >>> show((a & b) | ~c)
    'a ⊗ b ⊕ ¬c'
    >>> show(a & (b | c))
    'a ⊗ (b ⊕ c)'
    """
    return _show(f, symbols, 0)


def _show(f: Formula, symbols: Mapping[Enum, str], outer: int) -> str:
    if isinstance(f, Atom):
        return f.name
    if isinstance(f, Unary):
        return symbols[f.kind] + _show(f.child, symbols, UNARY_PRECEDENCE)
    if isinstance(f, Binary):
        p = BINARY_PRECEDENCE[f.kind]
        text = (f"{_show(f.lhs, symbols, p)} {symbols[f.kind]} "
                f"{_show(f.rhs, symbols, p + 1)}")
        return f"({text})" if p < outer else text
    if isinstance(f, Quantifier):
        text = f"{symbols[f.kind]} {f.variable}: {_show(f.child, symbols, 0)}"
        return f"({text})" if outer > 0 else text
    raise TypeError(f"not a formula: {f!r}")


def eliminate_double_negation(f: Formula) -> Formula:
    """Remove every ¬¬ pair; Δ and the other connectives are kept."""
    if isinstance(f, Atom):
        return f
    if isinstance(f, Unary):
        if (f.kind is UnaryKind.NEGATION and isinstance(f.child, Unary)
                and f.child.kind is UnaryKind.NEGATION):
            return eliminate_double_negation(f.child.child)
        return Unary(eliminate_double_negation(f.child), f.kind)
    if isinstance(f, Binary):
        return Binary(eliminate_double_negation(f.lhs), eliminate_double_negation(f.rhs), f.kind)
    if isinstance(f, Quantifier):
        return Quantifier(f.variable, eliminate_double_negation(f.child), f.kind)
    raise TypeError(f"not a formula: {f!r}")


def atoms(f: Formula) -> FrozenSet[str]:
    if isinstance(f, Atom):
        return frozenset([f.name])
    if isinstance(f, (Unary, Quantifier)):
        return atoms(f.child)
    if isinstance(f, Binary):
        return atoms(f.lhs) | atoms(f.rhs)
    raise TypeError(f"not a formula: {f!r}")


def evaluate(f: Formula, valuation: Mapping[str, float], logic: Type[Logic]) -> float:
    """
    Truth degree of a quantifier-free formula.

    Parameters
    ----------
    f : Formula
    valuation : mapping
        Truth degree of every atom of ``f``.
    logic : Logic subclass
        Family giving the connectives their meaning.  Δ maps 1 to 1 and
        everything else to 0; ⊻ is the negated equivalence.

    Raises
    ------
    KeyError
        If an atom has no value.
    ValueError
        If ``f`` contains a quantifier.
    """
    if isinstance(f, Atom):
        return float(valuation[f.name])
    if isinstance(f, Unary):
        v = evaluate(f.child, valuation, logic)
        if f.kind is UnaryKind.NEGATION:
            return float(logic.negation(v))
        return 1.0 if v == 1.0 else 0.0
    if isinstance(f, Binary):
        a = evaluate(f.lhs, valuation, logic)
        b = evaluate(f.rhs, valuation, logic)
        return float(_BINARY_SEMANTICS[f.kind](logic, a, b))
    if isinstance(f, Quantifier):
        raise ValueError("quantified formulas need a domain; only propositional "
                         "formulas can be evaluated")
    raise TypeError(f"not a formula: {f!r}")


_BINARY_SEMANTICS = {
    BinaryKind.CONJUNCTION     : lambda L, a, b: L.strong_conjunction(a, b),
    BinaryKind.WEAK_CONJUNCTION: lambda L, a, b: L.weak_conjunction(a, b),
    BinaryKind.DISJUNCTION     : lambda L, a, b: L.strong_disjunction(a, b),
    BinaryKind.WEAK_DISJUNCTION: lambda L, a, b: L.weak_disjunction(a, b),
    BinaryKind.IMPLICATION     : lambda L, a, b: L.implication(a, b),
    BinaryKind.EQUIVALENCE     : lambda L, a, b: L.equivalence(a, b),
    BinaryKind.EX_DISJUNCTION  : lambda L, a, b: L.negation(L.equivalence(a, b)),
}
