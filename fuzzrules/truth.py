"""
truth.py
========
Truth values of many-valued logics and their connectives.

Implements:
  - Boolean logic (crisp {0, 1})
  - Łukasiewicz logic (bounded sum / product t-norm family)
  - Gödel-Dummett logic (minimum t-norm)
  - Product logic (product t-norm, Goguen implication)

Every family is exposed twice:

  * a stateless *logic* class (``Lukasiewicz``, ``Godel``, ...) whose
    connectives are vectorised over NumPy arrays, used by the classifier to
    evaluate a whole dataset column-wise;
  * an immutable *truth value* (``LukasiewiczTruth``, ...) wrapping one
    scalar, with the usual operator sugar (``~``, ``&``, ``|``, ``<``).

Reference
---------
Hájek, P. (1998). Metamathematics of Fuzzy Logic. Kluwer, Dordrecht.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Type, Union

ArrayLike = Union[float, np.ndarray]

_TOL = 1e-12


def _as_float(a: ArrayLike) -> ArrayLike:
    """Return a Python float for scalar input, an ndarray otherwise."""
    arr = np.asarray(a, dtype=float)
    return float(arr) if arr.ndim == 0 else arr


# ---------------------------------------------------------------------------
# Logic families (vectorised connectives)
# ---------------------------------------------------------------------------

class Logic:
    """
    Base class of a truth family.

    Subclasses override the connectives that differ from the defaults below.
    The weak conjunction and disjunction are the lattice operations
    (minimum and maximum) in every family.
    """

    name: str = ""
    zero: float = 0.0
    unit: float = 1.0

    @staticmethod
    def negation(a: ArrayLike) -> ArrayLike:
        raise NotImplementedError

    @staticmethod
    def strong_conjunction(a: ArrayLike, b: ArrayLike) -> ArrayLike:
        raise NotImplementedError

    @staticmethod
    def strong_disjunction(a: ArrayLike, b: ArrayLike) -> ArrayLike:
        raise NotImplementedError

    @staticmethod
    def implication(a: ArrayLike, b: ArrayLike) -> ArrayLike:
        raise NotImplementedError

    @staticmethod
    def weak_conjunction(a: ArrayLike, b: ArrayLike) -> ArrayLike:
        return _as_float(np.minimum(a, b))

    @staticmethod
    def weak_disjunction(a: ArrayLike, b: ArrayLike) -> ArrayLike:
        return _as_float(np.maximum(a, b))

    @classmethod
    def equivalence(cls, a: ArrayLike, b: ArrayLike) -> ArrayLike:
        """(a ⇒ b) ⊗ (b ⇒ a)."""
        return cls.strong_conjunction(cls.implication(a, b), cls.implication(b, a))

    @classmethod
    def truth(cls, value: float) -> "Truth":
        """Wrap a scalar into this family's truth value type."""
        return _TRUTH_TYPES[cls](value)


class Boolean(Logic):
    """Crisp two-valued logic on {0, 1}."""

    name = "Boolean"

    @staticmethod
    def negation(a):
        return _as_float(np.asarray(a) == 0)

    @staticmethod
    def strong_conjunction(a, b):
        return _as_float(np.logical_and(a, b))

    @staticmethod
    def strong_disjunction(a, b):
        return _as_float(np.logical_or(a, b))

    @staticmethod
    def implication(a, b):
        return _as_float(np.logical_or(np.logical_not(a), b))

    @classmethod
    def equivalence(cls, a, b):
        return _as_float(np.asarray(a, bool) == np.asarray(b, bool))


class Lukasiewicz(Logic):
    """
    Łukasiewicz logic.

        ¬a     = 1 - a
        a ⊗ b  = max(0, a + b - 1)
        a ⊕ b  = min(1, a + b)
        a ⇒ b  = min(1, 1 - a + b)
        a ⇔ b  = 1 - |a - b|

    The only fuzzy family here whose negation is involutive.
    """

    name = "Łukasiewicz"

    @staticmethod
    def negation(a):
        return _as_float(1.0 - np.asarray(a, float))

    @staticmethod
    def strong_conjunction(a, b):
        return _as_float(np.maximum(0.0, np.asarray(a, float) + b - 1.0))

    @staticmethod
    def strong_disjunction(a, b):
        return _as_float(np.minimum(1.0, np.asarray(a, float) + b))

    @staticmethod
    def implication(a, b):
        return _as_float(np.minimum(1.0, 1.0 - np.asarray(a, float) + b))

    @classmethod
    def equivalence(cls, a, b):
        return _as_float(1.0 - np.abs(np.asarray(a, float) - b))


class Godel(Logic):
    """
    Gödel-Dummett logic.

        ¬a     = 1 if a = 0 else 0
        a ⊗ b  = min(a, b)
        a ⊕ b  = max(a, b)
        a ⇒ b  = b if a > b else 1
    """

    name = "Gödel-Dummett"

    @staticmethod
    def negation(a):
        return _as_float(np.asarray(a) == 0)

    @staticmethod
    def strong_conjunction(a, b):
        return _as_float(np.minimum(a, b))

    @staticmethod
    def strong_disjunction(a, b):
        return _as_float(np.maximum(a, b))

    @staticmethod
    def implication(a, b):
        a, b = np.broadcast_arrays(np.asarray(a, float), np.asarray(b, float))
        return _as_float(np.where(a > b, b, 1.0))


class Product(Logic):
    """
    Product logic.

        ¬a     = 1 if a = 0 else 0
        a ⊗ b  = a · b
        a ⊕ b  = a + b - a · b
        a ⇒ b  = b / a if a > b else 1

    The quotient is only taken where a > b, hence a > 0.
    """

    name = "Product"

    @staticmethod
    def negation(a):
        return _as_float(np.asarray(a) == 0)

    @staticmethod
    def strong_conjunction(a, b):
        return _as_float(np.asarray(a, float) * b)

    @staticmethod
    def strong_disjunction(a, b):
        a = np.asarray(a, float)
        return _as_float(a + b - a * b)

    @staticmethod
    def implication(a, b):
        a, b = np.broadcast_arrays(np.asarray(a, float), np.asarray(b, float))
        out = np.ones(a.shape)
        mask = a > b
        np.divide(b, a, out=out, where=mask)
        return _as_float(out)


# ---------------------------------------------------------------------------
# Scalar truth values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=False)
class Truth:
    """
    A scalar truth value tagged with its logic family.

    Parameters
    ----------
    value : float
        Degree of truth in [0, 1] ({0, 1} for Boolean).

    Raises
    ------
    ValueError
        If ``value`` lies outside the family's domain.
    TypeError
        When combined with a truth value of another family.
    """
    value: float

    logic = Logic

    def __post_init__(self):
        v = float(self.value)
        if not (-_TOL <= v <= 1.0 + _TOL):
            raise ValueError(f"{self.logic.name} truth value must lie in [0, 1], got {v}")
        # absorb rounding from a + b - a*b and friends
        object.__setattr__(self, "value", min(max(v, 0.0), 1.0))

    def _other(self, other: "Truth") -> float:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other.value

    def _wrap(self, v: float) -> "Truth":
        return type(self)(v)

    @classmethod
    def zero(cls) -> "Truth":
        return cls(cls.logic.zero)

    @classmethod
    def unit(cls) -> "Truth":
        return cls(cls.logic.unit)

    def neg(self) -> "Truth":
        return self._wrap(self.logic.negation(self.value))

    def strong_and(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.strong_conjunction(self.value, self._other(other)))

    def weak_and(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.weak_conjunction(self.value, self._other(other)))

    def strong_or(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.strong_disjunction(self.value, self._other(other)))

    def weak_or(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.weak_disjunction(self.value, self._other(other)))

    def implies(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.implication(self.value, self._other(other)))

    def equiv(self, other: "Truth") -> "Truth":
        return self._wrap(self.logic.equivalence(self.value, self._other(other)))

    __invert__ = neg
    __and__ = strong_and
    __or__ = strong_or

    def __lt__(self, other: "Truth") -> bool:
        return self.value < self._other(other)

    def __le__(self, other: "Truth") -> bool:
        return self.value <= self._other(other)

    def __gt__(self, other: "Truth") -> bool:
        return self.value > self._other(other)

    def __ge__(self, other: "Truth") -> bool:
        return self.value >= self._other(other)

    def __float__(self) -> float:
        return self.value

    def __bool__(self) -> bool:
        return self.value > 0.0

    def __str__(self) -> str:
        return f"{self.value:g}"


@dataclass(frozen=True, order=False)
class BooleanTruth(Truth):
    logic = Boolean

    def __post_init__(self):
        v = float(self.value)
        if v not in (0.0, 1.0):
            raise ValueError(f"Boolean truth value must be 0 or 1, got {v}")
        object.__setattr__(self, "value", v)


@dataclass(frozen=True, order=False)
class LukasiewiczTruth(Truth):
    logic = Lukasiewicz


@dataclass(frozen=True, order=False)
class GodelTruth(Truth):
    logic = Godel


@dataclass(frozen=True, order=False)
class ProductTruth(Truth):
    logic = Product


_TRUTH_TYPES: Dict[Type[Logic], Type[Truth]] = {
    Boolean    : BooleanTruth,
    Lukasiewicz: LukasiewiczTruth,
    Godel      : GodelTruth,
    Product    : ProductTruth,
}


# ---------------------------------------------------------------------------
# Lookup by name
# ---------------------------------------------------------------------------

LOGICS: List[Type[Logic]] = [Boolean, Lukasiewicz, Godel, Product]

_ALIASES: Dict[str, Type[Logic]] = {
    "boolean"      : Boolean,
    "łukasiewicz"  : Lukasiewicz,
    "lukasiewicz"  : Lukasiewicz,
    "gödel-dummett": Godel,
    "godel-dummett": Godel,
    "gödel"        : Godel,
    "godel"        : Godel,
    "product"      : Product,
}


def get_logic(name: str) -> Type[Logic]:
    """
    Resolve a logic family from its display name or a common alias.

    Raises
    ------
    KeyError
        If the name is not recognised.
    """
    key = name.strip().lower()
    if key not in _ALIASES:
        raise KeyError(f"unknown logic {name!r}; expected one of "
                       f"{', '.join(l.name for l in LOGICS)}")
    return _ALIASES[key]
