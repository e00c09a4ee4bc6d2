"""
interpretation.py
=================
Shared vocabulary of a family of fuzzy classifiers.

An ``Interpretation`` names the input variables, holds one fuzzy partition per
variable, names the output categories and fixes the truth family used to
combine memberships.  Every classifier of a population refers to the same
object; it is frozen as soon as the first classifier binds to it.

Implements:
  - variable registration (triangular partitions or explicit ones)
  - id validation for antecedents and categories
  - fuzzify : membership degrees of a whole dataset, computed once
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Type, Union

from .data import TabularData
from .partition import FuzzyPartition, make_partition
from .truth import Boolean, Logic, Lukasiewicz, get_logic


@dataclass(frozen=True, eq=False)
class FuzzifiedData:
    """
    Membership degrees of every row of a dataset.

    ``degrees[var]`` has shape (n_sets(var), n_rows).
    """
    degrees: Tuple[np.ndarray, ...]
    y: np.ndarray

    @property
    def nrows(self) -> int:
        return self.y.shape[0]


class Interpretation:
    """
    Input names, fuzzy partitions, category names and truth family.

    Parameters
    ----------
    categories : sequence of str
        Output categories, indexed from 0.
    logic : Logic subclass or str
        Truth family used to evaluate rules (Łukasiewicz by default).

    Raises
    ------
    ValueError
        If no category is given, or if ``logic`` is the crisp Boolean
        family (membership degrees are graded).
    """

    def __init__(self, categories: Sequence[str],
                 logic: Union[Type[Logic], str] = Lukasiewicz):
        if len(categories) == 0:
            raise ValueError("an interpretation needs at least one category")
        self._logic = get_logic(logic) if isinstance(logic, str) else logic
        if self._logic is Boolean:
            raise ValueError("Boolean logic cannot grade fuzzy memberships")
        self._categories = tuple(categories)
        self._input_names: List[str] = []
        self._partitions: List[FuzzyPartition] = []
        self._frozen = False

    # -- construction -------------------------------------------------------

    def add_partition(self, name: str, partition: FuzzyPartition) -> int:
        """Register input variable ``name``; return its id."""
        if self._frozen:
            raise RuntimeError("interpretation is shared by classifiers and can no longer change")
        if len(partition) == 0:
            raise ValueError(f"variable {name!r} needs at least one fuzzy set")
        self._input_names.append(name)
        self._partitions.append(partition)
        return len(self._input_names) - 1

    def add_triangular_sets(self, name: str, nsets: int,
                            begin: float = 0.0, end: float = 1.0) -> int:
        """Register ``name`` with ``nsets`` equally spaced triangles over [begin, end]."""
        if nsets < 2:
            raise ValueError(f"nsets must be ≥ 2, got {nsets}")
        return self.add_partition(name, make_partition(f"{nsets} triangles", nsets, begin, end))

    def freeze(self) -> "Interpretation":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- vocabulary ---------------------------------------------------------

    @property
    def logic(self) -> Type[Logic]:
        return self._logic

    @property
    def categories(self) -> Tuple[str, ...]:
        return self._categories

    @property
    def input_names(self) -> Tuple[str, ...]:
        return tuple(self._input_names)

    def num_inputs(self) -> int:
        return len(self._input_names)

    def num_partitions(self, var: int) -> int:
        return len(self._partitions[var])

    def num_categories(self) -> int:
        return len(self._categories)

    def input_name(self, var: int) -> str:
        return self._input_names[var]

    def category_name(self, c: int) -> str:
        return self._categories[c]

    def partition(self, var: int) -> FuzzyPartition:
        return self._partitions[var]

    def partition_name(self, var: int) -> str:
        return self._partitions[var].name

    def label(self, var: int, s: int) -> str:
        return self._partitions[var].labels[s]

    def membership(self, var: int, s: int, x):
        """Degree of ``x`` in fuzzy set ``s`` of variable ``var``."""
        return self._partitions[var].membership(s, x)

    # -- validation ---------------------------------------------------------

    def check_rule(self, antecedent, category: int) -> None:
        """
        Raise IndexError if a rule refers to an unknown variable, set or
        category.
        """
        if not 0 <= category < self.num_categories():
            raise IndexError(f"category {category} out of range [0, {self.num_categories()})")
        for var, s in antecedent:
            if not 0 <= var < self.num_inputs():
                raise IndexError(f"input variable {var} out of range [0, {self.num_inputs()})")
            if not 0 <= s < self.num_partitions(var):
                raise IndexError(
                    f"fuzzy set {s} out of range for {self.input_name(var)!r} "
                    f"[0, {self.num_partitions(var)})"
                )

    # -- data ---------------------------------------------------------------

    def fuzzify(self, data: TabularData) -> FuzzifiedData:
        """Membership of every row in every fuzzy set of every variable."""
        if data.ncols < self.num_inputs():
            raise ValueError(
                f"data has {data.ncols} input columns, interpretation expects {self.num_inputs()}"
            )
        degrees = tuple(p.degrees(data.X[:, var]).reshape(len(p), data.nrows)
                        for var, p in enumerate(self._partitions))
        return FuzzifiedData(degrees, data.y.copy())

    def __str__(self) -> str:
        lines = ["Input variables:"]
        for var, name in enumerate(self._input_names):
            labels = ", ".join(self._partitions[var].labels)
            lines.append(f"  {var}: {name} [{self.partition_name(var)}: {labels}]")
        lines.append("Categories:")
        lines.extend(f"  {c}: {name}" for c, name in enumerate(self._categories))
        lines.append(f"Logic: {self._logic.name}")
        return "\n".join(lines)
