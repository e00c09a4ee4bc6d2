"""
data.py
=======
Tabular supervised-learning data: rows of (input vector, category id).

Implements:
  - TabularData : named float inputs plus one integer output column
  - CSV loading through pandas (last column is the output)
  - min-max normalisation of the inputs to [0, 1]
  - held-out splitting through scikit-learn, stratified when the class
    counts allow it
"""

from __future__ import annotations

import os
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from sklearn.model_selection import train_test_split


@dataclass
class TabularData:
    """
    Input matrix and category column of a classification dataset.

    Parameters
    ----------
    X : np.ndarray
        (n_rows, n_cols) input values.
    y : np.ndarray
        (n_rows,) non-negative integer categories.
    input_names : sequence of str
        Column names of ``X``.
    output_name : str
        Name of the category column.
    """
    X: np.ndarray
    y: np.ndarray
    input_names: Tuple[str, ...]
    output_name: str = "category"

    def __post_init__(self):
        self.input_names = tuple(str(n) for n in self.input_names)
        self.X = np.asarray(self.X, dtype=float)
        self.y = np.asarray(self.y, dtype=np.int64).reshape(-1)
        if self.X.size == 0:
            self.X = self.X.reshape(0, len(self.input_names))
        elif self.X.ndim == 1:
            self.X = self.X.reshape(-1, 1)
        if self.X.ndim != 2:
            raise ValueError(f"X must be 2-D, got shape {self.X.shape}")
        if self.y.shape != (self.X.shape[0],):
            raise ValueError(f"y must have shape ({self.X.shape[0]},), got {self.y.shape}")
        if len(self.input_names) != self.X.shape[1]:
            raise ValueError(
                f"{len(self.input_names)} input names for {self.X.shape[1]} columns"
            )
        if self.y.size and self.y.min() < 0:
            raise ValueError("categories must be non-negative integers")

    # -- construction -------------------------------------------------------

    @classmethod
    def from_frame(cls, df: pd.DataFrame, output: Optional[str] = None) -> "TabularData":
        """Build from a DataFrame; ``output`` defaults to the last column."""
        output = df.columns[-1] if output is None else output
        inputs = [c for c in df.columns if c != output]
        return cls(df[inputs].to_numpy(dtype=float),
                   df[output].to_numpy(dtype=np.int64),
                   tuple(inputs), str(output))

    @classmethod
    def from_csv(cls, path: str, sep: str = ",", output: Optional[str] = None) -> "TabularData":
        """
        Load a CSV file with a header row.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        ValueError
            If the file has fewer than two columns or non-numeric cells.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"data file not found: {path}")
        df = pd.read_csv(path, sep=sep)
        if df.shape[1] < 2:
            raise ValueError(f"{path}: need at least one input and one output column")
        return cls.from_frame(df, output)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.X, columns=list(self.input_names))
        df[self.output_name] = self.y
        return df

    # -- shape and access ---------------------------------------------------

    @property
    def nrows(self) -> int:
        return self.X.shape[0]

    @property
    def ncols(self) -> int:
        return self.X.shape[1]

    def __len__(self) -> int:
        return self.nrows

    def empty(self) -> bool:
        return self.nrows == 0

    def input_name(self, col: int) -> str:
        return self.input_names[col]

    def value(self, row: int, col: int) -> float:
        return float(self.X[row, col])

    def output(self, row: int) -> int:
        return int(self.y[row])

    def column(self, name: str) -> np.ndarray:
        return self.X[:, self.input_names.index(name)]

    def __iter__(self) -> Iterator[Tuple[np.ndarray, int]]:
        for i in range(self.nrows):
            yield self.X[i], int(self.y[i])

    def num_categories(self) -> int:
        return int(self.y.max()) + 1 if self.y.size else 0

    # -- transformations ----------------------------------------------------

    def subset(self, rows: Sequence[int]) -> "TabularData":
        rows = np.asarray(rows, dtype=np.intp)
        return TabularData(self.X[rows], self.y[rows], self.input_names, self.output_name)

    def normalised(self) -> "TabularData":
        """Min-max scale every input column to [0, 1]; constant columns map to 0."""
        if self.empty():
            return TabularData(self.X.copy(), self.y.copy(), self.input_names, self.output_name)
        lo = self.X.min(axis=0)
        span = self.X.max(axis=0) - lo
        X = (self.X - lo) / np.where(span == 0, 1.0, span)
        return TabularData(X, self.y.copy(), self.input_names, self.output_name)

    def split(self, prop: float, rng: np.random.Generator,
              stratify: bool = True) -> Tuple["TabularData", "TabularData"]:
        """
        Hold out ``int(prop · nrows)`` rows.

        Parameters
        ----------
        prop : float
            Proportion in [0, 1] of rows to hold out.
        rng : np.random.Generator
            Seeds the shuffle, so equal generator states give equal splits.
        stratify : bool
            Preserve class proportions when every class has at least two rows
            and both sides can hold one row per class.

        Returns
        -------
        (remaining, held_out) : tuple of TabularData
            Disjoint subsets covering every row.
        """
        if not 0.0 <= prop <= 1.0:
            raise ValueError(f"prop must lie in [0, 1], got {prop}")
        n_test = int(prop * self.nrows)
        idx = np.arange(self.nrows)
        if n_test == 0:
            return self.subset(idx), self.subset(idx[:0])
        if n_test == self.nrows:
            return self.subset(idx[:0]), self.subset(rng.permutation(idx))

        classes, counts = np.unique(self.y, return_counts=True)
        can_stratify = (stratify and counts.min() >= 2
                        and n_test >= len(classes) and self.nrows - n_test >= len(classes))
        seed = int(rng.integers(0, 2**32 - 1))
        train_idx, test_idx = train_test_split(
            idx, test_size=n_test, random_state=seed,
            stratify=self.y if can_stratify else None,
        )
        return self.subset(np.sort(train_idx)), self.subset(np.sort(test_idx))
