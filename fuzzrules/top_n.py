"""
top_n.py
========
Bounded ordered containers that keep only the N highest-keyed entries.

Implements:
  - TopNMultimap : duplicate keys allowed (fitness ties between individuals)
  - TopNMap      : a key already present is rejected

Once full, an entry is accepted only if its key is *strictly* greater than
the current minimum key; the minimum entry (the oldest among equal minima) is
evicted first, so the size never exceeds ``max_size``.
"""

from __future__ import annotations

import bisect
from collections import Counter
from typing import Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class TopNMultimap(Generic[K, V]):
    """
    Keep the ``max_size`` largest keys seen so far, with their values.

    Parameters
    ----------
    max_size : int
        Capacity N (≥ 1).
    items : iterable of (key, value), optional
        Offered in order through ``try_insert``.
    """

    def __init__(self, max_size: int, items: Optional[Iterable[Tuple[K, V]]] = None):
        if max_size < 1:
            raise ValueError(f"max_size must be ≥ 1, got {max_size}")
        self._max_size = int(max_size)
        self._keys: List[K] = []
        self._values: List[V] = []
        for k, v in items or ():
            self.try_insert(k, v)

    def _accepts(self, key: K) -> bool:
        return not self.is_full() or self._keys[0] < key

    def try_insert(self, key: K, value: V) -> bool:
        """Insert (key, value) if it ranks among the top N; return whether it did."""
        if not self._accepts(key):
            return False
        if self.is_full():
            del self._keys[0]
            del self._values[0]
        pos = bisect.bisect_right(self._keys, key)
        self._keys.insert(pos, key)
        self._values.insert(pos, value)
        return True

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()

    # -- size ---------------------------------------------------------------

    def empty(self) -> bool:
        return not self._keys

    def is_full(self) -> bool:
        return len(self._keys) >= self._max_size

    def size(self) -> int:
        return len(self._keys)

    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._keys)

    # -- queries ------------------------------------------------------------

    def count(self, key: K) -> int:
        return bisect.bisect_right(self._keys, key) - bisect.bisect_left(self._keys, key)

    def __contains__(self, key: Any) -> bool:
        return self.count(key) > 0

    def find(self, key: K) -> Optional[V]:
        """Value of the first entry with ``key``, or None."""
        pos = bisect.bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            return self._values[pos]
        return None

    def minimum(self) -> Tuple[K, V]:
        if not self._keys:
            raise IndexError("minimum() of an empty container")
        return self._keys[0], self._values[0]

    def minimum_key(self) -> K:
        return self.minimum()[0]

    def maximum(self) -> Tuple[K, V]:
        if not self._keys:
            raise IndexError("maximum() of an empty container")
        return self._keys[-1], self._values[-1]

    def maximum_key(self) -> K:
        return self.maximum()[0]

    def keys(self) -> List[K]:
        return list(self._keys)

    def values(self) -> List[V]:
        return list(self._values)

    def set_of_keys(self) -> set:
        return set(self._keys)

    def multiset_of_keys(self) -> Counter:
        return Counter(self._keys)

    def set_of_values(self) -> set:
        return set(self._values)

    def multiset_of_values(self) -> Counter:
        return Counter(self._values)

    # -- iteration ----------------------------------------------------------

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        """Entries in ascending key order."""
        return iter(list(zip(self._keys, self._values)))

    def __reversed__(self) -> Iterator[Tuple[K, V]]:
        return iter(list(zip(reversed(self._keys), reversed(self._values))))

    def __str__(self) -> str:
        return "{" + ", ".join(f"({k}, {v})" for k, v in self) + "}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._max_size}, {list(self)!r})"


class TopNMap(TopNMultimap[K, V]):
    """``TopNMultimap`` with unique keys: offering a present key is a no-op."""

    def _accepts(self, key: K) -> bool:
        return key not in self and super()._accepts(key)
