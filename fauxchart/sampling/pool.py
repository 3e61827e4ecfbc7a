"""Weighted random selection over a fixed item set."""

from __future__ import annotations

from typing import Generic, Iterable, TypeVar

import numpy as np

from fauxchart.errors import DegenerateCandidateSetError

T = TypeVar("T")


class WeightedPool(Generic[T]):
    """Items with integer weights, drawn proportionally to their weight.

    Items are numbered in insertion order, so the same sequence of
    :meth:`add` calls always yields the same indices.  Draws can be made over
    the whole pool or over any subset of those indices; a subset draw costs
    O(k) in the subset size and never touches the rest of the pool.

    Subset draws scan ``indices`` in the order given.  Reordering the subset
    changes which item a particular random value lands on, but not the
    probability of any item.
    """

    def __init__(self) -> None:
        self._items: list[T] = []
        self._weights: list[int] = []
        self._cumulative: list[int] = []
        self._cumulative_array: np.ndarray | None = None

    def __len__(self) -> int:
        return len(self._items)

    @property
    def total_weight(self) -> int:
        return self._cumulative[-1] if self._cumulative else 0

    def item(self, index: int) -> T:
        return self._items[index]

    def weight(self, index: int) -> int:
        return self._weights[index]

    def add(self, weight: int, item: T) -> int:
        """Append ``item`` with ``weight`` and return its index.

        Raises:
            ValueError: If ``weight`` is not a non-negative integer.
        """
        if isinstance(weight, bool) or not isinstance(weight, (int, np.integer)):
            raise ValueError(f"Weight must be an integer, got {weight!r}")
        if weight < 0:
            raise ValueError(f"Weight must be non-negative, got {weight}")

        weight = int(weight)
        self._items.append(item)
        self._weights.append(weight)
        self._cumulative.append(self.total_weight + weight)
        self._cumulative_array = None
        return len(self._items) - 1

    def sample_all(self, rng: np.random.Generator) -> T:
        """Draw one item from the whole pool.

        Raises:
            DegenerateCandidateSetError: If the pool's total weight is zero.
        """
        total = self.total_weight
        if total <= 0:
            raise DegenerateCandidateSetError(
                f"Cannot sample from a pool of {len(self)} items with total weight 0"
            )
        cumulative = self._cumulative_array
        if cumulative is None:
            cumulative = self._cumulative_array = np.asarray(self._cumulative, dtype=np.int64)
        u = rng.random() * total
        # First entry whose cumulative weight exceeds u; zero-weight entries
        # share their predecessor's total and are skipped.
        i = int(np.searchsorted(cumulative, u, side="right"))
        if i == len(self._items):
            # u rounded up to total; take the last positive-weight entry.
            i = int(np.searchsorted(cumulative, total, side="left"))
        return self._items[i]

    def sample_subset(self, indices: Iterable[int], rng: np.random.Generator) -> T:
        """Draw one item from the items named by ``indices``.

        ``indices`` must not contain duplicates.

        Raises:
            DegenerateCandidateSetError: If ``indices`` is empty or the
                subset's total weight is zero.
        """
        indices = tuple(indices)
        if not indices:
            raise DegenerateCandidateSetError("Cannot sample from an empty candidate set")

        weights = self._weights
        cumulative = []
        total = 0
        for i in indices:
            total += weights[i]
            cumulative.append(total)

        if total <= 0:
            raise DegenerateCandidateSetError(
                f"Cannot sample from {len(indices)} candidates with total weight 0"
            )

        u = rng.random() * total
        for i, running in zip(indices, cumulative):
            if running > u:
                return self._items[i]

        # Only reachable if u rounded up to total; never hand back a zero weight.
        last = next(i for i in reversed(indices) if weights[i] > 0)
        return self._items[last]
