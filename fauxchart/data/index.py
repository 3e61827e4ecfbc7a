"""Month-bucket index of which reference rows are eligible when.

Each reference row is eligible for sampling within two standard deviations of
the month it typically appears in.  :func:`build_temporal_index` precomputes,
for every condition group and every month in the supported date range, the
rows eligible in that month, so a record only has to look its month up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from fauxchart.schema.base import ConditionGroup, ReferenceRow

logger = logging.getLogger(__name__)

EPOCH_YEAR = 1900


def month_bucket(when: date | datetime) -> int:
    """Number of whole calendar months since the start of 1900 (Jan 1900 is 1)."""
    return (when.year - EPOCH_YEAR) * 12 + when.month


def occurrence_window(row: ReferenceRow, min_bucket: int, max_bucket: int) -> tuple[int, int]:
    """Return the clamped ``(first, last)`` buckets in which ``row`` is eligible.

    The window is empty when ``first > last``.
    """
    first = int(round(row.mean_bucket - 2 * row.spread_bucket))
    last = int(round(row.mean_bucket + 2 * row.spread_bucket))
    return max(first, min_bucket), min(last, max_bucket)


@dataclass(frozen=True)
class TemporalIndex:
    """Immutable ``group -> bucket -> row indices`` mapping.

    Every bucket in ``[min_bucket, max_bucket]`` is present for every group,
    possibly with an empty tuple.
    """

    min_bucket: int
    max_bucket: int
    buckets: Mapping[ConditionGroup, Mapping[int, tuple[int, ...]]]

    @property
    def groups(self) -> list[ConditionGroup]:
        return list(self.buckets.keys())

    def candidates(self, group: ConditionGroup | str, bucket: int) -> tuple[int, ...]:
        """Row indices eligible for ``group`` in ``bucket``.

        Raises:
            KeyError: If the group is unknown or the bucket is outside the index.
        """
        if not isinstance(group, ConditionGroup):
            try:
                group = ConditionGroup(group)
            except ValueError:
                raise KeyError(f"Unknown group '{group}'") from None
        if group not in self.buckets:
            raise KeyError(
                f"Group '{group.value}' not indexed. "
                f"Available: {[g.value for g in self.buckets]}"
            )
        if not self.min_bucket <= bucket <= self.max_bucket:
            raise KeyError(
                f"Bucket {bucket} outside indexed range "
                f"[{self.min_bucket}, {self.max_bucket}]"
            )
        return self.buckets[group][bucket]


def build_temporal_index(
    rows: Sequence[ReferenceRow],
    min_bucket: int,
    max_bucket: int,
    groups: Iterable[ConditionGroup] = tuple(ConditionGroup),
) -> TemporalIndex:
    """Index ``rows`` by the month buckets of their occurrence windows.

    Row ``i`` is listed under ``(rows[i].group, b)`` for every ``b`` in its
    clamped window.  Rows whose window falls entirely outside the range are
    not listed anywhere but keep their index.

    Raises:
        ValueError: If ``min_bucket > max_bucket``.
    """
    if min_bucket > max_bucket:
        raise ValueError(f"Empty bucket range [{min_bucket}, {max_bucket}]")

    working: dict[ConditionGroup, dict[int, list[int]]] = {
        group: {b: [] for b in range(min_bucket, max_bucket + 1)} for group in groups
    }
    for group in {row.group for row in rows} - working.keys():
        working[group] = {b: [] for b in range(min_bucket, max_bucket + 1)}

    unplaced = 0
    for i, row in enumerate(rows):
        first, last = occurrence_window(row, min_bucket, max_bucket)
        if first > last:
            unplaced += 1
            continue
        per_bucket = working[row.group]
        for b in range(first, last + 1):
            per_bucket[b].append(i)

    if unplaced:
        logger.info("%d of %d reference rows fall outside buckets [%d, %d]",
                    unplaced, len(rows), min_bucket, max_bucket)

    frozen = {
        group: MappingProxyType({b: tuple(ix) for b, ix in per_bucket.items()})
        for group, per_bucket in working.items()
    }
    return TemporalIndex(min_bucket, max_bucket, MappingProxyType(frozen))
