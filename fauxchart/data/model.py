"""Built-once sampling model for hospital admission conditions."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Sequence

import numpy as np

from fauxchart.data.index import TemporalIndex, build_temporal_index, month_bucket
from fauxchart.data.loader import load_reference_table
from fauxchart.errors import DegenerateCandidateSetError, ReferenceDataError
from fauxchart.sampling.pool import WeightedPool
from fauxchart.schema.base import ConditionGroup, ReferenceRow

logger = logging.getLogger(__name__)

MINIMUM_DATE = datetime(1983, 1, 1)
MAXIMUM_DATE = datetime(2018, 1, 1)


@dataclass(frozen=True)
class AdmissionsModel:
    """A :class:`TemporalIndex` paired with the pool of codes it indexes.

    Pool entry ``i`` holds reference row ``i``'s code and weight, so the
    index's candidate tuples can be handed straight to
    :meth:`WeightedPool.sample_subset`.  Neither part is mutated after
    :func:`build_admissions_model` returns, so one model may be shared by any
    number of threads.
    """

    index: TemporalIndex
    pool: WeightedPool[str]
    minimum_date: datetime = MINIMUM_DATE
    maximum_date: datetime = MAXIMUM_DATE

    def draw_code(self, group: ConditionGroup | str, bucket: int, rng: np.random.Generator) -> str:
        """Draw a code for ``group`` from the rows eligible in ``bucket``.

        Raises:
            DegenerateCandidateSetError: If no row with positive weight is
                eligible there.
        """
        candidates = self.index.candidates(group, bucket)
        try:
            return self.pool.sample_subset(candidates, rng)
        except DegenerateCandidateSetError as e:
            name = ConditionGroup(group).value
            raise DegenerateCandidateSetError(
                f"No {name} codes eligible in month bucket {bucket}: {e}",
                group=name,
                bucket=bucket,
            ) from e


def build_admissions_model(
    rows: Sequence[ReferenceRow],
    minimum_date: datetime = MINIMUM_DATE,
    maximum_date: datetime = MAXIMUM_DATE,
) -> AdmissionsModel:
    """Build the index and weighted pool for ``rows``.

    Raises:
        ReferenceDataError: If ``rows`` is empty or the date range is inverted.
    """
    if not rows:
        raise ReferenceDataError("Reference table has no rows")
    if minimum_date > maximum_date:
        raise ReferenceDataError(
            f"Minimum date {minimum_date:%Y-%m-%d} is after maximum date {maximum_date:%Y-%m-%d}"
        )

    pool: WeightedPool[str] = WeightedPool()
    for row in rows:
        pool.add(row.weight, row.code)

    index = build_temporal_index(rows, month_bucket(minimum_date), month_bucket(maximum_date))
    logger.info(
        "Built admissions model: %d codes, buckets %d-%d",
        len(pool), index.min_bucket, index.max_bucket,
    )
    return AdmissionsModel(index, pool, minimum_date, maximum_date)


def load_admissions_model(path: Path | str | None = None) -> AdmissionsModel:
    """Load a reference table (the bundled one by default) and build its model."""
    return build_admissions_model(load_reference_table(path))


_default_model: AdmissionsModel | None = None
_default_lock = threading.Lock()


def default_admissions_model() -> AdmissionsModel:
    """Model for the bundled reference table, built on first use.

    Concurrent first callers block until a single build completes and then
    all receive the same instance.
    """
    global _default_model
    model = _default_model
    if model is None:
        with _default_lock:
            if _default_model is None:
                _default_model = load_admissions_model()
            model = _default_model
    return model
