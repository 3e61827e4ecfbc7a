"""Hospital admissions: when a person was admitted, discharged, and why.

Admission dates are uniform over the supported range (never before the
patient's birth).  Conditions are ICD-10 codes drawn from the reference rows
eligible in the admission month, weighted by how often each appears:

- ``condition_1`` is always present;
- ``condition_2`` half the time, ``condition_3`` half of those, and
  ``condition_4`` half of those again;
- one in ten ``condition_4`` values is the literal ``"Nul"``, mimicking dirty
  source data.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass, fields
from datetime import datetime, timedelta
from typing import Any

import numpy as np

from fauxchart.data.index import month_bucket
from fauxchart.data.model import AdmissionsModel
from fauxchart.dates import random_date
from fauxchart.datasets.base import DataGenerator
from fauxchart.errors import DegenerateCandidateSetError
from fauxchart.people import Person
from fauxchart.schema.base import ConditionGroup

logger = logging.getLogger(__name__)

MAX_STAY_HOURS = 240
DIRTY_CONDITION = "Nul"


@dataclass(frozen=True)
class HospitalAdmissionsRecord:
    """One admission; ``condition_2`` to ``condition_4`` are None when absent."""

    chi: str
    date_of_birth: datetime
    admission_date: datetime
    discharge_date: datetime
    condition_1: str
    condition_2: str | None = None
    condition_3: str | None = None
    condition_4: str | None = None

    @classmethod
    def headers(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def as_row(self) -> list[Any]:
        return list(astuple(self))

    @classmethod
    def generate(
        cls,
        person: Person,
        after: datetime,
        rng: np.random.Generator,
        model: AdmissionsModel,
    ) -> HospitalAdmissionsRecord:
        """Synthesize an admission for ``person`` no earlier than ``after``.

        The lower bound is raised to the person's birth and the model's
        minimum date, and capped at the model's maximum date so a late bound
        yields the latest possible admission rather than an inverted range.

        Raises:
            DegenerateCandidateSetError: If no code is eligible for a condition
                slot in the admission month.
        """
        start = max(after, person.date_of_birth, model.minimum_date)
        start = min(start, model.maximum_date)

        admission = random_date(start, model.maximum_date, rng)
        discharge = admission + timedelta(hours=int(rng.integers(MAX_STAY_HOURS)))

        bucket = month_bucket(admission)
        conditions: list[str | None] = [None, None, None]
        condition_1 = model.draw_code(ConditionGroup.MAIN_CONDITION, bucket, rng)

        if rng.integers(2) == 0:
            conditions[0] = model.draw_code(ConditionGroup.OTHER_CONDITION_1, bucket, rng)
            if rng.integers(2) == 0:
                conditions[1] = model.draw_code(ConditionGroup.OTHER_CONDITION_2, bucket, rng)
                if rng.integers(2) == 0:
                    conditions[2] = model.draw_code(ConditionGroup.OTHER_CONDITION_3, bucket, rng)
                    if rng.integers(10) == 0:
                        conditions[2] = DIRTY_CONDITION

        return cls(person.chi, person.date_of_birth, admission, discharge, condition_1, *conditions)


class HospitalAdmissions(DataGenerator):
    """Dataset of :class:`HospitalAdmissionsRecord` rows.

    ``on_degenerate`` decides what happens when a condition cannot be drawn
    for the admission month: ``"raise"`` propagates the
    :class:`DegenerateCandidateSetError`, ``"skip"`` drops that row.
    """

    ON_DEGENERATE = ("raise", "skip")

    def __init__(
        self,
        rng: np.random.Generator,
        model: AdmissionsModel,
        on_degenerate: str = "raise",
    ) -> None:
        super().__init__(rng)
        if on_degenerate not in self.ON_DEGENERATE:
            raise ValueError(
                f"on_degenerate must be one of {self.ON_DEGENERATE}, got '{on_degenerate}'"
            )
        self.model = model
        self.on_degenerate = on_degenerate

    def headers(self) -> list[str]:
        return HospitalAdmissionsRecord.headers()

    def generate_row(self, person: Person) -> list[Any] | None:
        try:
            record = HospitalAdmissionsRecord.generate(
                person, person.date_of_birth, self.rng, self.model
            )
        except DegenerateCandidateSetError as e:
            if self.on_degenerate == "raise":
                raise
            logger.warning("Skipping admission for %s: %s", person.chi, e)
            return None
        return record.as_row()
