"""Births: a mother from the cohort, her partner, and one to three babies."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import numpy as np

from fauxchart.dates import add_years, random_date
from fauxchart.datasets.base import DataGenerator
from fauxchart.people import Person, random_chi

YOUNGEST_MOTHER = 18
OLDEST_MOTHER = 55


class Births(DataGenerator):
    """One birth event per row.

    One in 30 births are twins and one in 34 twin births are triplets.
    """

    def __init__(self, rng: np.random.Generator, reference_date: datetime | None = None) -> None:
        super().__init__(rng)
        self.reference_date = reference_date or datetime.now()

    def headers(self) -> list[str]:
        return [
            "mother_chi",
            "healthboard",
            "date",
            "partner_chi",
            "baby_chi_1",
            "baby_chi_2",
            "baby_chi_3",
        ]

    def generate_row(self, person: Person) -> list[Any]:
        r = self.rng
        healthboard = "T" if r.integers(2) == 0 else "F"

        youngest = add_years(person.date_of_birth, YOUNGEST_MOTHER)
        oldest = person.date_of_death or add_years(person.date_of_birth, OLDEST_MOTHER)
        oldest = min(oldest, self.reference_date)

        # Died before 18, or not yet 18
        birth_date = youngest if youngest > oldest else random_date(youngest, oldest, r)

        partner = random_chi(r)
        babies: list[str | None] = [random_chi(r), None, None]
        if r.integers(30) == 0:
            babies[1] = random_chi(r)
            if r.integers(34) == 0:
                babies[2] = random_chi(r)

        return [person.chi, healthboard, birth_date, partner, *babies]
