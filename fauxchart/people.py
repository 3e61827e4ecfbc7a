"""Synthetic person cohort that datasets attach their records to."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Iterator

import numpy as np
import pandas as pd
from faker import Faker

from fauxchart.dates import random_date

logger = logging.getLogger(__name__)

EARLIEST_BIRTH = datetime(1920, 1, 1)
LATEST_BIRTH = datetime(2010, 1, 1)

_CHI_WEIGHTS = (10, 9, 8, 7, 6, 5, 4, 3, 2)


def chi_check_digit(first_nine: str) -> int | None:
    """Modulus-11 check digit for a CHI number, or None if no valid digit exists."""
    total = sum(int(d) * w for d, w in zip(first_nine, _CHI_WEIGHTS))
    check = 11 - total % 11
    if check == 11:
        return 0
    if check == 10:
        return None
    return check


def make_chi(date_of_birth: datetime, gender: str, rng: np.random.Generator) -> str:
    """CHI number: birth date as DDMMYY, two serial digits, a sex digit and a check digit.

    The sex digit is odd for males and even for females.
    """
    prefix = date_of_birth.strftime("%d%m%y")
    parity = 1 if gender == "M" else 0
    while True:
        serial = int(rng.integers(100))
        sex_digit = 2 * int(rng.integers(5)) + parity
        first_nine = f"{prefix}{serial:02d}{sex_digit}"
        check = chi_check_digit(first_nine)
        if check is not None:
            return f"{first_nine}{check}"


def random_chi(rng: np.random.Generator) -> str:
    """CHI number of a random person who is not part of any cohort."""
    gender = "M" if rng.integers(2) == 0 else "F"
    return make_chi(random_date(EARLIEST_BIRTH, LATEST_BIRTH, rng), gender, rng)


@dataclass(frozen=True)
class Person:
    """A fictional patient."""

    chi: str
    forename: str
    surname: str
    gender: str
    date_of_birth: datetime
    date_of_death: datetime | None
    address: str


class PersonCollection:
    """A fixed cohort of people; datasets draw their subjects from it.

    ``reference_date`` is "today" for the cohort: nobody dies after it.
    """

    def __init__(self, reference_date: datetime | None = None) -> None:
        self.reference_date = reference_date or datetime.now()
        self.people: list[Person] = []

    def __len__(self) -> int:
        return len(self.people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self.people)

    def generate(self, n: int, rng: np.random.Generator) -> PersonCollection:
        """Replace the cohort with ``n`` new people and return ``self``."""
        if n <= 0:
            raise ValueError(f"Number of people must be positive, got {n}")

        fake = Faker("en_GB")
        fake.seed_instance(int(rng.integers(2**32)))

        people = []
        for _ in range(n):
            gender = "M" if rng.integers(2) == 0 else "F"
            dob = random_date(EARLIEST_BIRTH, LATEST_BIRTH, rng).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            dod = None
            if rng.integers(3) == 0:
                dod = random_date(dob, self.reference_date, rng)
            people.append(Person(
                chi=make_chi(dob, gender, rng),
                forename=fake.first_name_male() if gender == "M" else fake.first_name_female(),
                surname=fake.last_name(),
                gender=gender,
                date_of_birth=dob,
                date_of_death=dod,
                address=fake.address().replace("\n", ", "),
            ))

        self.people = people
        logger.info("Generated cohort of %d people", n)
        return self

    def random_person(self, rng: np.random.Generator) -> Person:
        if not self.people:
            raise ValueError("Cohort is empty; call generate() first")
        return self.people[int(rng.integers(len(self.people)))]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([asdict(p) for p in self.people])
