"""Base class for datasets generated one row per sampled person."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from fauxchart.people import Person, PersonCollection

logger = logging.getLogger(__name__)


class DataGenerator(ABC):
    """Generate a table of synthetic records about people in a cohort.

    Subclasses define the column headers and how one row is made for a
    person.  Each row's subject is drawn uniformly from the cohort with the
    generator's own random source.
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def headers(self) -> list[str]:
        """Column names, in row order."""

    @abstractmethod
    def generate_row(self, person: Person) -> list[Any] | None:
        """Values for one row about ``person``, or None to reject the row."""

    def generate_table(self, people: PersonCollection, n_rows: int) -> pd.DataFrame:
        """Generate up to ``n_rows`` rows; rejected rows are not replaced."""
        if n_rows < 0:
            raise ValueError(f"Number of rows must be non-negative, got {n_rows}")

        records = []
        for _ in range(n_rows):
            row = self.generate_row(people.random_person(self.rng))
            if row is not None:
                records.append(row)

        if len(records) < n_rows:
            logger.warning("%s: %d of %d rows rejected", self.name, n_rows - len(records), n_rows)
        return pd.DataFrame(records, columns=self.headers())

    def generate_file(self, people: PersonCollection, path: str | Path, n_rows: int) -> pd.DataFrame:
        """Generate a table and save it as CSV at ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        df = self.generate_table(people, n_rows)
        df.to_csv(path, index=False)
        logger.info("Saved %s: %d rows -> %s", self.name, len(df), path)
        return df
