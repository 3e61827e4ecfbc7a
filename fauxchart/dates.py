"""Random dates."""

from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np


def random_date(start: datetime, end: datetime, rng: np.random.Generator) -> datetime:
    """Uniform datetime in ``[start, end)``, or ``start`` when the range is empty."""
    span = end - start
    if span <= timedelta(0):
        return start
    micros = span // timedelta(microseconds=1)
    return start + timedelta(microseconds=int(rng.random() * micros))


def add_years(when: datetime, years: int) -> datetime:
    """Same calendar day ``years`` later; 29 February falls back to the 28th."""
    try:
        return when.replace(year=when.year + years)
    except ValueError:
        return when.replace(year=when.year + years, day=28)
