"""
Pytest Configuration and Shared Fixtures

Global fixtures and configuration for the test suite.
"""

from datetime import datetime

import numpy as np
import pytest

from fauxchart.data.model import build_admissions_model, default_admissions_model
from fauxchart.people import Person, PersonCollection
from fauxchart.schema.base import ConditionGroup, ReferenceRow

REFERENCE_DATE = datetime(2019, 1, 1)


def make_row(code, group=ConditionGroup.MAIN_CONDITION, mean=1200.0, spread=120.0, weight=1):
    """Build a ReferenceRow with defaults that cover the whole default date range."""
    return ReferenceRow(
        code=code,
        group=group,
        mean_bucket=mean,
        spread_bucket=spread,
        weight=weight,
    )


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def every_group_rows():
    """Two codes per condition group, both eligible for every month."""
    rows = []
    for group in ConditionGroup:
        suffix = group.value[-1] if group is not ConditionGroup.MAIN_CONDITION else "M"
        rows.append(make_row(f"A{suffix}", group=group, weight=3))
        rows.append(make_row(f"B{suffix}", group=group, weight=1))
    return rows


@pytest.fixture
def small_model(every_group_rows):
    return build_admissions_model(every_group_rows)


@pytest.fixture(scope="session")
def bundled_model():
    return default_admissions_model()


@pytest.fixture
def person():
    return Person(
        chi="0101801230",
        forename="Ada",
        surname="Smith",
        gender="F",
        date_of_birth=datetime(1980, 1, 1),
        date_of_death=None,
        address="1 High Street, Dundee",
    )


@pytest.fixture(scope="session")
def cohort():
    return PersonCollection(reference_date=REFERENCE_DATE).generate(200, np.random.default_rng(7))
