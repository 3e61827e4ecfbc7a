"""Synthetic datasets."""

from fauxchart.datasets.admissions import (
    DIRTY_CONDITION,
    MAX_STAY_HOURS,
    HospitalAdmissions,
    HospitalAdmissionsRecord,
)
from fauxchart.datasets.base import DataGenerator
from fauxchart.datasets.births import Births
from fauxchart.datasets.factory import DataGeneratorFactory

__all__ = [
    "DIRTY_CONDITION",
    "MAX_STAY_HOURS",
    "Births",
    "DataGenerator",
    "DataGeneratorFactory",
    "HospitalAdmissions",
    "HospitalAdmissionsRecord",
]
