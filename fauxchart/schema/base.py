"""Core schema types for reference tables."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConditionGroup(str, Enum):
    """Which condition slot of an admission a reference row can fill."""

    MAIN_CONDITION = "MAIN_CONDITION"
    OTHER_CONDITION_1 = "OTHER_CONDITION_1"
    OTHER_CONDITION_2 = "OTHER_CONDITION_2"
    OTHER_CONDITION_3 = "OTHER_CONDITION_3"


class ReferenceRow(BaseModel):
    """One entry of a reference table: a code and when and how often it occurs.

    ``mean_bucket`` and ``spread_bucket`` are measured in month buckets
    (see :func:`fauxchart.data.index.month_bucket`).
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1)
    group: ConditionGroup
    mean_bucket: float
    spread_bucket: float = Field(..., ge=0.0)
    weight: int = Field(..., ge=0)


# Column names used by reference table CSV files, keyed by ReferenceRow field.
REFERENCE_COLUMNS: dict[str, str] = {
    "group": "column_appearing_in",
    "mean_bucket": "average_month_appearing",
    "spread_bucket": "standard_deviation_month_appearing",
    "weight": "count_appearances",
    "code": "test_code",
}
