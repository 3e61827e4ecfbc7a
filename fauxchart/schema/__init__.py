"""Reference table schema."""

from fauxchart.schema.base import REFERENCE_COLUMNS, ConditionGroup, ReferenceRow

__all__ = ["REFERENCE_COLUMNS", "ConditionGroup", "ReferenceRow"]
