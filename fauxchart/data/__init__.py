"""Reference data loading, temporal indexing and the admissions model."""

from fauxchart.data.index import (
    TemporalIndex,
    build_temporal_index,
    month_bucket,
    occurrence_window,
)
from fauxchart.data.loader import ReferenceTableLoader, bundled_reference_path, load_reference_table
from fauxchart.data.model import (
    MAXIMUM_DATE,
    MINIMUM_DATE,
    AdmissionsModel,
    build_admissions_model,
    default_admissions_model,
    load_admissions_model,
)

__all__ = [
    "MAXIMUM_DATE",
    "MINIMUM_DATE",
    "AdmissionsModel",
    "ReferenceTableLoader",
    "TemporalIndex",
    "build_admissions_model",
    "build_temporal_index",
    "bundled_reference_path",
    "default_admissions_model",
    "load_admissions_model",
    "load_reference_table",
    "month_bucket",
    "occurrence_window",
]
