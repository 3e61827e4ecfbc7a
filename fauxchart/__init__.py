"""fauxchart: statistically plausible fake clinical records."""

from fauxchart.errors import (
    ConfigError,
    DegenerateCandidateSetError,
    FauxchartError,
    ReferenceDataError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DegenerateCandidateSetError",
    "FauxchartError",
    "ReferenceDataError",
    "__version__",
]
