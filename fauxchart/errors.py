"""Exception types raised by fauxchart."""

from __future__ import annotations


class FauxchartError(Exception):
    """Base class for all fauxchart errors."""


class ReferenceDataError(FauxchartError, ValueError):
    """The reference table is malformed and no model can be built from it."""


class DegenerateCandidateSetError(FauxchartError, ValueError):
    """A weighted draw was requested over no items or over zero total weight.

    When raised through :class:`~fauxchart.data.model.AdmissionsModel` the
    offending ``group`` and ``bucket`` are attached.
    """

    def __init__(self, message: str, group: str | None = None, bucket: int | None = None) -> None:
        super().__init__(message)
        self.group = group
        self.bucket = bucket


class ConfigError(FauxchartError, ValueError):
    """The YAML configuration could not be read or validated."""
