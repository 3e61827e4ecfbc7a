"""Reference table loading and validation."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from fauxchart.errors import ReferenceDataError
from fauxchart.schema.base import REFERENCE_COLUMNS, ReferenceRow

logger = logging.getLogger(__name__)

BUNDLED_REFERENCE_TABLE = "hospital_admissions.csv"


def bundled_reference_path() -> Path:
    """Return the path of the reference table shipped with the package."""
    return Path(str(resources.files("fauxchart.data").joinpath(BUNDLED_REFERENCE_TABLE)))


class ReferenceTableLoader:
    """Load reference tables into validated :class:`ReferenceRow` lists."""

    _TEXT_COLUMNS = (REFERENCE_COLUMNS["group"], REFERENCE_COLUMNS["code"])

    def read_frame(self, path: Path | str | None = None) -> pd.DataFrame:
        """Read a reference CSV as a DataFrame; the bundled table if ``path`` is None.

        Raises:
            FileNotFoundError: If the file does not exist.
            ReferenceDataError: If the file cannot be parsed or required
                columns are missing.
        """
        path = Path(path) if path is not None else bundled_reference_path()
        if not path.exists():
            raise FileNotFoundError(f"Reference table not found: {path}")

        try:
            df = pd.read_csv(path, dtype={c: str for c in self._TEXT_COLUMNS})
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise ReferenceDataError(f"Cannot parse reference table '{path.name}': {e}") from e
        missing = [c for c in REFERENCE_COLUMNS.values() if c not in df.columns]
        if missing:
            raise ReferenceDataError(
                f"Reference table '{path.name}' is missing columns: {missing}. "
                f"Found: {sorted(df.columns.tolist())}"
            )
        return df

    def rows_from_frame(self, df: pd.DataFrame) -> list[ReferenceRow]:
        """Validate every row of ``df``.

        Raises:
            ReferenceDataError: On the first row with an empty or invalid value.
        """
        columns = list(REFERENCE_COLUMNS.values())
        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise ReferenceDataError(f"Reference table is missing columns: {missing}")

        blanks = df[columns].isna()
        if blanks.values.any():
            line, column = next(
                (i, c) for i, row in blanks.iterrows() for c in columns if row[c]
            )
            raise ReferenceDataError(f"Reference row {line}: column '{column}' is empty")

        rows: list[ReferenceRow] = []
        for line, record in enumerate(df[columns].to_dict(orient="records")):
            try:
                rows.append(
                    ReferenceRow(**{field: record[col] for field, col in REFERENCE_COLUMNS.items()})
                )
            except ValidationError as e:
                raise ReferenceDataError(f"Reference row {line} is invalid: {e}") from e
        return rows

    def load(self, path: Path | str | None = None) -> list[ReferenceRow]:
        """Read and validate a reference table."""
        df = self.read_frame(path)
        rows = self.rows_from_frame(df)
        logger.info("Loaded %d reference rows from %s", len(rows), path or BUNDLED_REFERENCE_TABLE)
        return rows


def load_reference_table(path: Path | str | None = None) -> list[ReferenceRow]:
    """Shortcut for ``ReferenceTableLoader().load(path)``."""
    return ReferenceTableLoader().load(path)
