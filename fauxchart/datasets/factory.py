"""Registry of available datasets."""

from __future__ import annotations

import logging
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable

import numpy as np

from fauxchart.data.loader import bundled_reference_path
from fauxchart.data.model import AdmissionsModel, default_admissions_model, load_admissions_model
from fauxchart.datasets.admissions import HospitalAdmissions
from fauxchart.datasets.base import DataGenerator
from fauxchart.datasets.births import Births

logger = logging.getLogger(__name__)


class DataGeneratorFactory:
    """Create dataset generators by name.

    The admissions model is built at most once per factory and shared by
    every generator the factory creates.  Without a ``reference_table`` the
    process-wide model for the bundled table is used.
    """

    def __init__(
        self,
        reference_table: str | Path | None = None,
        on_degenerate: str = "raise",
        reference_date: datetime | None = None,
    ) -> None:
        self.reference_table = Path(reference_table) if reference_table else None
        self.on_degenerate = on_degenerate
        self.reference_date = reference_date
        self._model: AdmissionsModel | None = None
        self._model_lock = threading.Lock()
        self._builders: dict[str, Callable[[np.random.Generator], DataGenerator]] = {
            "HospitalAdmissions": lambda rng: HospitalAdmissions(
                rng, self.model, on_degenerate=self.on_degenerate
            ),
            "Births": lambda rng: Births(rng, reference_date=self.reference_date),
        }

    @property
    def model(self) -> AdmissionsModel:
        """The shared admissions model; concurrent first callers wait for one build."""
        model = self._model
        if model is None:
            with self._model_lock:
                if self._model is None:
                    if self.reference_table is None:
                        self._model = default_admissions_model()
                    else:
                        self._model = load_admissions_model(self.reference_table)
                model = self._model
        return model

    def available(self) -> list[str]:
        return sorted(self._builders)

    def create(self, name: str, rng: np.random.Generator) -> DataGenerator:
        """Return a new generator for dataset ``name``.

        Raises:
            KeyError: If no dataset has that name.
        """
        if name not in self._builders:
            raise KeyError(
                f"Dataset '{name}' not found. Available: {', '.join(self.available())}"
            )
        return self._builders[name](rng)

    def write_lookups(self, directory: str | Path) -> list[Path]:
        """Copy the reference tables used as code lookups into ``directory``."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        source = self.reference_table or bundled_reference_path()
        target = directory / "HospitalAdmissions_lookup.csv"
        shutil.copyfile(source, target)
        logger.info("Wrote lookup %s", target)
        return [target]
