"""Loading of the ADSL and findings source tables.

Tables come from a data directory (``<name>.csv`` or ``<name>.xpt``) or, when
no directory is given, from the sample study bundled with the package.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import pandas as pd
import pyreadstat

from ..io.csv_reader import CSVReader, CSVReadOptions
from ..io.exceptions import (
    DataParseError,
    DataSourceNotFoundError,
    DataValidationError,
)
from ..io.sdtm_types import coerce_sdtm_types

SUPPORTED_EXTENSIONS = (".csv", ".xpt")
SAMPLE_PACKAGE = "adam_bds"
SAMPLE_DIRECTORY = "data"


class SourceDataRepository:
    def __init__(
        self, data_dir: Path | None = None, csv_reader: CSVReader | None = None
    ) -> None:
        super().__init__()
        self.data_dir = data_dir
        self._csv_reader = csv_reader or CSVReader()

    @property
    def source_label(self) -> str:
        return str(self.data_dir) if self.data_dir else "bundled sample data"

    def read_dataset(self, file_path: str | Path) -> pd.DataFrame:
        path = Path(file_path)
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        ext = path.suffix.lower()
        if ext == ".csv":
            return self._read_csv(path)
        if ext == ".xpt":
            return self._read_xpt(path)
        supported = ", ".join(SUPPORTED_EXTENSIONS)
        raise DataParseError(f"Unsupported format '{ext}'. Supported: {supported}")

    def find_dataset(self, name: str) -> Path:
        """Locate ``<name>.csv`` or ``<name>.xpt`` (any case) in the data directory."""
        if self.data_dir is None:
            raise DataSourceNotFoundError("No data directory configured")
        if not self.data_dir.is_dir():
            raise DataSourceNotFoundError(f"Data directory not found: {self.data_dir}")
        wanted = {f"{name.lower()}{ext}" for ext in SUPPORTED_EXTENSIONS}
        for path in sorted(self.data_dir.iterdir()):
            if path.is_file() and path.name.lower() in wanted:
                return path
        raise DataSourceNotFoundError(
            f"No {name.lower()}.csv or {name.lower()}.xpt in {self.data_dir}"
        )

    def load(self, name: str, domain: str | None = None) -> pd.DataFrame:
        """Load and type a source table.

        Args:
            name: Dataset name (``adsl``, ``lb``, ``vs``)
            domain: Findings domain prefix, None for subject-level tables

        Returns:
            DataFrame with numeric SDTM variables as floats
        """
        if self.data_dir is None:
            frame = self._read_sample(name)
        else:
            frame = self.read_dataset(self.find_dataset(name))
        return coerce_sdtm_types(frame, domain)

    def load_adsl(self) -> pd.DataFrame:
        adsl = self.load("adsl")
        if "USUBJID" not in adsl.columns:
            raise DataParseError("ADSL has no USUBJID column")
        return adsl

    def load_findings(self, domain: str) -> pd.DataFrame:
        domain = domain.upper()
        findings = self.load(domain.lower(), domain=domain)
        required = ["USUBJID", f"{domain}TESTCD"]
        missing = [var for var in required if var not in findings.columns]
        if missing:
            raise DataParseError(
                f"{domain} data is missing required variables: {', '.join(missing)}"
            )
        if findings.empty:
            raise DataValidationError(f"{domain} data contains no records")
        return findings

    def _read_sample(self, name: str) -> pd.DataFrame:
        resource = resources.files(SAMPLE_PACKAGE) / SAMPLE_DIRECTORY / f"{name.lower()}.csv"
        if not resource.is_file():
            raise DataSourceNotFoundError(f"No bundled sample dataset named {name!r}")
        with resources.as_file(resource) as path:
            return self._read_csv(path)

    def _read_csv(self, path: Path) -> pd.DataFrame:
        options = CSVReadOptions(normalize_headers=True, strict_na_handling=True)
        return self._csv_reader.read(path, options)

    def _read_xpt(self, path: Path) -> pd.DataFrame:
        try:
            frame, _meta = pyreadstat.read_xport(
                str(path), dates_as_pandas_datetime=True
            )
        except Exception as e:
            raise DataParseError(f"Failed to read XPT file {path}: {e}") from e
        frame.columns = [str(col).strip().upper() for col in frame.columns]
        return frame
