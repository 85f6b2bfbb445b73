from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from .exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

INDEX_COLUMN_PREFIX = "UNNAMED:"


@dataclass(slots=True)
class CSVReadOptions:
    normalize_headers: bool = True
    strict_na_handling: bool = True
    drop_blank_rows: bool = True
    dtype: Any = str
    encoding: str = "utf-8-sig"


class CSVReader:
    """Read SDTM/ADaM extracts stored as CSV.

    All columns are read as strings; only empty cells become missing so that
    literal values such as ``NA`` in a result column survive the read.
    Spreadsheet exports often carry a byte order mark, a leading index column
    and trailing blank lines; the default options remove them.
    """

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        options = options or CSVReadOptions()
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")

        df = self._read_frame(path, options)
        if df.shape[1] == 0:
            raise DataParseError(f"CSV file has no columns: {path}")
        if options.normalize_headers:
            df = self._normalize_headers(df)
        if options.drop_blank_rows:
            df = df.dropna(how="all").reset_index(drop=True)
        return df

    @staticmethod
    def _read_frame(path: Path, options: CSVReadOptions) -> pd.DataFrame:
        strict = options.strict_na_handling
        try:
            return pd.read_csv(
                path,
                dtype=options.dtype,
                keep_default_na=not strict,
                na_values=[""] if strict else None,
                encoding=options.encoding,
            )
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"CSV file is empty: {path}") from e
        except pd.errors.ParserError as e:
            raise DataParseError(f"Failed to parse CSV {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path} as {options.encoding}: {e}"
            ) from e

    @staticmethod
    def _normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
        df.columns = [str(col).strip().upper() for col in df.columns]
        index_columns = [
            col for col in df.columns if col.startswith(INDEX_COLUMN_PREFIX)
        ]
        return df.drop(columns=index_columns)
