"""Infrastructure I/O layer: CSV reading, SDTM typing and XPT export."""

from .csv_reader import CSVReader, CSVReadOptions
from .exceptions import (
    AdamBdsInfrastructureError,
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataValidationError,
    XportGenerationError,
)
from .sdtm_types import coerce_sdtm_types
from .xpt_writer import write_xpt_file

__all__ = [
    "AdamBdsInfrastructureError",
    "CSVReadOptions",
    "CSVReader",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataValidationError",
    "XportGenerationError",
    "coerce_sdtm_types",
    "write_xpt_file",
]
