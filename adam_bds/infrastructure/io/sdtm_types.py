"""Column typing for SDTM and ADSL tables read from text sources.

CSV extracts arrive as strings. Sorting and comparisons in the derivations
need the numeric SDTM variables as numbers and the ADSL ``*DT`` variables as
dates; ``--DTC`` values stay character because they may be partial.
"""

from __future__ import annotations

import pandas as pd

from ...pandas_utils import normalize_missing_strings, to_date_series, to_float_series

NUMERIC_SUFFIXES = ("SEQ", "STRESN", "STNRLO", "STNRHI", "TPTNUM")
NUMERIC_VARIABLES = ("VISITNUM", "VISITDY", "AGE")


def numeric_columns(df: pd.DataFrame, domain: str | None = None) -> list[str]:
    prefix = (domain or "").upper()
    names = [f"{prefix}{suffix}" for suffix in NUMERIC_SUFFIXES] if prefix else []
    names.extend(NUMERIC_VARIABLES)
    return [name for name in names if name in df.columns]


def date_columns(df: pd.DataFrame) -> list[str]:
    return [str(col) for col in df.columns if str(col).endswith("DT")]


def coerce_sdtm_types(df: pd.DataFrame, domain: str | None = None) -> pd.DataFrame:
    """Return a copy with numeric variables as float64 and text blanks as NA.

    Args:
        df: Table as read from the source file
        domain: Findings domain prefix (``LB``, ``VS``); None for ADSL

    Returns:
        Typed copy of ``df``
    """
    typed = df.copy()
    numeric = set(numeric_columns(typed, domain))
    for col in typed.columns:
        if col in numeric:
            typed[col] = to_float_series(typed[col])
        elif not pd.api.types.is_numeric_dtype(
            typed[col].dtype
        ) and not pd.api.types.is_datetime64_any_dtype(typed[col].dtype):
            typed[col] = normalize_missing_strings(typed[col], markers={""})
    if domain is None:
        for col in date_columns(typed):
            typed[col] = to_date_series(typed[col])
    return typed
