from typing import Any, cast

import numpy as np
import pandas as pd

from .constants import MissingValues


def ensure_series(value: object, index: pd.Index | None = None) -> pd.Series:
    if isinstance(value, pd.Series):
        return value
    if isinstance(value, pd.DataFrame):
        if value.shape[1] == 0:
            return pd.Series(index=value.index, dtype="object")
        return value.iloc[:, 0]
    return pd.Series(cast("Any", value), index=index)


def to_float_series(value: object, index: pd.Index | None = None) -> pd.Series:
    """Coerce values to a plain float64 series, NaN for anything non-numeric."""
    series = ensure_series(value, index=index)
    if not pd.api.types.is_numeric_dtype(series.dtype):
        series = series.astype("object").where(series.notna(), None)
        series = pd.to_numeric(series, errors="coerce")
    return pd.Series(
        series.to_numpy(dtype="float64", na_value=np.nan), index=series.index
    )


def is_missing_scalar(value: object) -> bool:
    try:
        return cast("bool", pd.isna(cast("Any", value)))
    except (TypeError, ValueError):
        return False


def normalize_missing_strings(value: object, *, markers: set[str] | None = None) -> pd.Series:
    """Strip text values and turn missing-value markers into ``pd.NA``."""
    series = ensure_series(value).astype("string")
    stripped = series.str.strip()
    marker_set = {m.upper() for m in markers or MissingValues.STRING_MARKERS}
    marker_mask = stripped.str.upper().isin(marker_set)
    return stripped.mask(marker_mask, pd.NA)


def to_date_series(value: object) -> pd.Series:
    """Coerce a column of dates (strings, timestamps) to normalized datetimes."""
    series = ensure_series(value)
    return pd.to_datetime(series, errors="coerce", format="ISO8601").dt.normalize()


def added_columns(before: pd.DataFrame, after: pd.DataFrame) -> list[str]:
    existing = set(before.columns)
    return [str(col) for col in after.columns if col not in existing]
