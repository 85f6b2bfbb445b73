from pathlib import Path

import numpy as np
import pandas as pd
import pyreadstat

from ...constants import Domains, VariableLabels
from .exceptions import XportGenerationError

MAX_XPT_FILENAME_STEM = 8
MAX_XPT_LABEL_LENGTH = 40


def _export_values(series: pd.Series) -> np.ndarray:
    if pd.api.types.is_datetime64_any_dtype(series.dtype):
        normalized = series.dt.normalize()
        if (series.dropna() == normalized.dropna()).all():
            return np.array(
                [None if pd.isna(v) else v.date() for v in series], dtype=object
            )
        return np.array(
            [None if pd.isna(v) else v.to_pydatetime() for v in series], dtype=object
        )
    if pd.api.types.is_bool_dtype(series.dtype) or pd.api.types.is_numeric_dtype(
        series.dtype
    ):
        return pd.to_numeric(series, errors="coerce").to_numpy(
            dtype="float64", na_value=np.nan
        )
    normalized = series.astype(object).where(series.notna(), "").map(str)
    if not normalized.str.len().any():
        normalized = pd.Series([" "] * len(series), index=series.index)
    return normalized.to_numpy(dtype=object)


def write_xpt_file(
    dataset: pd.DataFrame,
    dataset_name: str,
    path: str | Path,
    *,
    file_label: str | None = None,
) -> Path:
    """Write an ADaM dataset as a SAS transport (v5) file.

    Date columns holding whole days are written as SAS dates, other datetime
    columns as SAS datetimes. Character missing values become blanks.

    Returns:
        The written path (file name lower-cased)

    Raises:
        XportGenerationError: If the file name or a column name is too long for
            transport v5, or pyreadstat fails to write the file
    """
    output_path = Path(path)
    output_path = output_path.with_name(output_path.name.lower())
    if len(output_path.stem) > MAX_XPT_FILENAME_STEM:
        raise XportGenerationError(
            f"XPT filename stem must be <=8 characters: {output_path.name}"
        )
    too_long = [str(col) for col in dataset.columns if len(str(col)) > 8]
    if too_long:
        raise XportGenerationError(
            f"XPT variable names must be <=8 characters: {', '.join(too_long)}"
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.exists():
        output_path.unlink()

    table_name = dataset_name.upper()[:8]
    default_label = next(
        (
            Domains.DESCRIPTIONS[code]
            for code, name in Domains.DATASET_NAMES.items()
            if name == table_name
        ),
        table_name,
    )
    label = (file_label or default_label).strip()[:MAX_XPT_LABEL_LENGTH] or None
    column_labels = [
        VariableLabels.ADAM.get(str(col).upper(), str(col))[:MAX_XPT_LABEL_LENGTH]
        for col in dataset.columns
    ]

    export_df = pd.DataFrame(index=dataset.index)
    for column_index, col in enumerate(dataset.columns):
        export_df.insert(
            column_index,
            col,
            _export_values(dataset.iloc[:, column_index]),
            allow_duplicates=True,
        )
    try:
        pyreadstat.write_xport(
            export_df.reset_index(drop=True),
            str(output_path),
            file_label=label,
            column_labels=column_labels,
            table_name=table_name,
            file_format_version=5,
        )
    except Exception as exc:
        raise XportGenerationError(f"Failed to write XPT file: {exc}") from exc
    return output_path
