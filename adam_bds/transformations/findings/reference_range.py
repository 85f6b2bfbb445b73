"""Reference range derivations (ANRLO, ANRHI, ANRIND)."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ...pandas_utils import to_float_series
from ..base import TransformationContext, TransformationResult


def reference_range_indicator(
    aval: pd.Series, low: pd.Series, high: pd.Series
) -> pd.Series:
    """Classify analysis values against their normal range.

    ``LOW`` below the lower limit, ``HIGH`` above the upper limit, ``NORMAL``
    otherwise; missing when the value or both limits are missing.
    """
    conditions = [
        aval.isna() | (low.isna() & high.isna()),
        aval < low,
        aval > high,
    ]
    indicator = np.select(conditions, [None, "LOW", "HIGH"], default="NORMAL")
    return pd.Series(indicator, index=aval.index, dtype="string")


class ReferenceRangeDeriver:
    """Transformer deriving normal range limits and the range indicator.

    ``ANRLO``/``ANRHI`` come from ``--STNRLO``/``--STNRHI``; records without
    limits (typical for vital signs) keep a missing ``ANRIND``.
    """

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        prefix = domain.upper()
        return "AVAL" in df.columns and (
            f"{prefix}STNRLO" in df.columns or f"{prefix}STNRHI" in df.columns
        )

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        transformed_df = df.copy()
        index = transformed_df.index
        low_var, high_var = context.var("STNRLO"), context.var("STNRHI")

        missing = pd.Series(float("nan"), index=index)
        low = (
            to_float_series(transformed_df[low_var])
            if low_var in transformed_df.columns
            else missing
        )
        high = (
            to_float_series(transformed_df[high_var])
            if high_var in transformed_df.columns
            else missing
        )
        aval = to_float_series(transformed_df["AVAL"])

        transformed_df["ANRLO"] = low
        transformed_df["ANRHI"] = high
        transformed_df["ANRIND"] = reference_range_indicator(aval, low, high)

        counts = transformed_df["ANRIND"].value_counts().to_dict()
        return TransformationResult(
            data=transformed_df,
            applied=True,
            message="Derived ANRLO, ANRHI, ANRIND",
            metadata={
                "derived_variables": ["ANRLO", "ANRHI", "ANRIND"],
                "indicator_counts": {str(k): int(v) for k, v in counts.items()},
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
