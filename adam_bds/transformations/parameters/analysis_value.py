"""Analysis value derivation (AVAL, AVALC, AVALU)."""

from __future__ import annotations

import pandas as pd

from ...pandas_utils import normalize_missing_strings, to_float_series
from ..base import TransformationContext, TransformationResult


class AnalysisValueDeriver:
    """Transformer deriving the analysis value from the standardized result.

    - ``AVAL``: ``--STRESN``, falling back to a numeric ``--STRESC``
    - ``AVALC``: ``--STRESC`` for results that are not numeric
    - ``AVALU``: ``--STRESU``
    """

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        prefix = domain.upper()
        return f"{prefix}STRESN" in df.columns or f"{prefix}STRESC" in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        stresn = context.var("STRESN")
        stresc = context.var("STRESC")
        stresu = context.var("STRESU")

        transformed_df = df.copy()
        index = transformed_df.index

        character = (
            normalize_missing_strings(transformed_df[stresc])
            if stresc in transformed_df.columns
            else pd.Series(pd.NA, index=index, dtype="string")
        )
        numeric = (
            to_float_series(transformed_df[stresn])
            if stresn in transformed_df.columns
            else pd.Series(float("nan"), index=index)
        )
        aval = numeric.fillna(to_float_series(character))

        transformed_df["AVAL"] = aval.astype("float64")
        transformed_df["AVALC"] = character.where(aval.isna(), pd.NA)
        derived = ["AVAL", "AVALC"]
        if stresu in transformed_df.columns:
            transformed_df["AVALU"] = normalize_missing_strings(transformed_df[stresu])
            derived.append("AVALU")

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {', '.join(derived)}",
            metadata={
                "derived_variables": derived,
                "numeric_results": int(aval.notna().sum()),
                "character_results": int(transformed_df["AVALC"].notna().sum()),
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
