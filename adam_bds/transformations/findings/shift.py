"""Shift from baseline derivation (SHIFT1)."""

from __future__ import annotations

import pandas as pd

from ...constants import Defaults
from ...pandas_utils import to_float_series
from ..base import TransformationContext, TransformationResult


class ShiftDeriver:
    """Transformer deriving ``SHIFT1`` as ``"<from> to <to>"``.

    Only post-baseline records (``AVISITN > 0``) get a shift; a missing
    indicator is shown as ``na_value``.
    """

    def __init__(
        self,
        from_var: str = "BNRIND",
        to_var: str = "ANRIND",
        new_var: str = "SHIFT1",
        na_value: str = Defaults.SHIFT_NA_VALUE,
    ):
        self.from_var = from_var
        self.to_var = to_var
        self.new_var = new_var
        self.na_value = na_value

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return self.from_var in df.columns and self.to_var in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        transformed_df = df.copy()
        source = transformed_df[self.from_var].astype("string").fillna(self.na_value)
        target = transformed_df[self.to_var].astype("string").fillna(self.na_value)
        shift = source + " to " + target

        if "AVISITN" in transformed_df.columns:
            shift = shift.where(to_float_series(transformed_df["AVISITN"]) > 0, pd.NA)
        transformed_df[self.new_var] = shift.astype("string")

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {self.new_var} from {self.from_var} and {self.to_var}",
            metadata={
                "derived_variables": [self.new_var],
                "shifts": {
                    str(k): int(v)
                    for k, v in transformed_df[self.new_var].value_counts().items()
                },
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
