"""Analysis record flag (ANL01FL)."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..base import TransformationContext, TransformationResult
from .baseline import REQUIRED_KEYS, flag_extreme_records


class AnalysisFlagDeriver:
    """Transformer selecting one analysis record per subject, parameter and visit.

    Candidates are on-treatment records with an analysis visit; the last one
    by ``order`` is flagged. Baseline records are always flagged.
    """

    def __init__(
        self,
        by_vars: Sequence[str] = ("USUBJID", "PARAMCD", "AVISIT"),
        order: Sequence[str] = ("ADT", "AVAL"),
        new_var: str = "ANL01FL",
    ):
        self.by_vars = list(by_vars)
        self.order = list(order)
        self.new_var = new_var

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return all(var in df.columns for var in [*self.by_vars, "AVISITN"])

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        transformed_df = df.copy()
        index = transformed_df.index

        def is_yes(var: str) -> pd.Series:
            if var not in transformed_df.columns:
                return pd.Series(False, index=index)
            return (transformed_df[var].astype("string") == "Y").fillna(False)

        candidates = transformed_df["AVISITN"].notna() & is_yes("ONTRTFL")
        for var in self.by_vars:
            if var in REQUIRED_KEYS:
                candidates &= transformed_df[var].notna()

        flags = flag_extreme_records(
            transformed_df, self.by_vars, self.order, candidates
        )
        flags[is_yes("ABLFL").to_numpy(dtype=bool)] = "Y"
        transformed_df[self.new_var] = flags
        flagged = int((transformed_df[self.new_var] == "Y").sum())

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Flagged {flagged} analysis record(s) in {self.new_var}",
            metadata={
                "derived_variables": [self.new_var],
                "flagged_records": flagged,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
