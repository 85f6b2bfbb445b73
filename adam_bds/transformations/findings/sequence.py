"""Analysis sequence number (ASEQ)."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..base import TransformationContext, TransformationResult


class SequenceNumberDeriver:
    """Transformer numbering records 1..n within each subject.

    The default order is PARAMCD, ADT, AVISITN, VISITNUM and the source
    sequence number ``--SEQ``; missing values sort last. The output is
    sorted in ASEQ order.
    """

    def __init__(
        self,
        by_vars: Sequence[str] = ("STUDYID", "USUBJID"),
        order: Sequence[str] | None = None,
        new_var: str = "ASEQ",
    ):
        self.by_vars = list(by_vars)
        self.order = list(order) if order is not None else None
        self.new_var = new_var

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return "USUBJID" in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        order = self.order or [
            "PARAMCD",
            "ADT",
            "AVISITN",
            "VISITNUM",
            context.var("SEQ"),
        ]
        by_vars = [var for var in self.by_vars if var in df.columns]
        order_vars = [var for var in order if var in df.columns]

        transformed_df = df.sort_values(
            [*by_vars, *order_vars], kind="stable", na_position="last"
        ).reset_index(drop=True)
        transformed_df[self.new_var] = (
            transformed_df.groupby(by_vars, sort=False).cumcount() + 1
        ).astype("Int64")

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {self.new_var} by {', '.join(by_vars)}",
            metadata={
                "derived_variables": [self.new_var],
                "order": order_vars,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
