"""Analysis relative day calculator.

Derives ``--DY`` variables (``ADY`` from ``ADT``) relative to a reference
date, by default the treatment start date ``TRTSDT`` merged from ADSL.

Study Day Calculation Rules:
- If date >= reference: day = (date - reference).days + 1
- If date < reference: day = (date - reference).days
- There is NO Day 0
- A missing date or reference date results in a missing day
- Only the date portion of datetimes is used
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ...pandas_utils import to_date_series
from ..base import TransformationContext, TransformationResult


def day_variable_name(source_var: str) -> str:
    """Name of the relative day variable for a date variable.

    Example:
        >>> day_variable_name("ADT"), day_variable_name("ASTDTM")
        ('ADY', 'ASTDY')
    """
    if source_var.endswith("DTM"):
        return source_var[:-3] + "DY"
    if source_var.endswith("DT"):
        return source_var[:-2] + "DY"
    raise ValueError(f"{source_var} is not a date (--DT) or datetime (--DTM) variable")


def compute_relative_day(dates: pd.Series, reference: pd.Series) -> pd.Series:
    """Vectorised study day computation with no Day 0."""
    delta = (to_date_series(dates) - to_date_series(reference)).dt.days
    days = delta.where(delta < 0, delta + 1)
    return days.astype("Int64")


class AnalysisDayCalculator:
    """Transformer for calculating analysis relative day variables.

    Example:
        >>> calculator = AnalysisDayCalculator(reference_date="TRTSDT", source_vars=["ADT"])
        >>> result = calculator.transform(adlb, TransformationContext(domain="LB"))
        >>> result.metadata["dy_columns_calculated"]
        ['ADY']
    """

    def __init__(
        self, reference_date: str = "TRTSDT", source_vars: Sequence[str] = ("ADT",)
    ):
        self.reference_date = reference_date
        self.source_vars = list(source_vars)

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return self.reference_date in df.columns and any(
            var in df.columns for var in self.source_vars
        )

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        transformed_df = df.copy()

        if self.reference_date not in transformed_df.columns:
            return TransformationResult(
                data=transformed_df,
                applied=False,
                message=f"{self.reference_date} column not found",
                warnings=[
                    f"Cannot calculate relative days without {self.reference_date}"
                ],
            )

        dy_columns_calculated = []
        for source_var in self.source_vars:
            if source_var not in transformed_df.columns:
                continue
            dy_var = day_variable_name(source_var)
            transformed_df[dy_var] = compute_relative_day(
                transformed_df[source_var], transformed_df[self.reference_date]
            )
            dy_columns_calculated.append(dy_var)

        if not dy_columns_calculated:
            return TransformationResult(
                data=transformed_df,
                applied=False,
                message="No source date columns found",
            )

        missing_reference = int(transformed_df[self.reference_date].isna().sum())
        warnings = []
        if missing_reference:
            warnings.append(
                f"{missing_reference} record(s) without {self.reference_date}"
            )

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=(
                f"Calculated relative days for {len(dy_columns_calculated)} column(s): "
                f"{', '.join(dy_columns_calculated)}"
            ),
            warnings=warnings,
            metadata={
                "dy_columns_calculated": dy_columns_calculated,
                "reference_date": self.reference_date,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
