"""Subject-level variable merger.

Left-joins ADSL covariates (treatment dates, planned/actual treatment) onto
the observation-level records. ADSL must be unique by subject so the join
never duplicates or drops observation rows.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ...constants import Keys
from ...pandas_utils import to_date_series
from ..base import TransformationContext, TransformationResult


class SubjectVariableMerger:
    """Transformer adding subject-level variables from ADSL.

    Date variables (names ending in ``DT``) are coerced to datetimes so the
    later date derivations can compare against them.

    Example:
        >>> merger = SubjectVariableMerger(adsl, variables=["TRTSDT", "TRTEDT"])
        >>> result = merger.transform(lb, TransformationContext(domain="LB"))
        >>> result.data[["USUBJID", "TRTSDT"]]
    """

    def __init__(
        self,
        adsl: pd.DataFrame,
        variables: Sequence[str] = Keys.ADSL_VARIABLES,
    ):
        self.adsl = adsl
        self.variables = list(variables)

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return "USUBJID" in df.columns and "USUBJID" in self.adsl.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        by_vars = [
            key for key in Keys.SUBJECT if key in df.columns and key in self.adsl.columns
        ]

        missing = [var for var in self.variables if var not in self.adsl.columns]
        if missing:
            return TransformationResult(
                data=df.copy(),
                applied=True,
                message="ADSL merge failed",
                errors=[f"ADSL is missing requested variables: {', '.join(missing)}"],
            )

        duplicated = self.adsl.duplicated(subset=by_vars, keep=False)
        if duplicated.any():
            subjects = sorted(self.adsl.loc[duplicated, "USUBJID"].astype(str).unique())
            return TransformationResult(
                data=df.copy(),
                applied=True,
                message="ADSL merge failed",
                errors=[
                    f"ADSL is not unique by {', '.join(by_vars)}: "
                    f"{', '.join(subjects[:5])}"
                ],
            )

        warnings: list[str] = []
        left = df.copy()
        overwritten = [var for var in self.variables if var in left.columns]
        if overwritten:
            left = left.drop(columns=overwritten)
            warnings.append(f"Replaced existing columns: {', '.join(overwritten)}")

        right = self.adsl.loc[:, [*by_vars, *self.variables]].copy()
        for var in self.variables:
            if var.endswith("DT"):
                right[var] = to_date_series(right[var])
        right = right.astype({key: left[key].dtype for key in by_vars})

        merged = left.merge(right, on=by_vars, how="left", validate="many_to_one")
        merged.index = df.index

        known = set(self.adsl["USUBJID"].dropna().astype(str))
        unmatched = sorted(
            {str(s) for s in df["USUBJID"].dropna() if str(s) not in known}
        )
        if unmatched:
            warnings.append(
                f"{len(unmatched)} subject(s) not found in ADSL: {', '.join(unmatched[:5])}"
            )

        return TransformationResult(
            data=merged,
            applied=True,
            message=f"Merged {len(self.variables)} ADSL variable(s) by {', '.join(by_vars)}",
            warnings=warnings,
            metadata={
                "by_vars": by_vars,
                "merged_variables": list(self.variables),
                "unmatched_subjects": unmatched,
                "input_rows": len(df),
                "output_rows": len(merged),
            },
        )
