"""Parameter lookup merger.

Left-joins the parameter lookup (PARAMCD, PARAM, PARAMN, PARCAT1) onto the
observations by test code. The lookup must hold one row per test code;
observations whose test code is not in the lookup keep missing parameter
variables and are reported.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..base import TransformationContext, TransformationResult

LOOKUP_VARIABLES = ("PARAMCD", "PARAM", "PARAMN", "PARCAT1")


class ParameterLookupMerger:
    """Transformer joining parameter variables by ``--TESTCD``.

    Example:
        >>> lookup = build_parameter_lookup(lb, domain="LB")
        >>> merger = ParameterLookupMerger(lookup)
        >>> result = merger.transform(adlb, TransformationContext(domain="LB"))
        >>> result.metadata["unmapped_test_codes"]
        []
    """

    def __init__(
        self, lookup: pd.DataFrame, new_vars: Sequence[str] = LOOKUP_VARIABLES
    ):
        self.lookup = lookup
        self.new_vars = [var for var in new_vars if var in lookup.columns]

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        key = f"{domain.upper()}TESTCD"
        return key in df.columns and key in self.lookup.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        key = context.var("TESTCD")

        duplicated = self.lookup[key].duplicated(keep=False)
        if duplicated.any():
            codes = sorted(self.lookup.loc[duplicated, key].astype(str).unique())
            return TransformationResult(
                data=df.copy(),
                applied=True,
                message="Parameter lookup merge failed",
                errors=[f"Lookup is not unique by {key}: {', '.join(codes)}"],
            )

        warnings: list[str] = []
        left = df.copy()
        overwritten = [var for var in self.new_vars if var in left.columns]
        if overwritten:
            left = left.drop(columns=overwritten)
            warnings.append(f"Replaced existing columns: {', '.join(overwritten)}")

        right = self.lookup.loc[:, [key, *self.new_vars]].astype(
            {key: left[key].dtype}
        )
        merged = left.merge(right, on=key, how="left", validate="many_to_one")
        merged.index = df.index

        known = set(self.lookup[key].dropna().astype(str))
        unmapped = sorted(
            {str(code) for code in df[key].dropna() if str(code) not in known}
        )
        if unmapped:
            warnings.append(
                f"Test codes not mapped to a parameter: {', '.join(unmapped)}"
            )

        return TransformationResult(
            data=merged,
            applied=True,
            message=f"Merged {', '.join(self.new_vars)} by {key}",
            warnings=warnings,
            metadata={
                "by_vars": [key],
                "merged_variables": list(self.new_vars),
                "unmapped_test_codes": unmapped,
                "input_rows": len(df),
                "output_rows": len(merged),
            },
        )
