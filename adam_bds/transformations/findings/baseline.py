"""Baseline and change-from-baseline derivations.

- ``ABLFL``: last record with a result (AVAL or AVALC) on or before
  treatment start, per subject and parameter
- ``BASE``, ``BASEC``, ``BNRIND``: spread from the baseline record to every
  record of the subject/parameter
- ``CHG``, ``PCHG``: change and percent change from baseline, post-baseline
  records only (``AVISITN > 0``)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from ...pandas_utils import normalize_missing_strings, to_date_series, to_float_series
from ..base import TransformationContext, TransformationResult

ROW_COLUMN = "_ROW"
# Grouping variables that must be present for a record to be selected;
# other grouping variables (e.g. ATPT) may be missing and form their own group.
REQUIRED_KEYS = ("USUBJID", "PARAMCD")


def flag_extreme_records(
    df: pd.DataFrame,
    by_vars: Sequence[str],
    order: Sequence[str],
    candidates: pd.Series,
    *,
    mode: str = "last",
) -> pd.Series:
    """Flag the first or last candidate record per group with ``"Y"``.

    Rows are ordered by ``order`` (missing values first) and then by their
    original position, so the result is deterministic.
    """
    if mode not in ("first", "last"):
        raise ValueError(f"mode must be 'first' or 'last', got {mode!r}")
    frame = df.reset_index(drop=True)
    frame[ROW_COLUMN] = np.arange(len(frame))
    selected = frame.loc[candidates.to_numpy(dtype=bool)]
    order_vars = [var for var in order if var in frame.columns]
    selected = selected.sort_values(
        [*by_vars, *order_vars, ROW_COLUMN], kind="stable", na_position="first"
    )
    grouped = selected.groupby(list(by_vars), dropna=False, sort=False)
    chosen = grouped.tail(1) if mode == "last" else grouped.head(1)

    flags = pd.Series(pd.NA, index=frame.index, dtype="string")
    flags.iloc[chosen[ROW_COLUMN].to_numpy()] = "Y"
    flags.index = df.index
    return flags


class BaselineDeriver:
    """Transformer deriving baseline flag, baseline values and changes.

    Example:
        >>> deriver = BaselineDeriver()
        >>> result = deriver.transform(adlb, TransformationContext(domain="LB"))
        >>> result.data.loc[result.data["ABLFL"] == "Y", ["USUBJID", "PARAMCD", "AVAL"]]
    """

    def __init__(
        self,
        by_vars: Sequence[str] = ("USUBJID", "PARAMCD"),
        order: Sequence[str] | None = None,
        reference_date: str = "TRTSDT",
    ):
        self.by_vars = list(by_vars)
        self.order = list(order) if order is not None else None
        self.reference_date = reference_date

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        required = [*self.by_vars, "AVAL", "ADT", self.reference_date]
        return all(var in df.columns for var in required)

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        order = self.order or ["ADT", "VISITNUM", context.var("SEQ")]
        transformed_df = df.copy()

        aval = to_float_series(transformed_df["AVAL"])
        adt = to_date_series(transformed_df["ADT"])
        reference = to_date_series(transformed_df[self.reference_date])
        has_value = aval.notna()
        if "AVALC" in transformed_df.columns:
            has_value |= normalize_missing_strings(transformed_df["AVALC"]).notna()
        candidates = has_value & adt.notna() & (adt <= reference)
        for var in self.by_vars:
            if var in REQUIRED_KEYS:
                candidates &= transformed_df[var].notna()

        transformed_df["ABLFL"] = flag_extreme_records(
            transformed_df, self.by_vars, order, candidates
        )

        spread = {"AVAL": "BASE"}
        if "AVALC" in transformed_df.columns:
            spread["AVALC"] = "BASEC"
        if "ANRIND" in transformed_df.columns:
            spread["ANRIND"] = "BNRIND"
        baseline = (
            transformed_df.loc[
                transformed_df["ABLFL"] == "Y", [*self.by_vars, *spread.keys()]
            ]
            .rename(columns=spread)
        )
        transformed_df = transformed_df.drop(
            columns=[c for c in spread.values() if c in transformed_df.columns]
        )
        merged = transformed_df.merge(
            baseline, on=self.by_vars, how="left", validate="many_to_one"
        )
        merged.index = df.index

        base = to_float_series(merged["BASE"])
        post_baseline = (
            to_float_series(merged["AVISITN"]) > 0
            if "AVISITN" in merged.columns
            else pd.Series(True, index=merged.index)
        )
        chg = (aval - base).where(post_baseline)
        merged["BASE"] = base
        merged["CHG"] = chg
        merged["PCHG"] = (chg / base * 100).where(base != 0)

        baseline_records = int((merged["ABLFL"] == "Y").sum())
        keyed = merged.dropna(subset=[v for v in self.by_vars if v in REQUIRED_KEYS])
        groups = keyed.groupby(self.by_vars, dropna=False).ngroups
        warnings = []
        if baseline_records < groups:
            warnings.append(
                f"{groups - baseline_records} subject/parameter group(s) without a baseline record"
            )

        return TransformationResult(
            data=merged,
            applied=True,
            message=f"Derived ABLFL, {', '.join(spread.values())}, CHG, PCHG",
            warnings=warnings,
            metadata={
                "derived_variables": ["ABLFL", *spread.values(), "CHG", "PCHG"],
                "baseline_records": baseline_records,
                "input_rows": len(df),
                "output_rows": len(merged),
            },
        )
