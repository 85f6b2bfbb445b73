"""Analysis visit and timepoint derivation."""

from __future__ import annotations

import re

import pandas as pd

from ...constants import Patterns
from ...pandas_utils import normalize_missing_strings, to_float_series
from ..base import TransformationContext, TransformationResult

WEEK_PATTERN = re.compile(Patterns.VISIT_WEEK)


def analysis_visit(visit: object) -> str | None:
    """Map an SDTM ``VISIT`` to ``AVISIT``.

    Screening, unscheduled, retrieval and ambulatory visits are not analysis
    visits.

    Example:
        >>> analysis_visit("WEEK 2"), analysis_visit("UNSCHEDULED 1.1")
        ('Week 2', None)
    """
    if visit is None or pd.isna(visit):
        return None
    text = str(visit).strip()
    upper = text.upper()
    if not text or any(marker in upper for marker in Patterns.NON_ANALYSIS_VISITS):
        return None
    return text.title()


def analysis_visit_number(visit: object) -> float | None:
    """Map an SDTM ``VISIT`` to ``AVISITN``: 0 for baseline, N for week N.

    Example:
        >>> analysis_visit_number("BASELINE"), analysis_visit_number("WEEK 12")
        (0.0, 12.0)
    """
    if visit is None or pd.isna(visit):
        return None
    upper = str(visit).strip().upper()
    if upper == "BASELINE":
        return 0.0
    match = WEEK_PATTERN.match(upper)
    if match:
        return float(match.group(1))
    return None


class AnalysisVisitDeriver:
    """Transformer deriving ``AVISIT``/``AVISITN`` and ``ATPT``/``ATPTN``.

    The timepoint variables are copied from ``--TPT``/``--TPTNUM`` when the
    source domain has them (vital signs).
    """

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return "VISIT" in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        transformed_df = df.copy()
        visits = normalize_missing_strings(transformed_df["VISIT"])

        transformed_df["AVISIT"] = pd.Series(
            [analysis_visit(v) for v in visits], index=visits.index, dtype="string"
        )
        transformed_df["AVISITN"] = pd.Series(
            [analysis_visit_number(v) for v in visits],
            index=visits.index,
            dtype="float64",
        )
        derived = ["AVISIT", "AVISITN"]

        tpt, tptnum = context.var("TPT"), context.var("TPTNUM")
        if tpt in transformed_df.columns:
            transformed_df["ATPT"] = normalize_missing_strings(transformed_df[tpt])
            derived.append("ATPT")
        if tptnum in transformed_df.columns:
            transformed_df["ATPTN"] = to_float_series(transformed_df[tptnum])
            derived.append("ATPTN")

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {', '.join(derived)} from VISIT",
            metadata={
                "derived_variables": derived,
                "analysis_visits": sorted(
                    transformed_df["AVISIT"].dropna().unique().tolist()
                ),
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
