"""Data-integrity checks for the enriched BDS dataset.

The checks cover the joins the vignette illustrates:

- the enriched dataset has exactly as many rows as the source observations
- every enriched row has a subject identifier
- the parameter lookup holds exactly one row per distinct test code
- no row carries a parameter code while its test code is outside the
  lookup's key domain
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from ..pandas_utils import normalize_missing_strings


class IntegrityError(Exception):
    """Raised when the enriched dataset violates a join invariant."""

    def __init__(self, issues: list[IntegrityIssue]):
        self.issues = issues
        details = "; ".join(f"{issue.check}: {issue.message}" for issue in issues)
        super().__init__(f"{len(issues)} integrity check(s) failed: {details}")


@dataclass(frozen=True, slots=True)
class IntegrityIssue:
    check: str
    message: str


def _empty_issues() -> list[IntegrityIssue]:
    return []


@dataclass(slots=True)
class IntegrityReport:
    source_rows: int
    enriched_rows: int
    lookup_rows: int
    issues: list[IntegrityIssue] = field(default_factory=_empty_issues)

    @property
    def passed(self) -> bool:
        return not self.issues

    def raise_for_issues(self) -> None:
        if self.issues:
            raise IntegrityError(list(self.issues))


def check_row_count(source: pd.DataFrame, enriched: pd.DataFrame) -> IntegrityIssue | None:
    if len(source) != len(enriched):
        return IntegrityIssue(
            "row_count",
            f"enriched dataset has {len(enriched)} rows, source has {len(source)}",
        )
    return None


def check_subject_identifier(enriched: pd.DataFrame) -> IntegrityIssue | None:
    if "USUBJID" not in enriched.columns:
        return IntegrityIssue("subject_identifier", "USUBJID column is missing")
    subjects = enriched["USUBJID"].astype("string").str.strip()
    missing = int((subjects.isna() | (subjects == "")).sum())
    if missing:
        return IntegrityIssue(
            "subject_identifier", f"{missing} row(s) without USUBJID"
        )
    return None


def check_lookup_uniqueness(
    source: pd.DataFrame, lookup: pd.DataFrame, key: str
) -> IntegrityIssue | None:
    if key not in lookup.columns:
        return IntegrityIssue("lookup_unique", f"lookup has no {key} column")
    duplicated = sorted(
        lookup.loc[lookup[key].duplicated(keep=False), key].astype(str).unique()
    )
    if duplicated:
        return IntegrityIssue(
            "lookup_unique", f"duplicate test codes in lookup: {', '.join(duplicated)}"
        )
    if key in source.columns:
        distinct = normalize_missing_strings(source[key]).dropna().nunique()
        if len(lookup) != distinct:
            return IntegrityIssue(
                "lookup_unique",
                f"lookup has {len(lookup)} rows for {distinct} distinct test codes",
            )
    return None


def check_lookup_domain(
    enriched: pd.DataFrame, lookup: pd.DataFrame, key: str
) -> IntegrityIssue | None:
    if "PARAMCD" not in enriched.columns or key not in enriched.columns:
        return None
    known = set(lookup[key].dropna().astype(str)) if key in lookup.columns else set()
    mapped = enriched.loc[enriched["PARAMCD"].notna(), key].dropna().astype(str)
    foreign = sorted(set(mapped) - known)
    if foreign:
        return IntegrityIssue(
            "lookup_domain",
            f"parameter codes assigned to unknown test codes: {', '.join(foreign)}",
        )
    return None


def check_integrity(
    source: pd.DataFrame,
    enriched: pd.DataFrame,
    lookup: pd.DataFrame,
    domain: str = "LB",
) -> IntegrityReport:
    """Run every integrity check and collect the issues found.

    Args:
        source: Source SDTM findings records
        enriched: Derived BDS dataset
        lookup: Parameter lookup used for the PARAMCD join
        domain: Domain prefix of the test code variable

    Returns:
        IntegrityReport; call ``raise_for_issues()`` to fail on issues
    """
    key = f"{domain.upper()}TESTCD"
    report = IntegrityReport(
        source_rows=len(source), enriched_rows=len(enriched), lookup_rows=len(lookup)
    )
    for issue in (
        check_row_count(source, enriched),
        check_subject_identifier(enriched),
        check_lookup_uniqueness(source, lookup, key),
        check_lookup_domain(enriched, lookup, key),
    ):
        if issue is not None:
            report.issues.append(issue)
    return report
