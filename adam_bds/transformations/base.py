"""Contract of the BDS derivation steps.

A derivation step is any object with ``can_transform`` and ``transform``.
Steps never modify their input; they return a ``TransformationResult`` with
a derived copy, and report data problems as warnings or errors instead of
raising, so the vignette can show what each step did.

Example:
    >>> class VisitUppercaser:
    ...     def can_transform(self, df, domain):
    ...         return "VISIT" in df.columns
    ...
    ...     def transform(self, df, context):
    ...         return TransformationResult(
    ...             data=df.assign(VISIT=df["VISIT"].str.upper()),
    ...             message="Uppercased VISIT",
    ...         )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import pandas as pd


def _empty_str_list() -> list[str]:
    return []


def _empty_metadata() -> dict[str, object]:
    return {}


@dataclass
class TransformationContext:
    """Names shared by every step of one build.

    Attributes:
        domain: SDTM findings domain prefix of the source data ('LB', 'VS')
        dataset: ADaM dataset being built, ``AD<domain>`` by default
        study_id: Study identifier (optional)

    Example:
        >>> context = TransformationContext(domain="lb")
        >>> context.dataset, context.var("TESTCD")
        ('ADLB', 'LBTESTCD')
    """

    domain: str
    dataset: str = ""
    study_id: str | None = None

    def __post_init__(self) -> None:
        self.domain = self.domain.upper()
        if not self.dataset:
            self.dataset = f"AD{self.domain}"

    def var(self, suffix: str) -> str:
        """Return the domain-prefixed SDTM variable name for ``suffix``."""
        return f"{self.domain}{suffix}"


@dataclass
class TransformationResult:
    """Outcome of a derivation step.

    Attributes:
        data: Derived DataFrame
        applied: False when the step had nothing to do
        message: What the step derived, e.g. ``Derived ADT, ADTF from LBDTC``
        warnings: Data problems the step worked around
        errors: Problems that make ``data`` unusable
        metadata: Row counts, derived variables and step-specific counts
    """

    data: pd.DataFrame
    applied: bool = True
    message: str = ""
    warnings: list[str] = field(default_factory=_empty_str_list)
    errors: list[str] = field(default_factory=_empty_str_list)
    metadata: dict[str, object] = field(default_factory=_empty_metadata)

    @property
    def success(self) -> bool:
        return self.applied and not self.errors


class TransformerPort(Protocol):
    """Protocol every derivation step implements."""

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        """Whether ``df`` carries the variables this step derives from."""
        ...

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult: ...
