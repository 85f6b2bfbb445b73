"""Pipeline for chaining BDS derivation steps.

Each step receives the output of the previous one. The pipeline skips steps
whose inputs are absent, stops at the first failing step unless fail-safe
mode is on, and records row counts and derived columns per step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from ..pandas_utils import added_columns
from .base import TransformationContext, TransformationResult, TransformerPort


@dataclass
class _Run:
    data: pd.DataFrame
    applied: list[dict[str, Any]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def metadata(self, input_rows: int, **extra: object) -> dict[str, object]:
        return {
            "input_rows": input_rows,
            "output_rows": len(self.data),
            "applied_transformers": self.applied,
            "skipped_transformers": self.skipped,
            **extra,
        }


class TransformationPipeline:
    """Sequential executor for derivation steps.

    Example:
        >>> from adam_bds.transformations.dates import AnalysisDateDeriver, AnalysisDayCalculator
        >>>
        >>> pipeline = TransformationPipeline()
        >>> pipeline.add_transformer(AnalysisDateDeriver()).add_transformer(AnalysisDayCalculator())
        >>> result = pipeline.execute(adlb, TransformationContext(domain="LB"))
        >>> result.metadata["applied_transformers"][0]["added_columns"]
        ['ADT', 'ADTF']
    """

    def __init__(self, fail_safe: bool = False):
        """Initialize the pipeline.

        Args:
            fail_safe: If True, keep going after a failing step (its output is
                      discarded). If False, stop on the first error.
        """
        self.transformers: list[TransformerPort] = []
        self.fail_safe = fail_safe

    def add_transformer(self, transformer: TransformerPort) -> TransformationPipeline:
        """Add a step; steps run in the order they are added."""
        self.transformers.append(transformer)
        return self

    def __len__(self) -> int:
        return len(self.transformers)

    def execute(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        """Run every applicable step on ``df``.

        Returns:
            TransformationResult with the final data; ``metadata`` lists the
            applied and skipped steps and, when the run stopped early, the
            step it stopped at
        """
        if not self.transformers:
            return TransformationResult(
                data=df,
                applied=False,
                message="Pipeline is empty (no transformers registered)",
            )

        run = _Run(data=df)
        for transformer in self.transformers:
            name = transformer.__class__.__name__
            if not transformer.can_transform(run.data, context.domain):
                run.skipped.append(name)
                continue

            try:
                result = transformer.transform(run.data, context)
            except Exception as e:
                run.errors.append(f"{name}: Unexpected error: {e}")
                if not self.fail_safe:
                    return self._stopped(run, name, "raised exception", len(df))
                run.warnings.append(f"{name}: Caught exception, continuing (fail-safe mode)")
                continue

            run.warnings.extend(f"{name}: {w}" for w in result.warnings)
            if not result.applied:
                run.skipped.append(name)
                continue

            run.applied.append(
                {
                    "name": name,
                    "input_rows": len(run.data),
                    "output_rows": len(result.data),
                    "added_columns": added_columns(run.data, result.data),
                    "message": result.message,
                    "metadata": result.metadata,
                }
            )
            run.errors.extend(f"{name}: {e}" for e in result.errors)
            if result.success:
                run.data = result.data
            elif self.fail_safe:
                run.warnings.append(
                    f"{name}: Transformation failed but continuing (fail-safe mode)"
                )
            else:
                return self._stopped(run, name, "failed", len(df))

        names = [step["name"] for step in run.applied]
        if not names:
            message = "No transformers were applicable"
        elif len(names) == 1:
            message = f"Applied 1 transformer: {names[0]}"
        else:
            message = f"Applied {len(names)} transformers: {', '.join(names)}"

        return TransformationResult(
            data=run.data,
            applied=bool(names),
            message=message,
            warnings=run.warnings,
            errors=run.errors,
            metadata=run.metadata(len(df), transformers_count=len(self.transformers)),
        )

    @staticmethod
    def _stopped(
        run: _Run, name: str, reason: str, input_rows: int
    ) -> TransformationResult:
        return TransformationResult(
            data=run.data,
            applied=True,
            message=f"Pipeline stopped: {name} {reason}",
            warnings=run.warnings,
            errors=run.errors,
            metadata=run.metadata(input_rows, stopped_at=name),
        )
