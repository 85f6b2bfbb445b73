"""Record-level treatment variables (TRTP, TRTA)."""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from ..base import TransformationContext, TransformationResult

DEFAULT_TREATMENT_VARIABLES = {"TRTP": "TRT01P", "TRTA": "TRT01A"}


class TreatmentVariableDeriver:
    """Transformer copying period treatment variables to the record level."""

    def __init__(self, mapping: Mapping[str, str] | None = None):
        self.mapping = dict(mapping or DEFAULT_TREATMENT_VARIABLES)

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return any(source in df.columns for source in self.mapping.values())

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        transformed_df = df.copy()
        derived = []
        for target, source in self.mapping.items():
            if source in transformed_df.columns:
                transformed_df[target] = transformed_df[source]
                derived.append(target)

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {', '.join(derived)}",
            metadata={
                "derived_variables": derived,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
