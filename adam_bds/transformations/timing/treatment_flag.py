"""On-treatment record flag (ONTRTFL)."""

from __future__ import annotations

import pandas as pd

from ...constants import Defaults
from ...pandas_utils import to_date_series
from ..base import TransformationContext, TransformationResult


class OnTreatmentFlagger:
    """Transformer flagging records that fall within the treatment period.

    ``ONTRTFL = "Y"`` when ``ref_start <= ADT <= ref_end + window``. Records
    without an analysis date or treatment start are left missing. A missing
    treatment end date leaves the period open-ended.
    """

    def __init__(
        self,
        start_date: str = "ADT",
        ref_start_date: str = "TRTSDT",
        ref_end_date: str = "TRTEDT",
        ref_end_window: int = Defaults.ONTRT_WINDOW_DAYS,
        new_var: str = "ONTRTFL",
    ):
        if ref_end_window < 0:
            raise ValueError(f"ref_end_window must not be negative, got {ref_end_window}")
        self.start_date = start_date
        self.ref_start_date = ref_start_date
        self.ref_end_date = ref_end_date
        self.ref_end_window = ref_end_window
        self.new_var = new_var

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        _ = domain
        return self.start_date in df.columns and self.ref_start_date in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        _ = context
        transformed_df = df.copy()
        dates = to_date_series(transformed_df[self.start_date])
        starts = to_date_series(transformed_df[self.ref_start_date])
        if self.ref_end_date in transformed_df.columns:
            ends = to_date_series(transformed_df[self.ref_end_date])
        else:
            ends = pd.Series(pd.NaT, index=transformed_df.index)
        ends = ends + pd.Timedelta(days=self.ref_end_window)

        on_treatment = (starts <= dates) & (ends.isna() | (dates <= ends))
        flags = pd.Series(pd.NA, index=transformed_df.index, dtype="string")
        flags[on_treatment.fillna(False)] = "Y"
        transformed_df[self.new_var] = flags

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=(
                f"Flagged {int((flags == 'Y').sum())} on-treatment record(s) in "
                f"{self.new_var}"
            ),
            metadata={
                "derived_variables": [self.new_var],
                "ref_end_window": self.ref_end_window,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
