"""Analysis date and datetime derivations.

- ``ADT`` / ``ADTF``: analysis date and date imputation flag from ``--DTC``
- ``ADTM`` / ``ATMF``: analysis datetime and time imputation flag

``ADTF`` is only created when date imputation is allowed; a record whose
date could not be derived keeps a missing ``ADT``.
"""

from __future__ import annotations

import pandas as pd

from ...constants import Defaults
from ..base import TransformationContext, TransformationResult
from .imputation import LEVEL_RANK, impute_dates, impute_datetimes


class AnalysisDateDeriver:
    """Transformer deriving ``<prefix>DT`` and ``<prefix>DTF`` from ``--DTC``.

    Example:
        >>> deriver = AnalysisDateDeriver(highest_imputation="M")
        >>> result = deriver.transform(adlb, TransformationContext(domain="LB"))
        >>> result.data[["LBDTC", "ADT", "ADTF"]]
    """

    def __init__(
        self,
        new_vars_prefix: str = "A",
        dtc_var: str | None = None,
        highest_imputation: str = Defaults.HIGHEST_DATE_IMPUTATION,
        date_imputation: str = Defaults.DATE_IMPUTATION,
    ):
        self.new_vars_prefix = new_vars_prefix
        self.dtc_var = dtc_var
        self.highest_imputation = highest_imputation
        self.date_imputation = date_imputation

    def _source(self, domain: str) -> str:
        return self.dtc_var or f"{domain.upper()}DTC"

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        return self._source(domain) in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        source = self._source(context.domain)
        date_var = f"{self.new_vars_prefix}DT"
        flag_var = f"{self.new_vars_prefix}DTF"

        transformed_df = df.copy()
        dates, flags = impute_dates(
            transformed_df[source], self.highest_imputation, self.date_imputation
        )
        transformed_df[date_var] = dates
        derived = [date_var]
        if self.highest_imputation != "n":
            transformed_df[flag_var] = flags
            derived.append(flag_var)

        present = transformed_df[source].notna() & (
            transformed_df[source].astype("string").str.strip() != ""
        )
        not_derived = int((present & dates.isna()).sum())
        warnings = []
        if not_derived:
            warnings.append(
                f"{not_derived} {source} value(s) could not be converted to {date_var}"
            )

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {', '.join(derived)} from {source}",
            warnings=warnings,
            metadata={
                "derived_variables": derived,
                "imputed_records": int(flags.notna().sum()),
                "not_derived": not_derived,
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )


class AnalysisDatetimeDeriver:
    """Transformer deriving ``<prefix>DTM`` and ``<prefix>TMF`` from ``--DTC``.

    When date imputation is allowed (highest level ``D`` or above) the date
    flag ``<prefix>DTF`` is added as well, unless it already exists.
    """

    def __init__(
        self,
        new_vars_prefix: str = "A",
        dtc_var: str | None = None,
        highest_imputation: str = Defaults.HIGHEST_TIME_IMPUTATION,
        date_imputation: str = Defaults.DATE_IMPUTATION,
        time_imputation: str = Defaults.TIME_IMPUTATION,
        ignore_seconds_flag: bool = False,
    ):
        self.new_vars_prefix = new_vars_prefix
        self.dtc_var = dtc_var
        self.highest_imputation = highest_imputation
        self.date_imputation = date_imputation
        self.time_imputation = time_imputation
        self.ignore_seconds_flag = ignore_seconds_flag

    def _source(self, domain: str) -> str:
        return self.dtc_var or f"{domain.upper()}DTC"

    def can_transform(self, df: pd.DataFrame, domain: str) -> bool:
        return self._source(domain) in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        source = self._source(context.domain)
        dtm_var = f"{self.new_vars_prefix}DTM"
        tmf_var = f"{self.new_vars_prefix}TMF"
        dtf_var = f"{self.new_vars_prefix}DTF"

        transformed_df = df.copy()
        datetimes, date_flags, time_flags = impute_datetimes(
            transformed_df[source],
            self.highest_imputation,
            self.date_imputation,
            self.time_imputation,
            ignore_seconds_flag=self.ignore_seconds_flag,
        )
        transformed_df[dtm_var] = datetimes
        transformed_df[tmf_var] = time_flags
        derived = [dtm_var, tmf_var]
        if (
            LEVEL_RANK[self.highest_imputation] >= LEVEL_RANK["D"]
            and dtf_var not in transformed_df.columns
        ):
            transformed_df[dtf_var] = date_flags
            derived.append(dtf_var)

        return TransformationResult(
            data=transformed_df,
            applied=True,
            message=f"Derived {', '.join(derived)} from {source}",
            metadata={
                "derived_variables": derived,
                "time_imputed_records": int(time_flags.notna().sum()),
                "input_rows": len(df),
                "output_rows": len(transformed_df),
            },
        )
