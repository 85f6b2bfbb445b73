"""Date derivation framework.

This module provides transformers for date-related derivations:
- Date/time imputation of partial ISO 8601 values (ADT, ADTF, ADTM, ATMF)
- Analysis relative day calculation (ADY)
"""

from .analysis_date import AnalysisDateDeriver, AnalysisDatetimeDeriver
from .imputation import impute_date, impute_datetime, parse_dtc
from .study_day_calculator import AnalysisDayCalculator, compute_relative_day

__all__ = [
    "AnalysisDateDeriver",
    "AnalysisDatetimeDeriver",
    "AnalysisDayCalculator",
    "compute_relative_day",
    "impute_date",
    "impute_datetime",
    "parse_dtc",
]
