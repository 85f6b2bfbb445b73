"""Findings derivations for BDS datasets.

This module provides transformers for:
- Reference ranges (ANRLO, ANRHI, ANRIND)
- Baseline and change from baseline (ABLFL, BASE, CHG, PCHG)
- Shifts (SHIFT1)
- Analysis flags (ANL01FL)
- Treatment variables (TRTP, TRTA)
- Sequence numbers (ASEQ)
"""

from .analysis_flag import AnalysisFlagDeriver
from .baseline import BaselineDeriver, flag_extreme_records
from .reference_range import ReferenceRangeDeriver, reference_range_indicator
from .sequence import SequenceNumberDeriver
from .shift import ShiftDeriver
from .treatment import TreatmentVariableDeriver

__all__ = [
    "AnalysisFlagDeriver",
    "BaselineDeriver",
    "ReferenceRangeDeriver",
    "SequenceNumberDeriver",
    "ShiftDeriver",
    "TreatmentVariableDeriver",
    "flag_extreme_records",
    "reference_range_indicator",
]
