"""Timing derivations: analysis visits, timepoints and treatment period flags."""

from .treatment_flag import OnTreatmentFlagger
from .visit import AnalysisVisitDeriver, analysis_visit, analysis_visit_number

__all__ = [
    "AnalysisVisitDeriver",
    "OnTreatmentFlagger",
    "analysis_visit",
    "analysis_visit_number",
]
