"""Parameter assignment and analysis value derivations."""

from .analysis_value import AnalysisValueDeriver
from .lookup_builder import build_parameter_lookup, parameter_label

__all__ = [
    "AnalysisValueDeriver",
    "build_parameter_lookup",
    "parameter_label",
]
