"""Join-based enrichment of observation records."""

from .adsl_merger import SubjectVariableMerger
from .lookup_merger import LOOKUP_VARIABLES, ParameterLookupMerger

__all__ = [
    "LOOKUP_VARIABLES",
    "ParameterLookupMerger",
    "SubjectVariableMerger",
]
