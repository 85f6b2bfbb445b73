"""Derivation framework.

This module provides the pluggable transformer framework the BDS vignette
steps are built on: merges, date imputation, parameter lookups, timing and
findings derivations.
"""

from .base import TransformationContext, TransformationResult, TransformerPort
from .pipeline import TransformationPipeline

__all__ = [
    "TransformationContext",
    "TransformationPipeline",
    "TransformationResult",
    "TransformerPort",
]
