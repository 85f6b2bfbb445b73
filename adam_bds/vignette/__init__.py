"""The BDS Finding vignette: derivation steps and HTML rendering."""

from .bds_finding import STEPS, VignetteState, VignetteStep, run_transformers
from .renderer import VignetteRenderer, frame_to_html

__all__ = [
    "STEPS",
    "VignetteRenderer",
    "VignetteState",
    "VignetteStep",
    "frame_to_html",
    "run_transformers",
]
