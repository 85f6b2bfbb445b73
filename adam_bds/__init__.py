"""ADaM BDS Finding vignette package.

This package derives analysis-ready Basic Data Structure datasets (ADLB,
ADVS) from SDTM findings domains and a subject-level ADSL table, and renders
the derivation as an HTML vignette.

Features:
- Subject-level covariate merge and parameter lookup joins
- Date/time imputation and analysis day derivation
- Timing, reference range, baseline and change-from-baseline derivations
- HTML vignette rendering and XPT/CSV dataset export
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("adam-bds")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from adam_bds.transformations import (
    TransformationContext,
    TransformationPipeline,
    TransformationResult,
)
from adam_bds.transformations.parameters import build_parameter_lookup
from adam_bds.validators import check_integrity

__all__ = [
    "__version__",
    "TransformationContext",
    "TransformationPipeline",
    "TransformationResult",
    "build_parameter_lookup",
    "check_integrity",
]
