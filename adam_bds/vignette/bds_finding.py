"""Steps of the BDS Finding vignette.

Each step is a plain function taking the ``VignetteState`` and returning the
``TransformationResult`` of the transformers it runs. The renderer shows the
source of the step function as its code listing, so the functions are kept
short and read top to bottom like the narrative.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import inspect
import textwrap

import pandas as pd

from ..config import BdsConfig
from ..transformations.base import TransformationContext, TransformationResult
from ..transformations.dates import (
    AnalysisDateDeriver,
    AnalysisDatetimeDeriver,
    AnalysisDayCalculator,
)
from ..transformations.findings import (
    AnalysisFlagDeriver,
    BaselineDeriver,
    ReferenceRangeDeriver,
    SequenceNumberDeriver,
    ShiftDeriver,
    TreatmentVariableDeriver,
)
from ..transformations.merges import ParameterLookupMerger, SubjectVariableMerger
from ..transformations.parameters import AnalysisValueDeriver, build_parameter_lookup
from ..transformations.pipeline import TransformationPipeline
from ..transformations.timing import AnalysisVisitDeriver, OnTreatmentFlagger


@dataclass(slots=True)
class VignetteState:
    """Inputs of the vignette and the dataset built so far.

    Attributes:
        adsl: Subject-level analysis dataset
        source: SDTM findings records (LB or VS)
        context: Domain and dataset names passed to every transformer
        config: Imputation and window settings
        fail_safe: Keep running a step's transformers after one fails
        data: Dataset built so far, starting as a copy of ``source``
        lookup: Parameter lookup, set by the parameter step
    """

    adsl: pd.DataFrame
    source: pd.DataFrame
    context: TransformationContext
    config: BdsConfig = field(default_factory=BdsConfig)
    fail_safe: bool = False
    data: pd.DataFrame = field(init=False)
    lookup: pd.DataFrame | None = None

    def __post_init__(self) -> None:
        self.data = self.source.copy()

    @property
    def domain(self) -> str:
        return self.context.domain

    def subject_keys(self, *extra: str) -> list[str]:
        """Grouping variables for per-subject/parameter derivations.

        Vital signs are measured at several timepoints per visit, so the
        timepoint is part of the key when the dataset has one.
        """
        keys = ["USUBJID", "PARAMCD"]
        if "ATPT" in self.data.columns and self.data["ATPT"].notna().any():
            keys.append("ATPT")
        return [*keys, *extra]


def run_transformers(
    state: VignetteState, *transformers: object
) -> TransformationResult:
    pipeline = TransformationPipeline(fail_safe=state.fail_safe)
    for transformer in transformers:
        pipeline.add_transformer(transformer)  # type: ignore[arg-type]
    return pipeline.execute(state.data, state.context)


def merge_adsl_variables(state: VignetteState) -> TransformationResult:
    return run_transformers(
        state,
        SubjectVariableMerger(
            state.adsl, variables=["TRTSDT", "TRTEDT", "TRT01A", "TRT01P"]
        ),
    )


def derive_analysis_dates(state: VignetteState) -> TransformationResult:
    config = state.config
    return run_transformers(
        state,
        AnalysisDateDeriver(
            highest_imputation=config.highest_date_imputation,
            date_imputation=config.date_imputation,
        ),
        AnalysisDatetimeDeriver(
            highest_imputation=config.highest_time_imputation,
            date_imputation=config.date_imputation,
            time_imputation=config.time_imputation,
            ignore_seconds_flag=True,
        ),
        AnalysisDayCalculator(reference_date="TRTSDT", source_vars=["ADT"]),
    )


def assign_parameters(state: VignetteState) -> TransformationResult:
    state.lookup = build_parameter_lookup(state.source, domain=state.domain)
    return run_transformers(state, ParameterLookupMerger(state.lookup))


def derive_analysis_values(state: VignetteState) -> TransformationResult:
    return run_transformers(state, AnalysisValueDeriver())


def derive_timing(state: VignetteState) -> TransformationResult:
    return run_transformers(
        state,
        AnalysisVisitDeriver(),
        OnTreatmentFlagger(
            start_date="ADT",
            ref_start_date="TRTSDT",
            ref_end_date="TRTEDT",
            ref_end_window=state.config.ontrt_window_days,
        ),
    )


def derive_reference_ranges(state: VignetteState) -> TransformationResult:
    return run_transformers(state, ReferenceRangeDeriver())


def derive_baseline(state: VignetteState) -> TransformationResult:
    return run_transformers(
        state,
        BaselineDeriver(by_vars=state.subject_keys()),
        ShiftDeriver(from_var="BNRIND", to_var="ANRIND", new_var="SHIFT1"),
    )


def derive_analysis_flag(state: VignetteState) -> TransformationResult:
    return run_transformers(
        state,
        AnalysisFlagDeriver(
            by_vars=state.subject_keys("AVISIT"), order=["ADT", "AVAL"]
        ),
    )


def derive_treatment_and_sequence(state: VignetteState) -> TransformationResult:
    return run_transformers(
        state,
        TreatmentVariableDeriver({"TRTP": "TRT01P", "TRTA": "TRT01A"}),
        SequenceNumberDeriver(by_vars=["STUDYID", "USUBJID"]),
    )


@dataclass(frozen=True, slots=True)
class VignetteStep:
    """A titled vignette step with its narrative and previewed columns.

    ``preview`` entries may use ``{D}`` for the domain prefix, e.g.
    ``{D}TESTCD``.
    """

    key: str
    title: str
    narrative: str
    function: Callable[[VignetteState], TransformationResult]
    preview: tuple[str, ...]

    def run(self, state: VignetteState) -> TransformationResult:
        return self.function(state)

    def preview_columns(self, domain: str, df: pd.DataFrame) -> list[str]:
        columns = [name.format(D=domain.upper()) for name in self.preview]
        return [col for col in columns if col in df.columns]

    @property
    def source(self) -> str:
        return textwrap.dedent(inspect.getsource(self.function)).strip()


STEPS: tuple[VignetteStep, ...] = (
    VignetteStep(
        key="adsl",
        title="Read in data and merge ADSL variables",
        narrative=(
            "The SDTM findings records are the starting point. Treatment "
            "start and end dates and the planned and actual treatment of each "
            "subject are added from ADSL by USUBJID. The join keeps every "
            "observation row: subjects missing from ADSL keep empty values."
        ),
        function=merge_adsl_variables,
        preview=("USUBJID", "{D}TESTCD", "{D}DTC", "TRTSDT", "TRTEDT", "TRT01A"),
    ),
    VignetteStep(
        key="dates",
        title="Derive analysis dates and study day",
        narrative=(
            "ADT is the analysis date derived from --DTC. Partial dates are "
            "imputed up to the configured level and ADTF records which part "
            "was imputed. ADTM and ATMF do the same for the date and time. "
            "ADY counts days from the treatment start date; there is no day 0."
        ),
        function=derive_analysis_dates,
        preview=("USUBJID", "{D}DTC", "ADT", "ADTF", "ADTM", "ATMF", "ADY"),
    ),
    VignetteStep(
        key="parameters",
        title="Assign PARAMCD, PARAM, PARAMN and PARCAT1",
        narrative=(
            "A parameter lookup with one row per test code is built by "
            "counting the test name, category and unit combinations of each "
            "code. The lookup is joined on the test code; codes missing from "
            "the lookup are reported and keep an empty PARAMCD."
        ),
        function=assign_parameters,
        preview=("USUBJID", "{D}TESTCD", "PARAMCD", "PARAM", "PARAMN", "PARCAT1"),
    ),
    VignetteStep(
        key="results",
        title="Derive results (AVAL, AVALC, AVALU)",
        narrative=(
            "AVAL holds the standardized numeric result. Results that are not "
            "numeric are kept in AVALC, and AVALU carries the standard unit."
        ),
        function=derive_analysis_values,
        preview=("USUBJID", "PARAMCD", "{D}STRESC", "{D}STRESN", "AVAL", "AVALC", "AVALU"),
    ),
    VignetteStep(
        key="timing",
        title="Derive timing variables (AVISIT, AVISITN, ONTRTFL)",
        narrative=(
            "Scheduled visits map to analysis visits; screening and "
            "unscheduled visits have no analysis visit. Records dated between "
            "the first and last treatment dates are flagged on treatment."
        ),
        function=derive_timing,
        preview=("USUBJID", "VISIT", "AVISIT", "AVISITN", "ATPT", "ATPTN", "ADT", "ONTRTFL"),
    ),
    VignetteStep(
        key="ranges",
        title="Derive reference ranges (ANRLO, ANRHI, ANRIND)",
        narrative=(
            "The normal range limits come from the standardized reference "
            "range, and ANRIND classifies each value as LOW, NORMAL or HIGH. "
            "Domains without reference ranges skip this step."
        ),
        function=derive_reference_ranges,
        preview=("USUBJID", "PARAMCD", "AVAL", "ANRLO", "ANRHI", "ANRIND"),
    ),
    VignetteStep(
        key="baseline",
        title="Derive baseline and change from baseline",
        narrative=(
            "The baseline record is the last non-missing value on or before "
            "the treatment start date. BASE, BASEC and BNRIND are copied from "
            "it to every record of the subject and parameter; CHG, PCHG and "
            "SHIFT1 are derived for post-baseline visits."
        ),
        function=derive_baseline,
        preview=("USUBJID", "PARAMCD", "AVISIT", "AVAL", "ABLFL", "BASE", "CHG", "PCHG", "SHIFT1"),
    ),
    VignetteStep(
        key="analysis_flag",
        title="Derive the analysis flag (ANL01FL)",
        narrative=(
            "One record per subject, parameter and analysis visit is selected "
            "for analysis: the latest on-treatment record, or the baseline "
            "record at the baseline visit."
        ),
        function=derive_analysis_flag,
        preview=("USUBJID", "PARAMCD", "AVISIT", "ADT", "AVAL", "ONTRTFL", "ABLFL", "ANL01FL"),
    ),
    VignetteStep(
        key="sequence",
        title="Assign treatment variables and ASEQ",
        narrative=(
            "TRTP and TRTA take the period 1 treatments. ASEQ numbers the "
            "records of each subject after sorting by parameter and date."
        ),
        function=derive_treatment_and_sequence,
        preview=("USUBJID", "PARAMCD", "ADT", "AVISITN", "TRTP", "TRTA", "ASEQ"),
    ),
)
