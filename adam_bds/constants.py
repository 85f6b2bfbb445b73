from typing import ClassVar


class Defaults:
    PREVIEW_ROWS = 10
    DATE_IMPUTATION = "first"
    HIGHEST_DATE_IMPUTATION = "M"
    TIME_IMPUTATION = "first"
    HIGHEST_TIME_IMPUTATION = "h"
    ONTRT_WINDOW_DAYS = 0
    DOMAIN = "LB"
    OUTPUT_FORMAT = "html"
    SHIFT_NA_VALUE = "NULL"


class Domains:
    SUPPORTED: ClassVar[tuple[str, ...]] = ("LB", "VS")
    DATASET_NAMES: ClassVar[dict[str, str]] = {"LB": "ADLB", "VS": "ADVS"}
    DESCRIPTIONS: ClassVar[dict[str, str]] = {
        "LB": "Laboratory Test Results Analysis Dataset",
        "VS": "Vital Signs Analysis Dataset",
    }


class ImputationLevels:
    DATE: ClassVar[tuple[str, ...]] = ("n", "D", "M", "Y")
    TIME: ClassVar[tuple[str, ...]] = ("n", "s", "m", "h", "D", "M", "Y")
    DATE_MODES: ClassVar[tuple[str, ...]] = ("first", "mid", "last")
    TIME_MODES: ClassVar[tuple[str, ...]] = ("first", "last")


class Keys:
    SUBJECT: ClassVar[tuple[str, ...]] = ("STUDYID", "USUBJID")
    ADSL_VARIABLES: ClassVar[tuple[str, ...]] = (
        "TRTSDT",
        "TRTEDT",
        "TRT01A",
        "TRT01P",
    )


class Patterns:
    VISIT_WEEK = r"^WEEK\s*(\d+)$"
    NON_ANALYSIS_VISITS: ClassVar[tuple[str, ...]] = (
        "SCREEN",
        "UNSCHED",
        "RETRIEVAL",
        "AMBUL",
    )


class MissingValues:
    STRING_MARKERS: ClassVar[frozenset[str]] = frozenset(
        {"", "NAN", "<NA>", "NONE", "NULL"}
    )


class VariableLabels:
    ADAM: ClassVar[dict[str, str]] = {
        "STUDYID": "Study Identifier",
        "USUBJID": "Unique Subject Identifier",
        "TRTSDT": "Date of First Exposure to Treatment",
        "TRTEDT": "Date of Last Exposure to Treatment",
        "TRT01P": "Planned Treatment for Period 01",
        "TRT01A": "Actual Treatment for Period 01",
        "TRTP": "Planned Treatment",
        "TRTA": "Actual Treatment",
        "ASEQ": "Analysis Sequence Number",
        "PARAMCD": "Parameter Code",
        "PARAM": "Parameter",
        "PARAMN": "Parameter (N)",
        "PARCAT1": "Parameter Category 1",
        "AVAL": "Analysis Value",
        "AVALC": "Analysis Value (C)",
        "AVALU": "Analysis Value Unit",
        "BASE": "Baseline Value",
        "BASEC": "Baseline Value (C)",
        "CHG": "Change from Baseline",
        "PCHG": "Percent Change from Baseline",
        "ABLFL": "Baseline Record Flag",
        "ANL01FL": "Analysis Flag 01",
        "ONTRTFL": "On Treatment Record Flag",
        "ADT": "Analysis Date",
        "ADTF": "Analysis Date Imputation Flag",
        "ADTM": "Analysis Datetime",
        "ATMF": "Analysis Time Imputation Flag",
        "ADY": "Analysis Relative Day",
        "AVISIT": "Analysis Visit",
        "AVISITN": "Analysis Visit (N)",
        "ATPT": "Analysis Timepoint",
        "ATPTN": "Analysis Timepoint (N)",
        "ANRLO": "Analysis Normal Range Lower Limit",
        "ANRHI": "Analysis Normal Range Upper Limit",
        "ANRIND": "Analysis Reference Range Indicator",
        "BNRIND": "Baseline Reference Range Indicator",
        "SHIFT1": "Shift 1",
        "VISIT": "Visit Name",
        "VISITNUM": "Visit Number",
    }
