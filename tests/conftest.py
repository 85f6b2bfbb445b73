import os

import pandas as pd
import pytest

from adam_bds.transformations import TransformationContext


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ADAM_BDS_* settings from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("ADAM_BDS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def lb_context() -> TransformationContext:
    return TransformationContext(domain="LB", study_id="STUDY01")


@pytest.fixture
def adsl_frame() -> pd.DataFrame:
    """Two subjects; the second one has an open-ended treatment period."""
    return pd.DataFrame(
        {
            "STUDYID": ["STUDY01", "STUDY01"],
            "USUBJID": ["S-001", "S-002"],
            "TRTSDT": pd.to_datetime(["2023-01-10", "2023-02-01"]),
            "TRTEDT": pd.to_datetime(["2023-03-10", None]),
            "TRT01P": ["Placebo", "Drug A"],
            "TRT01A": ["Placebo", "Drug A"],
            "AGE": [54.0, 61.0],
        }
    )


@pytest.fixture
def lb_frame() -> pd.DataFrame:
    """Laboratory records for S-001: ALT at screening, baseline and two weeks."""
    return pd.DataFrame(
        {
            "STUDYID": ["STUDY01"] * 4,
            "USUBJID": ["S-001"] * 4,
            "LBSEQ": [1.0, 2.0, 3.0, 4.0],
            "LBTESTCD": ["ALT"] * 4,
            "LBTEST": ["Alanine Aminotransferase"] * 4,
            "LBCAT": ["CHEMISTRY"] * 4,
            "LBSTRESC": ["20", "30", "45", "36"],
            "LBSTRESN": [20.0, 30.0, 45.0, 36.0],
            "LBSTRESU": ["U/L"] * 4,
            "LBSTNRLO": [6.0] * 4,
            "LBSTNRHI": [34.0] * 4,
            "VISITNUM": [1.0, 2.0, 3.0, 4.0],
            "VISIT": ["SCREENING 1", "BASELINE", "WEEK 2", "WEEK 4"],
            "LBDTC": ["2023-01-01", "2023-01-10", "2023-01-24", "2023-02-07"],
        }
    )


@pytest.fixture
def adlb_frame(lb_frame: pd.DataFrame) -> pd.DataFrame:
    """``lb_frame`` with the variables the findings derivations start from."""
    return lb_frame.assign(
        TRTSDT=pd.Timestamp("2023-01-10"),
        TRTEDT=pd.Timestamp("2023-03-10"),
        TRT01P="Placebo",
        TRT01A="Placebo",
        PARAMCD="ALT",
        AVAL=lb_frame["LBSTRESN"],
        ADT=pd.to_datetime(lb_frame["LBDTC"]),
        AVISIT=pd.array([None, "Baseline", "Week 2", "Week 4"], dtype="string"),
        AVISITN=[float("nan"), 0.0, 2.0, 4.0],
    )
