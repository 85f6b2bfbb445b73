"""Tests for analysis visit and timepoint derivation."""

import pandas as pd
import pytest

from adam_bds.transformations import TransformationContext
from adam_bds.transformations.timing import (
    AnalysisVisitDeriver,
    analysis_visit,
    analysis_visit_number,
)


class TestAnalysisVisit:
    @pytest.mark.parametrize(
        "visit, expected",
        [
            ("BASELINE", "Baseline"),
            ("WEEK 2", "Week 2"),
            (" week 12 ", "Week 12"),
            ("SCREENING 1", None),
            ("UNSCHEDULED 4.1", None),
            ("RETRIEVAL", None),
            ("AMBUL ECG REMOVAL", None),
            ("", None),
            (None, None),
        ],
    )
    def test_analysis_visit(self, visit, expected):
        assert analysis_visit(visit) == expected

    @pytest.mark.parametrize(
        "visit, expected",
        [
            ("BASELINE", 0.0),
            ("WEEK 2", 2.0),
            ("Week 26", 26.0),
            ("SCREENING 1", None),
            ("UNSCHEDULED 4.1", None),
            (None, None),
        ],
    )
    def test_analysis_visit_number(self, visit, expected):
        assert analysis_visit_number(visit) == expected


class TestAnalysisVisitDeriver:
    """Tests for AnalysisVisitDeriver."""

    def test_laboratory_visits(self, lb_frame, lb_context):
        result = AnalysisVisitDeriver().transform(lb_frame, lb_context)

        assert result.success
        assert pd.isna(result.data.loc[0, "AVISIT"])
        assert result.data["AVISIT"].tolist()[1:] == ["Baseline", "Week 2", "Week 4"]
        assert result.data["AVISITN"].tolist()[1:] == [0.0, 2.0, 4.0]
        assert "ATPT" not in result.data.columns
        assert result.metadata["analysis_visits"] == ["Baseline", "Week 2", "Week 4"]

    def test_timepoints_are_copied(self):
        df = pd.DataFrame(
            {
                "VISIT": ["BASELINE", "BASELINE", "WEEK 2"],
                "VSTPT": [
                    "AFTER LYING DOWN FOR 5 MINUTES",
                    "AFTER STANDING FOR 1 MINUTE",
                    "",
                ],
                "VSTPTNUM": ["815", "816", ""],
            }
        )

        result = AnalysisVisitDeriver().transform(df, TransformationContext(domain="VS"))

        assert result.data.loc[0, "ATPT"] == "AFTER LYING DOWN FOR 5 MINUTES"
        assert result.data["ATPTN"].tolist()[:2] == [815.0, 816.0]
        assert pd.isna(result.data.loc[2, "ATPT"])
        assert pd.isna(result.data.loc[2, "ATPTN"])
        assert result.metadata["derived_variables"] == [
            "AVISIT",
            "AVISITN",
            "ATPT",
            "ATPTN",
        ]

    def test_requires_visit(self):
        assert not AnalysisVisitDeriver().can_transform(pd.DataFrame({"A": []}), "LB")
