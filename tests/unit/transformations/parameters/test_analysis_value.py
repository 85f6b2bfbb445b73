"""Tests for AVAL/AVALC/AVALU derivation."""

import pandas as pd

from adam_bds.transformations import TransformationContext
from adam_bds.transformations.parameters import AnalysisValueDeriver


class TestAnalysisValueDeriver:
    """Tests for AnalysisValueDeriver."""

    def test_numeric_results(self, lb_frame, lb_context):
        result = AnalysisValueDeriver().transform(lb_frame, lb_context)

        assert result.success
        assert result.data["AVAL"].tolist() == [20.0, 30.0, 45.0, 36.0]
        assert result.data["AVALC"].isna().all()
        assert (result.data["AVALU"] == "U/L").all()
        assert result.metadata["numeric_results"] == 4

    def test_character_results(self, lb_context):
        df = pd.DataFrame(
            {
                "LBSTRESC": ["YELLOW", "7.5", "", None],
                "LBSTRESN": [None, None, None, None],
                "LBSTRESU": ["", "", "", ""],
            }
        )

        result = AnalysisValueDeriver().transform(df, lb_context)

        assert result.data.loc[0, "AVALC"] == "YELLOW"
        assert pd.isna(result.data.loc[0, "AVAL"])
        assert result.data.loc[1, "AVAL"] == 7.5
        assert pd.isna(result.data.loc[1, "AVALC"])
        assert result.data.loc[2:, "AVALC"].isna().all()
        assert result.data["AVALU"].isna().all()
        assert result.metadata["character_results"] == 1

    def test_stresn_takes_precedence(self, lb_context):
        df = pd.DataFrame({"LBSTRESC": ["<5"], "LBSTRESN": [5.0]})

        result = AnalysisValueDeriver().transform(df, lb_context)

        assert result.data.loc[0, "AVAL"] == 5.0
        assert pd.isna(result.data.loc[0, "AVALC"])
        assert "AVALU" not in result.data.columns

    def test_vital_signs_prefix(self):
        df = pd.DataFrame({"VSSTRESN": [120.0], "VSSTRESU": ["mmHg"]})
        context = TransformationContext(domain="VS")

        deriver = AnalysisValueDeriver()
        result = deriver.transform(df, context)

        assert deriver.can_transform(df, "VS")
        assert not deriver.can_transform(df, "LB")
        assert result.data.loc[0, "AVAL"] == 120.0
        assert result.data.loc[0, "AVALU"] == "mmHg"
