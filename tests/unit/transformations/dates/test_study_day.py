"""Tests for analysis relative day derivation."""

import pandas as pd
import pytest

from adam_bds.transformations.dates import AnalysisDayCalculator, compute_relative_day
from adam_bds.transformations.dates.study_day_calculator import day_variable_name


class TestComputeRelativeDay:
    def test_no_day_zero(self):
        reference = pd.Series(pd.to_datetime(["2023-01-10"] * 3))
        dates = pd.Series(pd.to_datetime(["2023-01-09", "2023-01-10", "2023-01-11"]))

        assert compute_relative_day(dates, reference).tolist() == [-1, 1, 2]

    def test_missing_inputs_give_missing_day(self):
        dates = pd.Series(pd.to_datetime(["2023-01-09", None]))
        reference = pd.Series(pd.to_datetime([None, "2023-01-10"]))

        assert compute_relative_day(dates, reference).isna().all()

    def test_time_part_is_ignored(self):
        dates = pd.Series(pd.to_datetime(["2023-01-10 23:59"]))
        reference = pd.Series(pd.to_datetime(["2023-01-10 08:00"]))

        assert compute_relative_day(dates, reference).tolist() == [1]


class TestDayVariableName:
    @pytest.mark.parametrize(
        "source, expected", [("ADT", "ADY"), ("ASTDTM", "ASTDY"), ("AENDT", "AENDY")]
    )
    def test_names(self, source, expected):
        assert day_variable_name(source) == expected

    def test_rejects_non_date_variable(self):
        with pytest.raises(ValueError, match="AVAL"):
            day_variable_name("AVAL")


class TestAnalysisDayCalculator:
    """Tests for AnalysisDayCalculator."""

    def test_calculates_ady(self, lb_context):
        df = pd.DataFrame(
            {
                "ADT": pd.to_datetime(["2023-01-01", "2023-01-10", "2023-01-24"]),
                "TRTSDT": pd.to_datetime(["2023-01-10"] * 3),
            }
        )

        result = AnalysisDayCalculator().transform(df, lb_context)

        assert result.success
        assert result.data["ADY"].tolist() == [-9, 1, 15]
        assert result.metadata["dy_columns_calculated"] == ["ADY"]

    def test_can_transform_needs_reference(self):
        calculator = AnalysisDayCalculator()

        assert not calculator.can_transform(pd.DataFrame({"ADT": []}), "LB")
        assert calculator.can_transform(pd.DataFrame({"ADT": [], "TRTSDT": []}), "LB")

    def test_missing_reference_is_a_warning(self, lb_context):
        df = pd.DataFrame(
            {
                "ADT": pd.to_datetime(["2023-01-01"]),
                "TRTSDT": pd.to_datetime([None]),
            }
        )

        result = AnalysisDayCalculator().transform(df, lb_context)

        assert pd.isna(result.data.loc[0, "ADY"])
        assert result.warnings == ["1 record(s) without TRTSDT"]

    def test_without_reference_column(self, lb_context):
        result = AnalysisDayCalculator().transform(
            pd.DataFrame({"ADT": pd.to_datetime(["2023-01-01"])}), lb_context
        )

        assert not result.applied
        assert "TRTSDT" in result.message
