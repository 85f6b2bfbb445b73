"""Tests for the ADT/ADTF and ADTM/ATMF derivations."""

import pandas as pd

from adam_bds.transformations.dates import (
    AnalysisDateDeriver,
    AnalysisDatetimeDeriver,
)


def _frame(*dtcs):
    return pd.DataFrame({"USUBJID": ["S-001"] * len(dtcs), "LBDTC": list(dtcs)})


class TestAnalysisDateDeriver:
    """Tests for AnalysisDateDeriver."""

    def test_can_transform_needs_dtc(self):
        deriver = AnalysisDateDeriver()

        assert deriver.can_transform(_frame("2023-01-01"), "LB")
        assert not deriver.can_transform(_frame("2023-01-01"), "VS")

    def test_derives_date_and_flag(self, lb_context):
        result = AnalysisDateDeriver().transform(
            _frame("2023-01-10", "2023-02", "2023"), lb_context
        )

        assert result.success
        assert result.data["ADT"].tolist()[:2] == [
            pd.Timestamp("2023-01-10"),
            pd.Timestamp("2023-02-01"),
        ]
        assert pd.isna(result.data.loc[0, "ADTF"])
        assert result.data.loc[1, "ADTF"] == "D"
        assert result.metadata["derived_variables"] == ["ADT", "ADTF"]
        assert result.data.loc[2, "ADTF"] == "M"
        assert result.metadata["imputed_records"] == 2

    def test_date_beyond_highest_level_stays_missing(self, lb_context):
        """Test that a year-only date is not derived when only days may be imputed."""
        result = AnalysisDateDeriver(highest_imputation="D").transform(
            _frame("2023"), lb_context
        )

        assert pd.isna(result.data.loc[0, "ADT"])
        assert result.metadata["not_derived"] == 1
        assert result.warnings == ["1 LBDTC value(s) could not be converted to ADT"]

    def test_out_of_range_month_is_a_warning(self, lb_context):
        result = AnalysisDateDeriver().transform(
            _frame("2019-07-01", "2019-13"), lb_context
        )

        assert result.success
        assert result.data.loc[0, "ADT"] == pd.Timestamp("2019-07-01")
        assert pd.isna(result.data.loc[1, "ADT"])
        assert result.warnings == ["1 LBDTC value(s) could not be converted to ADT"]

    def test_missing_dtc_is_not_a_warning(self, lb_context):
        result = AnalysisDateDeriver().transform(_frame(None, ""), lb_context)

        assert result.data["ADT"].isna().all()
        assert result.warnings == []

    def test_no_flag_without_imputation(self, lb_context):
        result = AnalysisDateDeriver(highest_imputation="n").transform(
            _frame("2023-01-10"), lb_context
        )

        assert "ADTF" not in result.data.columns
        assert result.message == "Derived ADT from LBDTC"

    def test_custom_prefix_and_source(self, lb_context):
        df = pd.DataFrame({"LBENDTC": ["2023-05"]})

        result = AnalysisDateDeriver(
            new_vars_prefix="AEN", dtc_var="LBENDTC", date_imputation="last"
        ).transform(df, lb_context)

        assert result.data.loc[0, "AENDT"] == pd.Timestamp("2023-05-31")
        assert result.data.loc[0, "AENDTF"] == "D"

    def test_does_not_modify_input(self, lb_context):
        df = _frame("2023-01-10")

        AnalysisDateDeriver().transform(df, lb_context)

        assert list(df.columns) == ["USUBJID", "LBDTC"]


class TestAnalysisDatetimeDeriver:
    """Tests for AnalysisDatetimeDeriver."""

    def test_derives_datetime_and_time_flag(self, lb_context):
        result = AnalysisDatetimeDeriver().transform(
            _frame("2023-01-10T08:30:00", "2023-01-10"), lb_context
        )

        assert result.data.loc[0, "ADTM"] == pd.Timestamp("2023-01-10 08:30")
        assert pd.isna(result.data.loc[0, "ATMF"])
        assert result.data.loc[1, "ADTM"] == pd.Timestamp("2023-01-10 00:00")
        assert result.data.loc[1, "ATMF"] == "H"
        assert "ADTF" not in result.data.columns

    def test_ignore_seconds_flag(self, lb_context):
        result = AnalysisDatetimeDeriver(ignore_seconds_flag=True).transform(
            _frame("2023-01-10T08:30"), lb_context
        )

        assert pd.isna(result.data.loc[0, "ATMF"])
        assert result.metadata["time_imputed_records"] == 0

    def test_adds_date_flag_when_dates_are_imputed(self, lb_context):
        result = AnalysisDatetimeDeriver(highest_imputation="M").transform(
            _frame("2023-02"), lb_context
        )

        assert result.data.loc[0, "ADTM"] == pd.Timestamp("2023-02-01 00:00")
        assert result.data.loc[0, "ADTF"] == "D"
        assert result.data.loc[0, "ATMF"] == "H"

    def test_keeps_existing_date_flag(self, lb_context):
        df = _frame("2023-02")
        df["ADTF"] = ["M"]

        result = AnalysisDatetimeDeriver(highest_imputation="M").transform(
            df, lb_context
        )

        assert result.data.loc[0, "ADTF"] == "M"
        assert result.metadata["derived_variables"] == ["ADTM", "ATMF"]
