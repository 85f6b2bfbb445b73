"""Tests for shift from baseline derivation."""

import pandas as pd

from adam_bds.transformations.findings import ShiftDeriver


def _frame():
    return pd.DataFrame(
        {
            "BNRIND": pd.array(["NORMAL", "NORMAL", None, "LOW", "NORMAL"], dtype="string"),
            "ANRIND": pd.array(["NORMAL", "HIGH", "LOW", None, "NORMAL"], dtype="string"),
            "AVISITN": [0.0, 2.0, 2.0, 4.0, float("nan")],
        }
    )


class TestShiftDeriver:
    """Tests for ShiftDeriver."""

    def test_post_baseline_shifts(self, lb_context):
        result = ShiftDeriver().transform(_frame(), lb_context)

        shift = result.data["SHIFT1"]
        assert pd.isna(shift.iloc[0])
        assert shift.iloc[1] == "NORMAL to HIGH"
        assert shift.iloc[2] == "NULL to LOW"
        assert shift.iloc[3] == "LOW to NULL"
        assert pd.isna(shift.iloc[4])

    def test_counts_in_metadata(self, lb_context):
        result = ShiftDeriver().transform(_frame(), lb_context)

        assert result.metadata["shifts"] == {
            "NORMAL to HIGH": 1,
            "NULL to LOW": 1,
            "LOW to NULL": 1,
        }

    def test_custom_missing_label(self, lb_context):
        result = ShiftDeriver(na_value="MISSING").transform(_frame(), lb_context)

        assert result.data.loc[2, "SHIFT1"] == "MISSING to LOW"

    def test_without_visit_number_every_record_is_shifted(self, lb_context):
        df = _frame().drop(columns=["AVISITN"])

        result = ShiftDeriver().transform(df, lb_context)

        assert result.data["SHIFT1"].notna().all()
        assert result.data.loc[0, "SHIFT1"] == "NORMAL to NORMAL"

    def test_requires_both_indicators(self):
        df = _frame().drop(columns=["BNRIND"])

        assert not ShiftDeriver().can_transform(df, "LB")
