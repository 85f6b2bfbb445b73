"""Tests for the enriched-dataset integrity checks."""

import pandas as pd
import pytest

from adam_bds.validators import IntegrityError, check_integrity


def _lookup(*codes):
    return pd.DataFrame({"LBTESTCD": list(codes), "PARAMCD": list(codes)})


class TestCheckIntegrity:
    """Tests for check_integrity."""

    def test_consistent_dataset_passes(self, lb_frame, adlb_frame):
        report = check_integrity(lb_frame, adlb_frame, _lookup("ALT"), domain="LB")

        assert report.passed
        assert report.source_rows == 4
        assert report.enriched_rows == 4
        assert report.lookup_rows == 1
        report.raise_for_issues()

    def test_row_count_mismatch(self, lb_frame, adlb_frame):
        enriched = pd.concat([adlb_frame, adlb_frame.iloc[[0]]], ignore_index=True)

        report = check_integrity(lb_frame, enriched, _lookup("ALT"))

        assert [issue.check for issue in report.issues] == ["row_count"]
        assert "5 rows, source has 4" in report.issues[0].message

    def test_missing_subject_identifier(self, lb_frame, adlb_frame):
        enriched = adlb_frame.copy()
        enriched.loc[1, "USUBJID"] = None
        enriched.loc[2, "USUBJID"] = " "

        report = check_integrity(lb_frame, enriched, _lookup("ALT"))

        assert report.issues[0].check == "subject_identifier"
        assert report.issues[0].message == "2 row(s) without USUBJID"

    def test_subject_identifier_column_missing(self, lb_frame, adlb_frame):
        report = check_integrity(
            lb_frame, adlb_frame.drop(columns=["USUBJID"]), _lookup("ALT")
        )

        assert report.issues[0].message == "USUBJID column is missing"

    def test_duplicate_lookup_keys(self, lb_frame, adlb_frame):
        report = check_integrity(lb_frame, adlb_frame, _lookup("ALT", "ALT"))

        assert [issue.check for issue in report.issues] == ["lookup_unique"]
        assert "ALT" in report.issues[0].message

    def test_lookup_must_cover_every_test_code(self, lb_frame, adlb_frame):
        """Test that the lookup has exactly one row per distinct test code."""
        report = check_integrity(lb_frame, adlb_frame, _lookup("ALT", "AST"))

        assert report.issues[0].check == "lookup_unique"
        assert report.issues[0].message == "lookup has 2 rows for 1 distinct test codes"

    def test_parameter_outside_lookup_domain(self, lb_frame, adlb_frame):
        enriched = adlb_frame.copy()
        enriched.loc[3, "LBTESTCD"] = "BILI"

        report = check_integrity(lb_frame, enriched, _lookup("ALT"))

        assert [issue.check for issue in report.issues] == ["lookup_domain"]
        assert "BILI" in report.issues[0].message

    def test_raise_for_issues(self, lb_frame, adlb_frame):
        report = check_integrity(lb_frame, adlb_frame.iloc[:2], _lookup("ALT"))

        with pytest.raises(IntegrityError, match="row_count") as excinfo:
            report.raise_for_issues()

        assert len(excinfo.value.issues) == 1
        assert str(excinfo.value).startswith("1 integrity check(s) failed")
