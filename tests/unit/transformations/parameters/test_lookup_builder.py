"""Tests for parameter lookup construction."""

import pandas as pd
import pytest

from adam_bds.transformations.parameters import build_parameter_lookup, parameter_label


def _observations():
    return pd.DataFrame(
        {
            "LBTESTCD": ["HGB", "ALT", "ALT", "PH", "HGB", "ALT", " "],
            "LBTEST": [
                "Hemoglobin",
                "Alanine Aminotransferase",
                "Alanine Aminotransferase",
                "pH",
                "Hemoglobin",
                "Alanine Aminotransferase",
                "Unknown",
            ],
            "LBCAT": [
                "HEMATOLOGY",
                "CHEMISTRY",
                "CHEMISTRY",
                "URINALYSIS",
                "HEMATOLOGY",
                "CHEMISTRY",
                "CHEMISTRY",
            ],
            "LBSTRESU": ["g/dL", "U/L", "U/L", "", "g/dL", None, "U/L"],
        }
    )


class TestParameterLabel:
    @pytest.mark.parametrize(
        "test, unit, expected",
        [
            ("Alanine Aminotransferase", "U/L", "Alanine Aminotransferase (U/L)"),
            ("pH", None, "pH"),
            ("pH", pd.NA, "pH"),
            (" Weight ", " kg ", "Weight (kg)"),
            (None, "kg", None),
            ("  ", "kg", None),
        ],
    )
    def test_labels(self, test, unit, expected):
        assert parameter_label(test, unit) == expected


class TestBuildParameterLookup:
    """Tests for build_parameter_lookup."""

    def test_one_row_per_test_code(self):
        lookup = build_parameter_lookup(_observations(), domain="LB")

        assert lookup.columns.tolist() == [
            "LBTESTCD",
            "PARAMCD",
            "PARAM",
            "PARCAT1",
            "PARAMN",
        ]
        assert lookup["LBTESTCD"].tolist() == ["ALT", "HGB", "PH"]
        assert lookup["LBTESTCD"].is_unique

    def test_parameter_variables(self):
        lookup = build_parameter_lookup(_observations(), domain="LB").set_index(
            "PARAMCD"
        )

        assert lookup.loc["ALT", "PARAM"] == "Alanine Aminotransferase (U/L)"
        assert lookup.loc["PH", "PARAM"] == "pH"
        assert lookup.loc["HGB", "PARCAT1"] == "HEMATOLOGY"
        assert lookup["PARAMN"].tolist() == [1, 2, 3]

    def test_most_frequent_variant_wins(self):
        """Test that a unit missing on one record does not change the label."""
        lookup = build_parameter_lookup(_observations(), domain="LB")

        assert lookup.loc[lookup["PARAMCD"] == "ALT", "PARAM"].item() == (
            "Alanine Aminotransferase (U/L)"
        )

    def test_tie_goes_to_first_in_sort_order(self):
        observations = pd.DataFrame(
            {
                "VSTESTCD": ["WEIGHT", "WEIGHT"],
                "VSTEST": ["Weight", "Weight"],
                "VSSTRESU": ["lb", "kg"],
            }
        )

        lookup = build_parameter_lookup(observations, domain="VS")

        assert lookup["PARAM"].tolist() == ["Weight (kg)"]
        assert lookup["PARCAT1"].isna().all()

    def test_custom_unit_variable(self):
        observations = _observations().assign(
            LBORRESU=["g/L", "IU/L", "IU/L", "", "g/L", "IU/L", ""]
        )

        lookup = build_parameter_lookup(observations, domain="LB", unit_var="LBORRESU")

        assert lookup.loc[0, "PARAM"] == "Alanine Aminotransferase (IU/L)"

    def test_missing_required_variables(self):
        with pytest.raises(ValueError, match="LBTEST"):
            build_parameter_lookup(pd.DataFrame({"LBTESTCD": ["ALT"]}), domain="LB")

    def test_empty_observations(self):
        lookup = build_parameter_lookup(
            pd.DataFrame({"LBTESTCD": [], "LBTEST": []}), domain="LB"
        )

        assert lookup.empty
        assert "PARAMN" in lookup.columns
