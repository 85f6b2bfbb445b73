"""Tests for SAS transport export."""

from pathlib import Path

import pandas as pd
import pyreadstat
import pytest

from adam_bds.infrastructure.io import XportGenerationError, write_xpt_file


def _dataset():
    return pd.DataFrame(
        {
            "USUBJID": ["S-001", "S-001"],
            "PARAMCD": ["ALT", "ALT"],
            "AVAL": [20.0, None],
            "AVALC": pd.array([pd.NA, pd.NA], dtype="string"),
            "ADT": pd.to_datetime(["2023-01-10", None]),
            "ADTM": pd.to_datetime(["2023-01-10 08:30", "2023-01-24 09:00"]),
            "ASEQ": pd.array([1, 2], dtype="Int64"),
        }
    )


class TestWriteXptFile:
    """Tests for write_xpt_file."""

    def test_round_trip(self, tmp_path: Path):
        path = write_xpt_file(_dataset(), "ADLB", tmp_path / "ADLB.xpt")

        assert path == tmp_path / "adlb.xpt"
        frame, meta = pyreadstat.read_xport(str(path))
        assert list(frame.columns) == [
            "USUBJID",
            "PARAMCD",
            "AVAL",
            "AVALC",
            "ADT",
            "ADTM",
            "ASEQ",
        ]
        assert frame["USUBJID"].tolist() == ["S-001", "S-001"]
        assert frame.loc[0, "AVAL"] == 20.0
        assert pd.isna(frame.loc[1, "AVAL"])
        assert frame["ASEQ"].tolist() == [1.0, 2.0]
        assert meta.column_names_to_labels["AVAL"] == "Analysis Value"

    def test_dates_are_written_as_sas_dates(self, tmp_path: Path):
        path = write_xpt_file(_dataset(), "ADLB", tmp_path / "adlb.xpt")

        frame, _ = pyreadstat.read_xport(str(path), dates_as_pandas_datetime=True)

        assert pd.Timestamp(frame.loc[0, "ADT"]) == pd.Timestamp("2023-01-10")
        assert pd.Timestamp(frame.loc[0, "ADTM"]) == pd.Timestamp("2023-01-10 08:30")

    def test_replaces_existing_file(self, tmp_path: Path):
        target = tmp_path / "adlb.xpt"
        target.write_text("stale")

        write_xpt_file(_dataset(), "ADLB", target)

        assert target.read_bytes()[:6] != b"stale"

    def test_filename_too_long(self, tmp_path: Path):
        with pytest.raises(XportGenerationError, match="filename"):
            write_xpt_file(_dataset(), "ADLB", tmp_path / "adlb_full.xpt")

    def test_variable_name_too_long(self, tmp_path: Path):
        dataset = _dataset().rename(columns={"AVALC": "AVALCHAR1"})

        with pytest.raises(XportGenerationError, match="AVALCHAR1"):
            write_xpt_file(dataset, "ADLB", tmp_path / "adlb.xpt")
