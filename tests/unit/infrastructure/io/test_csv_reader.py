"""Unit tests for CSVReader."""

from pathlib import Path

import pandas as pd
import pytest

from adam_bds.infrastructure.io.csv_reader import CSVReader, CSVReadOptions
from adam_bds.infrastructure.io.exceptions import (
    DataParseError,
    DataSourceNotFoundError,
)


class TestCSVReader:
    """Test suite for CSVReader class."""

    def test_read_simple_csv(self, tmp_path: Path):
        """Test reading a simple CSV file."""
        # Arrange
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text("USUBJID,LBTESTCD,LBSTRESN\nS-001,ALT,20\n")
        reader = CSVReader()

        # Act
        df = reader.read(csv_file)

        # Assert
        assert len(df) == 1
        assert list(df.columns) == ["USUBJID", "LBTESTCD", "LBSTRESN"]
        assert df.loc[0, "LBSTRESN"] == "20"

    def test_headers_are_stripped_and_uppercased(self, tmp_path: Path):
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text(" usubjid , LbTestCd\nS-001,ALT\n")

        df = CSVReader().read(csv_file)

        assert list(df.columns) == ["USUBJID", "LBTESTCD"]

    def test_read_without_header_normalization(self, tmp_path: Path):
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text(" usubjid ,LBTESTCD\nS-001,ALT\n")

        df = CSVReader().read(csv_file, CSVReadOptions(normalize_headers=False))

        assert " usubjid " in df.columns

    def test_strict_na_handling_keeps_na_literals(self, tmp_path: Path):
        """Test that only empty cells become missing."""
        # Arrange
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text("LBTESTCD,LBORRES,LBSTRESC\nCOLOR,NA,\n")

        # Act
        df = CSVReader().read(csv_file)

        # Assert
        assert df.loc[0, "LBORRES"] == "NA"
        assert pd.isna(df.loc[0, "LBSTRESC"])

    def test_default_na_handling_when_not_strict(self, tmp_path: Path):
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text("LBTESTCD,LBORRES\nCOLOR,NA\n")

        df = CSVReader().read(csv_file, CSVReadOptions(strict_na_handling=False))

        assert pd.isna(df.loc[0, "LBORRES"])

    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="File not found"):
            CSVReader().read(tmp_path / "missing.csv")

    def test_directory_is_not_a_file(self, tmp_path: Path):
        with pytest.raises(DataSourceNotFoundError, match="Not a file"):
            CSVReader().read(tmp_path)

    def test_empty_file(self, tmp_path: Path):
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        with pytest.raises(DataParseError, match="empty"):
            CSVReader().read(csv_file)

    def test_malformed_file(self, tmp_path: Path):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("A,B\n1,2\n3,4,5,6\n")

        with pytest.raises(DataParseError):
            CSVReader().read(csv_file)

    def test_encoding_error(self, tmp_path: Path):
        csv_file = tmp_path / "latin.csv"
        csv_file.write_bytes("LBTEST\nH\xe9moglobine\n".encode("latin-1"))

        with pytest.raises(DataParseError, match="Encoding error"):
            CSVReader().read(csv_file)

        df = CSVReader().read(csv_file, CSVReadOptions(encoding="latin-1"))
        assert df.loc[0, "LBTEST"] == "Hémoglobine"

    def test_byte_order_mark_is_removed(self, tmp_path: Path):
        csv_file = tmp_path / "adsl.csv"
        csv_file.write_bytes(b"\xef\xbb\xbfUSUBJID,TRTSDT\nS-001,2023-01-10\n")

        df = CSVReader().read(csv_file)

        assert list(df.columns) == ["USUBJID", "TRTSDT"]

    def test_index_column_and_blank_rows_are_dropped(self, tmp_path: Path):
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text(",USUBJID,LBTESTCD\n0,S-001,ALT\n,,\n")

        df = CSVReader().read(csv_file)

        assert list(df.columns) == ["USUBJID", "LBTESTCD"]
        assert df["USUBJID"].tolist() == ["S-001"]

    def test_blank_rows_kept_on_request(self, tmp_path: Path):
        csv_file = tmp_path / "lb.csv"
        csv_file.write_text("USUBJID,LBTESTCD\nS-001,ALT\n,\n")

        df = CSVReader().read(csv_file, CSVReadOptions(drop_blank_rows=False))

        assert len(df) == 2
