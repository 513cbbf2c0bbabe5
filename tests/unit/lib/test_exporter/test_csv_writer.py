"""Tests for the CSV report writer."""

import csv
from pathlib import Path

from microchip_update.lib.exporter import write_csv


class TestCSVWriter:
    """Tests for write_csv."""

    def test_writes_header_and_records(self, tmp_path: Path) -> None:
        output = tmp_path / "test.csv"
        records = [{"Name": "Rex", "Number": "1"}, {"Name": "Goldie", "Number": "2"}]
        count = write_csv(output, records, columns=["Name", "Number"])
        assert count == 2

        with output.open() as f:
            rows = list(csv.DictReader(f))
        assert rows[1] == {"Name": "Goldie", "Number": "2"}

    def test_column_order_and_extra_keys(self, tmp_path: Path) -> None:
        output = tmp_path / "test.csv"
        write_csv(output, [{"b": "2", "a": "1", "ignored": "x"}], columns=["a", "b"])

        with output.open() as f:
            rows = list(csv.reader(f))
        assert rows == [["a", "b"], ["1", "2"]]

    def test_empty_records(self, tmp_path: Path) -> None:
        output = tmp_path / "test.csv"
        assert write_csv(output, [], columns=["a"]) == 0
        assert output.read_text().splitlines() == ["a"]

    def test_formula_injection_sanitized(self, tmp_path: Path) -> None:
        output = tmp_path / "test.csv"
        write_csv(output, [{"a": "=SUM(A1)", "b": "-5", "c": "safe"}], columns=["a", "b", "c"])

        with output.open() as f:
            rows = list(csv.DictReader(f))
        assert rows[0] == {"a": "'=SUM(A1)", "b": "'-5", "c": "safe"}

    def test_sanitize_disabled(self, tmp_path: Path) -> None:
        """Values are written unchanged when sanitizing is turned off."""
        output = tmp_path / "test.csv"
        write_csv(output, [{"a": "-5 Main St", "b": "+1 408 555 1212"}], columns=["a", "b"], sanitize=False)

        with output.open() as f:
            rows = list(csv.DictReader(f))
        assert rows[0] == {"a": "-5 Main St", "b": "+1 408 555 1212"}
