"""
Tests — CSV Reader / Writer
============================
Unit tests for :mod:`csvgeocode.csv_io`.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from csvgeocode.csv_io import read_rows, stringify_rows, write_rows
from shared.python.exceptions import OutputWriteError


@pytest.fixture()
def sample_csv(tmp_path: Path) -> Path:
    path = tmp_path / "sample.csv"
    path.write_text("name,zip,lat,lng\nA,02134,,\nB,10001,40.7,-73.9\n", encoding="utf-8")
    return path


class TestReadRows:
    def test_values_read_as_strings(self, sample_csv: Path) -> None:
        rows = read_rows(sample_csv)
        assert rows == [
            {"name": "A", "zip": "02134", "lat": "", "lng": ""},
            {"name": "B", "zip": "10001", "lat": "40.7", "lng": "-73.9"},
        ]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("")
        assert read_rows(path) == []


class TestWriteRows:
    def test_header_follows_first_row_and_new_columns_append(self) -> None:
        text = stringify_rows([{"a": "1", "b": "2"}, {"a": "3", "b": "4", "c": "5"}])
        assert text.splitlines() == ["a,b,c", "1,2,", "3,4,5"]

    def test_numbers_keep_their_form_when_later_rows_lack_columns(self) -> None:
        text = stringify_rows([{"address": "a", "lat": 1, "lng": 2}, {"address": "b"}])
        assert text.splitlines() == ["address,lat,lng", "a,1,2", "b,,"]

    def test_dict_values_written_as_json(self) -> None:
        text = stringify_rows([{"name": "x", "loc": {"country": "US"}}])
        header, line = text.splitlines()
        assert header == "name,loc"
        value = line.split(",", 1)[1]
        assert json.loads(value.strip('"').replace('""', '"')) == {"country": "US"}

    def test_empty_rows(self) -> None:
        assert stringify_rows([]) == ""

    def test_round_trip_file(self, tmp_path: Path, sample_csv: Path) -> None:
        rows = read_rows(sample_csv)
        out = tmp_path / "out.csv"
        write_rows(out, rows)
        assert read_rows(out) == rows

    def test_unwritable_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OutputWriteError):
            write_rows(tmp_path / "missing_dir" / "out.csv", [{"a": 1}])
