"""
Tests — csvgeocode CLI
=======================
Exercises the ``csvgeocode`` click command through
:class:`click.testing.CliRunner`, with HTTP mocked via ``responses``.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
import responses as rsps_lib
from click.testing import CliRunner

from csvgeocode.cli import main

GEOCODE_URL = "https://geo.test/geocode"
TEMPLATE = GEOCODE_URL + "?address={{address}}"


def _google_hit(lat: float, lng: float) -> dict:
    return {"status": "OK", "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}]}


@pytest.fixture()
def address_csv(tmp_path: Path) -> Path:
    path = tmp_path / "addresses.csv"
    path.write_text("address,lat,lng\nTimes Square,,\nnowhere,,\n", encoding="utf-8")
    return path


class TestCli:
    @rsps_lib.activate
    def test_writes_output_file_and_summary(self, tmp_path: Path, address_csv: Path) -> None:
        rsps_lib.add(
            rsps_lib.GET, f"{GEOCODE_URL}?address=Times+Square",
            json=_google_hit(40.758, -73.985), status=200,
        )
        rsps_lib.add(
            rsps_lib.GET, f"{GEOCODE_URL}?address=nowhere",
            json={"status": "ZERO_RESULTS", "results": []}, status=200,
        )
        output = tmp_path / "geocoded.csv"
        result = CliRunner().invoke(
            main, [str(address_csv), str(output), "--url", TEMPLATE, "--delay", "0"]
        )

        assert result.exit_code == 0, result.output
        assert "Row 2: ZERO_RESULTS" in result.output
        assert "Geocoded: 1/2 rows successfully" in result.output
        df = pd.read_csv(output)
        assert df.loc[0, "lat"] == pytest.approx(40.758)
        assert pd.isna(df.loc[1, "lat"])

    @rsps_lib.activate
    def test_stdout_output_when_no_path(self, address_csv: Path) -> None:
        rsps_lib.add(rsps_lib.GET, GEOCODE_URL, json=_google_hit(1.0, 2.0), status=200)
        result = CliRunner().invoke(
            main, [str(address_csv), "--url", TEMPLATE, "--delay", "0", "--handler", "GOOGLE"]
        )
        assert result.exit_code == 0, result.output
        assert "address,lat,lng" in result.output
        assert "Times Square,1.0,2.0" in result.output

    def test_url_from_environment(self, address_csv: Path) -> None:
        with rsps_lib.RequestsMock(assert_all_requests_are_fired=False) as rsps:
            rsps.add(rsps_lib.GET, GEOCODE_URL, json=_google_hit(1.0, 2.0), status=200)
            result = CliRunner().invoke(
                main, [str(address_csv), "--test", "--delay", "0"],
                env={"CSVGEOCODE_URL": TEMPLATE},
            )
        assert result.exit_code == 0, result.output
        assert "Geocoded: 2/2" in result.output

    def test_missing_url_is_usage_error(self, address_csv: Path) -> None:
        result = CliRunner().invoke(main, [str(address_csv)], env={"CSVGEOCODE_URL": None})
        assert result.exit_code == 2
        assert "--url" in result.output

    def test_unknown_handler_rejected(self, address_csv: Path) -> None:
        result = CliRunner().invoke(
            main, [str(address_csv), "--url", TEMPLATE, "--handler", "bing"]
        )
        assert result.exit_code == 2

    def test_non_csv_input_exits_1(self, tmp_path: Path) -> None:
        path = tmp_path / "addresses.txt"
        path.write_text("address\nx\n")
        result = CliRunner().invoke(main, [str(path), "--url", TEMPLATE, "--test"])
        assert result.exit_code == 1
        assert "Error: Unsupported file extension" in result.output
