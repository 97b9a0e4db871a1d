"""
Tests — Option Resolution
==========================
Unit tests for :func:`csvgeocode.options.resolve_options` and column
discovery.
"""

from __future__ import annotations

import pytest

from csvgeocode import handlers
from csvgeocode.options import DEFAULTS, OptionsResolution, discover_columns, resolve_options
from shared.python.exceptions import ConfigError

URL = "https://geo.test/?q={{address}}"


class TestResolveOptions:
    def test_defaults_applied(self) -> None:
        resolution = resolve_options(url=URL)
        assert resolution.ok
        options = resolution.unwrap()
        assert options.handler is handlers.google
        assert options.delay == DEFAULTS["delay"]
        assert options.concurrency == 1
        assert (options.force, options.test) == (False, False)
        assert options.lat is None and options.location is None

    def test_none_values_fall_back_to_defaults(self) -> None:
        options = resolve_options(url=URL, delay=None, handler=None).unwrap()
        assert options.delay == 250

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"url": ""},
            {"url": 123},
            {"url": URL, "handler": "nope"},
            {"url": URL, "delay": -1},
            {"url": URL, "delay": "fast"},
            {"url": URL, "concurrency": 0},
            {"url": URL, "concurrency": 2.5},
            {"url": URL, "retries": 3},
        ],
    )
    def test_invalid_options_return_error(self, overrides: dict) -> None:
        resolution = resolve_options(**overrides)
        assert not resolution.ok
        assert resolution.options is None
        assert isinstance(resolution.error, ConfigError)
        with pytest.raises(ConfigError):
            resolution.unwrap()

    def test_unwrap_without_options_raises_config_error(self) -> None:
        with pytest.raises(ConfigError, match="not resolved"):
            OptionsResolution().unwrap()

    def test_with_columns_keeps_explicit_names(self) -> None:
        options = resolve_options(url=URL, lat="y", lng="x").unwrap()
        assert options.with_columns({"lat": "", "lng": ""}) is options

    def test_with_columns_fills_only_missing(self) -> None:
        options = resolve_options(url=URL, lat="y").unwrap()
        filled = options.with_columns({"Longitude": ""})
        assert (filled.lat, filled.lng) == ("y", "Longitude")


class TestDiscoverColumns:
    @pytest.mark.parametrize(
        ("keys", "expected"),
        [
            (["name", "Lat", "LNG"], ("Lat", "LNG")),
            (["latitude", "longitude"], ("latitude", "longitude")),
            (["LATITUDE", "long"], ("LATITUDE", "long")),
            (["y", "lon"], ("lat", "lon")),
            (["address"], ("lat", "lng")),
            (["lat_deg", "longitudes"], ("lat", "lng")),
        ],
    )
    def test_heuristic(self, keys: list[str], expected: tuple[str, str]) -> None:
        assert discover_columns({key: "" for key in keys}) == expected
