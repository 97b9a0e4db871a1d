"""
Tests — Response Handlers
==========================
Unit tests for the handler registry and the built-in provider handlers in
:mod:`csvgeocode.handlers`.
"""

from __future__ import annotations

import json

import pytest

from csvgeocode import handlers
from csvgeocode.handlers import available_handlers, register_handler, resolve_handler
from shared.python.exceptions import ConfigError


class TestRegistry:
    def test_builtins_registered(self) -> None:
        assert {"google", "mapbox", "nominatim"} <= set(available_handlers())

    def test_lookup_is_case_insensitive(self) -> None:
        assert resolve_handler("GoOgLe") is handlers.google

    def test_callable_passes_through(self) -> None:
        def custom(body: str) -> dict:
            return {"lat": 0, "lng": 0}

        assert resolve_handler(custom) is custom

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ConfigError, match="built-ins"):
            resolve_handler("bing")

    def test_non_callable_raises(self) -> None:
        with pytest.raises(ConfigError):
            resolve_handler(3.14)

    def test_register_custom(self) -> None:
        @register_handler("Census")
        def census(body: str) -> dict:
            return {"lat": 1, "lng": 2}

        try:
            assert resolve_handler("census") is census
        finally:
            handlers._REGISTRY.pop("census")


class TestGoogle:
    def test_ok_returns_location(self) -> None:
        body = json.dumps(
            {"status": "OK", "results": [{"geometry": {"location": {"lat": 1.5, "lng": -2.5}}}]}
        )
        assert handlers.google(body) == {"lat": 1.5, "lng": -2.5}

    def test_error_status_returned_as_reason(self) -> None:
        assert handlers.google(json.dumps({"status": "REQUEST_DENIED"})) == "REQUEST_DENIED"

    def test_malformed_body_raises(self) -> None:
        with pytest.raises(ValueError):
            handlers.google("<html>")


class TestMapbox:
    def test_first_feature_center(self) -> None:
        body = json.dumps({"features": [{"center": [-73.98, 40.75]}]})
        assert handlers.mapbox(body) == {"lat": 40.75, "lng": -73.98}

    def test_no_features(self) -> None:
        assert handlers.mapbox(json.dumps({"features": []})) == "NO MATCH"

    def test_error_message(self) -> None:
        assert handlers.mapbox(json.dumps({"message": "Not Authorized"})) == "Not Authorized"


class TestNominatim:
    def test_first_hit(self) -> None:
        body = json.dumps([{"lat": "38.897", "lon": "-77.036", "display_name": "White House"}])
        assert handlers.nominatim(body) == {
            "lat": 38.897, "lng": -77.036, "display_name": "White House",
        }

    def test_no_hits(self) -> None:
        assert handlers.nominatim("[]") == "NO MATCH"
