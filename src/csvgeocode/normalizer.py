"""
csvgeocode — Response Normalizer
=================================
Runs the configured handler on a 200 response body and folds whatever it
returns into a :class:`~csvgeocode.models.GeocodeSuccess` or
:class:`~csvgeocode.models.GeocodeFailure`.

Address-component metadata (formatted address, postal code, country,
region, locality) is read straight from the body and assumes the Google
Geocoding layout::

    {"results": [{"formatted_address": "...",
                  "address_components": [{"long_name": "...",
                                          "types": ["postal_code", ...]}]}]}

Other providers' bodies yield metadata holding only ``coordinates``; this
is a known limitation and is independent of the handler in use.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from csvgeocode.handlers import Handler
from csvgeocode.models import GeocodeFailure, GeocodeResult, GeocodeSuccess
from shared.python.exceptions import HandlerContractViolation, ParseError

# First address-component type → metadata key.
_COMPONENT_KEYS = {
    "postal_code": "postalCode",
    "country": "country",
    "administrative_area_level_1": "region",
    "administrative_area_level_2": "locality",
}


class ResponseNormalizer:
    """Turn raw response bodies into tagged geocode results.

    Args:
        handler: The resolved response handler.
    """

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    def normalize(self, body: str) -> GeocodeResult:
        """Normalize one response body.

        Args:
            body: The raw 200 response text.

        Returns:
            :class:`GeocodeSuccess` when the handler found coordinates, or
            :class:`GeocodeFailure` carrying the provider's error string.

        Raises:
            ParseError: If the handler raised or *body* is not JSON.
            HandlerContractViolation: If the handler returned anything else.
        """
        # Handlers signal a malformed body by raising anything.
        try:
            result = self.handler(body)
            payload = json.loads(body)
        except Exception as exc:  # noqa: BLE001
            raise ParseError(str(exc)) from exc

        if isinstance(result, GeocodeFailure):
            return result
        if isinstance(result, str):
            return GeocodeFailure(result)
        if isinstance(result, GeocodeSuccess):
            if result.location is not None:
                return result
            return GeocodeSuccess(
                lat=result.lat,
                lng=result.lng,
                location=extract_location(payload, result.lat, result.lng),
                raw=result.raw,
            )
        if isinstance(result, Mapping) and "lat" in result and "lng" in result:
            return GeocodeSuccess(
                lat=result["lat"],
                lng=result["lng"],
                location=extract_location(payload, result["lat"], result["lng"]),
                raw=dict(result),
            )

        raise HandlerContractViolation(body)


def extract_location(payload: Any, lat: Any, lng: Any) -> dict[str, Any]:
    """Build the address metadata object for a successful result.

    Args:
        payload: The parsed response body.
        lat: Latitude the handler returned.
        lng: Longitude the handler returned.

    Returns:
        ``{"coordinates": [lng, lat], ...}`` plus ``formattedAddress``,
        ``postalCode``, ``country``, ``region`` and ``locality`` where the
        body has them.
    """
    location: dict[str, Any] = {"coordinates": [lng, lat]}

    results = payload.get("results") if isinstance(payload, Mapping) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], Mapping):
        return location

    first = results[0]
    if "formatted_address" in first:
        location["formattedAddress"] = first["formatted_address"]

    for component in first.get("address_components") or []:
        types = component.get("types") if isinstance(component, Mapping) else None
        if not types:
            continue
        key = _COMPONENT_KEYS.get(types[0])
        if key is not None:
            location[key] = component.get("long_name") or ""

    return location
