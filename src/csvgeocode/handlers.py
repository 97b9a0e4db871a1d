"""
csvgeocode — Response Handlers
===============================
A handler turns one provider's raw response body into either a coordinate
result or an error reason.

Contract::

    handler(body: str) -> {"lat": ..., "lng": ..., ...}   # success
                        | "ZERO_RESULTS"                   # provider error
                        | GeocodeSuccess | GeocodeFailure  # tagged form
    # raising signals a malformed body

Built-in handlers are registered under lowercase names and looked up once,
before any row is processed::

    from csvgeocode.handlers import register_handler

    @register_handler("myprovider")
    def myprovider(body: str) -> dict:
        data = json.loads(body)
        return {"lat": data["y"], "lng": data["x"]}
"""

from __future__ import annotations

import json
from typing import Any, Callable

from shared.python.exceptions import ConfigError

Handler = Callable[[str], Any]

_REGISTRY: dict[str, Handler] = {}

_INVALID_HANDLER = (
    "Invalid value for 'handler' option. Must be the name of a built-in "
    "handler or a custom handler."
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def register_handler(name: str) -> Callable[[Handler], Handler]:
    """Register the decorated function as the handler called *name*.

    Names are case-insensitive; registering an existing name replaces it.
    """

    def decorator(func: Handler) -> Handler:
        _REGISTRY[name.lower()] = func
        return func

    return decorator


def available_handlers() -> list[str]:
    """Sorted names of every registered handler."""
    return sorted(_REGISTRY)


def resolve_handler(handler: str | Handler) -> Handler:
    """Resolve *handler* to a callable.

    Args:
        handler: A registered handler name (any case) or a callable.

    Returns:
        The handler function.

    Raises:
        ConfigError: If *handler* is an unknown name or not callable.
    """
    if isinstance(handler, str):
        try:
            return _REGISTRY[handler.lower()]
        except KeyError:
            raise ConfigError(
                f"{_INVALID_HANDLER} Got {handler!r}; built-ins: "
                f"{', '.join(available_handlers())}."
            ) from None
    if callable(handler):
        return handler
    raise ConfigError(_INVALID_HANDLER)


# ---------------------------------------------------------------------------
# Built-in handlers
# ---------------------------------------------------------------------------


@register_handler("google")
def google(body: str) -> dict[str, Any] | str:
    """Google Maps Geocoding API (``/maps/api/geocode/json``).

    Returns the ``status`` string (``ZERO_RESULTS``, ``OVER_QUERY_LIMIT``,
    ``REQUEST_DENIED``, ...) for anything but a usable ``OK`` response.

    Reference:
        https://developers.google.com/maps/documentation/geocoding
    """
    response = json.loads(body)
    status = response.get("status", "UNKNOWN")
    if status != "OK":
        return status
    if not response.get("results"):
        return "ZERO_RESULTS"
    return dict(response["results"][0]["geometry"]["location"])


@register_handler("mapbox")
def mapbox(body: str) -> dict[str, Any] | str:
    """Mapbox Geocoding API (``/geocoding/v5/mapbox.places``).

    Error payloads carry a ``message`` instead of ``features``.
    """
    response = json.loads(body)
    features = response.get("features")
    if features is None:
        return response.get("message", "NO MATCH")
    if not features:
        return "NO MATCH"
    lng, lat = features[0]["center"][:2]
    return {"lat": lat, "lng": lng}


@register_handler("nominatim")
def nominatim(body: str) -> dict[str, Any] | str:
    """OpenStreetMap Nominatim ``/search?format=json``.

    Reference:
        https://nominatim.org/release-docs/develop/api/Search/
    """
    hits = json.loads(body)
    if not hits:
        return "NO MATCH"
    hit = hits[0]
    return {
        "lat": float(hit["lat"]),
        "lng": float(hit["lon"]),
        "display_name": hit.get("display_name"),
    }
