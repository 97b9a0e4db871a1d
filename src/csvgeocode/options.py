"""
csvgeocode — Options
=====================
Resolves user options into an immutable :class:`GeocodeOptions` once per
run, before any row is processed.

Resolution never raises; it returns an :class:`OptionsResolution` holding
either the options or the :class:`~shared.python.exceptions.ConfigError`
that explains why they are unusable::

    resolution = resolve_options(url="https://.../json?address={{address}}")
    if not resolution.ok:
        print(resolution.error.message)
    options = resolution.unwrap()
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Mapping

from csvgeocode.handlers import Handler, resolve_handler
from shared.python.exceptions import ConfigError

DEFAULTS: dict[str, Any] = {
    "url": None,
    "handler": "google",
    "lat": None,
    "lng": None,
    "force": False,
    "delay": 250,
    "test": False,
    "location": None,
    "concurrency": 1,
}

_LAT_PATTERN = re.compile(r"^lat(itude)?$", re.IGNORECASE)
_LNG_PATTERN = re.compile(r"^(lng|lon|long|longitude)$", re.IGNORECASE)


@dataclass(frozen=True)
class GeocodeOptions:
    """Configuration for one geocoding run.

    Attributes:
        url: Request URL template with ``{{column}}`` placeholders.
        handler: Resolved response handler.
        lat: Latitude column name, ``None`` until discovered.
        lng: Longitude column name, ``None`` until discovered.
        force: Re-geocode rows that already have numeric coordinates.
        delay: Milliseconds a network-resolved row waits before settling.
        test: Skip writing the output.
        location: Column that receives address-component metadata.
        concurrency: Maximum rows in flight at once.
    """

    url: str
    handler: Handler
    lat: str | None = None
    lng: str | None = None
    force: bool = False
    delay: float = 250
    test: bool = False
    location: str | None = None
    concurrency: int = 1

    def with_columns(self, first_row: Mapping[str, Any] | None) -> GeocodeOptions:
        """Return a copy with ``lat``/``lng`` filled in from *first_row*."""
        if self.lat is not None and self.lng is not None:
            return self
        lat, lng = discover_columns(first_row or {})
        return replace(self, lat=self.lat or lat, lng=self.lng or lng)


@dataclass(frozen=True)
class OptionsResolution:
    """Either resolved options or the error that prevented resolution."""

    options: GeocodeOptions | None = None
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> GeocodeOptions:
        """Return the options, raising the stored :class:`ConfigError`."""
        if self.error is not None:
            raise self.error
        if self.options is None:
            raise ConfigError("Options were not resolved.")
        return self.options


def resolve_options(**user_options: Any) -> OptionsResolution:
    """Merge *user_options* over :data:`DEFAULTS` and validate them.

    Args:
        **user_options: Any of the keys in :data:`DEFAULTS`.  ``None``
            values fall back to the default.

    Returns:
        An :class:`OptionsResolution`; check :attr:`~OptionsResolution.ok`
        or call :meth:`~OptionsResolution.unwrap`.
    """
    unknown = sorted(set(user_options) - set(DEFAULTS))
    if unknown:
        return OptionsResolution(
            error=ConfigError(f"Unknown option(s): {', '.join(unknown)}.")
        )

    merged = dict(DEFAULTS)
    merged.update({k: v for k, v in user_options.items() if v is not None})

    url = merged["url"]
    if not isinstance(url, str) or not url.strip():
        return OptionsResolution(error=ConfigError("'url' parameter is required."))

    try:
        handler = resolve_handler(merged["handler"])
    except ConfigError as exc:
        return OptionsResolution(error=exc)

    delay = merged["delay"]
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        return OptionsResolution(
            error=ConfigError(f"'delay' must be a non-negative number of milliseconds, got {delay!r}.")
        )

    concurrency = merged["concurrency"]
    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        return OptionsResolution(
            error=ConfigError(f"'concurrency' must be a positive integer, got {concurrency!r}.")
        )

    return OptionsResolution(
        options=GeocodeOptions(
            url=url,
            handler=handler,
            lat=merged["lat"],
            lng=merged["lng"],
            force=bool(merged["force"]),
            delay=delay,
            test=bool(merged["test"]),
            location=merged["location"],
            concurrency=concurrency,
        )
    )


def discover_columns(row: Mapping[str, Any]) -> tuple[str, str]:
    """Guess the latitude and longitude column names from *row*'s keys.

    Falls back to ``"lat"`` / ``"lng"`` for a column with no match.
    """
    lat = next((key for key in row if _LAT_PATTERN.match(key)), "lat")
    lng = next((key for key in row if _LNG_PATTERN.match(key)), "lng")
    return lat, lng
