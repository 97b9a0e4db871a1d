"""Request URL rendering: escape row values and fill ``{{column}}`` slots."""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import quote

# Characters encodeURIComponent leaves alone besides alphanumerics and "_.-~".
_UNRESERVED = "!*'()"

_PLACEHOLDER = re.compile(r"{{\s*([^{}]+?)\s*}}")


def escape_value(value: Any) -> str:
    """Percent-encode *value* for use inside a query string.

    Spaces become ``+`` and ``&`` is always encoded.
    """
    text = "" if value is None else str(value)
    encoded = quote(text, safe=_UNRESERVED)
    return encoded.replace("%20", "+").replace(" ", "+").replace("&", "%26")


def escape_row(row: Mapping[str, Any]) -> dict[str, str]:
    """Return a shallow copy of *row* with every value escaped."""
    return {key: escape_value(value) for key, value in row.items()}


def render_url(template: str, row: Mapping[str, Any]) -> str:
    """Substitute *row*'s escaped values into *template*.

    Placeholders naming a column the row does not have render as ``""``.

    Example::

        >>> render_url("https://x/geocode?q={{address}}", {"address": "1 Main St"})
        'https://x/geocode?q=1+Main+St'
    """
    escaped = escape_row(row)
    return _PLACEHOLDER.sub(lambda match: escaped.get(match.group(1), ""), template)
