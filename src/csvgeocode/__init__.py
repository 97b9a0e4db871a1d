"""
csvgeocode
===========
Geocode the rows of a CSV through any HTTP geocoding API, one request per
distinct address, writing coordinates back into the table.

Public API::

    from csvgeocode import CsvGeocoder, geocode, register_handler
"""

from csvgeocode.cache import GeocodeCache
from csvgeocode.csv_io import read_rows, stringify_rows, write_rows
from csvgeocode.executor import RequestExecutor
from csvgeocode.geocoder import CsvGeocoder, geocode
from csvgeocode.handlers import available_handlers, register_handler, resolve_handler
from csvgeocode.models import (
    GeocodeFailure,
    GeocodeSuccess,
    RowOutcome,
    RowStatus,
    Summary,
)
from csvgeocode.options import GeocodeOptions, OptionsResolution, resolve_options
from csvgeocode.render import render_url

__all__ = [
    "CsvGeocoder",
    "geocode",
    "GeocodeCache",
    "GeocodeOptions",
    "OptionsResolution",
    "resolve_options",
    "RequestExecutor",
    "GeocodeSuccess",
    "GeocodeFailure",
    "RowOutcome",
    "RowStatus",
    "Summary",
    "register_handler",
    "resolve_handler",
    "available_handlers",
    "render_url",
    "read_rows",
    "write_rows",
    "stringify_rows",
]
__version__ = "1.0.0"
