"""
csvgeocode — Shared Python Package
===================================
Re-exports the shared base class, exception hierarchy, and validator
utilities so the tool can import from a single location::

    from shared.python import GeoTool, Validators
    from shared.python.exceptions import ConfigError
"""

from shared.python.base_tool import GeoTool
from shared.python.exceptions import (
    ConfigError,
    CsvGeocodeError,
    GeocodingError,
    HandlerContractViolation,
    HttpStatusError,
    InputValidationError,
    OutputWriteError,
    ParseError,
    TransportError,
)
from shared.python.validators import Validators

__all__ = [
    "GeoTool",
    "Validators",
    "CsvGeocodeError",
    "InputValidationError",
    "ConfigError",
    "GeocodingError",
    "TransportError",
    "HttpStatusError",
    "ParseError",
    "HandlerContractViolation",
    "OutputWriteError",
]
