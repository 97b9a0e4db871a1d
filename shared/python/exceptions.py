"""
csvgeocode — Custom Exception Hierarchy
========================================
Every error raised by csvgeocode comes from this module so callers can
catch them at the right level of granularity.

Hierarchy::

    CsvGeocodeError                      ← catch-all base
    ├── InputValidationError             ← missing / unsupported input file
    │   └── ConfigError                  ← bad options or output destination
    ├── GeocodingError                   ← per-row failures, never fatal
    │   ├── TransportError               ← connection / timeout / DNS
    │   ├── HttpStatusError              ← provider answered non-200
    │   ├── ParseError                   ← handler raised or body not JSON
    │   └── HandlerContractViolation     ← handler returned garbage
    └── OutputWriteError                 ← cannot write the output

Only :class:`InputValidationError` (and so :class:`ConfigError`) and
:class:`OutputWriteError` abort a run.  :class:`GeocodingError` subclasses
are caught per row and recorded on the row's outcome.

Usage::

    from shared.python.exceptions import ConfigError

    raise ConfigError("'url' option is required.")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class CsvGeocodeError(Exception):
    """Base exception for csvgeocode.

    Catch this to handle any tool-specific error without caring about
    the exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(CsvGeocodeError):
    """Raised when a run's inputs fail pre-processing validation."""


class ConfigError(InputValidationError):
    """Raised when options cannot be resolved into a runnable configuration.

    Example::

        raise ConfigError("Invalid value for 'handler' option.")
    """


# ---------------------------------------------------------------------------
# Geocoding (per row)
# ---------------------------------------------------------------------------


class GeocodingError(CsvGeocodeError):
    """Raised when a single row cannot be geocoded.

    The message is what ends up in the row's outcome, so it is kept short
    and provider-facing.
    """


class TransportError(GeocodingError):
    """Raised when the HTTP request never produced a response.

    Args:
        url: The rendered request URL.
        reason: Description of the underlying transport failure.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(reason)
        self.url: str = url
        self.reason: str = reason


class HttpStatusError(GeocodingError):
    """Raised when the provider answers with anything but HTTP 200.

    Args:
        url: The rendered request URL.
        status_code: The HTTP status returned.

    Example::

        raise HttpStatusError(url, 500)   # message: "HTTP Status 500"
    """

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP Status {status_code}")
        self.url: str = url
        self.status_code: int = status_code


class ParseError(GeocodingError):
    """Raised when the handler raised or the body is not valid JSON.

    Args:
        reason: The underlying error text.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Parsing error: {reason}")
        self.reason: str = reason


class HandlerContractViolation(GeocodingError):
    """Raised when a handler returns neither a result object nor a string.

    Args:
        body: The raw response body, kept in the message for diagnosis.
    """

    def __init__(self, body: str) -> None:
        super().__init__(
            f"Invalid return value from handler for response body: {body}"
        )
        self.body: str = body


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputWriteError(CsvGeocodeError):
    """Raised when the geocoded rows cannot be written out.

    Args:
        output_path: String representation of the destination that failed.
        reason: Underlying OS or library error message.

    Example::

        raise OutputWriteError("/read-only/dir/out.csv", "Permission denied")
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write output to '{output_path}': {reason}"
        )
        self.output_path: str = output_path
        self.reason: str = reason
