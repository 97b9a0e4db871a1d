"""
csvgeocode — Data Classes
==========================
Value types passed between the pipeline stages.

Classes:
    GeocodeSuccess   Handler produced a coordinate pair.
    GeocodeFailure   Handler reported a provider-side error.
    RowStatus        How a row settled.
    RowOutcome       One record of the per-row result sequence.
    Summary          Counts and elapsed time for a whole run.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any, Union

Row = dict[str, Any]


def is_numeric(value: Any) -> bool:
    """Return ``True`` if *value* parses as a finite number.

    Empty strings, ``None`` and booleans are not numeric.
    """
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


# ---------------------------------------------------------------------------
# Normalized handler results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeocodeSuccess:
    """A coordinate pair extracted from a provider response.

    Attributes:
        lat: Latitude as returned by the handler.
        lng: Longitude as returned by the handler.
        location: Address-component metadata, or ``None`` when the
                  handler supplied its own success object without it.
        raw: Every key the handler returned, ``lat``/``lng`` included.
    """

    lat: Any
    lng: Any
    location: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GeocodeFailure:
    """A provider-reported error such as ``ZERO_RESULTS``."""

    reason: str


GeocodeResult = Union[GeocodeSuccess, GeocodeFailure]


# ---------------------------------------------------------------------------
# Per-row outcome and run summary
# ---------------------------------------------------------------------------


class RowStatus(str, enum.Enum):
    SKIPPED = "skipped"
    CACHED = "cached"
    GEOCODED = "geocoded"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class RowOutcome:
    """How one input row settled.

    Attributes:
        index: 0-based position of the row in the input.
        row: The (mutated) row itself.
        status: Which branch of the pipeline settled the row.
        error: Error description for ``failed`` / ``error`` rows, else
               ``None``.
    """

    index: int
    row: Row
    status: RowStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Summary:
    """Outcome counts for a whole run.

    Attributes:
        successes: Rows whose final lat and lng are both numeric.
        failures: All other rows.
        time: Elapsed wall-clock milliseconds from run start until the
              last row settled.
    """

    successes: int
    failures: int
    time: int

    @property
    def total(self) -> int:
        return self.successes + self.failures

    def to_dict(self) -> dict[str, int]:
        return {
            "failures": self.failures,
            "successes": self.successes,
            "time": self.time,
        }

    def summary(self) -> str:
        """Return a human-readable summary string for logging or display."""
        return (
            f"Geocoded {self.successes}/{self.total} rows "
            f"({self.failures} failed) in {self.time} ms"
        )
