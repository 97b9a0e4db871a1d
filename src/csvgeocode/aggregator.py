"""Outcome counting for a finished run."""

from __future__ import annotations

import logging
import time
from typing import Sequence

from csvgeocode.models import Row, Summary, is_numeric

logger = logging.getLogger("csvgeocode.aggregator")


class ResultAggregator:
    """Count successes and failures once every row has settled.

    A row counts as a success when its final lat and lng are both numeric,
    however it got them (skipped, cached or geocoded).

    Args:
        lat: Latitude column name.
        lng: Longitude column name.
        started: ``time.perf_counter()`` reading taken at run start.
    """

    def __init__(self, lat: str, lng: str, started: float | None = None) -> None:
        self.lat = lat
        self.lng = lng
        self.started = time.perf_counter() if started is None else started

    def is_success(self, row: Row) -> bool:
        return is_numeric(row.get(self.lat)) and is_numeric(row.get(self.lng))

    def summarize(self, rows: Sequence[Row]) -> Summary:
        elapsed_ms = max(0, round((time.perf_counter() - self.started) * 1000))
        successes = sum(1 for row in rows if self.is_success(row))
        summary = Summary(
            successes=successes,
            failures=len(rows) - successes,
            time=elapsed_ms,
        )
        logger.info(
            "Geocoding complete: %d/%d succeeded, %d failed.",
            summary.successes, summary.total, summary.failures,
        )
        logger.debug("Summary: %s", summary.to_dict())
        return summary
