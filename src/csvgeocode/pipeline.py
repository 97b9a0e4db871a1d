"""
csvgeocode — Row Pipeline
==========================
Everything that happens to a single row:

1. skip-check — numeric lat/lng and no ``force`` → accepted as-is
2. render the request URL
3. cache-check — a stored result is copied onto the row
4. fetch (:class:`~csvgeocode.executor.RequestExecutor`)
5. normalize (:class:`~csvgeocode.normalizer.ResponseNormalizer`)
6. write coordinates / failure markers onto the row

Per-row :class:`~shared.python.exceptions.GeocodingError` subclasses never
escape :meth:`RowPipeline.process`; they are logged and recorded on the
returned :class:`~csvgeocode.models.RowOutcome`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from csvgeocode.cache import GeocodeCache
from csvgeocode.executor import RequestExecutor
from csvgeocode.models import (
    GeocodeFailure,
    GeocodeResult,
    GeocodeSuccess,
    Row,
    RowOutcome,
    RowStatus,
    is_numeric,
)
from csvgeocode.normalizer import ResponseNormalizer
from csvgeocode.options import GeocodeOptions
from csvgeocode.render import render_url
from shared.python.exceptions import GeocodingError

logger = logging.getLogger("csvgeocode.pipeline")


class RowPipeline:
    """Geocode one row at a time against a shared cache.

    Safe to call from several worker threads at once: rows are never
    shared between calls and the cache does its own locking.

    Args:
        options: Resolved options with ``lat`` and ``lng`` already set.
        executor: Issues the HTTP requests.
        cache: Result cache for this run.  A fresh one is created when
               omitted.
        sleep: Called with the delay in seconds after each normalized
               response.
    """

    def __init__(
        self,
        options: GeocodeOptions,
        executor: RequestExecutor,
        cache: GeocodeCache | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if options.lat is None or options.lng is None:
            raise ValueError("lat/lng columns must be resolved before rows are processed")
        self.options = options
        self.executor = executor
        self.cache = cache if cache is not None else GeocodeCache()
        self.normalizer = ResponseNormalizer(options.handler)
        self._sleep = sleep

    def process(self, index: int, row: Row) -> RowOutcome:
        """Run *row* through the pipeline, mutating it in place."""
        opts = self.options

        if not opts.force and is_numeric(row.get(opts.lat)) and is_numeric(row.get(opts.lng)):
            logger.debug("[%d] already has coordinates, skipping", index + 1)
            return RowOutcome(index, row, RowStatus.SKIPPED)

        url = render_url(opts.url, row)
        claim = self.cache.claim(url)

        if claim.entry is not None:
            self._apply_success(row, claim.entry)
            logger.debug("[%d] served from cache: %s", index + 1, url)
            return RowOutcome(index, row, RowStatus.CACHED)

        try:
            if claim.owner:
                result = self._resolve_and_settle(url)
                status = RowStatus.GEOCODED
            else:
                logger.debug("[%d] waiting on in-flight request: %s", index + 1, url)
                result = claim.pending.result()
                status = RowStatus.CACHED
        except GeocodingError as exc:
            logger.warning("  ✗ Row %d: %s", index + 1, exc.message)
            return RowOutcome(index, row, RowStatus.ERROR, exc.message)

        if isinstance(result, GeocodeFailure):
            row[opts.lat] = ""
            row[opts.lng] = ""
            logger.warning("  ✗ Row %d: %s", index + 1, result.reason)
            return RowOutcome(index, row, RowStatus.FAILED, result.reason)

        self._apply_success(row, result)
        logger.debug("  ✓ Row %d → (%s, %s)", index + 1, result.lat, result.lng)
        return RowOutcome(index, row, status)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve_and_settle(self, url: str) -> GeocodeResult:
        """Fetch and normalize *url*, then publish the result to the cache."""
        try:
            result = self._resolve(url)
        except BaseException as exc:
            self.cache.fail(url, exc)
            raise
        self.cache.settle(url, result)
        return result

    def _resolve(self, url: str) -> GeocodeResult:
        body = self.executor.fetch(url)
        try:
            return self.normalizer.normalize(body)
        finally:
            if self.options.delay:
                self._sleep(self.options.delay / 1000.0)

    def _apply_success(self, row: Row, result: GeocodeSuccess) -> None:
        row[self.options.lat] = result.lat
        row[self.options.lng] = result.lng
        if self.options.location and result.location is not None:
            row[self.options.location] = result.location
