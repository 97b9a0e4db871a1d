"""
csvgeocode — Core Module
=========================
Geocodes every row of a CSV by calling a provider URL once per row and
writes the table back out with latitude/longitude (and optional address
metadata) filled in.

Architecture:
    :class:`CsvGeocoder` is a :class:`~shared.python.base_tool.GeoTool`.
    ``validate_inputs`` resolves options and checks the input/output;
    ``process`` reads rows, discovers coordinate columns, runs them through
    a :class:`~csvgeocode.scheduler.RowScheduler` and hands the result to
    the CSV writer.  The response format is a pluggable handler
    (see :mod:`csvgeocode.handlers`).

Usage::

    from csvgeocode import CsvGeocoder

    tool = CsvGeocoder(
        "data/addresses.csv",
        "output/addresses_geocoded.csv",
        url="https://maps.googleapis.com/maps/api/geocode/json"
            "?address={{address}}&key=YOUR_KEY",
        handler="google",
    )
    summary = tool.run()
    print(summary.summary())
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Any, Iterator, Sequence

from csvgeocode.aggregator import ResultAggregator
from csvgeocode.cache import GeocodeCache
from csvgeocode.csv_io import read_rows, stringify_rows, write_rows
from csvgeocode.executor import RequestExecutor
from csvgeocode.handlers import Handler
from csvgeocode.models import Row, RowOutcome, Summary
from csvgeocode.options import GeocodeOptions, resolve_options
from csvgeocode.pipeline import RowPipeline
from csvgeocode.scheduler import RowScheduler
from shared.python.base_tool import GeoTool
from shared.python.exceptions import InputValidationError, OutputWriteError
from shared.python.validators import Validators

logger = logging.getLogger("csvgeocode.geocoder")


class CsvGeocoder(GeoTool):
    """Geocode every row of a table through a provider URL template.

    Rows that already carry numeric coordinates are left alone unless
    ``force`` is set.  Every input row appears in the output, in input
    order, whether or not it was geocoded.

    Args:
        source: Path to the input CSV, or a list of row dicts.  Rows
                passed in directly are mutated in place.
        output: Output CSV path, a writable text stream, or ``None`` for
                standard output.  Not written to when ``test`` is set.
        url: Request URL template; ``{{column}}`` is replaced with the
             row's escaped value.
        handler: Built-in handler name or a callable
                 ``handler(body) -> {"lat", "lng"} | str``.
        lat: Latitude column.  Discovered from the first row when omitted.
        lng: Longitude column.  Discovered from the first row when omitted.
        force: Re-geocode rows that already have coordinates.
        delay: Milliseconds each network-resolved row waits before
               settling; throttles requests to the provider.
        test: Geocode but do not write output.
        location: Column to receive address metadata for geocoded rows.
        concurrency: Maximum rows in flight at once.
        executor: Custom :class:`~csvgeocode.executor.RequestExecutor`.
        verbose: Enable DEBUG-level logging.
    """

    def __init__(
        self,
        source: str | Path | Sequence[Row],
        output: Any = None,
        *,
        url: str | None = None,
        handler: str | Handler | None = None,
        lat: str | None = None,
        lng: str | None = None,
        force: bool | None = None,
        delay: float | None = None,
        test: bool | None = None,
        location: str | None = None,
        concurrency: int | None = None,
        executor: RequestExecutor | None = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(source, output, verbose=verbose)
        self._user_options: dict[str, Any] = {
            "url": url,
            "handler": handler,
            "lat": lat,
            "lng": lng,
            "force": force,
            "delay": delay,
            "test": test,
            "location": location,
            "concurrency": concurrency,
        }
        self._executor = executor
        self._options: GeocodeOptions | None = None
        self._outcomes: list[RowOutcome] = []
        self._rows: list[Row] = []
        self._summary: Summary | None = None

    # ------------------------------------------------------------------
    # GeoTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Resolve options and check the input and output before any row runs.

        Raises:
            ConfigError: If an option is invalid or the output is neither a
                path nor a writable stream.
            InputValidationError: If the input file is missing or not a CSV.
            OutputWriteError: If the output directory cannot be created.
        """
        options = resolve_options(**self._user_options).unwrap()

        if isinstance(self.source, Path):
            Validators.assert_file_exists(self.source)
            Validators.assert_supported_extension(self.source, [".csv"])
        elif not isinstance(self.source, (list, tuple)):
            raise InputValidationError(
                "Input needs to be a CSV filename or a list of rows, "
                f"got {type(self.source).__name__}."
            )

        Validators.assert_output_target(self.output)
        if not options.test and isinstance(self.output, Path):
            Validators.assert_output_dir_writable(self.output)

        self._options = options
        logger.debug("Inputs validated successfully.")

    def process(self) -> Summary:
        """Geocode every row, write the output and return the summary."""
        for _ in self.iter_outcomes():
            pass
        return self._summary

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def iter_outcomes(self) -> Iterator[RowOutcome]:
        """Geocode the rows, yielding each :class:`RowOutcome` in input order.

        Once the last outcome has been yielded the summary is computed and
        the output written.  Validates inputs first if :meth:`run` has not.
        """
        if self._options is None:
            self.validate_inputs()
        started = time.perf_counter()

        rows = self._load_rows()
        options = self._options.with_columns(rows[0] if rows else None)
        self._options = options
        logger.info(
            "Geocoding %d rows (lat=%r, lng=%r, concurrency=%d)...",
            len(rows), options.lat, options.lng, options.concurrency,
        )

        executor = self._executor or RequestExecutor()
        pipeline = RowPipeline(options, executor, GeocodeCache())
        scheduler = RowScheduler(pipeline, concurrency=options.concurrency)

        self._rows = rows
        self._outcomes = []
        outcomes = scheduler.run(rows)
        try:
            for outcome in outcomes:
                self._outcomes.append(outcome)
                yield outcome
        finally:
            # Remaining rows finish before the session goes away.
            outcomes.close()
            if self._executor is None:
                executor.close()

        self._summary = ResultAggregator(options.lat, options.lng, started).summarize(rows)

        if options.test:
            logger.info("Test mode: output not written.")
        else:
            self._write_output(rows)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load_rows(self) -> list[Row]:
        if isinstance(self.source, Path):
            return read_rows(self.source)
        return list(self.source)

    def _write_output(self, rows: list[Row]) -> None:
        """Hand *rows* to the CSV writer.

        Raises:
            OutputWriteError: If the destination rejects the write.
        """
        if isinstance(self.output, Path):
            write_rows(self.output, rows)
            return

        stream = self.output if self.output is not None else sys.stdout
        try:
            stream.write(stringify_rows(rows))
            if hasattr(stream, "flush"):
                stream.flush()
        except (OSError, TypeError, ValueError) as exc:
            raise OutputWriteError(repr(stream), str(exc)) from exc

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def options(self) -> GeocodeOptions | None:
        """The resolved options, with discovered columns once rows are read."""
        return self._options

    @property
    def outcomes(self) -> list[RowOutcome]:
        """Every :class:`RowOutcome` from the last run, or ``[]``."""
        return self._outcomes

    @property
    def rows(self) -> list[Row]:
        """The geocoded rows from the last run, in input order."""
        return self._rows

    @property
    def summary(self) -> Summary | None:
        """The :class:`Summary` of the last completed run."""
        return self._summary


def geocode(
    source: str | Path | Sequence[Row],
    output: Any = None,
    **options: Any,
) -> Summary:
    """Geocode *source* into *output* in one call.

    Accepts the same keyword options as :class:`CsvGeocoder`.

    Example::

        summary = geocode("in.csv", "out.csv", url="...?q={{address}}", handler="mapbox")
    """
    return CsvGeocoder(source, output, **options).run()
