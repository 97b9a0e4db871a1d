"""
csvgeocode — Row Scheduler
===========================
Drives rows through a :class:`~csvgeocode.pipeline.RowPipeline` with a
bounded number in flight and hands back their outcomes in input order.

With the default ``concurrency=1`` rows run strictly one after another.
A higher bound runs rows on a :class:`~concurrent.futures.ThreadPoolExecutor`
of that size; output order is still decided by input position, never by
completion time.

Usage::

    scheduler = RowScheduler(pipeline, concurrency=4)
    for outcome in scheduler.run(rows):
        print(outcome.index, outcome.status, outcome.error)
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, Iterator

from csvgeocode.models import Row, RowOutcome
from csvgeocode.pipeline import RowPipeline

logger = logging.getLogger("csvgeocode.scheduler")


class RowScheduler:
    """Bounded-concurrency, order-preserving row runner.

    Args:
        pipeline: Processes one row.
        concurrency: Maximum rows in flight.  Must be ``>= 1``.
    """

    def __init__(self, pipeline: RowPipeline, concurrency: int = 1) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be ≥ 1")
        self.pipeline = pipeline
        self.concurrency = concurrency

    def submit(self, pool: ThreadPoolExecutor, rows: Iterable[Row]) -> list[Future]:
        """Queue every row on *pool*; one future per row, in input order."""
        return [
            pool.submit(self.pipeline.process, index, row)
            for index, row in enumerate(rows)
        ]

    def run(self, rows: Iterable[Row]) -> Iterator[RowOutcome]:
        """Yield one :class:`RowOutcome` per row, in input order.

        There is no cancellation: if the caller stops iterating early
        (``close()``), every remaining row is still processed before the
        generator finishes.  Their outcomes are discarded; the rows are
        still updated in place.
        """
        if self.concurrency == 1:
            remaining = enumerate(rows)
            try:
                for index, row in remaining:
                    yield self.pipeline.process(index, row)
            finally:
                for index, row in remaining:
                    self.pipeline.process(index, row)
            return

        logger.debug("Running with %d rows in flight", self.concurrency)
        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="csvgeocode"
        ) as pool:
            for future in self.submit(pool, rows):
                yield future.result()
