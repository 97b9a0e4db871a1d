"""
csvgeocode — Shared Base Tool
==============================
Abstract base class for csvgeocode tools.

Design Pattern:
    Template Method — the public ``run()`` method defines a fixed
    pipeline (validate → process → report) that subclasses fill in
    by implementing the abstract methods ``validate_inputs`` and
    ``process``.

Usage:
    Do NOT instantiate this class directly.  Subclass it and implement
    the two abstract methods::

        from shared.python.base_tool import GeoTool

        class MyTool(GeoTool):
            def validate_inputs(self) -> None:
                ...
            def process(self) -> Summary:
                ...
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

# ---------------------------------------------------------------------------
# Module-level logger — each module gets its own child logger via
#   logging.getLogger("csvgeocode.<module>").
# ---------------------------------------------------------------------------
logger = logging.getLogger("csvgeocode")


class GeoTool(ABC):
    """Abstract base class for csvgeocode tools.

    Every concrete tool must inherit from this class and implement
    :meth:`validate_inputs` and :meth:`process`.  Calling :meth:`run`
    executes the full pipeline in the correct order.

    Attributes:
        source: Input CSV path, or an in-memory sequence of rows.
        output: Output path, a writable stream, or ``None`` for stdout.
        verbose: When ``True`` the tool logs DEBUG-level messages in
            addition to INFO/WARNING/ERROR.
    """

    def __init__(
        self,
        source: Any,
        output: Any = None,
        *,
        verbose: bool = False,
    ) -> None:
        """Initialise the base tool.

        Args:
            source: Path to the input CSV, or a list of row mappings.
            output: Where the tool writes its output.  A ``str`` is
                    normalised to a :class:`~pathlib.Path`; streams are kept
                    as-is and validated later.
            verbose: Set to ``True`` to enable debug-level console
                     logging during the run.  Defaults to ``False``.
        """
        self.source: Any = Path(source) if isinstance(source, str) else source
        self.output: Any = Path(output) if isinstance(output, str) else output
        self.verbose: bool = verbose

        self._configure_logging()

    # ------------------------------------------------------------------
    # Abstract interface — subclasses MUST implement these
    # ------------------------------------------------------------------

    @abstractmethod
    def validate_inputs(self) -> None:
        """Validate all inputs before processing begins.

        Raises:
            InputValidationError: If the input file is missing or the
                options cannot be resolved.
        """

    @abstractmethod
    def process(self) -> Any:
        """Execute the core processing logic.

        Called by :meth:`run` after :meth:`validate_inputs` has succeeded.
        Its return value is handed back to the caller of :meth:`run`.
        """

    # ------------------------------------------------------------------
    # Template method — the public API callers use
    # ------------------------------------------------------------------

    def run(self) -> Any:
        """Execute the full tool pipeline.

        Runs the steps in order:

        1. :meth:`validate_inputs` — verify all preconditions.
        2. :meth:`process` — perform the work.
        3. :meth:`_report_success` — log the elapsed time and output.

        Returns:
            Whatever :meth:`process` returned.

        Raises:
            Any exception raised by ``validate_inputs`` or ``process``
            propagates unchanged so callers can handle it appropriately.
        """
        logger.info("Starting %s", self.__class__.__name__)
        start = time.perf_counter()

        self.validate_inputs()
        result = self.process()

        elapsed = time.perf_counter() - start
        self._report_success(elapsed)
        return result

    # ------------------------------------------------------------------
    # Protected helpers — subclasses may override if needed
    # ------------------------------------------------------------------

    def _report_success(self, elapsed: float) -> None:
        """Log a success message with the elapsed time and output target."""
        logger.info(
            "%s completed in %.2fs → %s",
            self.__class__.__name__,
            elapsed,
            self.output if self.output is not None else "<stdout>",
        )

    def _configure_logging(self) -> None:
        """Set up console logging for this tool instance.

        Attaches a :class:`logging.StreamHandler` to the root
        ``csvgeocode`` logger if no handlers are already present.
        Uses DEBUG level when ``self.verbose`` is ``True``, otherwise INFO.
        """
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                fmt="[%(asctime)s] %(levelname)-8s %(name)s — %(message)s",
                datefmt="%H:%M:%S",
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"source={self.source!r}, "
            f"output={self.output!r})"
        )
