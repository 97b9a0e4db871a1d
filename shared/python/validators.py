"""
csvgeocode — Shared Input Validators
=====================================
Static precondition checks run before any row is geocoded.

All methods raise an appropriate exception from
:mod:`shared.python.exceptions` rather than returning booleans, which keeps
``validate_inputs`` implementations simple and readable::

    class MyTool(GeoTool):
        def validate_inputs(self) -> None:
            Validators.assert_file_exists(self.source)
            Validators.assert_supported_extension(self.source, [".csv"])
            Validators.assert_output_target(self.output)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from shared.python.exceptions import (
    ConfigError,
    InputValidationError,
    OutputWriteError,
)


class Validators:
    """Collection of static precondition checks.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Args:
            path: Path object to check.

        Raises:
            InputValidationError: If *path* does not exist or is a
                directory rather than a file.

        Example::

            Validators.assert_file_exists(Path("data/addresses.csv"))
        """
        path = Path(path)
        if not path.exists():
            raise InputValidationError(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InputValidationError(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Assert that the parent directory of *output_path* is writable.

        Creates the parent directory (and any missing parents) if it does
        not yet exist, so callers never have to pre-create output dirs.

        Args:
            output_path: Intended output file path.

        Raises:
            OutputWriteError: If the parent directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Allowed extensions, each starting with a dot
                        (e.g. ``[".csv"]``).

        Raises:
            InputValidationError: If the file extension is not in
                *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InputValidationError(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    # ------------------------------------------------------------------
    # Output destination checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_output_target(output: Any) -> None:
        """Assert that *output* is a path, a writable stream, or ``None``.

        ``None`` means standard output.

        Raises:
            ConfigError: For anything else (numbers, dicts, read-only
                objects, ...).
        """
        if output is None or isinstance(output, (str, Path)):
            return
        if callable(getattr(output, "write", None)):
            return
        raise ConfigError(
            "Invalid value for output. Needs to be a filename or a writable "
            f"stream, got {type(output).__name__}."
        )
