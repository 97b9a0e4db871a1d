"""
csvgeocode — CSV Reader / Writer
=================================
Thin pandas wrappers that move rows between CSV text and lists of plain
dicts.

Every cell is read as a string (empty cells as ``""``) so values survive
the round trip exactly as they appeared in the input.  Dict and list
values, such as the location metadata column, are written as JSON text.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from csvgeocode.models import Row
from shared.python.exceptions import InputValidationError, OutputWriteError


def read_rows(path: Path) -> list[Row]:
    """Read *path* into a list of ``{column: value}`` dicts.

    Raises:
        InputValidationError: If pandas cannot parse the file.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise InputValidationError(f"Could not parse CSV '{path}': {exc}") from exc
    return df.to_dict(orient="records")


def _to_frame(rows: Sequence[Row]) -> pd.DataFrame:
    # Columns follow first appearance; missing cells are written empty.
    return pd.DataFrame(
        [{key: _cell(value) for key, value in row.items()} for row in rows], dtype=object
    )


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def stringify_rows(rows: Sequence[Row]) -> str:
    """Render *rows* as CSV text with a header line.

    An empty sequence renders as ``""``.
    """
    if not rows:
        return ""
    buffer = io.StringIO()
    _to_frame(rows).to_csv(buffer, index=False, lineterminator="\n")
    return buffer.getvalue()


def write_rows(path: Path, rows: Sequence[Row]) -> None:
    """Write *rows* to *path* as CSV.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        Path(path).write_text(stringify_rows(rows), encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(str(path), str(exc)) from exc
