from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .column_descriptor import CorrelationRecord

"""Document-level models: rows as read from disk and their derived views."""

__all__ = [
    "Row",
    "TabularDocument",
    "LocatedHeader",
    "RowResult",
]

Row = tuple[str, ...]

DocumentKind = Literal["excel", "delimited"]


@dataclass(frozen=True)
class TabularDocument:
    """Rows of one input file, every cell already stringified.

    Only the first sheet of a workbook is read; ``sheet_name`` records which
    one it was so the writer can reuse the name.
    """
    path: Path
    kind: DocumentKind
    rows: list[Row]
    sheet_name: str | None = None  # excel only
    delimiter: str | None = None  # delimited only
    line_terminator: str = "\r\n"  # delimited only, as found in the input


@dataclass(frozen=True)
class LocatedHeader:
    """Header row, its position and the rows around it."""
    header: Row
    header_index: int
    data_rows: list[Row]
    preamble: list[Row] = field(default_factory=list)  # rows before the header, copied as-is


@dataclass(frozen=True)
class RowResult:
    """Output of transforming one data row."""
    row: Row
    records: list[CorrelationRecord] = field(default_factory=list)
    transformed_cells: int = 0
