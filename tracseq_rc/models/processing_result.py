from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .column_descriptor import ColumnDescriptor, CorrelationRecord

"""Processing result model.

ProcessingResult is what process_file() hands back to the CLI: everything an
operator-facing report needs (descriptors, records, counts, timings) without
the caller having to re-derive anything from the rows.
"""

__all__ = [
    "ProcessingResult",
]


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of processing one sample sheet."""
    input_path: Path
    output_path: Path
    header_index: int  # 0-based row of the header within the document
    strategy: str  # canonical | heuristic | none
    descriptors: list[ColumnDescriptor]
    identifier_column: ColumnDescriptor | None
    records: list[CorrelationRecord]
    statements: list[str]  # rendered UPDATE statements, same order as records
    data_rows: int
    columns: int  # width of the header row
    transformed_cells: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    sql_path: Path | None = None

    @property
    def has_sequence_columns(self) -> bool:
        return bool(self.descriptors)
