from __future__ import annotations

from collections.abc import Sequence

from ..models.column_descriptor import ColumnDescriptor, CorrelationRecord
from ..models.config_models import MissingDelimiterPolicy
from ..models.document import Row, RowResult
from .codec import reverse_complement

"""Row transformation.

Applies the reverse complement to the cells named by the column descriptors
and pairs every transformed cell with the row identifier. Descriptors are
computed once per document and shared read-only across all rows.
"""

__all__ = [
    "transform_value",
    "transform_row",
]

DELIMITER = "-"


def transform_value(
    value: str,
    delimiter: bool,
    missing_delimiter: MissingDelimiterPolicy = MissingDelimiterPolicy.REVERSE_COMPLEMENT,
) -> str | None:
    """Transform a single cell value.

    Returns the new value, or None when the cell is left untouched (blank
    cell, or a delimited column without ``-`` under the KEEP policy).

    >>> transform_value("Prefix-ATGC", delimiter=True)
    'Prefix-GCAT'
    >>> transform_value("GCAT", delimiter=False)
    'ATGC'
    """
    if not value.strip():
        return None
    if not delimiter:
        return reverse_complement(value)
    parts = value.split(DELIMITER, 1)
    if len(parts) == 2:
        prefix, suffix = parts
        return f"{prefix}{DELIMITER}{reverse_complement(suffix)}"
    if missing_delimiter is MissingDelimiterPolicy.KEEP:
        return None
    return reverse_complement(value)


def transform_row(
    row: Row,
    descriptors: Sequence[ColumnDescriptor],
    identifier_column: ColumnDescriptor | None = None,
    missing_delimiter: MissingDelimiterPolicy = MissingDelimiterPolicy.REVERSE_COMPLEMENT,
) -> RowResult:
    """Transform one data row.

    Cells without a descriptor are copied unchanged at their position;
    descriptor positions past the end of a short row are ignored.

    One CorrelationRecord is emitted per transformed cell, in column order,
    provided the row has a non-empty identifier. Rows without an identifier
    are still transformed but produce no records.
    """
    cells = list(row)
    transformed: list[tuple[ColumnDescriptor, str]] = []
    # 同一 position の重複は後勝ち (通常は分類器が一意性を保証)
    by_position = {d.position: d for d in descriptors}
    for position in sorted(by_position):
        if position >= len(cells):
            continue
        descriptor = by_position[position]
        new_value = transform_value(cells[position], descriptor.delimiter, missing_delimiter)
        if new_value is None:
            continue
        cells[position] = new_value
        transformed.append((descriptor, new_value))

    records: list[CorrelationRecord] = []
    identifier = ""
    if identifier_column is not None and identifier_column.position < len(row):
        identifier = row[identifier_column.position].strip()
    if identifier:
        records = [
            CorrelationRecord(identifier=identifier, new_value=value, column_name=descriptor.name)
            for descriptor, value in transformed
        ]
    return RowResult(row=tuple(cells), records=records, transformed_cells=len(transformed))
