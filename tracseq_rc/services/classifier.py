from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..models.column_descriptor import ColumnDescriptor
from ..models.config_models import (
    DEFAULT_CANONICAL_COLUMNS,
    DEFAULT_IDENTIFIER_COLUMNS,
    CanonicalColumn,
    ClassifierThresholds,
)
from ..models.document import Row
from .codec import NUCLEOTIDES

"""Column classification: which columns hold index sequences.

Two strategies, only one of which is used per document:

1. Canonical match - header labels with a fixed meaning (IndexNtSequence,
   IndexNtSequence2, "Index 2", Index). Several may coexist. When any of them
   is present the heuristic scan is skipped entirely.
2. Heuristic scan - every column is probed on a bounded sample of data rows.
   A cell like ``D701-ATTACTCG`` marks a delimited column, a cell made only of
   ACGTN (``AATTCCGG``) marks a whole-value column. The first qualifying cell
   (row-major order) decides the column's flag.

Classification is pure: it looks at the header and the sample only and never
touches the rows being written.
"""

__all__ = [
    "classify_columns",
    "match_canonical_columns",
    "scan_columns",
    "find_identifier_column",
    "synthetic_column_name",
    "is_delimited_sequence",
    "is_whole_sequence",
]

logger = logging.getLogger(__name__)

SYNTHETIC_PREFIX = "Column_"


def synthetic_column_name(position: int) -> str:
    """Name for a column whose header cell is blank (1-based, like Excel)."""
    return f"{SYNTHETIC_PREFIX}{position + 1}"


def _column_name(header: Row, position: int) -> str:
    name = header[position].strip() if position < len(header) else ""
    return name or synthetic_column_name(position)


def is_delimited_sequence(value: str, thresholds: ClassifierThresholds) -> bool:
    """True for ``<label>-<sequence>`` values with a mostly-ACGTN suffix."""
    if value.count("-") != 1:
        return False
    suffix = value.split("-", 1)[1]
    if len(suffix) < thresholds.min_suffix_length:
        return False
    hits = sum(1 for c in suffix if c in NUCLEOTIDES)
    return hits / len(suffix) >= thresholds.suffix_ratio


def is_whole_sequence(value: str, thresholds: ClassifierThresholds) -> bool:
    """True for values made only of ACGTN and long enough to be a barcode."""
    return len(value) >= thresholds.min_sequence_length and all(c in NUCLEOTIDES for c in value)


def match_canonical_columns(
    header: Row, canonical_columns: Iterable[CanonicalColumn] = DEFAULT_CANONICAL_COLUMNS
) -> list[ColumnDescriptor]:
    """Descriptors for every canonical label present in ``header``.

    Labels are checked in priority order; a position already claimed by a
    higher-priority label is not claimed again. Result is in column order.
    """
    claimed: dict[int, ColumnDescriptor] = {}
    for canonical in canonical_columns:
        for position, cell in enumerate(header):
            if cell.strip() != canonical.name:
                continue
            if position not in claimed:
                claimed[position] = ColumnDescriptor(position, canonical.name, canonical.delimiter)
            break
    return [claimed[p] for p in sorted(claimed)]


def scan_columns(
    header: Row, sample_rows: Sequence[Row], thresholds: ClassifierThresholds | None = None
) -> list[ColumnDescriptor]:
    """Heuristic scan over the first ``thresholds.sample_rows`` data rows.

    Columns are probed up to the widest of the header and the sampled rows;
    data cells past the end of a short header get a ``Column_<n>`` name.
    """
    thresholds = thresholds or ClassifierThresholds()
    sample = sample_rows[: thresholds.sample_rows]
    width = max([len(header), *(len(row) for row in sample)])
    descriptors: list[ColumnDescriptor] = []
    for position in range(width):
        for row in sample:
            if position >= len(row):
                continue
            value = row[position].strip()
            # 区切り判定を先に行う (セル単位)
            if is_delimited_sequence(value, thresholds):
                delimiter = True
            elif is_whole_sequence(value, thresholds):
                delimiter = False
            else:
                continue
            descriptors.append(ColumnDescriptor(position, _column_name(header, position), delimiter))
            logger.debug(f"heuristic: column {position} matched on value '{value}' delimiter={delimiter}")
            break
    return descriptors


def classify_columns(
    header: Row,
    sample_rows: Sequence[Row],
    canonical_columns: Iterable[CanonicalColumn] = DEFAULT_CANONICAL_COLUMNS,
    thresholds: ClassifierThresholds | None = None,
) -> list[ColumnDescriptor]:
    """Determine which columns hold index sequences.

    Args:
        header: Header row
        sample_rows: Data rows; only the first ``thresholds.sample_rows`` are
            examined by the heuristic
        canonical_columns: Canonical labels in priority order
        thresholds: Heuristic tuning (defaults when None)

    Returns:
        Descriptors in column order. Empty when nothing qualifies, which is a
        valid outcome rather than an error.
    """
    descriptors = match_canonical_columns(header, canonical_columns)
    if descriptors:
        return descriptors
    return scan_columns(header, sample_rows, thresholds)


def find_identifier_column(
    header: Row, identifier_names: Iterable[str] = DEFAULT_IDENTIFIER_COLUMNS
) -> ColumnDescriptor | None:
    """Locate the row identifier column (first matching name wins)."""
    for name in identifier_names:
        for position, cell in enumerate(header):
            if cell.strip() == name:
                return ColumnDescriptor(position, name)
    return None
