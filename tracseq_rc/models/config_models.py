from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Config dataclasses for the sample-sheet reverse-complement tool.

These are the typed settings consumed by the engine. The YAML loader in
tracseq_rc/config/loader.py builds them; every field has a default so the
tool runs without any configuration file.
"""


class MissingDelimiterPolicy(Enum):
    """What to do with a delimiter column value that has no ``-``.

    - REVERSE_COMPLEMENT: reverse-complement the whole value
    - KEEP: leave the value untouched (not counted as transformed)
    """
    REVERSE_COMPLEMENT = "reverse_complement"
    KEEP = "keep"


@dataclass(frozen=True)
class CanonicalColumn:
    """Header label with a fixed meaning and its delimiter flag."""
    name: str
    delimiter: bool


# 優先順位順 (先頭が最優先)
DEFAULT_CANONICAL_COLUMNS: tuple[CanonicalColumn, ...] = (
    CanonicalColumn("IndexNtSequence", True),
    CanonicalColumn("IndexNtSequence2", False),
    CanonicalColumn("Index 2", False),
    CanonicalColumn("Index", True),
)

DEFAULT_IDENTIFIER_COLUMNS: tuple[str, ...] = ("Id", "Sample ID")

DEFAULT_TABLE_NAME = "SampleBatchItems"
DEFAULT_OUTPUT_SUFFIX = "_RC"


@dataclass(frozen=True)
class ClassifierThresholds:
    """Tuning knobs for the heuristic column scan.

    sample_rows bounds how many data rows are examined per column.
    """
    sample_rows: int = 10
    min_suffix_length: int = 4  # delimited: length of the part after '-'
    suffix_ratio: float = 0.8  # delimited: share of ACGTN chars in the suffix
    min_sequence_length: int = 6  # whole-value: every char must be ACGTN

    def __post_init__(self) -> None:
        if self.sample_rows < 1:
            raise ValueError("sample_rows must be >= 1")
        if not 0.0 <= self.suffix_ratio <= 1.0:
            raise ValueError("suffix_ratio must be within [0, 1]")


@dataclass(frozen=True)
class RcConfig:
    """Root configuration for one run."""
    table_name: str = DEFAULT_TABLE_NAME
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    header_sentinel: str | None = None  # None -> first row is the header
    missing_delimiter: MissingDelimiterPolicy = MissingDelimiterPolicy.REVERSE_COMPLEMENT
    canonical_columns: tuple[CanonicalColumn, ...] = DEFAULT_CANONICAL_COLUMNS
    identifier_columns: tuple[str, ...] = DEFAULT_IDENTIFIER_COLUMNS
    thresholds: ClassifierThresholds = field(default_factory=ClassifierThresholds)
