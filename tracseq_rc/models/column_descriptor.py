from __future__ import annotations

from dataclasses import dataclass

"""Column descriptor and correlation record models.

A ColumnDescriptor points at one column of a sample sheet that is subject to
the reverse-complement transformation. A CorrelationRecord pairs a transformed
value with the identifier of the row it came from, so that an UPDATE statement
can be rendered for it.
"""

__all__ = [
    "ColumnDescriptor",
    "CorrelationRecord",
]


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column holding index sequences.

    Attributes:
        position: 0-based column position in the header row
        name: Header label, or a synthetic ``Column_<n>`` for blank headers
        delimiter: When True the value is split on the first ``-`` and only
            the suffix is reverse-complemented
    """
    position: int
    name: str
    delimiter: bool = False

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"column position must be >= 0, got {self.position}")


@dataclass(frozen=True)
class CorrelationRecord:
    """Transformed value correlated with its row identifier."""
    identifier: str  # trimmed, never empty
    new_value: str
    column_name: str

    def __post_init__(self) -> None:
        if not self.identifier.strip():
            raise ValueError("correlation record requires a non-empty identifier")
