from __future__ import annotations

from collections.abc import Iterable

from ..models.column_descriptor import CorrelationRecord
from ..models.config_models import DEFAULT_TABLE_NAME
from .classifier import SYNTHETIC_PREFIX

"""UPDATE statement rendering.

Statements are text only; nothing here talks to a database. Values are
written verbatim between single quotes (no escaping).
"""

__all__ = [
    "column_reference",
    "format_update",
    "format_updates",
]


def column_reference(column_name: str) -> str:
    """Bracket-quote names with spaces and synthetic ``Column_<n>`` names."""
    if " " in column_name or column_name.startswith(SYNTHETIC_PREFIX):
        return f"[{column_name}]"
    return column_name


def format_update(record: CorrelationRecord, table_name: str = DEFAULT_TABLE_NAME) -> str:
    """Render one correlation record.

    >>> format_update(CorrelationRecord("7", "D701-CGAGTAAT", "IndexNtSequence"))
    "UPDATE SampleBatchItems SET IndexNtSequence = 'D701-CGAGTAAT' WHERE Id = '7';"
    """
    return (
        f"UPDATE {table_name} SET {column_reference(record.column_name)} = "
        f"'{record.new_value}' WHERE Id = '{record.identifier}';"
    )


def format_updates(records: Iterable[CorrelationRecord], table_name: str = DEFAULT_TABLE_NAME) -> list[str]:
    return [format_update(r, table_name) for r in records]
