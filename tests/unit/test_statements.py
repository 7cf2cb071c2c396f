from __future__ import annotations

from tracseq_rc.models.column_descriptor import CorrelationRecord
from tracseq_rc.services.statements import column_reference, format_update, format_updates


def test_bare_column_name():
    assert column_reference("IndexNtSequence") == "IndexNtSequence"


def test_column_with_space_is_bracketed():
    assert column_reference("Index 2") == "[Index 2]"


def test_synthetic_column_is_bracketed():
    assert column_reference("Column_4") == "[Column_4]"


def test_format_update_default_table():
    record = CorrelationRecord("1", "Prefix-GCAT", "IndexNtSequence")
    assert format_update(record) == (
        "UPDATE SampleBatchItems SET IndexNtSequence = 'Prefix-GCAT' WHERE Id = '1';"
    )


def test_format_update_custom_table_and_bracketed_column():
    record = CorrelationRecord("S-9", "ATGC", "Index 2")
    assert format_update(record, "dbo.Items") == "UPDATE dbo.Items SET [Index 2] = 'ATGC' WHERE Id = 'S-9';"


def test_format_update_does_not_escape_values():
    record = CorrelationRecord("o'1", "A'C", "Index")
    assert format_update(record) == "UPDATE SampleBatchItems SET Index = 'A'C' WHERE Id = 'o'1';"


def test_format_updates_preserves_order():
    records = [CorrelationRecord("2", "B", "Index"), CorrelationRecord("1", "A", "Index")]
    lines = format_updates(records, "T")
    assert lines == [
        "UPDATE T SET Index = 'B' WHERE Id = '2';",
        "UPDATE T SET Index = 'A' WHERE Id = '1';",
    ]
    assert format_updates([], "T") == []
