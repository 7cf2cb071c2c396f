from __future__ import annotations

from tracseq_rc.models.column_descriptor import ColumnDescriptor
from tracseq_rc.models.config_models import CanonicalColumn, ClassifierThresholds
from tracseq_rc.services.classifier import (
    classify_columns,
    find_identifier_column,
    is_delimited_sequence,
    is_whole_sequence,
    match_canonical_columns,
    scan_columns,
    synthetic_column_name,
)

DEFAULTS = ClassifierThresholds()


def test_canonical_index_nt_sequence_wins_regardless_of_data():
    header = ("Id", "IndexNtSequence", "Other")
    rows = [("1", "not a sequence", "AATTCCGG")]
    assert classify_columns(header, rows) == [ColumnDescriptor(1, "IndexNtSequence", True)]


def test_canonical_multiple_columns_coexist_in_column_order():
    header = ("Index", "Id", "Index 2", "IndexNtSequence2")
    descriptors = classify_columns(header, [])
    assert descriptors == [
        ColumnDescriptor(0, "Index", True),
        ColumnDescriptor(2, "Index 2", False),
        ColumnDescriptor(3, "IndexNtSequence2", False),
    ]


def test_canonical_match_skips_heuristic_entirely():
    header = ("Id", "Index", "Barcode")
    rows = [("1", "x", "AATTCCGG")]
    descriptors = classify_columns(header, rows)
    assert [d.position for d in descriptors] == [1]


def test_canonical_match_ignores_surrounding_whitespace():
    assert match_canonical_columns((" IndexNtSequence ",)) == [ColumnDescriptor(0, "IndexNtSequence", True)]


def test_canonical_match_is_case_sensitive():
    assert match_canonical_columns(("indexntsequence",)) == []


def test_canonical_duplicate_label_first_position_only():
    descriptors = match_canonical_columns(("Index", "Index"))
    assert descriptors == [ColumnDescriptor(0, "Index", True)]


def test_custom_canonical_columns():
    canonical = [CanonicalColumn("i7", False), CanonicalColumn("i5", False)]
    descriptors = classify_columns(("i5", "i7"), [], canonical_columns=canonical)
    assert descriptors == [ColumnDescriptor(0, "i5", False), ColumnDescriptor(1, "i7", False)]


def test_heuristic_whole_sequence_column():
    header = ("Name", "Plate", "Well", "Barcode")
    rows = [("s1", "P1", "A01", "AATTCCGG")]
    assert classify_columns(header, rows) == [ColumnDescriptor(3, "Barcode", False)]


def test_heuristic_delimited_column():
    header = ("Name", "Tag")
    rows = [("s1", "D701-ATTACTCG")]
    assert classify_columns(header, rows) == [ColumnDescriptor(1, "Tag", True)]


def test_heuristic_blank_header_gets_synthetic_name():
    header = ("Name", "", "Other")
    rows = [("s1", "GGGGAAAA", "x")]
    assert classify_columns(header, rows) == [ColumnDescriptor(1, "Column_2", False)]
    assert synthetic_column_name(0) == "Column_1"


def test_heuristic_first_qualifying_row_decides_flag():
    header = ("Tag",)
    rows = [("nothing",), ("AATTCCGG",), ("D701-ATTACTCG",)]
    assert classify_columns(header, rows) == [ColumnDescriptor(0, "Tag", False)]

    rows = [("D701-ATTACTCG",), ("AATTCCGG",)]
    assert classify_columns(header, rows) == [ColumnDescriptor(0, "Tag", True)]


def test_heuristic_only_examines_sample_rows():
    header = ("Tag",)
    rows = [("x",)] * 10 + [("AATTCCGG",)]
    assert classify_columns(header, rows) == []
    wider = ClassifierThresholds(sample_rows=11)
    assert classify_columns(header, rows, thresholds=wider) == [ColumnDescriptor(0, "Tag", False)]


def test_heuristic_skips_short_rows():
    header = ("Name", "Barcode")
    rows = [("s1",), ("s2", "ACGTACGT")]
    assert classify_columns(header, rows) == [ColumnDescriptor(1, "Barcode", False)]


def test_heuristic_scans_cells_past_short_header():
    header = ("Name", "Plate")
    rows = [("s1", "P1", "AATTCCGG"), ("s2", "P1", "TTGGCCAA", "D702-TCCGGAGA")]
    assert classify_columns(header, rows) == [
        ColumnDescriptor(2, "Column_3", False),
        ColumnDescriptor(3, "Column_4", True),
    ]


def test_heuristic_no_columns_is_empty_list():
    header = ("Name", "Count")
    rows = [("alpha", "12"), ("beta", "13")]
    assert classify_columns(header, rows) == []


def test_heuristic_with_no_data_rows():
    assert classify_columns(("a", "b"), []) == []


def test_is_delimited_sequence_rules():
    assert is_delimited_sequence("P-ACGT", DEFAULTS)
    assert not is_delimited_sequence("P-ACG", DEFAULTS)  # suffix too short
    assert not is_delimited_sequence("A-B-ACGTACGT", DEFAULTS)  # two dashes
    assert not is_delimited_sequence("ACGTACGT", DEFAULTS)  # no dash
    # 4 of 5 ACGTN chars = 0.8 -> accepted
    assert is_delimited_sequence("P-ACGTx", DEFAULTS)
    # 3 of 5 -> rejected
    assert not is_delimited_sequence("P-ACGxx", DEFAULTS)


def test_is_whole_sequence_rules():
    assert is_whole_sequence("ACGTNN", DEFAULTS)
    assert not is_whole_sequence("ACGTN", DEFAULTS)  # too short
    assert not is_whole_sequence("ACGTNa", DEFAULTS)  # lowercase not accepted
    assert not is_whole_sequence("", DEFAULTS)


def test_custom_thresholds():
    thresholds = ClassifierThresholds(min_sequence_length=4, min_suffix_length=2, suffix_ratio=1.0)
    assert is_whole_sequence("ACGT", thresholds)
    assert is_delimited_sequence("x-AC", thresholds)
    assert not is_delimited_sequence("x-ACx", thresholds)


def test_scan_columns_default_thresholds():
    assert scan_columns(("a",), [("ACGTACGT",)]) == [ColumnDescriptor(0, "a", False)]


def test_find_identifier_column_priority():
    header = ("Sample ID", "Index", "Id")
    assert find_identifier_column(header) == ColumnDescriptor(2, "Id")
    assert find_identifier_column(("Sample ID", "Index")) == ColumnDescriptor(0, "Sample ID")
    assert find_identifier_column(("Name", "Index")) is None
    assert find_identifier_column(("Key",), identifier_names=["Key"]) == ColumnDescriptor(0, "Key")
