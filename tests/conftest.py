# Shared pytest fixtures
from __future__ import annotations

import csv
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TRACSEQ_RC_CONFIG", raising=False)
        monkeypatch.delenv("TRACSEQ_RC_TABLE", raising=False)
        yield p


@pytest.fixture()
def make_excel(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[object]], sheet: str = "Samples") -> Path:
        p = temp_workdir / "data" / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return p
    return _make


@pytest.fixture()
def make_csv(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[str]], delimiter: str = ",") -> Path:
        p = temp_workdir / "data" / name
        with p.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f, delimiter=delimiter).writerows(rows)
        return p
    return _make


@pytest.fixture()
def read_excel_rows() -> Callable[[Path], list[list[str]]]:
    def _read(path: Path) -> list[list[str]]:
        df = pd.read_excel(path, header=None, dtype=str, keep_default_na=False)
        return [list(r) for r in df.itertuples(index=False, name=None)]
    return _read


@pytest.fixture()
def sample_rows() -> list[list[str]]:
    return [
        ["Id", "IndexNtSequence", "Other"],
        ["1", "Prefix-ATGC", "Test1"],
        ["2", "GCAT", "Test2"],
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """table_name: SampleBatchItems
output_suffix: _RC
missing_delimiter: reverse_complement
canonical_columns:
  - name: IndexNtSequence
    delimiter: true
  - name: Index
    delimiter: true
identifier_columns: [Id]
classifier:
  sample_rows: 5
  min_suffix_length: 4
  suffix_ratio: 0.8
  min_sequence_length: 6
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "rc.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
