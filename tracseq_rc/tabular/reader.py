from __future__ import annotations

import csv
import io
import math
from datetime import date, datetime, time
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..models.document import Row, TabularDocument

"""Tabular readers: Excel workbooks and delimited text.

Every cell is stringified on read so the engine only ever sees strings:
- empty / NaN -> ""
- integral floats -> integer text (Excel stores 1 as 1.0)
- dates and times -> ISO text

Excel goes through pandas (openpyxl engine). Delimited sample sheets are
often ragged (``[Header]`` sections with fewer fields than the data block),
which the csv module reads without padding or complaining.
"""

__all__ = [
    "UnsupportedFileType",
    "IOFailure",
    "EXCEL_SUFFIXES",
    "DELIMITED_SUFFIXES",
    "detect_kind",
    "stringify_cell",
    "read_document",
    "read_excel_rows",
    "read_delimited_rows",
    "detect_line_terminator",
]


class UnsupportedFileType(Exception):
    """Raised when the file extension is not handled by any adapter."""


class IOFailure(Exception):
    """Raised when reading or writing a tabular file fails."""


EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
DELIMITED_SUFFIXES = {".csv": ",", ".tsv": "\t", ".txt": "\t"}
DEFAULT_LINE_TERMINATOR = "\r\n"


def detect_kind(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return "excel"
    if suffix in DELIMITED_SUFFIXES:
        return "delimited"
    raise UnsupportedFileType(
        f"unsupported file type '{path.suffix or '<none>'}' "
        f"(expected one of {sorted(EXCEL_SUFFIXES | set(DELIMITED_SUFFIXES))})"
    )


def stringify_cell(value: Any) -> str:
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def read_excel_rows(path: Path) -> tuple[str, list[Row]]:
    """Read the first sheet of a workbook, returning (sheet_name, rows)."""
    # keep_default_na=False: "NA" 等の文字列を NaN に変換させない (インデックス名として有効)
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        sheet_name = str(xls.sheet_names[0])
        df = xls.parse(sheet_name, header=None, keep_default_na=False)
    rows = [tuple(stringify_cell(v) for v in raw) for raw in df.itertuples(index=False, name=None)]
    return sheet_name, rows


def detect_line_terminator(text: str) -> str:
    """Line ending of the first line break in ``text`` (CRLF when there is none)."""
    index = text.find("\n")
    if index < 0:
        return DEFAULT_LINE_TERMINATOR
    return "\r\n" if index > 0 and text[index - 1] == "\r" else "\n"


def read_delimited_rows(path: Path, delimiter: str) -> tuple[str, list[Row]]:
    """Read a delimited file, returning (line_terminator, rows)."""
    # utf-8-sig: Excel 保存の CSV に付く BOM を除去
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        text = f.read()
    rows = [tuple(cells) for cells in csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)]
    return detect_line_terminator(text), rows


def read_document(path: Path) -> TabularDocument:
    """Read ``path`` into a TabularDocument.

    Raises:
        UnsupportedFileType: extension is not .xlsx/.xlsm/.csv/.tsv/.txt
        IOFailure: file missing, unreadable or not parseable
    """
    kind = detect_kind(path)
    if not path.is_file():
        raise IOFailure(f"input file not found: {path}")
    try:
        if kind == "excel":
            sheet_name, rows = read_excel_rows(path)
            return TabularDocument(path=path, kind="excel", rows=rows, sheet_name=sheet_name)
        delimiter = DELIMITED_SUFFIXES[path.suffix.lower()]
        line_terminator, rows = read_delimited_rows(path, delimiter)
        return TabularDocument(
            path=path, kind="delimited", rows=rows, delimiter=delimiter, line_terminator=line_terminator
        )
    except (OSError, ValueError, csv.Error, BadZipFile, InvalidFileException) as e:
        raise IOFailure(f"failed to read {path.name}: {e}") from e
