from __future__ import annotations

import csv
import os
import tempfile
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import pandas as pd

from ..models.document import Row, TabularDocument
from .reader import IOFailure

"""Tabular writers.

Output files are written to temporary files in their target directories and
renamed into place only once every one of them is fully written, so a failed
run leaves neither a truncated sample sheet nor a sample sheet without its
SQL file behind.
"""

__all__ = [
    "derive_output_path",
    "atomic_path",
    "atomic_paths",
    "write_rows",
]

DEFAULT_SHEET_NAME = "Sheet1"


def derive_output_path(path: Path, suffix: str = "_RC") -> Path:
    """``plate.xlsx`` -> ``plate_RC.xlsx`` in the same directory."""
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


@contextmanager
def atomic_paths(*targets: Path) -> Iterator[list[Path]]:
    """Yield one temporary sibling path per target.

    The targets are replaced only after the with-block completes. If a later
    rename fails, targets already renamed in this commit are removed again.
    """
    tmps: list[Path] = []
    committed: list[Path] = []
    try:
        for target in targets:
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.stem}.", suffix=target.suffix)
            os.close(fd)
            tmps.append(Path(tmp_name))
        yield tmps
        try:
            for tmp, target in zip(tmps, targets):
                os.replace(tmp, target)
                committed.append(target)
        except OSError:
            for target in committed:
                target.unlink(missing_ok=True)
            raise
    finally:
        for tmp in tmps:
            if tmp.exists():
                tmp.unlink()


@contextmanager
def atomic_path(target: Path) -> Iterator[Path]:
    """Yield a temporary sibling path that replaces ``target`` on success."""
    with atomic_paths(target) as (tmp,):
        yield tmp


def _write_excel(path: Path, rows: Sequence[Row], sheet_name: str | None) -> None:
    df = pd.DataFrame([list(r) for r in rows])
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name or DEFAULT_SHEET_NAME, header=False, index=False)


def _write_delimited(path: Path, rows: Sequence[Row], delimiter: str, line_terminator: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        csv.writer(f, delimiter=delimiter, lineterminator=line_terminator).writerows(rows)


def _write_lines(path: Path, lines: Iterable[str]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


def write_rows(
    target: Path,
    rows: Sequence[Row],
    like: TabularDocument,
    *,
    sql_path: Path | None = None,
    statements: Iterable[str] = (),
) -> Path:
    """Write ``rows`` to ``target`` in the same format family as ``like``.

    When ``sql_path`` is given the statements are written there as well (one
    per line); both files appear together or not at all.

    Raises:
        IOFailure: a file could not be written
    """
    targets = [target] if sql_path is None else [target, sql_path]
    try:
        with atomic_paths(*targets) as tmps:
            if like.kind == "excel":
                _write_excel(tmps[0], rows, like.sheet_name)
            else:
                _write_delimited(tmps[0], rows, like.delimiter or ",", like.line_terminator)
            if sql_path is not None:
                _write_lines(tmps[1], statements)
    except (OSError, ValueError) as e:
        raise IOFailure(f"failed to write {target}: {e}") from e
    return target
