#!/usr/bin/env python3
"""Generate synthetic sample sheets for performance testing.

Layout of the generated sheet:
- Row 1: batch/title row (preamble, skipped with ``--sentinel Id``)
- Row 2: header row (Id, Sample Name, IndexNtSequence, IndexNtSequence2, Project)
- Row 3+: data rows with random 8bp indexes

Usable with both ``.xlsx`` and ``.csv`` output paths.
"""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = ["Id", "Sample Name", "IndexNtSequence", "IndexNtSequence2", "Project"]
BASES = np.array(list("ACGT"))


def random_indexes(rows: int, length: int = 8) -> list[str]:
    """Random index sequences of ``length`` bases."""
    picks = np.random.choice(BASES, size=(rows, length))
    return ["".join(r) for r in picks]


def generate_sample_rows(rows: int, seed: int = 42) -> list[list[str]]:
    """Header plus ``rows`` data rows (no preamble)."""
    np.random.seed(seed)
    i7 = random_indexes(rows)
    i5 = random_indexes(rows)
    adapters = np.random.randint(701, 713, rows)
    projects = np.random.choice(["P101", "P102", "P205", "P310"], rows)

    out = [list(HEADER)]
    for j in range(rows):
        out.append([
            str(j + 1),
            f"S{j + 1:05d}",
            f"D{adapters[j]}-{i7[j]}",
            i5[j],
            str(projects[j]),
        ])
    return out


def create_sample_sheet(output_path: Path, rows: int, title: str = "Performance Batch", seed: int = 42) -> None:
    """Write a synthetic sample sheet (Excel or CSV by extension)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet = [["Batch", title]] + generate_sample_rows(rows, seed)

    if output_path.suffix.lower() in (".xlsx", ".xlsm"):
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            pd.DataFrame(sheet).to_excel(writer, sheet_name="Samples", header=False, index=False)
    else:
        delimiter = "," if output_path.suffix.lower() == ".csv" else "\t"
        with output_path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f, delimiter=delimiter).writerows(sheet)

    print(f"Created sample sheet: {output_path}")
    print(f"  Data rows: {rows} (+ title and header rows)")
    print(f"  Sequence cells: {rows * 2:,}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic sample sheets for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10k rows Excel sheet
  %(prog)s perf.xlsx --rows 10000

  # CSV with custom seed
  %(prog)s perf.csv --rows 50000 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output path (.xlsx, .csv, .tsv)")
    parser.add_argument("--rows", type=int, default=10_000, help="Number of data rows (default: 10000)")
    parser.add_argument("--title", default="Performance Batch", help="Batch title in the first row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    try:
        create_sample_sheet(args.output, args.rows, args.title, args.seed)
    except OSError as e:
        print(f"Error creating sample sheet: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
