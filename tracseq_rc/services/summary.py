from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""Report rendering for the CLI.

SUMMARY line format (stable, parsed by wrapper scripts):

    SUMMARY file={input} output={output} strategy={strategy} columns={n}
    rows={n} sequence_columns={n} transformed={n} statements={n}
    elapsed_sec={elapsed}

(single line, fields separated by one space)
"""

__all__ = [
    "format_elapsed",
    "describe_columns",
    "render_summary_line",
]


def format_elapsed(seconds: float) -> str:
    """Format seconds without scientific notation, integers without '.0'."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def describe_columns(result: ProcessingResult) -> list[str]:
    """One human-readable line per detected sequence column."""
    lines = []
    for d in result.descriptors:
        mode = "prefix-delimited" if d.delimiter else "whole value"
        lines.append(f"sequence column '{d.name}' at position {d.position + 1} ({mode}, {result.strategy})")
    return lines


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for one processed file.

    Example: ``SUMMARY file=plate.xlsx output=plate_RC.xlsx strategy=canonical columns=3 rows=2 ...``
    """
    return (
        f"SUMMARY file={result.input_path.name} "
        f"output={result.output_path.name} "
        f"strategy={result.strategy} "
        f"columns={result.columns} "
        f"rows={result.data_rows} "
        f"sequence_columns={len(result.descriptors)} "
        f"transformed={result.transformed_cells} "
        f"statements={len(result.statements)} "
        f"elapsed_sec={format_elapsed(result.elapsed_seconds)}"
    )
