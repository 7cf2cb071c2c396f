from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..models.column_descriptor import ColumnDescriptor, CorrelationRecord
from ..models.config_models import RcConfig
from ..models.document import LocatedHeader, Row
from ..models.processing_result import ProcessingResult
from ..tabular.reader import read_document
from ..tabular.writer import derive_output_path, write_rows
from .classifier import classify_columns, find_identifier_column
from .header import locate_header
from .progress import ProgressTracker
from .statements import format_updates
from .transformer import transform_row

"""Service orchestration: read -> locate header -> classify -> transform -> write.

transform_rows() is the pure part and works on rows of strings regardless of
the file format; process_file() wraps it with the tabular adapters. Header,
descriptors and identifier column are derived once per document and shared
read-only by the row loop.
"""

__all__ = [
    "ProcessingError",
    "TransformOutcome",
    "transform_rows",
    "process_file",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


@dataclass(frozen=True)
class TransformOutcome:
    located: LocatedHeader
    strategy: str  # canonical | heuristic | none
    descriptors: list[ColumnDescriptor]
    identifier_column: ColumnDescriptor | None
    output_rows: list[Row]  # preamble + header + transformed data rows
    records: list[CorrelationRecord]
    transformed_cells: int


def _strategy(descriptors: Sequence[ColumnDescriptor], config: RcConfig) -> str:
    if not descriptors:
        return "none"
    canonical_names = {c.name for c in config.canonical_columns}
    # canonical が一つでもヒットすればヒューリスティックは実行されない
    if any(d.name in canonical_names for d in descriptors):
        return "canonical"
    return "heuristic"


def transform_rows(rows: Sequence[Row], config: RcConfig | None = None) -> TransformOutcome:
    """Transform an in-memory document.

    Raises:
        EmptyDocument: ``rows`` is empty
        HeaderNotFound: configured sentinel never matched
    """
    config = config or RcConfig()
    located = locate_header(rows, config.header_sentinel)
    descriptors = classify_columns(
        located.header,
        located.data_rows[: config.thresholds.sample_rows],
        config.canonical_columns,
        config.thresholds,
    )
    identifier_column = find_identifier_column(located.header, config.identifier_columns)
    strategy = _strategy(descriptors, config)
    logger.debug(
        f"header_index={located.header_index} strategy={strategy} "
        f"descriptors={len(descriptors)} identifier={identifier_column.name if identifier_column else None}"
    )

    output_rows: list[Row] = [*located.preamble, located.header]
    records: list[CorrelationRecord] = []
    transformed_cells = 0
    with ProgressTracker(len(located.data_rows)) as progress:
        for row in located.data_rows:
            result = transform_row(row, descriptors, identifier_column, config.missing_delimiter)
            output_rows.append(result.row)
            records.extend(result.records)
            transformed_cells += result.transformed_cells
            progress.advance()
        progress.set_postfix(cells=transformed_cells, records=len(records))

    return TransformOutcome(
        located=located,
        strategy=strategy,
        descriptors=descriptors,
        identifier_column=identifier_column,
        output_rows=output_rows,
        records=records,
        transformed_cells=transformed_cells,
    )


def process_file(
    input_path: Path,
    config: RcConfig | None = None,
    *,
    output_path: Path | None = None,
    sql_path: Path | None = None,
) -> ProcessingResult:
    """Process one sample sheet end to end.

    Args:
        input_path: .xlsx/.xlsm/.csv/.tsv/.txt file
        config: Effective configuration (defaults when None)
        output_path: Override for the derived ``<stem><suffix><ext>`` path
        sql_path: When given, rendered statements are also written there

    Returns:
        ProcessingResult describing the run

    Raises:
        UnsupportedFileType, IOFailure: from the tabular adapters
        EmptyDocument, HeaderNotFound: from header location
        ProcessingError: output or SQL path would overwrite the input, or the
            SQL path equals the output path
    """
    config = config or RcConfig()
    start_time = datetime.now(UTC)

    target = output_path or derive_output_path(input_path, config.output_suffix)
    if target.resolve() == input_path.resolve():
        raise ProcessingError(f"output path equals input path: {target}")
    if sql_path is not None:
        if sql_path.resolve() == input_path.resolve():
            raise ProcessingError(f"SQL path equals input path: {sql_path}")
        if sql_path.resolve() == target.resolve():
            raise ProcessingError(f"SQL path equals output path: {sql_path}")

    document = read_document(input_path)
    logger.debug(f"read {len(document.rows)} rows from {input_path.name} ({document.kind})")

    outcome = transform_rows(document.rows, config)
    statements = format_updates(outcome.records, config.table_name)

    # 全行を変換し終えてから書き出す (出力と SQL はまとめて確定)
    write_rows(target, outcome.output_rows, like=document, sql_path=sql_path, statements=statements)

    end_time = datetime.now(UTC)
    return ProcessingResult(
        input_path=input_path,
        output_path=target,
        header_index=outcome.located.header_index,
        strategy=outcome.strategy,
        descriptors=outcome.descriptors,
        identifier_column=outcome.identifier_column,
        records=outcome.records,
        statements=statements,
        data_rows=len(outcome.located.data_rows),
        columns=len(outcome.located.header),
        transformed_cells=outcome.transformed_cells,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        sql_path=sql_path,
    )
