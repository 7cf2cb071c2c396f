from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from tracseq_rc.config.loader import ConfigError, resolve_config
from tracseq_rc.logging.init import get_logger, log_statement, log_summary, setup_logging
from tracseq_rc.models.config_models import MissingDelimiterPolicy, RcConfig
from tracseq_rc.models.processing_result import ProcessingResult
from tracseq_rc.services.header import EmptyDocument, HeaderNotFound
from tracseq_rc.services.orchestrator import ProcessingError, process_file
from tracseq_rc.services.summary import describe_columns, render_summary_line
from tracseq_rc.tabular.reader import IOFailure, UnsupportedFileType

"""CLI entrypoint.

Flow:
- Load .env (python-dotenv) so TRACSEQ_RC_* variables can live there
- Resolve config (defaults -> YAML file -> CLI flags)
- Process the single input file
- Report detected columns, one UPDATE statement per correlation record and a
  SUMMARY line

Exit codes: 0 success (also when no sequence column was found), 1 on any
unrecoverable error (config, unreadable/unsupported file, empty document,
header sentinel not found).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

FATAL_ERRORS = (
    EmptyDocument,
    HeaderNotFound,
    UnsupportedFileType,
    IOFailure,
    ProcessingError,
)


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process env)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tracseq-rc",
        description="Reverse-complement index sequences in a sample sheet and emit SQL updates",
    )
    p.add_argument("file", type=Path, help="Sample sheet (.xlsx, .xlsm, .csv, .tsv, .txt)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--sentinel", default=None, help="First-cell label of the header row (e.g. 'Sample ID')")
    p.add_argument("--table", default=None, help="Table name used in UPDATE statements")
    p.add_argument("--suffix", default=None, help="Output file suffix (default: _RC)")
    p.add_argument(
        "--missing-delimiter",
        choices=[m.value for m in MissingDelimiterPolicy],
        default=None,
        help="Handling of delimited-column values without '-'",
    )
    p.add_argument("--sql-out", type=Path, default=None, help="Also write UPDATE statements to this file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _apply_overrides(cfg: RcConfig, args: argparse.Namespace) -> RcConfig:
    overrides: dict[str, object] = {}
    if args.sentinel is not None:
        overrides["header_sentinel"] = args.sentinel
    if args.table is not None:
        overrides["table_name"] = args.table
    if args.suffix is not None:
        overrides["output_suffix"] = args.suffix
    if args.missing_delimiter is not None:
        overrides["missing_delimiter"] = MissingDelimiterPolicy(args.missing_delimiter)
    return replace(cfg, **overrides) if overrides else cfg


def _report(result: ProcessingResult) -> None:
    logger = get_logger()
    if result.header_index:
        logger.info(f"header found at row {result.header_index + 1}")
    if not result.has_sequence_columns:
        logger.warning("no sequence columns found; document copied unchanged")
    for line in describe_columns(result):
        logger.info(line)
    if result.identifier_column is not None:
        logger.info(
            f"identifier column '{result.identifier_column.name}' "
            f"at position {result.identifier_column.position + 1}"
        )
    elif result.has_sequence_columns:
        logger.warning("no identifier column found; no UPDATE statements generated")

    for statement in result.statements:
        log_statement(statement)

    logger.info(f"Output saved to: {result.output_path}")
    if result.sql_path is not None:
        logger.info(f"SQL saved to: {result.sql_path}")
    logger.info(f"Number of data rows: {result.data_rows}")
    logger.info(f"Number of columns: {result.columns}")
    log_summary(render_summary_line(result)[len("SUMMARY "):])


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: [] が渡された場合に sys.argv[1:] (pytest の引数) を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    try:
        cfg = _apply_overrides(resolve_config(args.config), args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Processing file: {args.file}")
    try:
        result = process_file(args.file, cfg, sql_path=args.sql_out)
    except FATAL_ERRORS as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_FATAL

    _report(result)
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
