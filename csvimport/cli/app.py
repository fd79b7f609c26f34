from __future__ import annotations

import argparse
import os
import sys
import time
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..config.validation import InvalidConfigError, parse_row_index, resolve_delimiter
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ImportConfig, ImportProfile
from ..models.error_record import ErrorRecord
from ..models.import_result import ImportFailure
from ..models.table import PreviewResult, Table
from ..services.progress import RowProgress
from ..services.session import ImportSession
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (may set CSVIMPORT_CONFIG)
- Load the import profile, then apply command line overrides
- Run preview or commit through an ImportSession
- Print the preview table / write the committed table, log a SUMMARY line
- Write failures and row width warnings to the JSON Lines error log
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WARNINGS = 2

CONFIG_ENV_VAR = "CSVIMPORT_CONFIG"

OUTPUT_UNAVAILABLE = "OUTPUT_UNAVAILABLE"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a failure only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="csvimport", description="CSV preview / import")
    p.add_argument("mode", choices=["preview", "commit"], help="Sample the file or import it fully")
    p.add_argument("file", type=Path, help="CSV file to read")
    p.add_argument("--config", type=Path, help=f"Import profile (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--delimiter", help="comma | tab | space | semicolon | pipe")
    p.add_argument("--quote", help="Quote character")
    escape = p.add_mutually_exclusive_group()
    escape.add_argument("--escape", help="Escape character inside quoted fields")
    escape.add_argument("--no-escape", action="store_true", help="Disable escape handling")
    header = p.add_mutually_exclusive_group()
    header.add_argument("--header-row", help="0-based header row index")
    header.add_argument("--no-header", action="store_true", help="File has no header row")
    p.add_argument("--data-start-row", help="0-based first data row index")
    p.add_argument("--encoding", help="Source text encoding")
    p.add_argument("--keep-blank-rows", action="store_true", help="Keep rows whose fields are all empty")
    p.add_argument("--limit", help="Preview row limit")
    p.add_argument("--output", type=Path, help="commit: write the imported table to this CSV file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_profile(args: argparse.Namespace) -> ImportProfile:
    """Profile from --config, $CSVIMPORT_CONFIG or the default path.

    An explicitly named profile must exist; the default path is optional.
    """
    explicit = args.config or os.getenv(CONFIG_ENV_VAR)
    if explicit:
        return load_config(Path(explicit))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportProfile(config=ImportConfig())


def _apply_overrides(profile: ImportProfile, args: argparse.Namespace) -> tuple[ImportConfig, int]:
    """Apply command line flags on top of the profile.

    Raises:
        InvalidConfigError: Unknown delimiter name or non-integer index/limit
    """
    cfg = profile.config
    changes: dict[str, object] = {}
    if args.delimiter is not None:
        changes["delimiter"] = resolve_delimiter(args.delimiter)
    if args.quote is not None:
        changes["quote_character"] = args.quote
    if args.no_escape:
        changes["escape_character"] = None
    elif args.escape is not None:
        changes["escape_character"] = args.escape
    if args.encoding is not None:
        changes["encoding"] = args.encoding
    if args.keep_blank_rows:
        changes["skip_blank_rows"] = False

    header = cfg.header_row_index
    if args.no_header:
        header = None
        changes["header_row_index"] = None
    elif args.header_row is not None:
        header = parse_row_index(args.header_row, "--header-row", 0)
        changes["header_row_index"] = header

    if args.data_start_row is not None:
        changes["data_start_row_index"] = parse_row_index(args.data_start_row, "--data-start-row", 0)
    elif "header_row_index" in changes:
        changes["data_start_row_index"] = 0 if header is None else header + 1

    limit = parse_row_index(args.limit, "--limit", profile.preview_limit)
    return replace(cfg, **changes), limit


def _print_preview(result: PreviewResult) -> None:
    print(result.to_dataframe().to_string(index=False))


def main(argv: list[str] | None = None) -> int:
    # argv=[] must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    try:
        profile = _resolve_profile(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    try:
        config, limit = _apply_overrides(profile, args)
    except InvalidConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    file_name = args.file.name
    error_log = ErrorLogBuffer()
    session = ImportSession(config, args.file)
    logger.info(f"{args.mode}: {args.file}")

    start = time.perf_counter()
    result: PreviewResult | Table | ImportFailure
    if args.mode == "preview":
        result = session.preview(limit)
    else:
        with RowProgress() as progress:
            result = session.commit(progress=progress)
    elapsed = time.perf_counter() - start

    if isinstance(result, ImportFailure):
        logger.error(f"{file_name}: {result}")
        error_log.append(ErrorRecord.from_failure(file_name, result))
        error_log.flush()
        return EXIT_FATAL

    if isinstance(result, PreviewResult):
        _print_preview(result)
        for w in result.warnings:
            logger.warning(f"{file_name}: {w}")
    elif args.output is not None:
        try:
            result.to_dataframe().to_csv(args.output, index=False)
        except OSError as e:
            logger.error(f"output: cannot write {args.output}: {e}")
            error_log.append(
                ErrorRecord.create(file_name, -1, OUTPUT_UNAVAILABLE, f"cannot write {args.output}: {e}")
            )
            error_log.flush()
            return EXIT_FATAL
        logger.info(f"wrote {len(result)} rows to {args.output}")

    for w in result.warnings:
        error_log.append(ErrorRecord.from_warning(file_name, w))
    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    summary_line = render_summary_line(file_name, result, elapsed)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    return EXIT_WARNINGS if result.warnings else EXIT_SUCCESS
