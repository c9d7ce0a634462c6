from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from phase_timeline.config.loader import (
    ConfigError,
    TimelineConfig,
    load_config,
    load_manual_entries,
    resolve_config_path,
)
from phase_timeline.logging.error_log import ErrorLogBuffer
from phase_timeline.logging.init import log_summary, setup_logging
from phase_timeline.models.error_record import ErrorRecord
from phase_timeline.models.errors import TimelineValidationError
from phase_timeline.models.field_mapping import FieldMapping, MappingRequired
from phase_timeline.models.processing_result import BatchStatus, FileStat, RunResult
from phase_timeline.models.timeline import TimelineRecord
from phase_timeline.services.export import write_timeline_csv
from phase_timeline.services.manual_entry import normalize_manual_entries
from phase_timeline.services.pipeline import process_text
from phase_timeline.services.progress import ProgressTracker
from phase_timeline.services.summary import render_summary_line
from phase_timeline.tabular.parser import parse_table, preview_rows, read_text_file

"""CLI entrypoint.

build:  one batch per CSV file (directories are scanned for *.csv, non-recursive)
manual: one batch from a YAML file of month-range entries

Exit codes:
    0  every batch produced a timeline (or there was nothing to do)
    1  fatal startup problem (config, missing paths, bad options)
    2  at least one batch failed validation
    3  no failures, but at least one file needs a field mapping
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_VALIDATION_FAILURE = 2
EXIT_MAPPING_REQUIRED = 3

MANUAL_SOURCE = "<manual>"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env (e.g. PHASE_TIMELINE_CONFIG) without clobbering the real environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="phase-timeline", description="Consolidate phase date ranges into a timeline")
    p.add_argument("--config", help="YAML config path (default: config/timeline.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build timelines from CSV files")
    build.add_argument("paths", nargs="+", help="CSV files or directories containing them")
    build.add_argument("--phase", help="column holding the phase name")
    build.add_argument("--start", help="column holding the start date")
    build.add_argument("--end", help="column holding the end date")
    build.add_argument("--output-dir", help="write <name>.timeline.csv per input here")
    build.add_argument("--inspect-data", action="store_true", help="Print headers & first rows then exit")

    manual = sub.add_parser("manual", help="Build a timeline from a YAML list of month ranges")
    manual.add_argument("entries", help="YAML file with phase/startMonth/endMonth/description items")
    manual.add_argument("--year", type=int, help="calendar year (default: config or current year)")
    manual.add_argument("--output-dir", help="write manual.timeline.csv here")
    return p.parse_args(argv)


def _cli_mapping(args: argparse.Namespace) -> FieldMapping | None:
    values = (args.phase, args.start, args.end)
    if all(v is None for v in values):
        return None
    if any(v is None for v in values):
        raise ConfigError("--phase, --start and --end must be given together")
    return FieldMapping(phase=args.phase, start_date=args.start, end_date=args.end)


def scan_csv_files(paths: list[str]) -> list[Path]:
    """Expand CLI paths to CSV files; directories are scanned non-recursively.

    Raises:
        ConfigError: a path does not exist
    """
    files: list[Path] = []
    for raw in paths:
        p = Path(raw)
        if not p.exists():
            raise ConfigError(f"path not found: {p}")
        if p.is_dir():
            files.extend(sorted(f for f in p.iterdir() if f.is_file() and f.suffix.lower() == ".csv"))
        else:
            files.append(p)
    return files


def _success_stat(source: str, records: list[TimelineRecord] | tuple[TimelineRecord, ...]) -> FileStat:
    return FileStat(
        source=source,
        status=BatchStatus.SUCCESS,
        phases=len(records),
        start_date=min(r.start_date for r in records),
        end_date=max(r.end_date for r in records),
    )


def _log_records(logger, records) -> None:
    for r in records:
        extra = f" {dict(r.additional_data)}" if r.additional_data else ""
        logger.info(f"  {r.phase}: {r.start_date.isoformat()}..{r.end_date.isoformat()}{extra}")


def _inspect_data(files: list[Path], limit: int) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        try:
            table = parse_table(read_text_file(f))
        except (OSError, UnicodeDecodeError) as e:
            print(f"  read_error: {e}")
            continue
        rows = preview_rows(table, limit)
        if not rows:
            print("  (empty)")
            continue
        print(f"  headers={rows[0]}")
        for row in rows[1:]:
            print(f"    {row}")
    return EXIT_SUCCESS_ALL


def _run_build(args: argparse.Namespace, cfg: TimelineConfig, logger, error_log: ErrorLogBuffer) -> RunResult | int:
    try:
        mapping = _cli_mapping(args) or cfg.field_mapping
        files = scan_csv_files(args.paths)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(files, cfg.preview_rows)

    logger.info(f"Processing {len(files)} file(s)")
    stats: list[FileStat] = []
    with ProgressTracker(len(files)) as progress:
        for f in files:
            progress.start_file(f)
            stat = _process_file(f, mapping, args.output_dir, logger, error_log)
            stats.append(stat)
            progress.finish_file(phases=stat.phases)
    return RunResult(file_stats=tuple(stats))


def _process_file(
    path: Path,
    mapping: FieldMapping | None,
    output_dir: str | None,
    logger,
    error_log: ErrorLogBuffer,
) -> FileStat:
    source = path.name
    try:
        text = read_text_file(path)
        result = process_text(text, mapping, source=source)
    except (TimelineValidationError, OSError, UnicodeDecodeError) as e:
        record = ErrorRecord.from_exception(source, e)
        error_log.append(record)
        logger.error(f"{source}: {record.error_type} {e}")
        return FileStat(source=source, status=BatchStatus.FAILED, error_type=record.error_type)

    if isinstance(result, MappingRequired):
        logger.warning(
            f"{source}: columns phase/startDate/endDate not found; "
            f"choose a mapping with --phase/--start/--end from headers {list(result.headers)}"
        )
        return FileStat(source=source, status=BatchStatus.MAPPING_REQUIRED)

    _log_records(logger, result.records)
    if output_dir:
        out = write_timeline_csv(result.records, Path(output_dir) / f"{path.stem}.timeline.csv")
        logger.info(f"{source}: wrote {out}")
    return _success_stat(source, result.records)


def _run_manual(args: argparse.Namespace, cfg: TimelineConfig, logger, error_log: ErrorLogBuffer) -> RunResult | int:
    year = args.year if args.year is not None else cfg.manual_entry.year
    try:
        entries = load_manual_entries(Path(args.entries))
        records = normalize_manual_entries(entries, year, unique_phases=cfg.manual_entry.unique_phases)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    except TimelineValidationError as e:
        record = ErrorRecord.from_exception(MANUAL_SOURCE, e)
        error_log.append(record)
        logger.error(f"{MANUAL_SOURCE}: {record.error_type} {e}")
        return RunResult(file_stats=(FileStat(MANUAL_SOURCE, BatchStatus.FAILED, error_type=record.error_type),))

    if not records:
        logger.info(f"{MANUAL_SOURCE}: no entries")
        return RunResult(file_stats=(FileStat(MANUAL_SOURCE, BatchStatus.SUCCESS),))

    _log_records(logger, records)
    if args.output_dir:
        out = write_timeline_csv(records, Path(args.output_dir) / "manual.timeline.csv")
        logger.info(f"{MANUAL_SOURCE}: wrote {out}")
    return RunResult(file_stats=(_success_stat(MANUAL_SOURCE, records),))


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        logger = setup_logging(debug=True)
        logger.debug("debug mode enabled")

    config_path, required = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    error_log = ErrorLogBuffer(Path(cfg.error_log_directory))
    if args.command == "build":
        outcome = _run_build(args, cfg, logger, error_log)
    else:
        outcome = _run_manual(args, cfg, logger, error_log)
    if isinstance(outcome, int):
        return outcome

    written = error_log.flush()
    if written is not None:
        logger.info(f"error log written to {written}")

    summary_line = render_summary_line(outcome)
    log_summary(summary_line[len("SUMMARY "):])

    if outcome.failed_files > 0:
        return EXIT_VALIDATION_FAILURE
    if outcome.mapping_required_files > 0:
        return EXIT_MAPPING_REQUIRED
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
