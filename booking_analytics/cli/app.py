from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, default_config, load_config
from ..excel.normalizer import normalize_rows
from ..excel.reader import WorkbookReadError, list_sheets, read_raw_table
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import EXPORT_FORMATS, AnalyticsConfig
from ..services.orchestrator import ProcessingError, process_all
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (BOOKING_ANALYTICS_CONFIG / BOOKING_ANALYTICS_OUTPUT_DIR)
- Load config (explicit path, env var, config/analytics.yml, or built-in defaults)
- Analyse each input file independently and write its exports
- Print a SUMMARY line and return an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

ENV_CONFIG = "BOOKING_ANALYTICS_CONFIG"
ENV_OUTPUT_DIR = "BOOKING_ANALYTICS_OUTPUT_DIR"

INSPECT_ROWS = 3


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="booking-analytics",
        description="Minute-level railway booking analytics: summary, breakdowns and anomalies",
    )
    p.add_argument("files", nargs="*", type=Path, help="Workbook(s) to analyse (.xlsx/.xls/.csv)")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for exported reports")
    p.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=EXPORT_FORMATS,
        help="Export format (repeatable; default from config)",
    )
    p.add_argument("--no-export", action="store_true", help="Analyse only, write no report files")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet names & first normalized rows then exit")
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> AnalyticsConfig:
    """Explicit path > env var > default file (if present) > built-in defaults."""
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(ENV_CONFIG)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _inspect_data(files: list[Path], cfg: AnalyticsConfig) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        try:
            print(f"  sheets={list_sheets(f)}")
            raw = read_raw_table(f, cfg.sheet)
        except WorkbookReadError as e:
            print(f"  read_error: {e}")
            continue
        records = normalize_rows(raw)
        header = raw[0] if raw else []
        print(f"  header={header} data_rows={len(records)}")
        print("    sample_rows=", [r.to_dict() for r in records[:INSPECT_ROWS]])
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None: an empty list from tests must not pick up pytest args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.files:
        logger.error("no input files given")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files, cfg)

    output_dir = args.output_dir
    if output_dir is None and os.getenv(ENV_OUTPUT_DIR):
        output_dir = Path(os.environ[ENV_OUTPUT_DIR])
    if args.formats:
        cfg = replace(cfg, export=replace(cfg.export, formats=tuple(dict.fromkeys(args.formats))))

    logger.info(f"Analysing {len(args.files)} file(s)")
    try:
        result = process_all(args.files, cfg, export=not args.no_export, output_dir=output_dir)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result.total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
