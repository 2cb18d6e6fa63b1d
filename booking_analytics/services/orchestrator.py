from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, read_raw_table
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import AnalyticsConfig
from ..models.processed_data import ProcessedData
from ..models.processing_result import FileResult, FileStatus, RunResult
from .export import ExportError, write_exports
from .pipeline import process_booking_data
from .progress import ProgressTracker

"""Service orchestration for the booking analytics CLI.

Each input file is handled on its own: read -> pipeline -> export. A file that
cannot be read is rejected whole (no partial exports) and the remaining files
still run. Results are never merged across files.
"""

logger = logging.getLogger(__name__)

FILE_LEVEL_ROW = -1


class ProcessingError(Exception):
    """Fatal error that prevents a run from starting."""


def _sheet_label(config: AnalyticsConfig) -> str:
    return str(config.sheet)


def process_file(
    path: Path,
    config: AnalyticsConfig,
    error_log: ErrorLogBuffer,
    *,
    export: bool = True,
    output_dir: Path | None = None,
) -> tuple[FileResult, ProcessedData | None]:
    """Analyse one file. Failures are recorded in error_log and returned as FAILED."""
    start = datetime.now(UTC)

    def _elapsed() -> float:
        return (datetime.now(UTC) - start).total_seconds()

    try:
        raw = read_raw_table(path, config.sheet)
    except WorkbookReadError as e:
        logger.error(f"could not read {path.name}: {e}")
        error_log.append(ErrorRecord.create(
            file=path.name,
            sheet=_sheet_label(config),
            row=FILE_LEVEL_ROW,
            error_type="FILE_READ_ERROR",
            message=str(e),
        ))
        return FileResult(path=path, status=FileStatus.FAILED, elapsed_seconds=_elapsed(), error=str(e)), None

    data = process_booking_data(raw, config)

    outputs: list[Path] = []
    if export:
        target = output_dir if output_dir is not None else Path(config.export.output_directory)
        try:
            outputs = write_exports(
                data,
                target,
                path.stem,
                config.export.formats,
                source_name=path.name,
            )
        except ExportError as e:
            logger.error(f"export failed for {path.name}: {e}")
            error_log.append(ErrorRecord.create(
                file=path.name,
                sheet=_sheet_label(config),
                row=FILE_LEVEL_ROW,
                error_type="EXPORT_ERROR",
                message=str(e),
            ))
            return FileResult(
                path=path,
                status=FileStatus.FAILED,
                record_count=len(data.time_series),
                anomaly_count=len(data.anomalies),
                elapsed_seconds=_elapsed(),
                error=str(e),
            ), data

    logger.info(
        f"file={path.name} records={len(data.time_series)} anomalies={len(data.anomalies)} "
        f"success_rate={data.summary.overall_success_rate:.2f}% conversion={data.summary.booking_conversion:.2f}%"
    )
    return FileResult(
        path=path,
        status=FileStatus.SUCCESS,
        record_count=len(data.time_series),
        anomaly_count=len(data.anomalies),
        elapsed_seconds=_elapsed(),
        outputs=tuple(outputs),
    ), data


def process_all(
    paths: Sequence[Path],
    config: AnalyticsConfig,
    *,
    export: bool = True,
    output_dir: Path | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> RunResult:
    """Process every input file independently and aggregate the outcome counts.

    Raises:
        ProcessingError: if no input files were given
    """
    if not paths:
        raise ProcessingError("no input files given")

    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    results: list[FileResult] = []
    success_count = 0
    failed_count = 0
    total_records = 0
    total_anomalies = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            result, _ = process_file(path, config, error_log, export=export, output_dir=output_dir)
            results.append(result)
            if result.status == FileStatus.SUCCESS:
                success_count += 1
                total_records += result.record_count
                total_anomalies += result.anomaly_count
            else:
                failed_count += 1
            progress.set_postfix(success=success_count, failed=failed_count, records=total_records)
            progress.finish_file()

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")
    else:
        if log_path is not None:
            logger.warning(f"errors written to {log_path}")

    end_time = datetime.now(UTC)
    return RunResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        total_anomalies=total_anomalies,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_results=results,
    )
