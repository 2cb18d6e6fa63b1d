from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering for the booking analytics CLI.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} records={records}
anomalies={anomalies} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: RunResult) -> str:
    """Render a SUMMARY line from a RunResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_files=1, failed_files=0, total_records=1440,
        ...     total_anomalies=7, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 records=1440 anomalies=7 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"anomalies={result.total_anomalies} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
