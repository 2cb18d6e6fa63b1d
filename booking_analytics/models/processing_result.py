from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Processing result models for the booking analytics CLI.

FileResult tracks one input file through read -> analyse -> export.
RunResult aggregates a whole CLI invocation for the SUMMARY line and exit code.
Files are processed independently; nothing here merges their data.
"""


class FileStatus(Enum):
    """Status of a single input file.

    State transitions: pending -> (success | failed)
    """
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    """Per-file outcome."""
    path: Path
    status: FileStatus = FileStatus.PENDING
    record_count: int = 0
    anomaly_count: int = 0
    elapsed_seconds: float = 0.0
    outputs: tuple[Path, ...] = ()  # Export files written for this input
    error: str | None = None  # Failure reason summary

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class RunResult:
    """Aggregated results for one CLI run."""
    success_files: int
    failed_files: int
    total_records: int
    total_anomalies: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_results: list[FileResult] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
