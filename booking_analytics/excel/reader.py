from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import pandas as pd

"""Workbook reader: uploaded file -> raw two-dimensional cell table.

The reader is the only place that knows about file formats. It reads without a
header (header=None, dtype=object) so that the positional layout reaches the
normalizer untouched, and converts pandas NaN/NaT markers to None.

Any failure to read the file is raised as WorkbookReadError; callers reject the
whole file rather than using partial results.
"""

__all__ = [
    "WorkbookReadError",
    "EXCEL_SUFFIXES",
    "CSV_SUFFIXES",
    "list_sheets",
    "read_raw_table",
]

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
CSV_SUFFIXES = frozenset({".csv"})

# Only truly empty cells are missing; labels such as "NA" or "null" stay text
NA_VALUES = [""]


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be read (missing, corrupt, unsupported)."""


def _check_path(path: Path) -> str:
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in EXCEL_SUFFIXES and suffix not in CSV_SUFFIXES:
        raise WorkbookReadError(f"unsupported file type '{path.suffix}': {path.name}")
    return suffix


def _csv_width(path: Path) -> int:
    """Widest row in a CSV file (pandas otherwise sizes the frame from line 1)."""
    with path.open(encoding="utf-8", newline="") as f:
        return max((len(row) for row in csv.reader(f)), default=0)


def _to_rows(df: pd.DataFrame) -> list[list[Any]]:
    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.values.tolist()


def list_sheets(path: Path) -> list[str]:
    """Return sheet names (a CSV file has a single unnamed sheet)."""
    suffix = _check_path(path)
    if suffix in CSV_SUFFIXES:
        return [path.stem]
    try:
        with pd.ExcelFile(path) as xls:
            return [str(name) for name in xls.sheet_names]
    except Exception as e:
        raise WorkbookReadError(f"could not open {path.name}: {e}") from e


def read_raw_table(path: Path, sheet: str | int = 0) -> list[list[Any]]:
    """Read one sheet of a workbook as a list of rows of raw cell values.

    Parameters
    ----------
    path: workbook path (.xlsx/.xlsm/.xls or .csv)
    sheet: sheet name or 0-based index; ignored for CSV input
    """
    suffix = _check_path(path)
    try:
        if suffix in CSV_SUFFIXES:
            width = _csv_width(path)
            if width == 0:
                return []
            df = pd.read_csv(
                path,
                header=None,
                names=list(range(width)),
                dtype=object,
                skip_blank_lines=False,
                keep_default_na=False,
                na_values=NA_VALUES,
            )
        else:
            with pd.ExcelFile(path) as xls:
                names = [str(n) for n in xls.sheet_names]
                if isinstance(sheet, str) and sheet not in names:
                    raise WorkbookReadError(f"sheet '{sheet}' not found in {path.name} (sheets: {names})")
                if isinstance(sheet, int) and sheet >= len(names):
                    raise WorkbookReadError(f"sheet index {sheet} out of range for {path.name} ({len(names)} sheets)")
                df = xls.parse(
                    sheet,
                    header=None,
                    dtype=object,
                    keep_default_na=False,
                    na_values=NA_VALUES,
                )
    except WorkbookReadError:
        raise
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        raise WorkbookReadError(f"could not read {path.name}: {e}") from e
    return _to_rows(df)
