from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path

import pandas as pd

from ..models.booking_record import COLUMN_FIELDS, BookingRecord
from ..models.config_models import EXPORT_FORMATS
from ..models.processed_data import ProcessedData
from .report import render_text_report

"""Export writers for a ProcessedData result (CSV, JSON payload, text report).

The CSV column order is the positional source layout, so an export can be read
back by the same pipeline after prepending a header and a total row.
"""

__all__ = [
    "CSV_HEADERS",
    "ExportError",
    "filter_records",
    "render_csv",
    "render_json",
    "write_exports",
]

logger = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "Minute",
    "Attempts",
    "Settled",
    "Total Booking",
    "Website Booking",
    "App Booking",
    "Agents Booking",
    "SwaRail App Booking",
    "I-Tkts",
    "E-Tkts",
    "Tatkal",
    "PG Success Rate %",
    "Booking Vs Attempt %",
    "Delhi",
    "Chennai",
    "Kolkata",
    "Mumbai",
)


class ExportError(Exception):
    pass


def filter_records(records: Iterable[BookingRecord], term: str | None) -> list[BookingRecord]:
    """Case-insensitive substring filter on the minute label (None/"" keeps all)."""
    if not term:
        return list(records)
    needle = term.lower()
    return [r for r in records if needle in r.minute.lower()]


def render_csv(records: Sequence[BookingRecord]) -> str:
    rows = [[getattr(r, name) for name in COLUMN_FIELDS] for r in records]
    df = pd.DataFrame(rows, columns=list(CSV_HEADERS))
    return df.to_csv(index=False, lineterminator="\n")


def render_json(data: ProcessedData) -> str:
    return json.dumps(data.to_dict(), ensure_ascii=False, indent=2)


def write_exports(
    data: ProcessedData,
    output_dir: Path,
    stem: str,
    formats: Sequence[str] = EXPORT_FORMATS,
    *,
    source_name: str | None = None,
    generated_at: datetime | None = None,
) -> list[Path]:
    """Write <stem>.<fmt> for each requested format and return the written paths.

    Raises:
        ExportError: unknown format or the files cannot be written
    """
    unknown = [f for f in formats if f not in EXPORT_FORMATS]
    if unknown:
        raise ExportError(f"unknown export format(s): {unknown}")

    renderers = {
        "json": lambda: render_json(data),
        "csv": lambda: render_csv(data.time_series),
        "txt": lambda: render_text_report(data, source_name or stem, generated_at),
    }
    written: list[Path] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for fmt in formats:
            path = output_dir / f"{stem}.{fmt}"
            path.write_text(renderers[fmt](), encoding="utf-8")
            written.append(path)
            logger.debug("export written: %s", path)
    except OSError as e:
        raise ExportError(f"could not write exports to {output_dir}: {e}") from e
    return written
