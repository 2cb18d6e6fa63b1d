from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from datetime import date, datetime, time
from numbers import Integral, Real
from typing import Any

from ..models.booking_record import COLUMN_FIELDS, PERCENT_FIELDS, BookingRecord

"""Row normalization: raw spreadsheet cells -> BookingRecord sequence.

Row 0 is the header and row 1 a pre-computed total row; both are skipped.
Rows 2.. are per-minute observations with a fixed positional column layout
(see COLUMN_FIELDS). Cell problems never fail a row: any absent, empty or
non-numeric numeric cell becomes 0, and no row is dropped.
"""

__all__ = [
    "DATA_START_ROW",
    "normalize_rows",
    "normalize_row",
    "coerce_number",
    "coerce_percent",
    "coerce_minute",
]

logger = logging.getLogger(__name__)

DATA_START_ROW = 2

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def coerce_number(value: Any) -> float:
    """Coerce a cell to a number, 0 on failure.

    Whole-string parsing: "12" and " 1e3 " parse, "12abc" and "" do not.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, Real):
        try:
            return _finite_or_zero(float(value))
        except (OverflowError, ValueError):
            return 0.0
    if isinstance(value, str):
        text = value.strip()
        if _NUMBER_RE.match(text):
            return _finite_or_zero(float(text))
    return 0.0


def coerce_percent(value: Any) -> float:
    """Coerce a percentage cell, parsing the leading numeric prefix of strings.

    "72.5" and "72.5%" both give 72.5. A string without a numeric prefix gives 0.
    Boolean cells give 0 (counters, unlike percentages, read True as 1).
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        m = _NUMBER_PREFIX_RE.match(value.strip())
        return _finite_or_zero(float(m.group(0))) if m else 0.0
    return coerce_number(value)


def _coerce_counter(value: Any) -> int:
    # pandas reads integer columns with blanks as float64 (100 -> 100.0)
    return int(round(coerce_number(value)))


def coerce_minute(value: Any) -> str:
    """Coerce the minute label; falsy cells become "" rather than 0."""
    if value is None or value is False:
        return ""
    if isinstance(value, Integral) and not isinstance(value, bool):
        if value == 0:
            return ""
        try:
            return str(int(value))
        except ValueError:
            # beyond sys.get_int_max_str_digits()
            return ""
    if isinstance(value, Real):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return str(value)
        if math.isnan(number) or number == 0:
            return ""
        if number.is_integer():
            return str(int(number))
        return str(value)
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, time):
        return value.strftime("%H:%M:%S" if value.second else "%H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def normalize_row(row: Sequence[Any] | None) -> BookingRecord:
    """Build one BookingRecord from a positional row; short rows pad with defaults."""
    cells = list(row) if row is not None else []
    values: dict[str, Any] = {}
    for index, name in enumerate(COLUMN_FIELDS):
        cell = cells[index] if index < len(cells) else None
        if name == "minute":
            values[name] = coerce_minute(cell)
        elif name in PERCENT_FIELDS:
            values[name] = coerce_percent(cell)
        else:
            values[name] = _coerce_counter(cell)
    return BookingRecord(**values)


def normalize_rows(raw_table: Sequence[Sequence[Any] | None]) -> list[BookingRecord]:
    """Normalize a raw table into BookingRecords, in row (time) order.

    Tables with fewer than 2 rows have no data and yield an empty list.
    """
    if len(raw_table) < DATA_START_ROW:
        logger.debug("table has %d rows (< %d), no data rows", len(raw_table), DATA_START_ROW)
        return []
    records = [normalize_row(row) for row in raw_table[DATA_START_ROW:]]
    logger.debug("normalized %d data rows", len(records))
    return records
