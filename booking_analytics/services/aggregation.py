from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ..models.booking_record import BookingRecord
from ..models.config_models import BreakdownConfig, CategorySpec
from ..models.summary_report import BreakdownEntry, SuccessMetrics, SummaryReport

"""Aggregation service: BookingRecord sequence -> SummaryReport.

Totals are plain linear sums. Every ratio is zero-guarded, so an empty or all-zero
input yields 0 rather than NaN/Infinity. Channel and ticket shares are computed
against total bookings; city entries carry no share.

success_metrics() adds the funnel and per-minute health figures (averages and
minute counts) that sit next to the summary.
"""

__all__ = [
    "CRITICAL_SUCCESS_RATE",
    "LOW_SUCCESS_RATE",
    "percentage",
    "success_metrics",
    "summarize",
    "sum_field",
]

logger = logging.getLogger(__name__)

LOW_SUCCESS_RATE = 50.0  # pg success rate below this is a degraded minute
CRITICAL_SUCCESS_RATE = 30.0  # pg success rate below this is a critical minute


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def sum_field(records: Sequence[BookingRecord], field: str) -> int:
    return sum(getattr(r, field) for r in records)


def _breakdown(
    records: Sequence[BookingRecord],
    categories: Sequence[CategorySpec],
    total_bookings: int | None,
) -> tuple[BreakdownEntry, ...]:
    """Build a breakdown sorted by value, descending.

    sorted() is stable, so ties keep configuration order. When total_bookings is
    None the entries carry no percentage.
    """
    entries = []
    for category in categories:
        value = sum_field(records, category.field)
        share = None if total_bookings is None else percentage(value, total_bookings)
        entries.append(BreakdownEntry(name=category.name, value=value, percentage=share))
    return tuple(sorted(entries, key=lambda e: e.value, reverse=True))


def summarize(records: Sequence[BookingRecord], breakdowns: BreakdownConfig | None = None) -> SummaryReport:
    """Compute totals, success/conversion rates and category breakdowns."""
    if breakdowns is None:
        breakdowns = BreakdownConfig()

    total_attempts = sum_field(records, "attempts")
    total_settled = sum_field(records, "settled")
    total_bookings = sum_field(records, "total_booking")

    report = SummaryReport(
        total_attempts=total_attempts,
        total_settled=total_settled,
        total_bookings=total_bookings,
        overall_success_rate=percentage(total_settled, total_attempts),
        booking_conversion=percentage(total_bookings, total_settled),
        channel_breakdown=_breakdown(records, breakdowns.channels, total_bookings),
        ticket_breakdown=_breakdown(records, breakdowns.tickets, total_bookings),
        city_breakdown=_breakdown(records, breakdowns.cities, None),
    )
    logger.debug(
        "summary records=%d attempts=%d settled=%d bookings=%d",
        len(records),
        total_attempts,
        total_settled,
        total_bookings,
    )
    return report


def success_metrics(records: Sequence[BookingRecord]) -> SuccessMetrics:
    """Funnel conversion, average rates and minute counts; all 0 for no records."""
    if not records:
        return SuccessMetrics()

    pg = np.array([r.pg_success_rate for r in records], dtype=float)
    bva = np.array([r.booking_vs_attempt for r in records], dtype=float)
    tatkal = np.array([r.tatkal for r in records], dtype=float)
    total_attempts = sum_field(records, "attempts")
    total_bookings = sum_field(records, "total_booking")

    return SuccessMetrics(
        overall_conversion=percentage(total_bookings, total_attempts),
        avg_pg_success_rate=float(pg.mean()),
        avg_booking_vs_attempt=float(bva.mean()),
        low_success_minutes=int((pg < LOW_SUCCESS_RATE).sum()),
        critical_minutes=int((pg < CRITICAL_SUCCESS_RATE).sum()),
        tatkal_share=percentage(sum_field(records, "tatkal"), total_bookings),
        active_tatkal_minutes=int((tatkal > 0).sum()),
    )
