from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""SummaryReport model: aggregate totals, rates and category breakdowns.

The report is a pure projection of a BookingRecord sequence. It is never patched
incrementally; a new input produces a new report.
"""

__all__ = [
    "BreakdownEntry",
    "SuccessMetrics",
    "SummaryReport",
]


@dataclass(frozen=True)
class BreakdownEntry:
    """One named category total.

    ``percentage`` is the share of total bookings. City entries carry no share
    and leave it as None.
    """
    name: str
    value: int
    percentage: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.percentage is not None:
            data["percentage"] = self.percentage
        return data


@dataclass(frozen=True)
class SummaryReport:
    """Totals and breakdowns derived from a full BookingRecord sequence."""
    total_attempts: int
    total_settled: int
    total_bookings: int
    overall_success_rate: float  # settled / attempts * 100, 0 when attempts == 0
    booking_conversion: float  # bookings / settled * 100, 0 when settled == 0
    channel_breakdown: tuple[BreakdownEntry, ...] = ()
    ticket_breakdown: tuple[BreakdownEntry, ...] = ()
    city_breakdown: tuple[BreakdownEntry, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAttempts": self.total_attempts,
            "totalSettled": self.total_settled,
            "totalBookings": self.total_bookings,
            "overallSuccessRate": self.overall_success_rate,
            "bookingConversion": self.booking_conversion,
            "channelBreakdown": [e.to_dict() for e in self.channel_breakdown],
            "ticketBreakdown": [e.to_dict() for e in self.ticket_breakdown],
            "cityBreakdown": [e.to_dict() for e in self.city_breakdown],
        }


@dataclass(frozen=True)
class SuccessMetrics:
    """Funnel and per-minute health figures shown next to the summary.

    Averages are plain means over minutes (not weighted by attempts). Every value
    is 0 for an empty series.
    """
    overall_conversion: float = 0.0  # bookings / attempts * 100
    avg_pg_success_rate: float = 0.0
    avg_booking_vs_attempt: float = 0.0
    low_success_minutes: int = 0  # pg_success_rate < 50
    critical_minutes: int = 0  # pg_success_rate < 30
    tatkal_share: float = 0.0  # tatkal / bookings * 100
    active_tatkal_minutes: int = 0  # tatkal > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "overallConversion": self.overall_conversion,
            "avgPgSuccessRate": self.avg_pg_success_rate,
            "avgBookingVsAttempt": self.avg_booking_vs_attempt,
            "lowSuccessMinutes": self.low_success_minutes,
            "criticalMinutes": self.critical_minutes,
            "tatkalShare": self.tatkal_share,
            "activeTatkalMinutes": self.active_tatkal_minutes,
        }
