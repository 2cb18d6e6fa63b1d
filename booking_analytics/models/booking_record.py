from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

"""BookingRecord model for the booking analytics pipeline.

A BookingRecord is one minute bucket of booking activity after row normalization.
Records are kept in source row order, which is time order.
"""

__all__ = [
    "BookingRecord",
    "COLUMN_FIELDS",
    "COUNTER_FIELDS",
    "PERCENT_FIELDS",
    "WIRE_NAMES",
]


@dataclass(frozen=True)
class BookingRecord:
    """Typed representation of a single per-minute row.

    Numeric fields default to 0 so that a partially filled or fully empty
    source row still produces a record.
    """
    minute: str = ""  # Opaque time bucket label (never parsed)
    attempts: int = 0
    settled: int = 0
    total_booking: int = 0
    website_booking: int = 0
    app_booking: int = 0
    agents_booking: int = 0
    swa_rail_app_booking: int = 0
    i_tkts: int = 0
    e_tkts: int = 0
    tatkal: int = 0
    pg_success_rate: float = 0.0  # Already 0-100 in the source
    booking_vs_attempt: float = 0.0  # Already 0-100 in the source
    delhi: int = 0
    chennai: int = 0
    kolkata: int = 0
    mumbai: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the dashboard's camelCase field names."""
        return {WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)}


# Positional source layout: column index -> field name
COLUMN_FIELDS: tuple[str, ...] = (
    "minute",
    "attempts",
    "settled",
    "total_booking",
    "website_booking",
    "app_booking",
    "agents_booking",
    "swa_rail_app_booking",
    "i_tkts",
    "e_tkts",
    "tatkal",
    "pg_success_rate",
    "booking_vs_attempt",
    "delhi",
    "chennai",
    "kolkata",
    "mumbai",
)

PERCENT_FIELDS: frozenset[str] = frozenset({"pg_success_rate", "booking_vs_attempt"})

COUNTER_FIELDS: tuple[str, ...] = tuple(
    name for name in COLUMN_FIELDS if name != "minute" and name not in PERCENT_FIELDS
)

WIRE_NAMES: dict[str, str] = {
    "minute": "minute",
    "attempts": "attempts",
    "settled": "settled",
    "total_booking": "totalBooking",
    "website_booking": "websiteBooking",
    "app_booking": "appBooking",
    "agents_booking": "agentsBooking",
    "swa_rail_app_booking": "swaRailAppBooking",
    "i_tkts": "iTkts",
    "e_tkts": "eTkts",
    "tatkal": "tatkal",
    "pg_success_rate": "pgSuccessRate",
    "booking_vs_attempt": "bookingVsAttempt",
    "delhi": "delhi",
    "chennai": "chennai",
    "kolkata": "kolkata",
    "mumbai": "mumbai",
}
