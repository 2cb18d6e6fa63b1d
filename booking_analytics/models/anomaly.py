from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Anomaly domain models.

An AnomalyRecord flags one (minute, metric) pair. A minute may appear once per
metric that triggers; the list is not deduplicated per minute.
"""

__all__ = [
    "AnomalyRecord",
    "Severity",
    "METRIC_FIELDS",
]


class Severity(Enum):
    """Anomaly severity ladder.

    - LOW: 2 < z <= 2.5
    - MEDIUM: 2.5 < z <= 3
    - HIGH: z > 3
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}

# Anomaly type name -> BookingRecord attribute
METRIC_FIELDS: dict[str, str] = {
    "attempts": "attempts",
    "pgSuccessRate": "pg_success_rate",
    "bookingVsAttempt": "booking_vs_attempt",
}


@dataclass(frozen=True)
class AnomalyRecord:
    minute: str
    type: str  # one of METRIC_FIELDS keys
    value: float
    threshold: float  # mean + 2 * stdDev (or the floor for floor-only hits)
    severity: Severity
    z_score: float | None = None  # None when the series has no spread

    def to_dict(self) -> dict[str, Any]:
        return {
            "minute": self.minute,
            "type": self.type,
            "value": self.value,
            "threshold": self.threshold,
            "severity": self.severity.value,
            "zScore": self.z_score,
        }
