from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .anomaly import AnomalyRecord
from .booking_record import BookingRecord
from .summary_report import SuccessMetrics, SummaryReport

__all__ = [
    "ProcessedData",
]


@dataclass(frozen=True)
class ProcessedData:
    """Everything derived from one uploaded table (records, summary, anomalies, metrics)."""
    time_series: tuple[BookingRecord, ...]
    summary: SummaryReport
    anomalies: tuple[AnomalyRecord, ...] = ()
    metrics: SuccessMetrics = field(default_factory=SuccessMetrics)

    def to_dict(self) -> dict[str, Any]:
        """Dashboard payload with the presentation layer's key names."""
        return {
            "timeSeriesData": [r.to_dict() for r in self.time_series],
            "summary": self.summary.to_dict(),
            "anomalies": [a.to_dict() for a in self.anomalies],
            "successMetrics": self.metrics.to_dict(),
        }
