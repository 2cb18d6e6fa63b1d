"""Minute-level railway booking analytics.

Turns a spreadsheet of per-minute booking counters into typed records, summary
totals with channel/ticket/city breakdowns, and a z-score anomaly list.

Usage:
    from booking_analytics import process_booking_data
    result = process_booking_data(rows)  # rows: list of spreadsheet rows
"""

from .models import AnalyticsConfig, AnomalyRecord, BookingRecord, ProcessedData, Severity, SummaryReport
from .services.pipeline import process_booking_data

__version__ = "0.1.0"

__all__ = [
    "AnalyticsConfig",
    "AnomalyRecord",
    "BookingRecord",
    "ProcessedData",
    "Severity",
    "SummaryReport",
    "process_booking_data",
    "__version__",
]
