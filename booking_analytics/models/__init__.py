"""Domain models for the booking analytics pipeline.

This package contains the typed records produced by row normalization, the derived
summary and anomaly structures, configuration dataclasses and CLI result models.
"""

from .anomaly import METRIC_FIELDS, AnomalyRecord, Severity
from .booking_record import COLUMN_FIELDS, COUNTER_FIELDS, PERCENT_FIELDS, BookingRecord
from .config_models import (
    AnalyticsConfig,
    AnomalySettings,
    BreakdownConfig,
    CategorySpec,
    ExportConfig,
    PgFloorRule,
)
from .processed_data import ProcessedData
from .summary_report import BreakdownEntry, SuccessMetrics, SummaryReport

__all__ = [
    # Pipeline records
    "BookingRecord",
    "COLUMN_FIELDS",
    "COUNTER_FIELDS",
    "PERCENT_FIELDS",
    "BreakdownEntry",
    "SuccessMetrics",
    "SummaryReport",
    "AnomalyRecord",
    "Severity",
    "METRIC_FIELDS",
    "ProcessedData",
    # Configuration models
    "AnalyticsConfig",
    "AnomalySettings",
    "BreakdownConfig",
    "CategorySpec",
    "ExportConfig",
    "PgFloorRule",
]
