from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..excel.normalizer import normalize_rows
from ..models.config_models import AnalyticsConfig
from ..models.processed_data import ProcessedData
from .aggregation import success_metrics, summarize
from .anomaly import detect_anomalies

__all__ = [
    "process_booking_data",
]

logger = logging.getLogger(__name__)


def process_booking_data(raw_table: Sequence[Sequence[Any] | None], config: AnalyticsConfig | None = None) -> ProcessedData:
    """Run normalize -> summarize (+ success metrics) -> detect_anomalies on an in-memory table.

    Pure and synchronous: the same table and config always give an equal result,
    and nothing is cached between calls.
    """
    if config is None:
        config = AnalyticsConfig()
    records = normalize_rows(raw_table)
    summary = summarize(records, config.breakdowns)
    anomalies = detect_anomalies(records, config.anomaly)
    logger.debug("pipeline records=%d anomalies=%d", len(records), len(anomalies))
    return ProcessedData(
        time_series=tuple(records),
        summary=summary,
        anomalies=tuple(anomalies),
        metrics=success_metrics(records),
    )
