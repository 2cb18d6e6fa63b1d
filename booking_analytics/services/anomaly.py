from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

import numpy as np

from ..models.anomaly import METRIC_FIELDS, AnomalyRecord, Severity
from ..models.booking_record import BookingRecord
from ..models.config_models import AnomalySettings, PgFloorRule

"""Anomaly scanner: per-metric z-score pass over a BookingRecord sequence.

For each metric independently:
1. population mean and population standard deviation (divide by N)
2. z = |value - mean| / stdDev for every record
3. z > z_threshold -> anomaly with threshold = mean + z_threshold * stdDev
4. severity: z > high_z -> high, else z > medium_z -> medium, else low

A metric whose series has no spread (stdDev == 0, which includes empty and
single-record inputs) produces no z-score anomalies.

The pg success floor is a separate, optional rule (see PgFloorRule). When enabled it
flags low pgSuccessRate values regardless of z-score; a record already flagged by
the z-score pass keeps one entry with the higher of the two severities.

The final list is sorted by raw value, descending, across all metrics.
"""

__all__ = [
    "MetricStats",
    "classify",
    "detect_anomalies",
    "high_severity",
    "metric_stats",
]

logger = logging.getLogger(__name__)

PG_METRIC = "pgSuccessRate"


@dataclass(frozen=True)
class MetricStats:
    """Population mean / standard deviation of one metric series."""
    mean: float
    std_dev: float

    def z_score(self, value: float) -> float | None:
        if self.std_dev == 0:
            return None
        return abs(value - self.mean) / self.std_dev


def metric_stats(values: Sequence[float]) -> MetricStats:
    """Population statistics (ddof=0); an empty series has mean 0 and no spread.

    A float round-off spread on a constant series (e.g. 1e-15) counts as none.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return MetricStats(0.0, 0.0)
    mean = float(np.mean(arr))
    std = float(np.std(arr, ddof=0))
    if np.isclose(std, 0.0):
        std = 0.0
    return MetricStats(mean, std)


def classify(z: float, settings: AnomalySettings) -> Severity:
    if z > settings.high_z:
        return Severity.HIGH
    if z > settings.medium_z:
        return Severity.MEDIUM
    return Severity.LOW


def _floor_severity(value: float, rule: PgFloorRule) -> Severity | None:
    if value < rule.critical:
        return Severity.HIGH
    if value < rule.warning:
        return Severity.MEDIUM
    return None


def _scan_metric(
    records: Sequence[BookingRecord],
    metric: str,
    settings: AnomalySettings,
) -> list[AnomalyRecord]:
    field = METRIC_FIELDS[metric]
    values = [getattr(r, field) for r in records]
    stats = metric_stats(values)
    threshold = stats.mean + settings.z_threshold * stats.std_dev
    floor = settings.pg_success_floor if metric == PG_METRIC else None
    floor_on = floor is not None and floor.enabled

    if stats.std_dev == 0 and not floor_on:
        logger.debug("metric=%s has no spread (n=%d), skipping", metric, len(values))
        return []

    found: list[AnomalyRecord] = []
    for record, value in zip(records, values):
        z = stats.z_score(value)
        anomaly = None
        if z is not None and z > settings.z_threshold:
            anomaly = AnomalyRecord(
                minute=record.minute,
                type=metric,
                value=value,
                threshold=threshold,
                severity=classify(z, settings),
                z_score=z,
            )
        if floor_on:
            floor_sev = _floor_severity(value, floor)
            if floor_sev is not None:
                if anomaly is None:
                    anomaly = AnomalyRecord(
                        minute=record.minute,
                        type=metric,
                        value=value,
                        threshold=floor.warning,
                        severity=floor_sev,
                        z_score=z,
                    )
                elif floor_sev.rank > anomaly.severity.rank:
                    anomaly = replace(anomaly, severity=floor_sev)
        if anomaly is not None:
            found.append(anomaly)

    logger.debug(
        "metric=%s mean=%.4f std_dev=%.4f threshold=%.4f anomalies=%d",
        metric,
        stats.mean,
        stats.std_dev,
        threshold,
        len(found),
    )
    return found


def detect_anomalies(
    records: Sequence[BookingRecord],
    settings: AnomalySettings | None = None,
) -> list[AnomalyRecord]:
    """Scan each configured metric and return anomalies sorted by value (desc)."""
    if settings is None:
        settings = AnomalySettings()
    anomalies: list[AnomalyRecord] = []
    for metric in settings.metrics:
        if metric not in METRIC_FIELDS:
            raise ValueError(f"unknown anomaly metric: {metric}")
        anomalies.extend(_scan_metric(records, metric, settings))
    anomalies.sort(key=lambda a: a.value, reverse=True)
    return anomalies


def high_severity(anomalies: Iterable[AnomalyRecord]) -> list[AnomalyRecord]:
    return [a for a in anomalies if a.severity is Severity.HIGH]
