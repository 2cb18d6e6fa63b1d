from __future__ import annotations

from datetime import UTC, datetime

from ..models.anomaly import Severity
from ..models.processed_data import ProcessedData
from ..models.summary_report import BreakdownEntry
from .aggregation import CRITICAL_SUCCESS_RATE, LOW_SUCCESS_RATE
from .insights import generate_insights

"""Plain-text report rendering.

Layout:
    Booking Analytics Report - <source name>
    Generated on: <UTC timestamp>

    Summary Statistics:
    - Total Attempts: 1,234
    ...
    Success Metrics:
    - Overall Conversion: 41.20%
    ...
    Top Performing Channels:
    - <name>: <value> (<percentage>%)
    ...
"""

__all__ = [
    "breakdown_line",
    "render_text_report",
]

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S UTC"


def breakdown_line(entry: BreakdownEntry) -> str:
    """Format one breakdown entry as "- <name>: <value> (<percentage>%)".

    Entries without a share (cities) render as "- <name>: <value> bookings".
    """
    if entry.percentage is None:
        return f"- {entry.name}: {entry.value:,} bookings"
    return f"- {entry.name}: {entry.value:,} ({entry.percentage:.1f}%)"


def render_text_report(
    data: ProcessedData,
    source_name: str,
    generated_at: datetime | None = None,
) -> str:
    if generated_at is None:
        generated_at = datetime.now(UTC)
    summary = data.summary
    metrics = data.metrics

    lines = [
        f"Booking Analytics Report - {source_name}",
        f"Generated on: {generated_at.strftime(TIMESTAMP_FMT)}",
        "",
        "Summary Statistics:",
        f"- Total Attempts: {summary.total_attempts:,}",
        f"- Total Settled: {summary.total_settled:,}",
        f"- Total Bookings: {summary.total_bookings:,}",
        f"- Overall Success Rate: {summary.overall_success_rate:.2f}%",
        f"- Booking Conversion: {summary.booking_conversion:.2f}%",
        "",
        "Success Metrics:",
        f"- Overall Conversion: {metrics.overall_conversion:.2f}%",
        f"- Avg PG Success Rate: {metrics.avg_pg_success_rate:.2f}%",
        f"- Avg Booking Vs Attempt: {metrics.avg_booking_vs_attempt:.2f}%",
        f"- Minutes Below {LOW_SUCCESS_RATE:.0f}% PG Success: {metrics.low_success_minutes:,}",
        f"- Critical Minutes (below {CRITICAL_SUCCESS_RATE:.0f}%): {metrics.critical_minutes:,}",
        f"- Tatkal Share: {metrics.tatkal_share:.1f}%",
        f"- Active Tatkal Minutes: {metrics.active_tatkal_minutes:,}",
        "",
        "Top Performing Channels:",
        *(breakdown_line(e) for e in summary.channel_breakdown),
        "",
        "Ticket Types:",
        *(breakdown_line(e) for e in summary.ticket_breakdown),
        "",
        "Geographic Distribution:",
        *(breakdown_line(e) for e in summary.city_breakdown),
        "",
        "Anomalies:",
    ]

    counts = {s: 0 for s in Severity}
    for a in data.anomalies:
        counts[a.severity] += 1
    lines.append(
        f"- Total: {len(data.anomalies)} "
        f"(high: {counts[Severity.HIGH]}, medium: {counts[Severity.MEDIUM]}, low: {counts[Severity.LOW]})"
    )
    for a in data.anomalies:
        lines.append(f"- {a.minute} {a.type}={a.value:g} threshold={a.threshold:.2f} [{a.severity.value}]")

    insights = generate_insights(data)
    if insights:
        lines.append("")
        lines.append("Insights:")
        lines.extend(f"- {i.title}: {i.description}" for i in insights)

    return "\n".join(lines) + "\n"
