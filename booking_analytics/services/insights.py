from __future__ import annotations

from dataclasses import dataclass

from ..models.processed_data import ProcessedData
from .aggregation import LOW_SUCCESS_RATE, percentage

"""Narrative insights derived from a ProcessedData result.

Each rule inspects the summary or the time series and may emit one Insight.
Rules run in a fixed order so the output is stable for a given input.
"""

__all__ = [
    "Insight",
    "generate_insights",
    "LOW_SUCCESS_RATE",
    "CONVERSION_TARGET",
    "SWARAIL_SHARE_MIN",
]

CONVERSION_TARGET = 80.0  # booking conversion below this is an opportunity
SWARAIL_SHARE_MIN = 10.0  # growth is reported only above this channel share


@dataclass(frozen=True)
class Insight:
    kind: str  # peak | channel | growth | geography | performance | conversion | volume | tickets
    title: str
    description: str
    severity: str  # info | success | warning | error


def _fmt_int(value: int) -> str:
    return f"{value:,}"


def generate_insights(data: ProcessedData) -> list[Insight]:
    """Build the insight list; an empty time series yields no insights."""
    series = data.time_series
    summary = data.summary
    if not series:
        return []

    insights: list[Insight] = []

    # max() keeps the first maximal record, i.e. the earliest minute
    peak_tatkal = max(series, key=lambda r: r.tatkal)
    if peak_tatkal.tatkal > 0:
        insights.append(Insight(
            kind="peak",
            title="Peak Tatkal Activity",
            description=(
                f"Tatkal bookings peaked at {peak_tatkal.minute} with "
                f"{_fmt_int(peak_tatkal.tatkal)} tickets."
            ),
            severity="info",
        ))

    if summary.channel_breakdown:
        top = summary.channel_breakdown[0]
        insights.append(Insight(
            kind="channel",
            title="Channel Leadership",
            description=(
                f"{top.name} leads with {top.percentage or 0.0:.1f}% market share "
                f"({_fmt_int(top.value)} bookings)."
            ),
            severity="success",
        ))

    swarail = next((c for c in summary.channel_breakdown if c.name == "SwaRail"), None)
    if swarail is not None and (swarail.percentage or 0.0) > SWARAIL_SHARE_MIN and len(series) > 1:
        first = series[0].swa_rail_app_booking
        last = series[-1].swa_rail_app_booking
        if first != 0:
            growth = (last - first) / first * 100
            insights.append(Insight(
                kind="growth",
                title="SwaRail App Growth",
                description=(
                    f"SwaRail usage {'rose' if growth > 0 else 'declined'} "
                    f"{abs(growth):.1f}% over the observed period."
                ),
                severity="success" if growth > 0 else "warning",
            ))

    if summary.city_breakdown:
        top_city = summary.city_breakdown[0]
        share = percentage(top_city.value, summary.total_bookings)
        insights.append(Insight(
            kind="geography",
            title="Geographic Concentration",
            description=(
                f"{top_city.name} had the highest share of bookings ({share:.1f}%) "
                f"with {_fmt_int(top_city.value)} total bookings."
            ),
            severity="info",
        ))

    low_success = [r for r in series if r.pg_success_rate < LOW_SUCCESS_RATE]
    if low_success:
        worst = min(low_success, key=lambda r: r.pg_success_rate)
        insights.append(Insight(
            kind="performance",
            title="Performance Alert",
            description=(
                f"Booking success rate dropped below {LOW_SUCCESS_RATE:.0f}% for "
                f"{len(low_success)} minutes. Lowest was {worst.pg_success_rate:.1f}% at {worst.minute}."
            ),
            severity="error",
        ))

    if summary.booking_conversion < CONVERSION_TARGET:
        insights.append(Insight(
            kind="conversion",
            title="Conversion Opportunity",
            description=(
                f"Overall booking conversion rate is {summary.booking_conversion:.1f}%. "
                "There's room for improvement in converting settled transactions to bookings."
            ),
            severity="warning",
        ))

    peak_attempts = max(series, key=lambda r: r.attempts)
    insights.append(Insight(
        kind="volume",
        title="Peak Traffic",
        description=(
            f"Highest traffic occurred at {peak_attempts.minute} with "
            f"{_fmt_int(peak_attempts.attempts)} booking attempts."
        ),
        severity="info",
    ))

    if summary.ticket_breakdown:
        dominant = summary.ticket_breakdown[0]
        insights.append(Insight(
            kind="tickets",
            title="Ticket Preference",
            description=(
                f"{dominant.name} dominated with {dominant.percentage or 0.0:.1f}% of all bookings "
                f"({_fmt_int(dominant.value)} tickets)."
            ),
            severity="info",
        ))

    return insights
