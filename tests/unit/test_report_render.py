from __future__ import annotations
from datetime import UTC, datetime
from booking_analytics.models.summary_report import BreakdownEntry
from booking_analytics.services.pipeline import process_booking_data
from booking_analytics.services.report import breakdown_line, render_text_report

FIXED_TIME = datetime(2024, 3, 1, 9, 5, 7, tzinfo=UTC)


def test_breakdown_line_with_share():
    assert breakdown_line(BreakdownEntry("Website", 12345, 57.14)) == "- Website: 12,345 (57.1%)"


def test_breakdown_line_without_share():
    assert breakdown_line(BreakdownEntry("Delhi", 1500)) == "- Delhi: 1,500 bookings"


def test_report_sections_in_order(scenario_table):
    text = render_text_report(process_booking_data(scenario_table), "bookings.xlsx", FIXED_TIME)
    lines = text.splitlines()
    assert lines[0] == "Booking Analytics Report - bookings.xlsx"
    assert lines[1] == "Generated on: 2024-03-01 09:05:07 UTC"
    headings = [l for l in lines if l.endswith(":") and not l.startswith("-")]
    assert headings == [
        "Summary Statistics:",
        "Success Metrics:",
        "Top Performing Channels:",
        "Ticket Types:",
        "Geographic Distribution:",
        "Anomalies:",
        "Insights:",
    ]
    assert text.endswith("\n")


def test_report_summary_values(scenario_table):
    text = render_text_report(process_booking_data(scenario_table), "s", FIXED_TIME)
    assert "- Total Attempts: 100\n" in text
    assert "- Overall Success Rate: 80.00%\n" in text
    assert "- Booking Conversion: 87.50%\n" in text
    assert "- Website: 40 (57.1%)\n" in text
    assert "- Mumbai: 25 bookings\n" in text
    assert "- Total: 0 (high: 0, medium: 0, low: 0)\n" in text


def test_report_lists_anomalies(day_table):
    text = render_text_report(process_booking_data(day_table), "day", FIXED_TIME)
    assert "- Total: 1 (high: 1, medium: 0, low: 0)\n" in text
    line = next(l for l in text.splitlines() if l.startswith("- 00:11 attempts="))
    assert line.startswith("- 00:11 attempts=1300 threshold=")
    assert line.endswith("[high]")


def test_report_for_empty_table_has_no_insights():
    text = render_text_report(process_booking_data([]), "empty", FIXED_TIME)
    assert "Insights:" not in text
    assert "- Total Attempts: 0\n" in text


def test_report_success_metrics(scenario_table):
    text = render_text_report(process_booking_data(scenario_table), "s", FIXED_TIME)
    assert "- Overall Conversion: 70.00%\n" in text
    assert "- Avg PG Success Rate: 80.00%\n" in text
    assert "- Avg Booking Vs Attempt: 70.00%\n" in text
    assert "- Minutes Below 50% PG Success: 0\n" in text
    assert "- Critical Minutes (below 30%): 0\n" in text
    assert "- Tatkal Share: 7.1%\n" in text
    assert "- Active Tatkal Minutes: 1\n" in text


def test_report_success_metrics_for_empty_table():
    text = render_text_report(process_booking_data([]), "empty", FIXED_TIME)
    assert "- Overall Conversion: 0.00%\n" in text
    assert "- Tatkal Share: 0.0%\n" in text
    assert "- Active Tatkal Minutes: 0\n" in text
