#!/usr/bin/env python3
"""Synthetic booking workbook generator.

Generates a minute-level booking workbook in the layout the analytics pipeline
expects:
- Row 1: header row (17 columns)
- Row 2: total row (column sums, skipped by the pipeline)
- Row 3+: one row per minute

Optionally injects spikes and payment-gateway dips so the anomaly scan has
something to find.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from booking_analytics.services.export import CSV_HEADERS


def generate_minutes(rows: int, seed: int = 42, spikes: int = 3) -> pd.DataFrame:
    """Generate `rows` minutes of booking counters.

    Args:
        rows: Number of minute rows
        seed: Random seed for reproducible data
        spikes: Number of injected attempt spikes and pg success dips (each)

    Returns:
        DataFrame with CSV_HEADERS columns
    """
    rng = np.random.default_rng(seed)

    attempts = rng.poisson(1200, rows).astype(int)
    pg_rate = np.clip(rng.normal(82.0, 3.0, rows), 0, 100)

    if spikes:
        spike_idx = rng.choice(rows, size=min(spikes, rows), replace=False)
        attempts[spike_idx] = attempts[spike_idx] * 4
        dip_idx = rng.choice(rows, size=min(spikes, rows), replace=False)
        pg_rate[dip_idx] = rng.uniform(10.0, 35.0, len(dip_idx))

    settled = np.round(attempts * pg_rate / 100).astype(int)
    total_booking = np.round(settled * rng.uniform(0.8, 0.95, rows)).astype(int)

    # Channel split (website, app, agents, swarail)
    channel_share = rng.dirichlet([5, 3, 1, 1], rows)
    channels = np.floor(channel_share * total_booking[:, None]).astype(int)
    channels[:, 0] += total_booking - channels.sum(axis=1)

    # Ticket split (i-tickets, e-tickets, tatkal)
    ticket_share = rng.dirichlet([6, 2, 1], rows)
    tickets = np.floor(ticket_share * total_booking[:, None]).astype(int)
    tickets[:, 0] += total_booking - tickets.sum(axis=1)

    # City counts cover only part of the bookings
    city_share = rng.dirichlet([3, 2, 2, 3], rows) * 0.6
    cities = np.floor(city_share * total_booking[:, None]).astype(int)

    booking_vs_attempt = np.where(attempts > 0, total_booking / np.maximum(attempts, 1) * 100, 0.0)

    minutes = [f"{(m // 60) % 24:02d}:{m % 60:02d}" for m in range(rows)]

    data = {
        "Minute": minutes,
        "Attempts": attempts,
        "Settled": settled,
        "Total Booking": total_booking,
        "Website Booking": channels[:, 0],
        "App Booking": channels[:, 1],
        "Agents Booking": channels[:, 2],
        "SwaRail App Booking": channels[:, 3],
        "I-Tkts": tickets[:, 0],
        "E-Tkts": tickets[:, 1],
        "Tatkal": tickets[:, 2],
        "PG Success Rate %": np.round(pg_rate, 2),
        "Booking Vs Attempt %": np.round(booking_vs_attempt, 2),
        "Delhi": cities[:, 0],
        "Chennai": cities[:, 1],
        "Kolkata": cities[:, 2],
        "Mumbai": cities[:, 3],
    }
    return pd.DataFrame(data, columns=list(CSV_HEADERS))


def create_workbook(output_path: Path, rows: int, seed: int = 42, spikes: int = 3) -> None:
    """Write header row, total row and minute rows to an .xlsx file."""
    df = generate_minutes(rows, seed, spikes)

    totals: list[object] = ["Total"]
    for col in df.columns[1:]:
        if col.endswith("%"):
            totals.append(round(float(df[col].mean()), 2))
        else:
            totals.append(int(df[col].sum()))

    sheet = [list(df.columns), totals] + df.values.tolist()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet).to_excel(writer, sheet_name="Bookings", header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Minute rows: {rows} (+ header and total rows)")
    print(f"  Injected spikes/dips: {spikes}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic minute-level booking workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One day of minutes
  %(prog)s bookings.xlsx

  # Two hours, no injected anomalies
  %(prog)s quiet.xlsx --rows 120 --spikes 0
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=1440, help="Number of minute rows (default: 1440)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--spikes", type=int, default=3, help="Injected spikes and dips each (default: 3)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.spikes < 0:
        print("Error: --spikes must not be negative", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.rows, args.seed, args.spikes)
    except OSError as e:
        print(f"Error writing workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
