# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from booking_analytics.logging.init import reset_logging

HEADER_ROW = [
    "Minute", "Attempts", "Settled", "Total Booking", "Website Booking", "App Booking",
    "Agents Booking", "SwaRail App Booking", "I-Tkts", "E-Tkts", "Tatkal",
    "PG Success Rate %", "Booking Vs Attempt %", "Delhi", "Chennai", "Kolkata", "Mumbai",
]
TOTAL_ROW = ["Total", 999, 999, 999]

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def make_row(minute: str, attempts: int = 100, pg: float = 80.0, bva: float = 70.0, **overrides) -> list[object]:
    """Build one positional data row with sensible defaults."""
    row: list[object] = [minute, attempts, 80, 70, 40, 20, 5, 5, 50, 15, 5, pg, bva, 10, 20, 15, 25]
    index = {"settled": 2, "total_booking": 3, "website": 4, "app": 5, "agents": 6, "swarail": 7,
             "i_tkts": 8, "e_tkts": 9, "tatkal": 10, "delhi": 13, "chennai": 14, "kolkata": 15, "mumbai": 16}
    for key, value in overrides.items():
        row[index[key]] = value
    return row


def make_table(*rows: list[object]) -> list[list[object]]:
    return [list(HEADER_ROW), list(TOTAL_ROW), *[list(r) for r in rows]]


def make_excel(path: Path, rows: list[list[object]], sheet_name: str = "Bookings") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("BOOKING_ANALYTICS_CONFIG", raising=False)
        monkeypatch.delenv("BOOKING_ANALYTICS_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def scenario_table() -> list[list[object]]:
    return [
        ["h"],
        ["total", 999, 999, 999],
        ["00:01", 100, 80, 70, 40, 20, 5, 5, 50, 15, 5, "80.0", "70.0", 10, 20, 15, 25],
    ]


@pytest.fixture()
def day_table() -> list[list[object]]:
    """Eleven quiet minutes plus one attempts spike (z = sqrt(11) > 3)."""
    rows = [make_row(f"00:{m:02d}") for m in range(11)]
    rows.append(make_row("00:11", attempts=1300))
    return make_table(*rows)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sheet: 0
breakdowns:
  channels:
    - {name: Website, field: website_booking}
    - {name: App, field: app_booking}
anomaly:
  z_threshold: 2.0
  medium_z: 2.5
  high_z: 3.0
  pg_success_floor:
    enabled: true
    warning: 30
    critical: 20
export:
  output_directory: ./out
  formats: [json, txt]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "analytics.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
