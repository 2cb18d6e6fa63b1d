from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

import pytest

from booking_analytics.cli import main as cli_main
from scripts.gen_booking_dataset import create_workbook

"""Integration test: full CLI run on real workbooks.

Two synthetic days are analysed with the sample config (json + txt exports to
./out, pg floor enabled). Both files succeed, each gets its own exports, and the
SUMMARY line adds up the per-file counts.
"""


@pytest.fixture
def two_day_setup(temp_workdir: Path, write_config: Any) -> dict[str, Any]:
    data_dir = temp_workdir / "data"
    monday = data_dir / "monday.xlsx"
    tuesday = data_dir / "tuesday.xlsx"
    create_workbook(monday, 120, seed=1, spikes=2)
    create_workbook(tuesday, 90, seed=2, spikes=0)
    return {"files": [monday, tuesday], "expected_records": 210}


def test_run_success(two_day_setup: dict[str, Any], temp_workdir: Path, capsys) -> None:
    files = two_day_setup["files"]
    code = cli_main([str(p) for p in files])
    out = capsys.readouterr().out

    assert code == 0
    assert "ERROR" not in out
    assert f"records={two_day_setup['expected_records']}" in out
    assert "SUMMARY files=2/2 success=2 failed=0" in out

    out_dir = temp_workdir / "out"
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "monday.json", "monday.txt", "tuesday.json", "tuesday.txt",
    ]
    monday = json.loads((out_dir / "monday.json").read_text(encoding="utf-8"))
    assert len(monday["timeSeriesData"]) == 120
    assert monday["timeSeriesData"][0]["minute"] == "00:00"
    # the configured channel list has two entries
    assert [c["name"] for c in monday["summary"]["channelBreakdown"]] in (["Website", "App"], ["App", "Website"])
    assert any(a["type"] == "attempts" and a["severity"] == "high" for a in monday["anomalies"])
    values = [a["value"] for a in monday["anomalies"]]
    assert values == sorted(values, reverse=True)

    report = (out_dir / "monday.txt").read_text(encoding="utf-8")
    assert report.startswith("Booking Analytics Report - monday.xlsx\n")
    assert "Summary Statistics:" in report

    # no error log when nothing failed
    assert not (temp_workdir / "logs").exists()


def test_csv_export_reads_back(temp_workdir: Path, capsys) -> None:
    path = temp_workdir / "data" / "day.xlsx"
    create_workbook(path, 60, seed=3, spikes=1)
    assert cli_main([str(path), "--format", "csv", "--output-dir", "csv_out"]) == 0

    with (temp_workdir / "csv_out" / "day.csv").open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 61
    assert rows[0][:3] == ["Minute", "Attempts", "Settled"]
    assert rows[1][0] == "00:00"

    # the export is itself a valid input once it has a total row
    rows.insert(1, ["Total"])
    replay = temp_workdir / "data" / "replay.csv"
    with replay.open("w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(rows)
    assert cli_main([str(replay), "--no-export"]) == 0
    assert "records=60" in capsys.readouterr().out
