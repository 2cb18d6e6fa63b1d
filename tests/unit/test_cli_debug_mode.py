from __future__ import annotations
from pathlib import Path
from booking_analytics.cli import main as cli_main
from conftest import make_excel


def test_debug_flag_shows_pipeline_details(temp_workdir: Path, day_table, capsys):
    path = make_excel(temp_workdir / "data" / "day.xlsx", day_table)
    code = cli_main([str(path), "--debug", "--no-export"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG metric=attempts" in out


def test_no_debug_lines_by_default(temp_workdir: Path, day_table, capsys):
    path = make_excel(temp_workdir / "data" / "day.xlsx", day_table)
    assert cli_main([str(path), "--no-export"]) == 0
    assert "DEBUG" not in capsys.readouterr().out
