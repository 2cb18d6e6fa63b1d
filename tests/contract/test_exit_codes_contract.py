from __future__ import annotations

from pathlib import Path

from booking_analytics.cli import main as cli_main
from conftest import make_excel

"""Exit code contract.

0: every file analysed (and exported)
1: fatal startup error (config, no input files)
2: at least one file failed
"""


def test_exit_code_fatal_config(temp_workdir: Path, day_table, capsys):
    (temp_workdir / "config" / "analytics.yml").write_text("anomaly: {z_threshold: -1}\n", encoding="utf-8")
    path = make_excel(temp_workdir / "data" / "day.xlsx", day_table)
    assert cli_main([str(path)]) == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_no_files(temp_workdir: Path):
    assert cli_main([]) == 1


def test_exit_code_all_success(temp_workdir: Path, day_table):
    path = make_excel(temp_workdir / "data" / "day.xlsx", day_table)
    assert cli_main([str(path)]) == 0


def test_exit_code_partial_failure(temp_workdir: Path, day_table):
    good = make_excel(temp_workdir / "data" / "day.xlsx", day_table)
    bad = temp_workdir / "data" / "broken.xlsx"
    bad.write_bytes(b"not a workbook")
    assert cli_main([str(good), str(bad)]) == 2


def test_exit_code_all_failed(temp_workdir: Path):
    bad = temp_workdir / "data" / "notes.txt"
    bad.write_text("x", encoding="utf-8")
    assert cli_main([str(bad)]) == 2
