"""Tests for the command line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import cli


@pytest.fixture
def activity_file(tmp_path: Path) -> Path:
    path = tmp_path / "tempo.json"
    path.write_text(
        json.dumps(
            {
                "sport": "running",
                "sessions": [
                    {
                        "timestamp": "2025-03-02T08:00:00Z",
                        "total_distance": 10000,
                        "total_timer_time": 3000,
                        "avg_speed": 3.3333,
                        "laps": [{"total_timer_time": 3000, "total_distance": 10000, "avg_speed": 3.3333}],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    target = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(target))
    monkeypatch.delenv("UNIT_SYSTEM", raising=False)
    return target


def test_parse_args_custom_values() -> None:
    ns = cli.parse_args(["run.json", "--html", "--units", "statute", "--sub-type", "Track"])
    assert ns.activity == "run.json"
    assert ns.html is True
    assert ns.units == "statute"
    assert ns.sub_type == "Track"


def test_parse_args_rejects_unknown_units() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["run.json", "--units", "leagues"])


def test_main_prints_text_report(activity_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(activity_file), "--type", "Running"]) == 0
    out = capsys.readouterr().out
    assert "Running" in out
    assert "10.00 km" in out
    assert "5:00 min/km" in out


def test_main_saves_units_and_reuses_them(
    activity_file: Path, data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main([str(activity_file), "--units", "statute"]) == 0
    assert json.loads((data_dir / "config.json").read_text())["unit_system"] == "statute"
    capsys.readouterr()
    assert cli.main([str(activity_file)]) == 0
    assert "6.21 mi" in capsys.readouterr().out


def test_main_html_page(activity_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(activity_file), "--html", "--name", "Tempo"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<!DOCTYPE html>")
    assert "Activity: Tempo" in out
    assert 'id="laps"' in out


def test_main_reports_unreadable_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "missing.json"
    assert cli.main([str(missing)]) == 1
    assert "Cannot load activity" in capsys.readouterr().err
