"""Tests for the command-line report."""
import json

import pytest

from toll_analytics.cli import main


@pytest.fixture
def csv_path(tmp_path, sample_csv):
    path = tmp_path / "tolls.csv"
    path.write_text(sample_csv)
    return path


def test_json_report(csv_path, capsys):
    main(["analyze", str(csv_path), "--json"])
    report = json.loads(capsys.readouterr().out)
    assert report["transaction_count"] == 3
    assert report["total_expenses"] == 700


def test_text_report(csv_path, capsys):
    main(["analyze", str(csv_path), "--day", "2024-01-01"])
    out = capsys.readouterr().out
    assert "Loaded 3 rows" in out
    assert "$7.00" in out
    assert "Vehicle 1" in out
    assert "MONDAY, JAN 1, 2024" in out


def test_month_period(csv_path, capsys):
    main(["analyze", str(csv_path), "--period", "month", "--anchor", "2024-02-01"])
    out = capsys.readouterr().out
    assert "February 2024" in out
    assert "No data for this period" in out


def test_unreadable_file_exits(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("Date,Location\n01/01/2024,A\n")
    with pytest.raises(SystemExit) as exc:
        main(["analyze", str(path)])
    assert exc.value.code == 1
    assert "Amount" in capsys.readouterr().err


def test_bad_date_argument(csv_path):
    with pytest.raises(SystemExit):
        main(["analyze", str(csv_path), "--anchor", "01/15/2024"])
