"""Tests for stock_check.reporting.export."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from conftest import CURRENT_DATE, PREDICTION_DATE
from stock_check.engine import run_stock_check
from stock_check.models.result import CANONICAL_COLUMNS
from stock_check.reporting.export import (
    export_to_csv,
    export_to_json,
    report_basename,
    write_display_csv,
    write_output_json,
)


@pytest.fixture
def report(mock_universe, all_prices):
    return run_stock_check(CURRENT_DATE, PREDICTION_DATE, mock_universe, all_prices)


# ── export_to_csv ─────────────────────────────────────────────────────────────


def test_export_to_csv_basic(tmp_path: Path) -> None:
    """Writes a valid CSV with correct headers and values."""
    records = [
        {"ticker": "AAA", "price": 10.5},
        {"ticker": "BBB", "price": 20.0},
    ]
    out = tmp_path / "test.csv"
    result = export_to_csv(records, out)
    assert result == out

    with out.open(encoding="utf-8") as f:
        reader = list(csv.DictReader(f))
    assert len(reader) == 2
    assert reader[1]["ticker"] == "BBB"


def test_export_to_csv_custom_fieldnames(tmp_path: Path) -> None:
    """Custom fieldnames control column order; extra keys are ignored."""
    out = tmp_path / "cols.csv"
    export_to_csv([{"a": 1, "b": 2, "c": 3}], out, fieldnames=["c", "a"])

    with out.open(encoding="utf-8") as f:
        header = f.readline().strip()
    assert header == "c,a"


def test_export_to_csv_empty_records(tmp_path: Path) -> None:
    """No records and no fieldnames writes an empty file."""
    out = tmp_path / "empty.csv"
    export_to_csv([], out)
    assert out.read_text(encoding="utf-8") == ""


def test_export_to_csv_empty_records_with_header(tmp_path: Path) -> None:
    """No records with fieldnames still writes the header row."""
    out = tmp_path / "header.csv"
    export_to_csv([], out, fieldnames=["x", "y"])
    assert out.read_text(encoding="utf-8").strip() == "x,y"


def test_export_to_csv_creates_parent_dirs(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "dir" / "output.csv"
    export_to_csv([{"x": 1}], out)
    assert out.exists()


# ── export_to_json ────────────────────────────────────────────────────────────


def test_export_to_json_roundtrip(tmp_path: Path) -> None:
    out = tmp_path / "sub" / "data.json"
    export_to_json({"a": [1, 2]}, out)
    assert json.loads(out.read_text(encoding="utf-8")) == {"a": [1, 2]}


# ── Report writers ────────────────────────────────────────────────────────────


def test_report_basename(report) -> None:
    assert report_basename(report) == "stock_check_2026-02-15"


def test_report_basename_sanitizes(mock_universe, all_prices) -> None:
    """Path separators and spaces in the date label are replaced."""
    rep = run_stock_check(CURRENT_DATE, "2026/02/15 EOD", mock_universe, all_prices)
    assert report_basename(rep) == "stock_check_2026_02_15_EOD"


def test_write_output_json(report, tmp_path: Path) -> None:
    """JSON file holds the output document and the display table."""
    path = write_output_json(report, tmp_path / "out")
    assert path.name == "stock_check_2026-02-15.json"

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["output"]["model_version"] == "Stock Check v1.0"
    assert data["output"]["trade_header"] == "NO TRADE"
    assert len(data["output"]["results"]) == 11
    assert data["table"]["columns"] == list(CANONICAL_COLUMNS)
    assert data["output"]["results"][10]["ticker"] == "INTC"


def test_write_display_csv(report, tmp_path: Path) -> None:
    """CSV header is exactly the canonical columns; rows follow display order."""
    path = write_display_csv(report, tmp_path)
    assert path.suffix == ".csv"

    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header = next(reader)
        rows = list(reader)
    assert tuple(header) == CANONICAL_COLUMNS
    assert len(rows) == 11
    assert [row[1] for row in rows] == [r.ticker for r in report.display]
    assert rows[0][0] == "1"
