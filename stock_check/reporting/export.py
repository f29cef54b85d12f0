"""
File writers for stock check reports.

All functions write to disk and return the written ``Path``.

Output files
------------
  <output_dir>/
    stock_check_{prediction_date}.json   -- {"output": ..., "table": ...}
    stock_check_{prediction_date}.csv    -- display rows, canonical labels

The CSV header is exactly the canonical display column sequence and the rows
are in display order, so the file matches what the presentation layer shows.
"""

from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path

from stock_check.engine import StockCheckReport

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and not fieldnames:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def report_basename(report: StockCheckReport) -> str:
    """``stock_check_<prediction_date>`` with filesystem-unsafe chars replaced."""
    label = _UNSAFE_CHARS.sub("_", report.document.prediction_date)
    return f"stock_check_{label}"


def write_output_json(report: StockCheckReport, output_dir: Path) -> Path:
    """Write the output document plus display table as JSON."""
    path = output_dir / f"{report_basename(report)}.json"
    export_to_json(report.to_dict(), path)
    logger.info("Stock check JSON written: %s", path)
    return path


def write_display_csv(report: StockCheckReport, output_dir: Path) -> Path:
    """Write display-ordered rows with the canonical column labels as header."""
    path = output_dir / f"{report_basename(report)}.csv"
    rows = [r.to_display_row() for r in report.display]
    export_to_csv(rows, path, fieldnames=list(report.columns))
    logger.info("Stock check CSV written: %s (%d rows)", path, len(rows))
    return path
