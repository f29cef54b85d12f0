"""
Local file readers for universe and EOD price inputs.

Universe files
--------------
``.json``  Array of objects with the wire keys::

             ticker, company_name, sector, predicted_1day_growth_pct,
             3_month, 6_month, 12_month, factor_inputs

``.csv``   Header row with the same keys (``factor_inputs`` omitted).  Factor
           inputs may be given as ``f01``..``f43`` columns; an empty
           ``predicted_1day_growth_pct`` cell means "derive from factors".

Price files
-----------
``.json``  Object ``{"TICKER": price, ...}``
``.csv``   Header row with ``ticker`` and ``price`` columns.

Tickers are upper-cased.  Rows are validated before anything is returned;
any failure raises a single ``ValueError`` listing up to 10 problems.  No
value is defaulted: an empty required cell is an error.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from stock_check.factors.spec import factor_ids
from stock_check.models.universe import UniverseEntry

logger = logging.getLogger(__name__)

REQUIRED_UNIVERSE_COLUMNS = frozenset({
    "ticker", "company_name", "sector", "3_month", "6_month", "12_month",
})
REQUIRED_PRICE_COLUMNS = frozenset({"ticker", "price"})

_MAX_ERRORS_SHOWN = 10


# ── Universe ──────────────────────────────────────────────────────────────────

def load_universe(path: Path) -> list[UniverseEntry]:
    """Load universe entries from a ``.json`` or ``.csv`` file.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: Unsupported format, bad structure, or invalid rows.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Universe file not found: {path}")

    fmt = path.suffix.lower()
    if fmt == ".json":
        entries = _load_universe_json(path)
    elif fmt == ".csv":
        entries = _load_universe_csv(path)
    else:
        raise ValueError(f"Unsupported universe file format '{fmt}'. Use .json or .csv.")

    logger.info("Loaded %d universe entries from %s", len(entries), path.name)
    return entries


def _load_universe_json(path: Path) -> list[UniverseEntry]:
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise ValueError(f"Universe JSON must contain an array: {path}")

    entries: list[UniverseEntry] = []
    errors: list[tuple[int, str]] = []
    for i, item in enumerate(raw):
        try:
            if not isinstance(item, dict):
                raise ValueError("entry must be an object.")
            entries.append(UniverseEntry.model_validate(item))
        except (ValueError, ValidationError) as exc:
            errors.append((i, str(exc)))

    _raise_if_errors(errors, path, label="Entry")
    return entries


def _load_universe_csv(path: Path) -> list[UniverseEntry]:
    rows, columns = _read_csv(path, REQUIRED_UNIVERSE_COLUMNS)
    factor_cols = [fid for fid in factor_ids() if fid in columns]

    entries: list[UniverseEntry] = []
    errors: list[tuple[int, str]] = []
    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        try:
            entries.append(_row_to_entry(row, factor_cols))
        except (ValueError, ValidationError) as exc:
            errors.append((line_no, str(exc)))

    _raise_if_errors(errors, path, label="Row")
    return entries


def _row_to_entry(row: dict[str, str], factor_cols: list[str]) -> UniverseEntry:
    factor_inputs: Optional[dict[str, float]] = None
    present = {fid: _opt(row, fid) for fid in factor_cols}
    if any(v is not None for v in present.values()):
        # Blank factor cells are dropped so the factor model reports them by id.
        factor_inputs = {
            fid: _parse_float(v, fid) for fid, v in present.items() if v is not None
        }

    growth = _opt(row, "predicted_1day_growth_pct")
    return UniverseEntry(
        ticker=_req(row, "ticker"),
        company_name=_req(row, "company_name"),
        sector=_req(row, "sector"),
        predicted_1day_growth_pct=(
            _parse_float(growth, "predicted_1day_growth_pct") if growth is not None else None
        ),
        three_month=_parse_float(_req(row, "3_month"), "3_month"),
        six_month=_parse_float(_req(row, "6_month"), "6_month"),
        twelve_month=_parse_float(_req(row, "12_month"), "12_month"),
        factor_inputs=factor_inputs,
    )


# ── Prices ────────────────────────────────────────────────────────────────────

def load_price_map(path: Path) -> dict[str, Any]:
    """Load a ticker → EOD price mapping from ``.json`` or ``.csv``.

    JSON values are returned as parsed; price validity (positive, finite) is
    enforced by the engine for the tickers it actually outputs.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        ValueError: Unsupported format, bad structure, duplicate tickers.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Price file not found: {path}")

    fmt = path.suffix.lower()
    prices: dict[str, Any] = {}

    if fmt == ".json":
        raw = _read_json(path)
        if not isinstance(raw, dict):
            raise ValueError(f"Price JSON must contain an object of ticker -> price: {path}")
        for ticker, price in raw.items():
            _put_price(prices, str(ticker), price)

    elif fmt == ".csv":
        rows, _ = _read_csv(path, REQUIRED_PRICE_COLUMNS)
        errors: list[tuple[int, str]] = []
        for i, row in enumerate(rows):
            try:
                _put_price(
                    prices,
                    _req(row, "ticker"),
                    _parse_float(_req(row, "price"), "price"),
                )
            except ValueError as exc:
                errors.append((i + 2, str(exc)))
        _raise_if_errors(errors, path, label="Row")

    else:
        raise ValueError(f"Unsupported price file format '{fmt}'. Use .json or .csv.")

    logger.info("Loaded %d EOD prices from %s", len(prices), path.name)
    return prices


def _put_price(prices: dict[str, Any], ticker: str, price: Any) -> None:
    key = ticker.strip().upper()
    if not key:
        raise ValueError("Price entry has an empty ticker.")
    if key in prices:
        raise ValueError(f"Duplicate price for ticker {key}.")
    prices[key] = price


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"JSON parse error in {path.name}: {exc}") from exc


def _read_csv(path: Path, required: frozenset[str]) -> tuple[list[dict[str, str]], set[str]]:
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        columns = {c.strip() for c in reader.fieldnames}
        missing = required - columns
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(columns)}"
            )
        rows = [
            {(k or "").strip(): (v or "") for k, v in row.items()}
            for row in reader
        ]

    if not rows:
        logger.warning("CSV is empty (header only): %s", path)
    return rows, columns


def _raise_if_errors(errors: list[tuple[int, str]], path: Path, label: str) -> None:
    if not errors:
        return
    detail = "\n".join(f"  {label} {n}: {msg}" for n, msg in errors[:_MAX_ERRORS_SHOWN])
    extra = len(errors) - _MAX_ERRORS_SHOWN
    suffix = f"\n  ... and {extra} more" if extra > 0 else ""
    raise ValueError(
        f"{len(errors)} {label.lower()}(s) failed validation in {path.name}:\n{detail}{suffix}"
    )


def _req(row: dict[str, str], key: str) -> str:
    """Return a required string field, stripped; raise if empty."""
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _opt(row: dict[str, str], key: str) -> Optional[str]:
    """Return an optional string field, or None if absent/empty."""
    v = row.get(key, "").strip()
    return v if v else None


def _parse_float(value: str, key: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid number for '{key}': '{value}'.")
