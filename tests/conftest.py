"""
Shared pytest fixtures for the Stock Check test suite.

Provides:
  - ``mock_universe``: the deterministic 250-entry synthetic universe.
  - ``all_prices``: a flat 100.0 price for every mock ticker.
  - Factories (plain functions, importable from tests) for building
    universes with a chosen primary set.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stock_check.config import AppConfig
from stock_check.ingestion.mock_universe import MOCK_SECTORS, make_mock_universe, mock_price_map
from stock_check.models.result import RankedResult
from stock_check.models.universe import UniverseEntry

CURRENT_DATE = "2026-02-14"
PREDICTION_DATE = "2026-02-15"


# ── Factories ─────────────────────────────────────────────────────────────────

def make_entry(
    ticker: str,
    growth: float | None = 0.0,
    sector: str = "Tech",
    factor_inputs: dict | None = None,
    company_name: str | None = None,
) -> UniverseEntry:
    return UniverseEntry(
        ticker=ticker,
        company_name=company_name or f"Company {ticker}",
        sector=sector,
        predicted_1day_growth_pct=growth,
        three_month=1.5,
        six_month=3.25,
        twelve_month=-4.125,
        factor_inputs=factor_inputs,
    )


def make_universe(
    top_growths: list[float],
    top_sectors: list[str] | None = None,
    size: int = 250,
    required_ticker: str = "INTC",
) -> list[UniverseEntry]:
    """Universe whose primary set is exactly ``top_growths`` (all other
    entries, including the required ticker, sit below -1.0%)."""
    entries: list[UniverseEntry] = []
    for i, g in enumerate(top_growths):
        sector = top_sectors[i] if top_sectors else MOCK_SECTORS[i % len(MOCK_SECTORS)]
        entries.append(make_entry(f"P{i:03d}", g, sector))
    for i in range(len(top_growths), size):
        ticker = required_ticker if i == 50 else f"R{i:03d}"
        entries.append(
            make_entry(ticker, round(-1.0 - 0.001 * i, 4), MOCK_SECTORS[i % len(MOCK_SECTORS)])
        )
    return entries


def make_result(
    rank: int,
    ticker: str,
    growth: float,
    sector: str = "Tech",
    price: float = 100.0,
) -> RankedResult:
    return RankedResult(
        rank=rank,
        ticker=ticker,
        company_name=f"Company {ticker}",
        sector=sector,
        current_price=price,
        predicted_price=round(price * (1 + growth / 100), 2),
        predicted_1day_growth_pct=growth,
        three_month=1.0,
        six_month=2.0,
        twelve_month=3.0,
    )


def prices_for(universe: list[UniverseEntry], price: float = 100.0) -> dict[str, float]:
    return mock_price_map((e.ticker for e in universe), price)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def mock_universe() -> list[UniverseEntry]:
    return make_mock_universe(250)


@pytest.fixture
def all_prices(mock_universe) -> dict[str, float]:
    return prices_for(mock_universe)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A minimal TOML config writing outputs under ``tmp_path`` and no log file."""
    path = tmp_path / "config" / "default.toml"
    path.parent.mkdir(parents=True)
    path.write_text(
        "[engine]\n"
        'model_version = "Stock Check v1.0"\n'
        "min_universe_size = 100\n"
        'required_ticker = "INTC"\n'
        "top_n = 10\n"
        "\n"
        "[output]\n"
        f'output_dir = "{(tmp_path / "out").as_posix()}"\n'
        "\n"
        "[logging]\n"
        'level = "WARNING"\n'
        'log_file = ""\n',
        encoding="utf-8",
    )
    return path
