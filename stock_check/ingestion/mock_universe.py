"""
Deterministic synthetic universe for offline demos and tests.

This is NOT the factor model and not market data.  Values follow fixed
linear ramps so every call with the same arguments returns the same
universe::

    ticker        "T000".."T249"  (index 50 is the required ticker)
    sector        7 sectors, rotating by index
    growth %      2.2  - 0.01 * i     (turns negative after i = 220)
    3-month %     4.5  - 0.02 * i
    6-month %     8.2  - 0.03 * i
    12-month %    16.4 - 0.05 * i
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from stock_check.factors.spec import factor_ids
from stock_check.models.universe import UniverseEntry

MOCK_SECTORS: tuple[str, ...] = (
    "Tech", "Healthcare", "Industrials", "Financials", "Consumer", "Energy", "Utilities",
)
REQUIRED_TICKER_INDEX = 50

_COMPANY_NAMES: dict[str, str] = {"INTC": "Intel"}


def _r4(x: float) -> float:
    return round(x, 4)


def make_mock_universe(
    size: int = 250,
    required_ticker: str = "INTC",
) -> list[UniverseEntry]:
    """Build ``size`` deterministic entries with direct growth values.

    The required ticker sits at index 50 when ``size > 50``.
    """
    universe: list[UniverseEntry] = []
    required = required_ticker.upper()
    for i in range(size):
        ticker = required if i == REQUIRED_TICKER_INDEX else f"T{i:03d}"
        universe.append(
            UniverseEntry(
                ticker=ticker,
                company_name=_COMPANY_NAMES.get(ticker, f"Company {ticker}"),
                sector=MOCK_SECTORS[i % len(MOCK_SECTORS)],
                predicted_1day_growth_pct=_r4(2.2 - i * 0.01),
                three_month=_r4(4.5 - i * 0.02),
                six_month=_r4(8.2 - i * 0.03),
                twelve_month=_r4(16.4 - i * 0.05),
            )
        )
    return universe


def make_mock_factor_inputs(seed: int = 0) -> dict[str, float]:
    """Complete, deterministic factor input mapping.

    Mixes pre-normalized values in [0, 1] with z-score-like values outside
    it so both normalization paths are exercised.
    """
    inputs: dict[str, float] = {}
    for n, fid in enumerate(factor_ids()):
        phase = seed * 0.7 + n * 0.37
        if n % 3 == 0:
            inputs[fid] = _r4(2.5 * math.sin(phase))
        else:
            inputs[fid] = _r4(0.5 + 0.45 * math.cos(phase))
    return inputs


def mock_price_map(tickers: Iterable[str], price: float = 100.0) -> dict[str, float]:
    """Flat price map keyed by upper-cased ticker."""
    return {t.upper(): price for t in tickers}
