"""
Output assembly: merges the ranked selection with user-supplied EOD prices.

Prices are looked up under the upper-cased ticker only.  A missing,
non-numeric, non-finite or non-positive price raises ``MissingPriceError``
for that ticker; prices are never fetched, inferred or defaulted.

    predicted_price = round(current_price * (1 + growth_pct / 100), 2)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from stock_check.errors import MissingPriceError
from stock_check.factors.model import is_finite_number
from stock_check.models.result import RankedResult
from stock_check.ranking.ranker import ResolvedEntry


def lookup_price(price_map: Mapping[str, object], ticker: str) -> float:
    """Return the validated price for ``ticker`` (upper-cased key)."""
    key = ticker.upper()
    value = price_map.get(key)
    if not is_finite_number(value) or value <= 0:
        raise MissingPriceError(key, value)
    return float(value)


def predicted_price(current_price: float, growth_pct: float) -> float:
    return round(current_price * (1.0 + growth_pct / 100.0), 2)


def assemble_results(
    selection: Sequence[ResolvedEntry],
    price_map: Mapping[str, object],
) -> list[RankedResult]:
    """Build one ``RankedResult`` per selected entry, rank 1..N in order.

    Args:
        selection: Primary set followed by the appended ticker, if any.
        price_map: Caller-supplied ticker → EOD price.

    Returns:
        Ranked results in selection order.

    Raises:
        MissingPriceError: First selected ticker without a valid price.
    """
    results: list[RankedResult] = []
    for rank, item in enumerate(selection, start=1):
        price = lookup_price(price_map, item.ticker)
        growth = round(item.growth_pct, 4)
        entry = item.entry
        results.append(
            RankedResult(
                rank=rank,
                ticker=item.ticker,
                company_name=entry.company_name,
                sector=entry.sector,
                current_price=round(price, 2),
                predicted_price=predicted_price(price, growth),
                predicted_1day_growth_pct=growth,
                three_month=round(entry.three_month, 4),
                six_month=round(entry.six_month, 4),
                twelve_month=round(entry.twelve_month, 4),
            )
        )
    return results
