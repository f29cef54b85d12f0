"""
Presentation ordering for result rows.

Non-negative growth rows first, then negative growth rows; each group sorted
by growth descending with the same ticker tie-break as ranking.  This order
is for display only and never feeds back into ranks, the required-ticker
rule, or the decision engine.
"""

from __future__ import annotations

from collections.abc import Sequence

from stock_check.models.result import RankedResult
from stock_check.ranking.ranker import ranking_key


def sort_for_display(results: Sequence[RankedResult]) -> list[RankedResult]:
    gains = [r for r in results if r.predicted_1day_growth_pct >= 0]
    losses = [r for r in results if r.predicted_1day_growth_pct < 0]

    def key(r: RankedResult) -> tuple[float, str]:
        return ranking_key(r.ticker, r.predicted_1day_growth_pct)

    return sorted(gains, key=key) + sorted(losses, key=key)
