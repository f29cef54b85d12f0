"""
Trade header and sector warning, computed from the primary set only.

Rules
-----
    TRADE      average growth >= 0.50  AND  dispersion (max - min) >= 0.60
    NO TRADE   otherwise, or whenever ``manual_override`` is set

    sector_warning  any single sector holds >= 7 rows of the primary set

The appended required ticker is never passed in here.  The manual override
only affects the header; the sector warning is always the computed value.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from stock_check.models.result import NO_TRADE, TRADE, RankedResult, TradeHeader

logger = logging.getLogger(__name__)

DEFAULT_MIN_AVERAGE_GROWTH_PCT = 0.50
DEFAULT_MIN_DISPERSION_PCT = 0.60
DEFAULT_SECTOR_CONCENTRATION = 7

# Growth values carry 4 decimals; comparing at 6 keeps threshold ties exact.
_COMPARE_DECIMALS = 6


@dataclass(frozen=True)
class Decision:
    """Outcome of the decision rules.

    Attributes:
        trade_header:       Final header after any manual override.
        rule_header:        Header the rules produced before the override.
        sector_warning:     True when one sector dominates the primary set.
        average_growth:     Mean growth % across the primary set.
        dispersion:         Max minus min growth % across the primary set.
        dominant_sector:    Most frequent sector (first seen on ties).
        dominant_count:     Rows held by ``dominant_sector``.
        manual_override:    Whether the override was applied.
        primary_count:      Rows the rules were computed over.
    """

    trade_header:    TradeHeader
    rule_header:     TradeHeader
    sector_warning:  bool
    average_growth:  float
    dispersion:      float
    dominant_sector: Optional[str]
    dominant_count:  int
    manual_override: bool
    primary_count:   int


def decide(
    primary:                        Sequence[RankedResult],
    manual_override:                bool = False,
    min_average_growth_pct:         float = DEFAULT_MIN_AVERAGE_GROWTH_PCT,
    min_dispersion_pct:             float = DEFAULT_MIN_DISPERSION_PCT,
    sector_concentration_threshold: int = DEFAULT_SECTOR_CONCENTRATION,
) -> Decision:
    """Apply the trade-header and sector-warning rules to ``primary``.

    Raises:
        ValueError: ``primary`` is empty.
    """
    if not primary:
        raise ValueError("Decision rules need at least one primary result.")

    growths = [r.predicted_1day_growth_pct for r in primary]
    average = sum(growths) / len(growths)
    dispersion = max(growths) - min(growths)

    passes_average = round(average, _COMPARE_DECIMALS) >= min_average_growth_pct
    passes_dispersion = round(dispersion, _COMPARE_DECIMALS) >= min_dispersion_pct
    rule_header: TradeHeader = TRADE if passes_average and passes_dispersion else NO_TRADE

    sector_counts = Counter(r.sector for r in primary)
    dominant_sector, dominant_count = sector_counts.most_common(1)[0]
    sector_warning = dominant_count >= sector_concentration_threshold

    trade_header: TradeHeader = NO_TRADE if manual_override else rule_header

    logger.info(
        "Decision: header=%s (rule=%s, override=%s) avg=%.4f dispersion=%.4f "
        "sector_warning=%s (%s x%d)",
        trade_header, rule_header, manual_override, average, dispersion,
        sector_warning, dominant_sector, dominant_count,
    )

    return Decision(
        trade_header=trade_header,
        rule_header=rule_header,
        sector_warning=sector_warning,
        average_growth=round(average, 4),
        dispersion=round(dispersion, 4),
        dominant_sector=dominant_sector,
        dominant_count=dominant_count,
        manual_override=manual_override,
        primary_count=len(primary),
    )
