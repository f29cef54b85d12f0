"""
Universe ranker: resolves growth for every entry, sorts the full universe,
selects the primary top-N, and appends the required ticker.

Usage flow
----------
1. rank_universe(universe, min_universe_size=100, required_ticker="INTC")
   -> RankingSelection

   selection.primary     top-N ResolvedEntry objects (rank order)
   selection.appended    the required ticker's ResolvedEntry, or None when it
                         is already in the primary set
   selection.selected    primary + appended (what gets priced and output)
   selection.ranked      the full sorted universe

Ordering
--------
Growth % descending; ties broken by upper-cased ticker ascending.  Python's
sort is stable, so identical keys keep input order and repeated runs over
the same input produce identical output.

The appended ticker never displaces or reorders the primary set and is not
part of ``primary``; the decision engine only ever sees ``primary``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from stock_check.errors import (
    InputContractError,
    InsufficientUniverseError,
    RequiredTickerMissingError,
)
from stock_check.models.universe import UniverseEntry
from stock_check.ranking.resolver import GrowthResolution, resolve_growth

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10
DEFAULT_MIN_UNIVERSE_SIZE = 100
DEFAULT_REQUIRED_TICKER = "INTC"


@dataclass(frozen=True)
class ResolvedEntry:
    """A universe entry coupled with its resolved growth."""

    entry:      UniverseEntry
    resolution: GrowthResolution

    @property
    def ticker(self) -> str:
        return self.entry.ticker_key

    @property
    def growth_pct(self) -> float:
        return self.resolution.growth_pct


@dataclass(frozen=True)
class RankingSelection:
    """Output of ``rank_universe``.

    Attributes:
        ranked:   Full universe in rank order.
        primary:  First ``top_n`` of ``ranked``.
        appended: Required-ticker entry appended after ``primary``, or None.
    """

    ranked:   tuple[ResolvedEntry, ...]
    primary:  tuple[ResolvedEntry, ...]
    appended: Optional[ResolvedEntry]

    @property
    def selected(self) -> tuple[ResolvedEntry, ...]:
        if self.appended is None:
            return self.primary
        return self.primary + (self.appended,)


def ranking_key(ticker: str, growth_pct: float) -> tuple[float, str]:
    """Sort key: growth descending, then case-normalized ticker ascending."""
    return (-growth_pct, ticker.upper())


def sort_resolved(items: Sequence[ResolvedEntry]) -> list[ResolvedEntry]:
    return sorted(items, key=lambda r: ranking_key(r.ticker, r.growth_pct))


def rank_universe(
    universe:          Sequence[UniverseEntry],
    min_universe_size: int = DEFAULT_MIN_UNIVERSE_SIZE,
    required_ticker:   str = DEFAULT_REQUIRED_TICKER,
    top_n:             int = DEFAULT_TOP_N,
) -> RankingSelection:
    """Rank the full universe and build the output selection.

    Args:
        universe:          Complete universe of entries.
        min_universe_size: Minimum accepted universe length.
        required_ticker:   Symbol that must appear in the selection.
        top_n:             Size of the primary set.

    Returns:
        ``RankingSelection``.

    Raises:
        InsufficientUniverseError:  ``len(universe) < min_universe_size``.
        InputContractError:         Duplicate ticker (case-insensitive).
        MissingGrowthError:         An entry's growth cannot be resolved.
        RequiredTickerMissingError: ``required_ticker`` is not in the universe.
    """
    if len(universe) < min_universe_size:
        raise InsufficientUniverseError(len(universe), min_universe_size)

    seen: set[str] = set()
    resolved: list[ResolvedEntry] = []
    computed_count = 0

    for entry in universe:
        key = entry.ticker_key
        if key in seen:
            raise InputContractError("universe", f"duplicate ticker {key}.")
        seen.add(key)

        resolution = resolve_growth(entry)
        if resolution.source == "computed":
            computed_count += 1
        resolved.append(ResolvedEntry(entry=entry, resolution=resolution))

    logger.debug(
        "Resolved growth for %d entries (%d direct, %d computed)",
        len(resolved), len(resolved) - computed_count, computed_count,
    )

    ranked = tuple(sort_resolved(resolved))
    primary = ranked[:top_n]

    required = required_ticker.upper()
    appended: Optional[ResolvedEntry] = None
    if not any(r.ticker == required for r in primary):
        appended = next((r for r in ranked if r.ticker == required), None)
        if appended is None:
            raise RequiredTickerMissingError(required)
        logger.info(
            "Required ticker %s outside top %d (universe position %d); appended",
            required, top_n, ranked.index(appended) + 1,
        )

    return RankingSelection(ranked=ranked, primary=primary, appended=appended)
