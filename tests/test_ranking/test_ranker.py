"""
Tests for stock_check/ranking/ranker.py.

rank_universe():
  - Universe below the minimum -> InsufficientUniverseError.
  - Full universe sorted by growth desc; ties by upper-cased ticker asc.
  - Primary set is the first top_n entries.
  - Required ticker appended when outside the primary set, exactly once.
  - Required ticker inside the primary set -> nothing appended.
  - Required ticker absent -> RequiredTickerMissingError.
  - Duplicate tickers (case-insensitive) -> InputContractError.
  - Mixed direct / computed growth entries rank together.
"""

from __future__ import annotations

import pytest

from conftest import make_entry, make_universe
from stock_check.errors import (
    InputContractError,
    InsufficientUniverseError,
    MissingGrowthError,
    RequiredTickerMissingError,
)
from stock_check.factors.spec import factor_ids
from stock_check.ingestion.mock_universe import make_mock_universe
from stock_check.ranking.ranker import rank_universe, ranking_key


class TestUniverseSize:
    def test_below_minimum_raises(self):
        with pytest.raises(InsufficientUniverseError, match="Universe size \\(50\\)") as exc_info:
            rank_universe(make_mock_universe(50))
        assert exc_info.value.size == 50
        assert exc_info.value.minimum == 100

    def test_exact_minimum_accepted(self):
        selection = rank_universe(make_mock_universe(100))
        assert len(selection.primary) == 10

    def test_custom_minimum(self):
        selection = rank_universe(make_mock_universe(60), min_universe_size=60)
        assert len(selection.ranked) == 60


class TestOrdering:
    def test_ranked_growth_non_increasing(self, mock_universe):
        selection = rank_universe(mock_universe)
        growths = [r.growth_pct for r in selection.ranked]
        assert growths == sorted(growths, reverse=True)

    def test_primary_is_top_10(self, mock_universe):
        selection = rank_universe(mock_universe)
        assert [r.ticker for r in selection.primary] == [f"T{i:03d}" for i in range(10)]

    def test_tie_break_by_ticker_case_insensitive(self):
        universe = make_universe([0.5] * 10)
        universe += [make_entry("msft", 3.0), make_entry("AAPL", 3.0), make_entry("Goog", 3.0)]
        selection = rank_universe(universe)
        assert [r.ticker for r in selection.primary[:3]] == ["AAPL", "GOOG", "MSFT"]

    def test_reproducible(self, mock_universe):
        first = rank_universe(mock_universe)
        second = rank_universe(list(reversed(mock_universe)))
        assert [r.ticker for r in first.ranked] == [r.ticker for r in second.ranked]

    def test_ranking_key(self):
        assert ranking_key("b", 1.0) < ranking_key("A", 0.5)
        assert ranking_key("a", 1.0) < ranking_key("B", 1.0)

    def test_custom_top_n(self, mock_universe):
        selection = rank_universe(mock_universe, top_n=5)
        assert len(selection.primary) == 5


class TestRequiredTicker:
    def test_appended_when_outside_primary(self, mock_universe):
        selection = rank_universe(mock_universe)
        assert selection.appended is not None
        assert selection.appended.ticker == "INTC"
        assert [r.ticker for r in selection.selected][-1] == "INTC"
        assert len(selection.selected) == 11

    def test_appended_at_worst_rank(self):
        universe = [
            e.model_copy(update={"predicted_1day_growth_pct": -99.0}) if e.ticker == "INTC" else e
            for e in make_mock_universe(250)
        ]
        selection = rank_universe(universe)
        assert selection.ranked[-1].ticker == "INTC"
        tickers = [r.ticker for r in selection.selected]
        assert tickers.count("INTC") == 1
        assert tickers[10] == "INTC"
        # Primary set untouched by the append.
        assert tickers[:10] == [f"T{i:03d}" for i in range(10)]

    def test_not_appended_when_in_primary(self):
        universe = [
            e.model_copy(update={"predicted_1day_growth_pct": 5.0}) if e.ticker == "INTC" else e
            for e in make_mock_universe(250)
        ]
        selection = rank_universe(universe)
        assert selection.appended is None
        assert selection.primary[0].ticker == "INTC"
        assert len(selection.selected) == 10

    def test_lowercase_required_ticker_matches(self):
        universe = make_universe([1.0] * 10, required_ticker="intc")
        selection = rank_universe(universe)
        assert selection.appended is not None
        assert selection.appended.ticker == "INTC"

    def test_missing_required_ticker(self):
        universe = make_mock_universe(250, required_ticker="AMD")
        with pytest.raises(RequiredTickerMissingError, match="INTC"):
            rank_universe(universe, required_ticker="INTC")

    def test_configurable_required_ticker(self):
        universe = make_mock_universe(250, required_ticker="AMD")
        selection = rank_universe(universe, required_ticker="amd")
        assert selection.appended.ticker == "AMD"


class TestInputFailures:
    def test_duplicate_ticker(self, mock_universe):
        universe = mock_universe + [make_entry("t001", 0.1)]
        with pytest.raises(InputContractError, match="T001"):
            rank_universe(universe)

    def test_unresolvable_growth(self, mock_universe):
        universe = mock_universe[:-1] + [make_entry("LAST", growth=None)]
        with pytest.raises(MissingGrowthError, match="LAST"):
            rank_universe(universe)


class TestComputedGrowth:
    def test_factor_entry_ranks_with_direct_entries(self, mock_universe):
        top_inputs = {fid: 1.0 for fid in factor_ids()}   # +3.0%
        universe = mock_universe + [make_entry("FACT", growth=None, factor_inputs=top_inputs)]
        selection = rank_universe(universe)
        first = selection.ranked[0]
        assert first.ticker == "FACT"
        assert first.resolution.source == "computed"
        assert first.growth_pct == 3.0
