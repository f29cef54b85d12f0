"""
Tests for stock_check/ranking/assembler.py.

assemble_results():
  - Rank is contiguous from 1 in selection order.
  - Predicted price = price * (1 + growth/100), 2 decimals.
  - Percentages rounded to 4 decimals; tickers upper-cased.
  - Price looked up under the upper-cased ticker only.
  - Missing / zero / negative / non-finite / non-numeric price ->
    MissingPriceError naming the ticker.
"""

from __future__ import annotations

import pytest

from conftest import make_entry
from stock_check.errors import MissingPriceError
from stock_check.models.universe import UniverseEntry
from stock_check.ranking.assembler import assemble_results, lookup_price, predicted_price
from stock_check.ranking.ranker import ResolvedEntry
from stock_check.ranking.resolver import resolve_growth


def _resolved(entry: UniverseEntry) -> ResolvedEntry:
    return ResolvedEntry(entry=entry, resolution=resolve_growth(entry))


class TestAssembleResults:
    def test_contiguous_ranks_in_selection_order(self):
        selection = [_resolved(make_entry(t, g)) for t, g in [("B", 2.0), ("A", 1.0), ("C", -1.0)]]
        results = assemble_results(selection, {"A": 10.0, "B": 20.0, "C": 30.0})
        assert [r.rank for r in results] == [1, 2, 3]
        assert [r.ticker for r in results] == ["B", "A", "C"]

    def test_predicted_price(self):
        results = assemble_results([_resolved(make_entry("AAA", 2.0))], {"AAA": 123.45})
        assert results[0].current_price == 123.45
        assert results[0].predicted_price == 125.92

    def test_negative_growth_price(self):
        results = assemble_results([_resolved(make_entry("AAA", -2.5))], {"AAA": 40.0})
        assert results[0].predicted_price == 39.0

    def test_rounding(self):
        entry = UniverseEntry(
            ticker="aaa",
            company_name="Alpha",
            sector="Tech",
            predicted_1day_growth_pct=1.23456789,
            three_month=4.444449,
            six_month=-0.000049,
            twelve_month=12.3,
        )
        r = assemble_results([_resolved(entry)], {"AAA": 10.0})[0]
        assert r.ticker == "AAA"
        assert r.predicted_1day_growth_pct == 1.2346
        assert r.three_month == 4.4444
        assert r.six_month == 0.0
        assert r.twelve_month == 12.3
        assert r.company_name == "Alpha"
        assert r.sector == "Tech"

    def test_lowercase_price_key_not_accepted(self):
        with pytest.raises(MissingPriceError, match="AAA"):
            assemble_results([_resolved(make_entry("aaa", 1.0))], {"aaa": 10.0})

    def test_missing_price_names_ticker(self):
        selection = [_resolved(make_entry("AAA", 2.0)), _resolved(make_entry("BBB", 1.0))]
        with pytest.raises(MissingPriceError) as exc_info:
            assemble_results(selection, {"AAA": 10.0})
        assert exc_info.value.ticker == "BBB"

    @pytest.mark.parametrize(
        "bad", [0, -1.0, float("nan"), float("inf"), "10.0", None, True]
    )
    def test_invalid_price(self, bad):
        with pytest.raises(MissingPriceError, match="AAA"):
            assemble_results([_resolved(make_entry("AAA", 1.0))], {"AAA": bad})

    def test_empty_selection(self):
        assert assemble_results([], {}) == []


class TestHelpers:
    def test_lookup_price_uppercases(self):
        assert lookup_price({"INTC": 31}, "intc") == 31.0

    def test_predicted_price_zero_growth(self):
        assert predicted_price(55.55, 0.0) == 55.55
