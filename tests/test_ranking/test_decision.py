"""
Tests for stock_check/ranking/decision.py.

decide():
  - TRADE iff average >= 0.50 AND dispersion >= 0.60.
  - Equal growths (dispersion 0) -> NO TRADE even with a qualifying average.
  - Thresholds are inclusive.
  - Sector warning iff one sector holds >= 7 rows.
  - manual_override forces NO TRADE; sector warning unchanged.
  - Empty input -> ValueError.
"""

from __future__ import annotations

import pytest

from conftest import make_result
from stock_check.ranking.decision import decide

_SECTORS = ["Tech", "Energy", "Utilities", "Financials", "Consumer"]


def _primary(growths: list[float], sectors: list[str] | None = None):
    sectors = sectors or [_SECTORS[i % len(_SECTORS)] for i in range(len(growths))]
    return [
        make_result(i + 1, f"T{i:02d}", g, sectors[i]) for i, g in enumerate(growths)
    ]


class TestTradeHeader:
    def test_trade_when_both_rules_pass(self):
        growths = [round(1.45 - 0.1 * i, 4) for i in range(10)]   # avg 1.0, dispersion 0.9
        d = decide(_primary(growths))
        assert d.trade_header == "TRADE"
        assert d.average_growth == pytest.approx(1.0)
        assert d.dispersion == pytest.approx(0.9)

    def test_no_trade_when_dispersion_zero(self):
        d = decide(_primary([0.6] * 10))
        assert d.trade_header == "NO TRADE"
        assert d.dispersion == 0.0

    def test_no_trade_when_average_too_low(self):
        growths = [0.9] + [0.1] * 9
        d = decide(_primary(growths))
        assert d.trade_header == "NO TRADE"

    def test_thresholds_inclusive(self):
        # avg exactly 0.50, dispersion exactly 0.60
        growths = [0.8] + [0.2] + [0.5] * 8
        d = decide(_primary(growths))
        assert d.average_growth == pytest.approx(0.5)
        assert d.dispersion == pytest.approx(0.6)
        assert d.trade_header == "TRADE"

    def test_custom_thresholds(self):
        growths = [round(1.45 - 0.1 * i, 4) for i in range(10)]
        d = decide(_primary(growths), min_average_growth_pct=1.5)
        assert d.trade_header == "NO TRADE"


class TestSectorWarning:
    def test_all_one_sector(self):
        d = decide(_primary([1.0] * 10, ["Tech"] * 10))
        assert d.sector_warning is True
        assert d.dominant_sector == "Tech"
        assert d.dominant_count == 10

    def test_seven_of_ten_warns(self):
        d = decide(_primary([1.0] * 10, ["Tech"] * 7 + ["Energy"] * 3))
        assert d.sector_warning is True

    def test_six_of_ten_does_not_warn(self):
        d = decide(_primary([1.0] * 10, ["Tech"] * 6 + ["Energy"] * 4))
        assert d.sector_warning is False
        assert d.dominant_count == 6


class TestManualOverride:
    def test_override_forces_no_trade(self):
        growths = [round(1.45 - 0.1 * i, 4) for i in range(10)]
        d = decide(_primary(growths, ["Tech"] * 10), manual_override=True)
        assert d.trade_header == "NO TRADE"
        assert d.rule_header == "TRADE"
        assert d.manual_override is True

    def test_override_leaves_sector_warning(self):
        d = decide(_primary([1.0] * 10, ["Tech"] * 10), manual_override=True)
        assert d.sector_warning is True

    def test_override_on_no_trade_stays_no_trade(self):
        d = decide(_primary([0.6] * 10), manual_override=True)
        assert d.trade_header == "NO TRADE"


def test_empty_primary_raises():
    with pytest.raises(ValueError):
        decide([])


def test_primary_count_recorded():
    assert decide(_primary([1.0] * 10)).primary_count == 10
