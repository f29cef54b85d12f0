"""
Locked 43-factor table for the predicted-growth model.

This module is the single source of truth for every factor the model reads.
Factors are keyed by stable ids ``f01``..``f43`` so a display-name change can
never silently break an input mapping.  The table is versioned: any weight
revision gets a new ``FACTOR_SPEC_VERSION`` so historical outputs remain
traceable to the weights that produced them.

Groups (weight %)
-----------------
Momentum & Price Structure            18.0
Earnings & Revenue Acceleration       16.0
Options & Flow Signals                14.0
Volatility Structure                  10.0
Relative Strength & Sector Rotation   12.0
Liquidity & Institutional Behavior    10.0
Risk Compression & Acceleration       10.0
Macro Overlay Inputs                  10.0
                                     -----
                                     100.0
"""

from __future__ import annotations

from dataclasses import dataclass

FACTOR_SPEC_VERSION = "43-factor-spec@2026-02-14"
EXPECTED_FACTOR_COUNT = 43


@dataclass(frozen=True)
class FactorDefinition:
    """One locked factor.

    Attributes:
        id:         Stable identifier (``"f01"``..``"f43"``).
        group:      Factor group label.
        name:       Display name.
        definition: Short description of what the raw input measures.
        weight_pct: Weight in percent (all weights sum to 100).
    """

    id: str
    group: str
    name: str
    definition: str
    weight_pct: float


@dataclass(frozen=True)
class FactorSpec:
    """Read-only snapshot of the locked factor table."""

    version: str
    total_weight_pct: float
    factors: tuple[FactorDefinition, ...]

    @property
    def factor_ids(self) -> tuple[str, ...]:
        return tuple(f.id for f in self.factors)


_MOM = "Momentum & Price Structure"
_EARN = "Earnings & Revenue Acceleration"
_OPT = "Options & Flow Signals"
_VOL = "Volatility Structure"
_RS = "Relative Strength & Sector Rotation"
_LIQ = "Liquidity & Institutional Behavior"
_RISK = "Risk Compression & Acceleration"
_MACRO = "Macro Overlay Inputs"

# ── Registry ──────────────────────────────────────────────────────────────────
# Order here is the canonical factor order.

FACTORS_43: tuple[FactorDefinition, ...] = (

    # ── I. Momentum & Price Structure (18%) ────────────────────────────────
    FactorDefinition("f01", _MOM, "5-Day Momentum",          "% change over 5 trading days", 2.0),
    FactorDefinition("f02", _MOM, "10-Day Momentum",         "% change over 10 days",        2.0),
    FactorDefinition("f03", _MOM, "20-Day Momentum",         "% change over 20 days",        2.0),
    FactorDefinition("f04", _MOM, "50-Day Trend Position",   "% above/below 50DMA",          2.5),
    FactorDefinition("f05", _MOM, "200-Day Trend Position",  "% above/below 200DMA",         2.5),
    FactorDefinition("f06", _MOM, "RSI Compression",         "RSI normalized 0-100",         2.0),
    FactorDefinition("f07", _MOM, "MACD Slope",              "Rate of change of MACD",       2.0),
    FactorDefinition("f08", _MOM, "Breakout Velocity",       "Distance from 30-day high",    3.0),

    # ── II. Earnings & Revenue Acceleration (16%) ──────────────────────────
    FactorDefinition("f09", _EARN, "EPS YoY Growth",            "Year-over-year EPS growth", 3.0),
    FactorDefinition("f10", _EARN, "EPS QoQ Acceleration",      "Sequential acceleration",   3.0),
    FactorDefinition("f11", _EARN, "Revenue YoY Growth",        "Revenue growth YoY",        3.0),
    FactorDefinition("f12", _EARN, "Revenue QoQ Acceleration",  "Sequential revenue change", 3.0),
    FactorDefinition("f13", _EARN, "Earnings Surprise",         "Last earnings beat %",      2.0),
    FactorDefinition("f14", _EARN, "Forward Guidance Revision", "Analyst upward revisions",  2.0),

    # ── III. Options & Flow Signals (14%) ──────────────────────────────────
    FactorDefinition("f15", _OPT, "Call/Put Volume Ratio",    "Relative bullish flow",    3.0),
    FactorDefinition("f16", _OPT, "Unusual Options Activity", "Z-score vs 30-day avg",    3.0),
    FactorDefinition("f17", _OPT, "Open Interest Expansion",  "OI % increase",            2.0),
    FactorDefinition("f18", _OPT, "Dark Pool Flow Bias",      "Net institutional prints", 3.0),
    FactorDefinition("f19", _OPT, "Block Trade Accumulation", "Large trade clustering",   3.0),

    # ── IV. Volatility Structure (10%) ─────────────────────────────────────
    FactorDefinition("f20", _VOL, "Implied Volatility Rank", "IV vs 1Y range",         2.5),
    FactorDefinition("f21", _VOL, "IV Skew",                 "Call vs put skew",       2.0),
    FactorDefinition("f22", _VOL, "Volatility Compression",  "Bollinger Band width",   2.5),
    FactorDefinition("f23", _VOL, "ATR Expansion",           "ATR vs 20-day baseline", 3.0),

    # ── V. Relative Strength & Sector Rotation (12%) ───────────────────────
    FactorDefinition("f24", _RS, "Relative Strength vs SPY",        "20-day relative return", 3.0),
    FactorDefinition("f25", _RS, "Relative Strength vs Sector ETF", "Relative to sector",     3.0),
    FactorDefinition("f26", _RS, "Sector Momentum Rank",            "Sector percentile",      3.0),
    FactorDefinition("f27", _RS, "Cross-Sector Capital Rotation",   "ETF flow direction",     3.0),

    # ── VI. Liquidity & Institutional Behavior (10%) ───────────────────────
    FactorDefinition("f28", _LIQ, "Volume Surge Ratio",             "Volume vs 30-day avg",     3.0),
    FactorDefinition("f29", _LIQ, "Institutional Ownership Change", "QoQ change",               2.5),
    FactorDefinition("f30", _LIQ, "Insider Buying Activity",        "Net insider accumulation", 2.5),
    FactorDefinition("f31", _LIQ, "Short Interest Compression",     "Days-to-cover trend",      2.0),

    # ── VII. Risk Compression & Acceleration (10%) ─────────────────────────
    FactorDefinition("f32", _RISK, "Beta Adjustment",           "Risk-normalized return",   2.0),
    FactorDefinition("f33", _RISK, "Downside Deviation",        "30-day downside risk",     2.0),
    FactorDefinition("f34", _RISK, "Price Gap Frequency",       "Positive gaps last 30d",   2.0),
    FactorDefinition("f35", _RISK, "Accumulation/Distribution", "Money flow trend",         2.0),
    FactorDefinition("f36", _RISK, "Acceleration Curve Fit",    "2nd derivative momentum",  2.0),

    # ── VIII. Macro Overlay Inputs (10%) ───────────────────────────────────
    FactorDefinition("f37", _MACRO, "Market Breadth",               "Adv/Decline ratio",     2.0),
    FactorDefinition("f38", _MACRO, "VIX Direction",                "5-day VIX trend",       2.0),
    FactorDefinition("f39", _MACRO, "Treasury Yield Trend",         "10Y rate direction",    2.0),
    FactorDefinition("f40", _MACRO, "Dollar Index Trend",           "DXY direction",         1.5),
    FactorDefinition("f41", _MACRO, "Fed Liquidity Proxy",          "Balance sheet change",  1.5),
    FactorDefinition("f42", _MACRO, "Economic Surprise Index",      "Macro surprise score",  0.5),
    FactorDefinition("f43", _MACRO, "Risk-On / Risk-Off Composite", "Cross-asset signal",    0.5),
)


# ── Query helpers ─────────────────────────────────────────────────────────────

def total_weight_pct(factors: tuple[FactorDefinition, ...] = FACTORS_43) -> float:
    """Sum of ``weight_pct`` across ``factors``."""
    return sum(f.weight_pct for f in factors)


def get_spec() -> FactorSpec:
    """Return the locked factor table as read-only reference data."""
    return FactorSpec(
        version=FACTOR_SPEC_VERSION,
        total_weight_pct=total_weight_pct(),
        factors=FACTORS_43,
    )


def factor_ids() -> tuple[str, ...]:
    """Return factor ids in canonical order."""
    return tuple(f.id for f in FACTORS_43)


def group_weights() -> dict[str, float]:
    """Return total weight percent per group, in table order."""
    out: dict[str, float] = {}
    for f in FACTORS_43:
        out[f.group] = out.get(f.group, 0.0) + f.weight_pct
    return out
