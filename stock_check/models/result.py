"""
Output contract models.

``RankedResult`` is one output row; ``OutputDocument`` is the full result
set returned to the presentation layer.  Both are frozen and created fresh
per engine invocation.

The wire shape (``to_dict()``) and the ten display labels in
``CANONICAL_COLUMNS`` are permanent external contracts: never reorder or
rename them.  Field-level enforcement of the contract lives in
``stock_check.ranking.validator``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TradeHeader = Literal["TRADE", "NO TRADE"]
TRADE: TradeHeader = "TRADE"
NO_TRADE: TradeHeader = "NO TRADE"
VALID_TRADE_HEADERS: frozenset[str] = frozenset({TRADE, NO_TRADE})

CANONICAL_COLUMNS: tuple[str, ...] = (
    "Rank",
    "Ticker",
    "Company Name",
    "Sector",
    "Current Price",
    "Predicted Price",
    "Predicted 1-Day % Growth",
    "3-Month",
    "6-Month",
    "12-Month",
)

# Wire keys of a result row, in the same order as CANONICAL_COLUMNS.
RESULT_KEYS: tuple[str, ...] = (
    "rank",
    "ticker",
    "company_name",
    "sector",
    "current_price",
    "predicted_price",
    "predicted_1day_growth_pct",
    "3_month",
    "6_month",
    "12_month",
)

COLUMN_KEY_MAP: dict[str, str] = dict(zip(CANONICAL_COLUMNS, RESULT_KEYS))


class RankedResult(BaseModel):
    """One ranked output row.

    Attributes:
        rank: 1-based contiguous position in selection order.
        ticker: Upper-cased ticker.
        company_name: Company display name.
        sector: Sector label.
        current_price: User-supplied EOD price, 2 decimals.
        predicted_price: ``current_price * (1 + growth / 100)``, 2 decimals.
        predicted_1day_growth_pct: Growth %, 4 decimals.
        three_month / six_month / twelve_month: Trailing returns %, 4 decimals.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rank: int
    ticker: str
    company_name: str
    sector: str
    current_price: float
    predicted_price: float
    predicted_1day_growth_pct: float
    three_month: float = Field(alias="3_month")
    six_month: float = Field(alias="6_month")
    twelve_month: float = Field(alias="12_month")

    def to_dict(self) -> dict[str, Any]:
        """Wire representation, keys in canonical order."""
        return self.model_dump(by_alias=True)

    def to_display_row(self) -> dict[str, Any]:
        """Row keyed by the canonical display labels."""
        data = self.to_dict()
        return {label: data[key] for label, key in COLUMN_KEY_MAP.items()}


class OutputDocument(BaseModel):
    """The engine's result set.

    Attributes:
        model_version: Engine version tag (e.g. ``"Stock Check v1.0"``).
        current_date: Caller-supplied as-of date string.
        prediction_date: Caller-supplied target date string.
        trade_header: ``"TRADE"`` or ``"NO TRADE"``.
        sector_warning: True when one sector dominates the primary set.
        results: Rows in rank order (primary set first, appended ticker last).
    """

    model_config = ConfigDict(frozen=True)

    model_version: str
    current_date: str
    prediction_date: str
    trade_header: TradeHeader
    sector_warning: bool
    results: tuple[RankedResult, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_version":   self.model_version,
            "current_date":    self.current_date,
            "prediction_date": self.prediction_date,
            "trade_header":    self.trade_header,
            "sector_warning":  self.sector_warning,
            "results":         [r.to_dict() for r in self.results],
        }
