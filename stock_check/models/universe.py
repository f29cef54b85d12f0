"""
Universe entry model.

``UniverseEntry`` is one tradable instrument supplied by the data-retrieval
layer.  Trailing 3/6/12-month returns are mandatory and must be finite.  The
predicted 1-day growth % is either supplied directly or derived later from
``factor_inputs`` by the ranking resolver; this model does not decide which,
so that an unresolvable entry surfaces as ``MissingGrowthError`` naming the
ticker rather than as a generic validation failure.

Wire keys follow the output contract (``3_month``, ``6_month``, ``12_month``);
Python attribute names are ``three_month`` / ``six_month`` / ``twelve_month``.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Wire key → attribute name for the trailing-return fields.
TRAILING_RETURN_KEYS: dict[str, str] = {
    "3_month":  "three_month",
    "6_month":  "six_month",
    "12_month": "twelve_month",
}


class UniverseEntry(BaseModel):
    """One instrument in the ranking universe.

    Attributes:
        ticker: Exchange symbol.  Uniqueness is enforced case-insensitively by
            the ranker, not here.
        company_name: Display name.
        sector: Sector label used for concentration warnings.
        predicted_1day_growth_pct: Direct growth value, or ``None`` to derive
            it from ``factor_inputs``.  A non-finite value counts as absent.
        three_month: Trailing 3-month return %.
        six_month: Trailing 6-month return %.
        twelve_month: Trailing 12-month return %.
        factor_inputs: Raw factor mapping (``f01``..``f43``), or ``None``.
            Values are validated by the factor model, not here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ticker: str
    company_name: str
    sector: str
    predicted_1day_growth_pct: Optional[float] = None
    three_month: float = Field(alias="3_month")
    six_month: float = Field(alias="6_month")
    twelve_month: float = Field(alias="12_month")
    factor_inputs: Optional[dict[str, Any]] = None

    @field_validator("ticker", "company_name", "sector")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string.")
        return v.strip()

    @field_validator(
        "predicted_1day_growth_pct", "three_month", "six_month", "twelve_month", mode="before"
    )
    @classmethod
    def reject_non_numeric(cls, v: Any) -> Any:
        # Lax mode would coerce True -> 1.0 and "4.5" -> 4.5.
        if isinstance(v, (bool, str, bytes)):
            raise ValueError(f"must be a number, got {v!r}.")
        return v

    @field_validator("three_month", "six_month", "twelve_month")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"must be a finite number, got {v}.")
        return v

    @property
    def ticker_key(self) -> str:
        """Upper-cased ticker used for price lookup, tie-breaks and output."""
        return self.ticker.upper()

    @property
    def has_direct_growth(self) -> bool:
        v = self.predicted_1day_growth_pct
        return v is not None and math.isfinite(v)
