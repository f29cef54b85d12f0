"""
Predicted-growth resolution for a single universe entry.

Two variants, checked in order:

    direct    entry.predicted_1day_growth_pct is present and finite
    computed  entry.factor_inputs is present → factor model

Anything else is unresolvable and raises ``MissingGrowthError``.  Errors from
the factor model (missing / invalid factor, weight integrity) propagate
unchanged so the caller sees the exact factor that failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from stock_check.errors import MissingGrowthError
from stock_check.factors.model import compute_factor_score
from stock_check.models.universe import UniverseEntry

GrowthSource = Literal["direct", "computed"]


@dataclass(frozen=True)
class GrowthResolution:
    """Tagged result of growth resolution.

    Attributes:
        source:         ``"direct"`` or ``"computed"``.
        growth_pct:     Resolved predicted 1-day growth %.
        weighted_score: Factor-model score for ``"computed"``; ``None`` otherwise.
    """

    source:         GrowthSource
    growth_pct:     float
    weighted_score: Optional[float] = None


def resolve_growth(entry: UniverseEntry) -> GrowthResolution:
    """Resolve ``entry``'s predicted growth.

    Raises:
        MissingGrowthError: Neither a finite direct value nor factor inputs.
        MissingFactorError / InvalidFactorError / WeightIntegrityError:
            From the factor model.
    """
    if entry.has_direct_growth:
        return GrowthResolution(source="direct", growth_pct=float(entry.predicted_1day_growth_pct))

    if entry.factor_inputs is not None:
        score = compute_factor_score(entry.factor_inputs)
        return GrowthResolution(
            source="computed",
            growth_pct=score.predicted_growth_pct,
            weighted_score=score.weighted_score,
        )

    raise MissingGrowthError(entry.ticker_key)
