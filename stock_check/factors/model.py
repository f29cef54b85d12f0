"""
43-factor scoring model: raw factor inputs → weighted score → predicted growth.

Pipeline (per call)
-------------------
1. Every factor id in the locked table must be present in ``inputs`` and
   hold a finite real number.  No partial computation.
2. Each raw value is normalized into [0, 1]:
     - values already in [0, 1] pass through unchanged;
     - anything else is treated as a z-score, clamped to ±12 and compressed
       through the logistic function into (0, 1).
   This keeps the model deterministic without historical distributions.
3. Weighted sum with weight = weight_pct / 100.  The accumulated weight must
   be 1.0 within ±0.001.
4. The score is clamped to [0, 1] and mapped linearly to growth %:

       score 0.0  →  -3.0 %
       score 0.5  →   0.0 %
       score 1.0  →  +3.0 %

   The ±3 % slope is a pinned calibration constant.
5. Score and growth are rounded to 4 decimals.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass

from stock_check.errors import (
    InputContractError,
    InvalidFactorError,
    MissingFactorError,
    WeightIntegrityError,
)
from stock_check.factors.spec import FACTORS_43, FactorDefinition

Z_CLAMP = 12.0
GROWTH_SLOPE_PCT = 6.0          # (score - 0.5) * 6.0 → [-3.0, +3.0]
WEIGHT_SUM_TOLERANCE = 0.001


@dataclass(frozen=True)
class FactorScore:
    """Output of the factor model for one instrument.

    Attributes:
        weighted_score:       Clamped weighted score in [0, 1], 4 decimals.
        predicted_growth_pct: Predicted 1-day growth %, 4 decimals.
    """

    weighted_score:       float
    predicted_growth_pct: float


def is_finite_number(value: object) -> bool:
    """True for real, finite numbers.  Booleans are rejected."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def normalize_factor_value(value: float) -> float:
    """Map a raw factor value into [0, 1].

    Values already in [0, 1] are returned unchanged; anything else is read as
    a z-score and passed through a logistic curve after clamping to ±12.
    """
    if 0.0 <= value <= 1.0:
        return float(value)
    z = max(-Z_CLAMP, min(Z_CLAMP, value))
    return 1.0 / (1.0 + math.exp(-z))


def score_to_growth_pct(score: float) -> float:
    """Linear calibration from weighted score to predicted growth %."""
    s = max(0.0, min(1.0, score))
    return (s - 0.5) * GROWTH_SLOPE_PCT


def compute_factor_score(
    inputs: Mapping[str, object],
    factors: tuple[FactorDefinition, ...] = FACTORS_43,
) -> FactorScore:
    """Compute the weighted score and predicted growth for one input mapping.

    Args:
        inputs:  Mapping of factor id → raw numeric value.  Extra keys are
                 ignored.
        factors: Factor table to score against.  Defaults to the locked
                 43-factor table; override only in tests.

    Returns:
        ``FactorScore`` with both values rounded to 4 decimals.

    Raises:
        InputContractError:   ``inputs`` is not a mapping.
        MissingFactorError:   A factor id is absent from ``inputs``.
        InvalidFactorError:   A value is not a finite real number.
        WeightIntegrityError: Factor weights do not sum to 100%.
    """
    if not isinstance(inputs, Mapping):
        raise InputContractError(
            "factor_inputs", "must be a mapping keyed by factor id (f01..f43)."
        )

    weighted = 0.0
    weight_sum = 0.0

    for f in factors:
        if f.id not in inputs:
            raise MissingFactorError(f.id, f.name)
        raw = inputs[f.id]
        if not is_finite_number(raw):
            raise InvalidFactorError(f.id, raw, f.name)

        w = f.weight_pct / 100.0
        weighted += normalize_factor_value(raw) * w
        weight_sum += w

    if not (1.0 - WEIGHT_SUM_TOLERANCE <= weight_sum <= 1.0 + WEIGHT_SUM_TOLERANCE):
        raise WeightIntegrityError(weight_sum)

    score = max(0.0, min(1.0, weighted))
    return FactorScore(
        weighted_score=round(score, 4),
        predicted_growth_pct=round(score_to_growth_pct(score), 4),
    )


def compute_growth(
    inputs: Mapping[str, object],
    factors: tuple[FactorDefinition, ...] = FACTORS_43,
) -> float:
    """Return predicted 1-day growth % (4 decimals) for ``inputs``."""
    return compute_factor_score(inputs, factors).predicted_growth_pct
