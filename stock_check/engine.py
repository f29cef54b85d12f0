"""
Stock Check engine: input contract → ranking → assembly → decision →
validation → display ordering.

Contract
--------
Input::

    current_date     non-empty string (a ``datetime.date`` is converted to ISO)
    prediction_date  non-empty string (same)
    universe         list of UniverseEntry (or wire dicts)
    price_map        mapping ticker -> positive finite EOD price
    manual_override  bool, optional — forces "NO TRADE"

Output: ``StockCheckReport`` holding the validated ``OutputDocument``, the
canonical display columns and the display-sorted rows.

The engine is a pure synchronous computation.  It holds only its frozen
configuration, performs no I/O and keeps nothing between calls; each call
returns new immutable objects.  Every failure raises a ``StockCheckError``
subclass immediately.  Nothing is defaulted or fetched.

Usage::

    engine = StockCheckEngine.from_app_config(load_config())
    report = engine.run(StockCheckRequest(
        current_date="2026-02-14",
        prediction_date="2026-02-15",
        universe=universe,
        price_map={"INTC": 31.2, ...},
    ))
    report.document.trade_header
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Union

from pydantic import ValidationError

from stock_check.config import AppConfig, DecisionConfig, EngineConfig
from stock_check.errors import InputContractError, InsufficientUniverseError
from stock_check.models.result import CANONICAL_COLUMNS, OutputDocument, RankedResult
from stock_check.models.universe import UniverseEntry
from stock_check.ranking.assembler import assemble_results
from stock_check.ranking.decision import Decision, decide
from stock_check.ranking.display import sort_for_display
from stock_check.ranking.ranker import rank_universe
from stock_check.ranking.validator import validate_output

logger = logging.getLogger(__name__)

UniverseInput = Sequence[Union[UniverseEntry, Mapping[str, Any]]]


@dataclass(frozen=True)
class StockCheckRequest:
    """One engine invocation's inputs."""

    current_date:    Union[str, date]
    prediction_date: Union[str, date]
    universe:        UniverseInput
    price_map:       Mapping[str, Any]
    manual_override: bool = False


@dataclass(frozen=True)
class StockCheckReport:
    """Engine output.

    Attributes:
        document:  Validated output document (rank order).
        display:   Same rows in presentation order.
        decision:  Decision details (averages, dominant sector).
        columns:   Canonical display column labels.
    """

    document: OutputDocument
    display:  tuple[RankedResult, ...]
    decision: Decision
    columns:  tuple[str, ...] = field(default=CANONICAL_COLUMNS)

    def to_dict(self) -> dict[str, Any]:
        """``{"output": ..., "table": {"columns": [...], "rows": [...]}}``."""
        return {
            "output": self.document.to_dict(),
            "table": {
                "columns": list(self.columns),
                "rows":    [r.to_dict() for r in self.display],
            },
        }


class StockCheckEngine:
    """Runs the Stock Check pipeline with explicit configuration.

    Attributes:
        engine_config:   Model version, universe minimum, required ticker, top-N.
        decision_config: Trade header and sector warning thresholds.
    """

    def __init__(
        self,
        engine_config:   Optional[EngineConfig] = None,
        decision_config: Optional[DecisionConfig] = None,
    ) -> None:
        self.engine_config = engine_config or EngineConfig()
        self.decision_config = decision_config or DecisionConfig()

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "StockCheckEngine":
        return cls(engine_config=config.engine, decision_config=config.decision)

    def run(self, request: StockCheckRequest) -> StockCheckReport:
        """Execute one stock check.

        Raises:
            InputContractError, InsufficientUniverseError, MissingGrowthError,
            MissingFactorError, InvalidFactorError, WeightIntegrityError,
            RequiredTickerMissingError, MissingPriceError, SchemaViolationError.
        """
        cfg = self.engine_config

        current_date = _require_date(request.current_date, "current_date")
        prediction_date = _require_date(request.prediction_date, "prediction_date")

        if isinstance(request.universe, (str, bytes)) or not isinstance(request.universe, Sequence):
            raise InputContractError("universe", "must be a list of universe entries.")
        if len(request.universe) < cfg.min_universe_size:
            raise InsufficientUniverseError(len(request.universe), cfg.min_universe_size)

        if not isinstance(request.price_map, Mapping):
            raise InputContractError("price_map", "EOD prices are required as a ticker -> price mapping.")
        if not isinstance(request.manual_override, bool):
            raise InputContractError(
                "manual_override", f"must be a boolean, got {request.manual_override!r}."
            )

        universe = parse_universe(request.universe)
        logger.info(
            "Stock check %s -> %s | universe=%d prices=%d override=%s",
            current_date, prediction_date, len(universe),
            len(request.price_map), request.manual_override,
        )

        selection = rank_universe(
            universe,
            min_universe_size=cfg.min_universe_size,
            required_ticker=cfg.required_ticker,
            top_n=cfg.top_n,
        )

        results = assemble_results(selection.selected, request.price_map)
        primary_results = results[: len(selection.primary)]

        dc = self.decision_config
        decision = decide(
            primary_results,
            manual_override=request.manual_override,
            min_average_growth_pct=dc.min_average_growth_pct,
            min_dispersion_pct=dc.min_dispersion_pct,
            sector_concentration_threshold=dc.sector_concentration_threshold,
        )

        document = OutputDocument(
            model_version=cfg.model_version,
            current_date=current_date,
            prediction_date=prediction_date,
            trade_header=decision.trade_header,
            sector_warning=decision.sector_warning,
            results=tuple(results),
        )
        validate_output(document, expected_model_version=cfg.model_version)

        display = tuple(sort_for_display(document.results))
        logger.info(
            "Stock check complete: %d results, header=%s, sector_warning=%s",
            len(document.results), document.trade_header, document.sector_warning,
        )
        return StockCheckReport(document=document, display=display, decision=decision)


def run_stock_check(
    current_date:    Union[str, date],
    prediction_date: Union[str, date],
    universe:        UniverseInput,
    price_map:       Mapping[str, Any],
    manual_override: bool = False,
    config:          Optional[AppConfig] = None,
) -> StockCheckReport:
    """Convenience wrapper: build an engine from ``config`` and run once."""
    engine = StockCheckEngine.from_app_config(config or AppConfig())
    return engine.run(
        StockCheckRequest(
            current_date=current_date,
            prediction_date=prediction_date,
            universe=universe,
            price_map=price_map,
            manual_override=manual_override,
        )
    )


def parse_universe(raw: UniverseInput) -> list[UniverseEntry]:
    """Coerce wire dicts to ``UniverseEntry``; pass model instances through.

    Raises:
        InputContractError: Naming the entry index, ticker and field that
            failed validation.
    """
    entries: list[UniverseEntry] = []
    for i, item in enumerate(raw):
        if isinstance(item, UniverseEntry):
            entries.append(item)
            continue
        if not isinstance(item, Mapping):
            raise InputContractError(f"universe[{i}]", "entry must be a mapping.")
        try:
            entries.append(UniverseEntry.model_validate(dict(item)))
        except ValidationError as exc:
            err = exc.errors()[0]
            loc = ".".join(str(p) for p in err["loc"]) or "entry"
            ticker = item.get("ticker") or "<no ticker>"
            raise InputContractError(
                f"universe[{i}].{loc}", f"{ticker}: {err['msg']}"
            ) from exc
    return entries


def _require_date(value: Any, field_name: str) -> str:
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        raise InputContractError(field_name, "is required (YYYY-MM-DD).")
    return value.strip()
