"""
Strict output-contract validation.

``validate_output()`` runs on the wire representation of an output document
(the dict returned by ``OutputDocument.to_dict()``), so it checks exactly
what leaves the engine.  The first violation raises ``SchemaViolationError``
naming the field (and the row index for per-row fields).  There is no
lenient mode.

Document-level fields
---------------------
model_version     non-empty string (equal to the configured tag when given)
current_date      non-empty string
prediction_date   non-empty string
trade_header      "TRADE" | "NO TRADE"
sector_warning    bool
results           list of rows

Per-row fields
--------------
rank                          int, equals row position (1, 2, 3, ...)
ticker, company_name, sector  non-empty string
current_price                 finite number > 0
predicted_price               finite number
predicted_1day_growth_pct,
3_month, 6_month, 12_month    finite number
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from stock_check.errors import SchemaViolationError
from stock_check.factors.model import is_finite_number
from stock_check.models.result import RESULT_KEYS, VALID_TRADE_HEADERS, OutputDocument

_STRING_FIELDS = ("ticker", "company_name", "sector")
_NUMBER_FIELDS = (
    "predicted_price",
    "predicted_1day_growth_pct",
    "3_month",
    "6_month",
    "12_month",
)


def validate_output(
    document: Union[OutputDocument, Mapping[str, Any]],
    expected_model_version: Optional[str] = None,
) -> None:
    """Validate an output document against the output contract.

    Args:
        document:               ``OutputDocument`` or its wire dict.
        expected_model_version: When set, ``model_version`` must equal it.

    Raises:
        SchemaViolationError: On the first violated field.
    """
    data = document.to_dict() if isinstance(document, OutputDocument) else document
    if not isinstance(data, Mapping):
        raise SchemaViolationError("document", "output must be a mapping.")

    model_version = data.get("model_version")
    _require_string(model_version, "model_version")
    if expected_model_version is not None and model_version != expected_model_version:
        raise SchemaViolationError(
            "model_version",
            f"must be '{expected_model_version}', got '{model_version}'.",
        )

    _require_string(data.get("current_date"), "current_date")
    _require_string(data.get("prediction_date"), "prediction_date")

    if data.get("trade_header") not in VALID_TRADE_HEADERS:
        raise SchemaViolationError(
            "trade_header",
            f"must be one of {sorted(VALID_TRADE_HEADERS)}, got {data.get('trade_header')!r}.",
        )

    if not isinstance(data.get("sector_warning"), bool):
        raise SchemaViolationError(
            "sector_warning", f"must be a boolean, got {data.get('sector_warning')!r}."
        )

    results = data.get("results")
    if not isinstance(results, (list, tuple)):
        raise SchemaViolationError("results", "must be a list.")

    for idx, row in enumerate(results):
        _validate_row(row, idx)


def _validate_row(row: Any, idx: int) -> None:
    if not isinstance(row, Mapping):
        raise SchemaViolationError("row", "result row must be a mapping.", idx)

    for key in RESULT_KEYS:
        if key not in row:
            raise SchemaViolationError(key, "required key is missing.", idx)

    rank = row["rank"]
    if not isinstance(rank, int) or isinstance(rank, bool) or rank < 1:
        raise SchemaViolationError("rank", f"must be a positive integer, got {rank!r}.", idx)
    if rank != idx + 1:
        raise SchemaViolationError(
            "rank", f"must be contiguous from 1; expected {idx + 1}, got {rank}.", idx
        )

    for key in _STRING_FIELDS:
        _require_string(row[key], key, idx)

    price = row["current_price"]
    if not is_finite_number(price) or price <= 0:
        raise SchemaViolationError(
            "current_price", f"must be a finite number > 0, got {price!r}.", idx
        )

    for key in _NUMBER_FIELDS:
        if not is_finite_number(row[key]):
            raise SchemaViolationError(
                key, f"must be a finite number, got {row[key]!r}.", idx
            )


def _require_string(value: Any, field: str, idx: Optional[int] = None) -> None:
    if not isinstance(value, str) or not value.strip():
        raise SchemaViolationError(field, f"must be a non-empty string, got {value!r}.", idx)
