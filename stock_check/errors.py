"""
Error taxonomy for the Stock Check engine.

Every failure is raised synchronously and propagates unmodified to the
caller.  The engine never catches these to substitute a default, a fetched
value, or a partial result.  Each error records the offending field, ticker
or factor identifier as an attribute so callers can report it without
parsing the message.
"""

from __future__ import annotations


class StockCheckError(Exception):
    """Base class for all Stock Check engine failures."""


class InputContractError(StockCheckError):
    """Raised when a required top-level input is missing or malformed.

    Attributes:
        field: Name of the offending input field.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        super().__init__(f"Input contract violation on '{field}': {detail}")


class InsufficientUniverseError(StockCheckError):
    """Raised when the universe is smaller than the configured minimum.

    Attributes:
        size:     Number of entries supplied.
        minimum:  Required minimum size.
    """

    def __init__(self, size: int, minimum: int) -> None:
        self.size    = size
        self.minimum = minimum
        super().__init__(
            f"Universe size ({size}) is below required minimum ({minimum}). "
            "Refusing partial-universe ranking."
        )


class MissingGrowthError(StockCheckError):
    """Raised when an entry has neither a direct growth value nor factor inputs.

    Attributes:
        ticker: The unresolvable ticker.
    """

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(
            f"Missing predicted_1day_growth_pct for {ticker}: no direct value and "
            "no factor inputs. Cannot rank on partial data."
        )


class MissingFactorError(StockCheckError):
    """Raised when a factor input mapping lacks one of the 43 identifiers.

    Attributes:
        factor_id: Identifier of the missing factor (e.g. ``"f17"``).
    """

    def __init__(self, factor_id: str, factor_name: str = "") -> None:
        self.factor_id = factor_id
        label = f"{factor_id} ({factor_name})" if factor_name else factor_id
        super().__init__(
            f"Missing factor input: {label}. Cannot compute a partial model."
        )


class InvalidFactorError(StockCheckError):
    """Raised when a factor input is not a finite number.

    Attributes:
        factor_id: Identifier of the invalid factor.
        value:     The rejected raw value.
    """

    def __init__(self, factor_id: str, value: object, factor_name: str = "") -> None:
        self.factor_id = factor_id
        self.value     = value
        label = f"{factor_id} ({factor_name})" if factor_name else factor_id
        super().__init__(
            f"Invalid factor input for {label}: must be a finite number, got {value!r}."
        )


class WeightIntegrityError(StockCheckError):
    """Raised when the accumulated factor weight is not 100%.

    Attributes:
        weight_sum: Accumulated weight as a unit fraction.
    """

    def __init__(self, weight_sum: float) -> None:
        self.weight_sum = weight_sum
        super().__init__(
            f"Model weights do not sum to 100%. Got {weight_sum * 100:.4f}%."
        )


class RequiredTickerMissingError(StockCheckError):
    """Raised when the required ticker is absent from the whole universe.

    Attributes:
        ticker: The required ticker symbol.
    """

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(
            f"{ticker} must be appended to results, but {ticker} is not present "
            "in the universe data."
        )


class MissingPriceError(StockCheckError):
    """Raised when an output ticker has no valid user-supplied price.

    Attributes:
        ticker: Upper-cased ticker that lacks a price.
    """

    def __init__(self, ticker: str, value: object = None) -> None:
        self.ticker = ticker
        self.value  = value
        super().__init__(
            f"Missing/invalid user-supplied EOD price for {ticker} (got {value!r}). "
            "Prices are never fetched or inferred."
        )


class SchemaViolationError(StockCheckError):
    """Raised when an output document breaks the output contract.

    Attributes:
        field:     Offending field name.
        row_index: 0-based index into ``results`` when the field is per-row,
                   else ``None``.
    """

    def __init__(self, field: str, detail: str, row_index: int | None = None) -> None:
        self.field     = field
        self.row_index = row_index
        where = f"results[{row_index}].{field}" if row_index is not None else field
        super().__init__(f"Schema violation at {where}: {detail}")
