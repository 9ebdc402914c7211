"""USD currency amount with exact arithmetic and IRS rounding rules.

UsdAmount wraps a Decimal and keeps full precision through every add,
subtract and rate multiplication. Rounding only happens when a caller asks
for it (round_to_cents, round_to_dollar), and both round half away from
zero, which is what the IRS instructions mean by "amounts under 50 cents
round down; 50 cents and over round up".

Example:
    >>> from taxengine.tax.currency import UsdAmount
    >>> UsdAmount.from_cents(12350).round_to_dollar()
    UsdAmount(amount=Decimal('124'))
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import (
    ROUND_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from taxengine.tax.errors import CalculationOverflowError, InvalidValueError

# Arithmetic context: any operation that would have to round raises instead.
_EXACT = Context(
    prec=34,
    rounding=ROUND_HALF_EVEN,
    traps=[Inexact, Overflow, InvalidOperation],
)

_CENT = Decimal("0.01")
_DOLLAR = Decimal("1")


def _to_decimal(value: Any) -> Decimal:
    """Convert a boundary value into a Decimal without binary float error.

    Floats only arrive from JSON parsers; they are converted through their
    shortest repr (``123.45`` -> ``Decimal("123.45")``).
    """
    if isinstance(value, bool):
        raise InvalidValueError("amount", f"expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "")
        try:
            result = Decimal(text) if text else Decimal("0")
        except InvalidOperation as exc:
            raise InvalidValueError("amount", f"not a number: {value!r}") from exc
    else:
        raise InvalidValueError(
            "amount", f"unsupported type {type(value).__name__}"
        )
    if not result.is_finite():
        raise InvalidValueError("amount", f"not a finite number: {value!r}")
    return result


@dataclass(frozen=True, order=True)
class UsdAmount:
    """An exact U.S. dollar amount.

    Attributes:
        amount: The underlying decimal value in dollars.
    """

    amount: Decimal

    ZERO: ClassVar["UsdAmount"]

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", _to_decimal(self.amount))

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_cents(cls, cents: int) -> UsdAmount:
        """Create from an integer number of cents (12345 -> $123.45)."""
        return cls(Decimal(cents).scaleb(-2))

    @classmethod
    def from_dollars(cls, dollars: int) -> UsdAmount:
        """Create from an integer number of whole dollars."""
        return cls(Decimal(dollars))

    @classmethod
    def coerce(cls, value: Any) -> UsdAmount:
        """Convert user or document input into a UsdAmount.

        Accepts UsdAmount, Decimal, int, str ("1,234.50", "$12") and
        floats produced by JSON decoders. None becomes zero.

        Raises:
            InvalidValueError: If the value is not a finite number.
        """
        if isinstance(value, UsdAmount):
            return value
        if value is None:
            return cls.ZERO
        return cls(_to_decimal(value))

    @classmethod
    def total(cls, amounts: Iterable[UsdAmount]) -> UsdAmount:
        """Sum an iterable of amounts; an empty iterable sums to zero."""
        result = cls.ZERO
        for amount in amounts:
            result = result + amount
        return result

    # -------------------------------------------------------------------------
    # Predicates and accessors
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def as_decimal(self) -> Decimal:
        return self.amount

    def as_cents(self) -> int:
        """Return the amount in whole cents, truncating fractions of a cent."""
        return int(self.amount.scaleb(2).to_integral_value(rounding=ROUND_DOWN))

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> UsdAmount:
        if not isinstance(other, UsdAmount):
            return NotImplemented
        return _apply("add", _EXACT.add, self.amount, other.amount)

    def __radd__(self, other: object) -> UsdAmount:
        # Lets the builtin sum() start from its integer 0.
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: object) -> UsdAmount:
        if not isinstance(other, UsdAmount):
            return NotImplemented
        return _apply("subtract", _EXACT.subtract, self.amount, other.amount)

    def __neg__(self) -> UsdAmount:
        return UsdAmount(self.amount.copy_negate())

    def __mul__(self, other: object) -> UsdAmount:
        if isinstance(other, bool) or not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.multiply_rate(Decimal(other))

    __rmul__ = __mul__

    def multiply_rate(self, rate: Decimal) -> UsdAmount:
        """Multiply by a decimal rate (e.g. a bracket rate of 0.22).

        Raises:
            CalculationOverflowError: If the product cannot be held exactly.
        """
        if not isinstance(rate, Decimal):
            raise TypeError(f"rate must be a Decimal, got {type(rate).__name__}")
        return _apply("multiply", _EXACT.multiply, self.amount, rate)

    def saturating_sub(self, other: UsdAmount) -> UsdAmount:
        """Subtract, returning zero instead of a negative result."""
        if self.amount > other.amount:
            return self - other
        return UsdAmount.ZERO

    def abs(self) -> UsdAmount:
        return UsdAmount(self.amount.copy_abs())

    def min(self, other: UsdAmount) -> UsdAmount:
        return self if self.amount <= other.amount else other

    def max(self, other: UsdAmount) -> UsdAmount:
        return self if self.amount >= other.amount else other

    # -------------------------------------------------------------------------
    # Rounding
    # -------------------------------------------------------------------------

    def round_to_cents(self) -> UsdAmount:
        """Round to 2 decimal places, half away from zero."""
        return UsdAmount(self.amount.quantize(_CENT, rounding=ROUND_HALF_UP))

    def round_to_dollar(self) -> UsdAmount:
        """Round to whole dollars, half away from zero ($123.50 -> $124)."""
        return UsdAmount(self.amount.quantize(_DOLLAR, rounding=ROUND_HALF_UP))

    def trunc_to_dollar(self) -> UsdAmount:
        """Drop the cents (toward zero)."""
        return UsdAmount(self.amount.quantize(_DOLLAR, rounding=ROUND_DOWN))

    # -------------------------------------------------------------------------
    # Display and pydantic integration
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        cents = self.round_to_cents().amount
        sign = "-" if cents < 0 else ""
        return f"{sign}${abs(cents):,.2f}"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: str(value.amount), when_used="json"
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> UsdAmount:
        # pydantic only collects ValueError into a ValidationError.
        try:
            return cls.coerce(value)
        except InvalidValueError as exc:
            raise ValueError(exc.reason) from exc

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"anyOf": [{"type": "number"}, {"type": "string"}], "examples": ["1234.56"]}


def _apply(operation: str, func: Any, left: Decimal, right: Decimal) -> UsdAmount:
    try:
        return UsdAmount(func(left, right))
    except (Inexact, Overflow) as exc:
        raise CalculationOverflowError(f"{operation} {left} and {right}") from exc


UsdAmount.ZERO = UsdAmount(Decimal("0"))
