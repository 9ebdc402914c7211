"""Tests for UsdAmount arithmetic, rounding and coercion."""

from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import CalculationOverflowError, InvalidValueError


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Tests for building amounts from boundary values."""

    def test_from_cents(self) -> None:
        assert UsdAmount.from_cents(12345).amount == Decimal("123.45")

    def test_from_dollars(self) -> None:
        assert UsdAmount.from_dollars(500).amount == Decimal("500")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1,234.50", Decimal("1234.50")),
            ("$12", Decimal("12")),
            (123.45, Decimal("123.45")),
            (7, Decimal("7")),
            ("", Decimal("0")),
            (None, Decimal("0")),
        ],
    )
    def test_coerce(self, raw: object, expected: Decimal) -> None:
        """Document strings, JSON floats and blanks all coerce exactly."""
        assert UsdAmount.coerce(raw).amount == expected

    def test_coerce_rejects_garbage(self) -> None:
        with pytest.raises(InvalidValueError, match="not a number"):
            UsdAmount.coerce("twelve dollars")

    def test_coerce_rejects_bool(self) -> None:
        with pytest.raises(InvalidValueError):
            UsdAmount.coerce(True)

    def test_coerce_rejects_infinity(self) -> None:
        with pytest.raises(InvalidValueError, match="finite"):
            UsdAmount.coerce("Infinity")

    def test_total_of_nothing_is_zero(self) -> None:
        assert UsdAmount.total([]) == UsdAmount.ZERO

    def test_builtin_sum(self) -> None:
        amounts = [UsdAmount.from_cents(150), UsdAmount.from_cents(250)]
        assert sum(amounts) == UsdAmount.from_dollars(4)


# =============================================================================
# Arithmetic
# =============================================================================


class TestArithmetic:
    """Tests for exact arithmetic."""

    def test_add_and_subtract_are_exact(self) -> None:
        a = UsdAmount.coerce("0.10")
        b = UsdAmount.coerce("0.20")
        assert (a + b).amount == Decimal("0.30")
        assert (a - b).amount == Decimal("-0.10")

    def test_multiply_rate_keeps_full_precision(self) -> None:
        """Rate products are not rounded until asked."""
        result = UsdAmount.coerce("1525").multiply_rate(Decimal("0.22"))
        assert result.amount == Decimal("335.50")

    def test_multiply_rate_requires_decimal(self) -> None:
        with pytest.raises(TypeError):
            UsdAmount.from_dollars(100).multiply_rate(0.22)  # type: ignore[arg-type]

    def test_multiply_by_int(self) -> None:
        assert UsdAmount.from_dollars(2200) * 3 == UsdAmount.from_dollars(6600)

    def test_saturating_sub_floors_at_zero(self) -> None:
        small = UsdAmount.from_dollars(100)
        large = UsdAmount.from_dollars(250)
        assert small.saturating_sub(large) == UsdAmount.ZERO
        assert large.saturating_sub(small) == UsdAmount.from_dollars(150)

    def test_min_max_abs(self) -> None:
        a = UsdAmount.from_dollars(-5)
        b = UsdAmount.from_dollars(3)
        assert a.min(b) == a
        assert a.max(b) == b
        assert a.abs() == UsdAmount.from_dollars(5)

    def test_negation_and_abs_are_exact(self) -> None:
        """Sign changes never round, whatever the number of digits."""
        long_amount = UsdAmount(Decimal("1234567890123456789012345.6789"))
        assert (-long_amount).amount == Decimal("-1234567890123456789012345.6789")
        assert UsdAmount.ZERO - long_amount == -long_amount
        assert (-long_amount).abs() == long_amount

    def test_ordering(self) -> None:
        assert UsdAmount.from_dollars(1) < UsdAmount.from_dollars(2)

    def test_inexact_product_raises(self) -> None:
        """Products that would need rounding fail instead of losing cents."""
        huge = UsdAmount(Decimal("1234567890123456789012345678901.23"))
        with pytest.raises(CalculationOverflowError):
            huge.multiply_rate(Decimal("0.123456789"))


# =============================================================================
# Rounding
# =============================================================================


class TestRounding:
    """Tests for IRS whole-dollar and cent rounding."""

    @pytest.mark.parametrize(
        ("cents", "dollars"),
        [
            (12349, 123),
            (12350, 124),
            (-12350, -124),
            (-12349, -123),
        ],
    )
    def test_round_to_dollar_half_away_from_zero(self, cents: int, dollars: int) -> None:
        assert UsdAmount.from_cents(cents).round_to_dollar() == UsdAmount.from_dollars(dollars)

    def test_round_to_cents(self) -> None:
        assert UsdAmount.coerce("10.005").round_to_cents().amount == Decimal("10.01")
        assert UsdAmount.coerce("10.004").round_to_cents().amount == Decimal("10.00")

    def test_trunc_to_dollar(self) -> None:
        assert UsdAmount.coerce("99.99").trunc_to_dollar() == UsdAmount.from_dollars(99)

    def test_as_cents_truncates(self) -> None:
        assert UsdAmount.coerce("1.239").as_cents() == 123


# =============================================================================
# Display and pydantic
# =============================================================================


class TestDisplay:
    """Tests for string formatting and model integration."""

    def test_str(self) -> None:
        assert str(UsdAmount.coerce("1234.5")) == "$1,234.50"
        assert str(UsdAmount.coerce("-42")) == "-$42.00"

    def test_pydantic_field_round_trip(self) -> None:
        """Models accept raw numbers and dump decimal strings to JSON."""

        class Payment(BaseModel):
            amount: UsdAmount

        payment = Payment(amount="1,000.25")
        assert payment.amount == UsdAmount.coerce("1000.25")
        assert payment.model_dump(mode="json") == {"amount": "1000.25"}

    def test_pydantic_rejects_garbage_as_validation_error(self) -> None:
        class Payment(BaseModel):
            amount: UsdAmount

        with pytest.raises(ValidationError):
            Payment(amount="abc")
