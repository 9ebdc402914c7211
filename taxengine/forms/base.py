"""Line model shared by output forms.

An output form is a set of numbered lines. Each line holds a tagged
FormValue so currency amounts and checkboxes travel through the same
interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import InvalidValueError


class OutputFormType(str, Enum):
    """Type of output form."""

    FORM_1040 = "1040"


class FormValueType(str, Enum):
    """Kind of value a form line holds."""

    CURRENCY = "currency"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FormValue:
    """A tagged line value. Build with ``currency()`` or ``boolean()``."""

    value_type: FormValueType
    value: UsdAmount | bool

    @classmethod
    def currency(cls, amount: UsdAmount) -> FormValue:
        return cls(FormValueType.CURRENCY, amount)

    @classmethod
    def boolean(cls, flag: bool) -> FormValue:
        return cls(FormValueType.BOOLEAN, flag)

    @classmethod
    def coerce(cls, value: FormValue | UsdAmount | bool) -> FormValue:
        """Wrap a raw UsdAmount or bool; pass FormValue through."""
        if isinstance(value, FormValue):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, UsdAmount):
            return cls.currency(value)
        raise InvalidValueError("line value", f"unsupported type {type(value).__name__}")

    def as_currency(self) -> UsdAmount:
        if self.value_type != FormValueType.CURRENCY:
            raise InvalidValueError("line value", f"expected currency, got {self.value_type.value}")
        return self.value  # type: ignore[return-value]

    def as_bool(self) -> bool:
        if self.value_type != FormValueType.BOOLEAN:
            raise InvalidValueError("line value", f"expected boolean, got {self.value_type.value}")
        return self.value  # type: ignore[return-value]

    def to_json(self) -> str | bool:
        """JSON-friendly form: decimal string for currency, bool otherwise."""
        if self.value_type == FormValueType.CURRENCY:
            return str(self.as_currency().amount)
        return self.as_bool()

    def __str__(self) -> str:
        if self.value_type == FormValueType.CURRENCY:
            return str(self.value)
        return "Yes" if self.value else "No"


@dataclass(frozen=True)
class FormLine:
    """One line of a form, as listed by ``OutputForm.lines()``."""

    line_id: str
    label: str
    value: FormValue


@runtime_checkable
class OutputForm(Protocol):
    """Line-setting and line-reading contract for output forms."""

    @property
    def form_type(self) -> OutputFormType: ...

    @property
    def tax_year(self) -> int: ...

    def line(self, line_id: str) -> FormValue | None: ...

    def lines(self) -> list[FormLine]: ...

    def set_line(self, line_id: str, value: FormValue | UsdAmount | bool) -> None: ...
