"""Exception hierarchy for the tax computation engine.

Every error raised by the engine derives from TaxError so callers can catch
engine failures in one place while still distinguishing the cases that need
different handling (unsupported year vs. bad input document).

Low-level IO and parse failures from collaborators (file reads, JSON/YAML
decoding, pydantic model parsing) are NOT wrapped in these types; they
propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taxengine.documents.validation import ValidationIssue


class TaxError(Exception):
    """Base class for all tax engine errors."""


class UnsupportedTaxYearError(TaxError):
    """Raised when rules are requested for a year outside the supported range.

    Attributes:
        year: The requested tax year.
        min_year: First supported tax year.
        max_year: Last supported tax year.
    """

    def __init__(self, year: int, min_year: int, max_year: int) -> None:
        self.year = year
        self.min_year = min_year
        self.max_year = max_year
        super().__init__(
            f"tax year {year} is not supported (supported: {min_year}-{max_year})"
        )


class RulesNotFoundError(TaxError):
    """Raised when a year inside the supported range has no rules table."""

    def __init__(self, year: int) -> None:
        self.year = year
        super().__init__(f"tax rules not found for year {year}")


class SchemaNotFoundError(TaxError):
    """Raised when an input document names a form type the engine doesn't know."""

    def __init__(self, form_type: str, year: int) -> None:
        self.form_type = form_type
        self.year = year
        super().__init__(f"form schema not found: {form_type} for year {year}")


class MissingInputError(TaxError):
    """Raised when a required input is absent."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing required input: {name}")


class InvalidValueError(TaxError):
    """Raised when a field holds a value the engine cannot accept."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"invalid value for {field}: {reason}")


class InvalidIdentifierError(InvalidValueError):
    """Raised when a taxpayer or employer identifier is malformed."""

    def __init__(self, field: str, value: str, expected: str) -> None:
        self.value = value
        self.expected = expected
        super().__init__(field, f"{value!r} does not match {expected}")


class InconsistentDataError(TaxError):
    """Raised when documents on the same return contradict each other."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"inconsistent data: {reason}")


class CalculationOverflowError(TaxError):
    """Raised when currency arithmetic cannot be carried out exactly."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"calculation overflow: {operation}")


class FormNotCalculatedError(TaxError):
    """Raised when a derived form line is read before the form was calculated."""

    def __init__(self, form_name: str, line_id: str) -> None:
        self.form_name = form_name
        self.line_id = line_id
        super().__init__(
            f"{form_name} line {line_id} is derived; call calculate() before reading it"
        )


class ValidationFailedError(InvalidValueError):
    """Raised when validation collected at least one error-severity issue.

    Attributes:
        issues: Every issue collected, warnings included.
    """

    def __init__(self, issues: list["ValidationIssue"]) -> None:
        self.issues = issues
        messages = [
            f"{issue.field}: {issue.message}" for issue in issues if issue.is_error
        ]
        super().__init__("multiple", "; ".join(messages))
