"""Validation of input documents and return-level facts.

Validators never stop at the first problem: every check runs and each
failure becomes a ValidationIssue in a ValidationErrors accumulator, so a
preparer sees the whole list in one pass. Errors block computation;
warnings are reported alongside the result.

Example:
    >>> from taxengine.documents.validation import DocumentValidator
    >>> validator = DocumentValidator()
    >>> issues = validator.validate_w2(w2_data, rules)
    >>> if issues.has_errors():
    ...     print(f"Errors: {issues.errors()}")
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from taxengine.documents.models import InputForm, InputFormType, W2Data
from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import InvalidIdentifierError, ValidationFailedError
from taxengine.tax.rules import TaxRules
from taxengine.tax.types import Dependent, FilingStatus, TaxpayerInfo

if TYPE_CHECKING:
    from taxengine.personal_tax.calculator import TaxReturnInput

SSN_PATTERN = re.compile(r"^[0-9]{3}-[0-9]{2}-[0-9]{4}$")
EIN_PATTERN = re.compile(r"^[0-9]{2}-[0-9]{7}$")

VALID_BOX_12_CODES = frozenset(
    {
        "A", "B", "C", "D", "E", "F", "G", "H", "J", "K", "L", "M", "N", "P",
        "Q", "R", "S", "T", "V", "W", "Y", "Z", "AA", "BB", "DD", "EE", "FF",
        "GG", "HH",
    }
)


class ValidationSeverity(str, Enum):
    """Severity of a validation issue."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found during validation.

    Attributes:
        field: Dotted path of the offending value (e.g. "W-2.employee_ssn").
        message: Human-readable description.
        severity: ERROR blocks computation; WARNING is informational.
    """

    field: str
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity == ValidationSeverity.ERROR

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.field}: {self.message}"


@dataclass
class ValidationErrors:
    """Accumulator for validation issues."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def add(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def add_error(self, field_name: str, message: str) -> None:
        self.add(ValidationIssue(field_name, message, ValidationSeverity.ERROR))

    def add_warning(self, field_name: str, message: str) -> None:
        self.add(ValidationIssue(field_name, message, ValidationSeverity.WARNING))

    def extend(self, other: ValidationErrors | Iterable[ValidationIssue]) -> None:
        issues = other.issues if isinstance(other, ValidationErrors) else other
        self.issues.extend(issues)

    def has_errors(self) -> bool:
        return any(issue.is_error for issue in self.issues)

    def has_warnings(self) -> bool:
        return any(not issue.is_error for issue in self.issues)

    def is_empty(self) -> bool:
        return not self.issues

    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.is_error]

    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if not issue.is_error]

    def all(self) -> list[ValidationIssue]:
        return list(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def raise_for_errors(self) -> None:
        """Raise ValidationFailedError if any ERROR-severity issue was collected.

        Raises:
            ValidationFailedError: Carrying every collected issue; its message
                joins the error messages with "; ".
        """
        if self.has_errors():
            raise ValidationFailedError(self.all())


# =============================================================================
# Identifier checks
# =============================================================================


def require_ssn(field_name: str, value: str) -> None:
    """Check an SSN is formatted XXX-XX-XXXX.

    Raises:
        InvalidIdentifierError: If the value does not match.
    """
    if not SSN_PATTERN.match(value):
        raise InvalidIdentifierError(field_name, value, "XXX-XX-XXXX")


def require_ein(field_name: str, value: str) -> None:
    """Check an EIN is formatted XX-XXXXXXX.

    Raises:
        InvalidIdentifierError: If the value does not match.
    """
    if not EIN_PATTERN.match(value):
        raise InvalidIdentifierError(field_name, value, "XX-XXXXXXX")


def require_tin(field_name: str, value: str) -> None:
    """Check a TIN is formatted as either an SSN or an EIN.

    Raises:
        InvalidIdentifierError: If the value matches neither format.
    """
    if not (SSN_PATTERN.match(value) or EIN_PATTERN.match(value)):
        raise InvalidIdentifierError(field_name, value, "XXX-XX-XXXX or XX-XXXXXXX")


def _last4(tin: str) -> str:
    return re.sub(r"\D", "", tin)[-4:]


class DocumentValidator:
    """Validate input documents and return-level facts.

    Each ``validate_*`` method returns a fresh ValidationErrors; the
    ``validate_return`` entry point runs all of them and merges the results.

    Example:
        >>> validator = DocumentValidator()
        >>> issues = validator.validate_return(tax_return, rules)
        >>> issues.raise_for_errors()
    """

    TOLERANCE = UsdAmount.from_dollars(10)

    def _check_identifier(
        self,
        issues: ValidationErrors,
        field_name: str,
        value: str,
        check: Callable[[str, str], None],
    ) -> None:
        if not value.strip():
            return
        try:
            check(field_name, value.strip())
        except InvalidIdentifierError as exc:
            issues.add_error(field_name, f"must be formatted as {exc.expected}")

    def _check_non_negative(self, issues: ValidationErrors, form: InputForm) -> None:
        for name, value in form.money_fields().items():
            if value.is_negative():
                issues.add_error(f"{form.label}.{name}", f"cannot be negative ({value})")

    # =========================================================================
    # Single documents
    # =========================================================================

    def validate_w2(self, w2: W2Data, rules: TaxRules) -> ValidationErrors:
        """Validate W-2 data for format and internal consistency.

        Checks:
        - Employee SSN and employer EIN formats
        - No negative money boxes (including state/local entries)
        - Box 12 codes are IRS codes
        - Federal withholding doesn't exceed wages
        - Social Security wages don't exceed the annual wage base
        - Social Security tax is approximately 6.2% of SS wages
        - Medicare tax is approximately 1.45% of Medicare wages

        Args:
            w2: W2Data model to validate.
            rules: Tax rules supplying the wage base and payroll rates.

        Returns:
            ValidationErrors with any errors or warnings.
        """
        issues = ValidationErrors()
        label = w2.label

        self._check_identifier(issues, f"{label}.employee_ssn", w2.employee_ssn, require_ssn)
        self._check_identifier(issues, f"{label}.employer_ein", w2.employer_ein, require_ein)
        self._check_non_negative(issues, w2)

        for index, entry in enumerate(w2.state_info):
            if entry.state_wages.is_negative() or entry.state_tax_withheld.is_negative():
                issues.add_error(f"{label}.state_info[{index}]", "cannot be negative")
        for index, entry in enumerate(w2.local_info):
            if entry.local_wages.is_negative() or entry.local_tax_withheld.is_negative():
                issues.add_error(f"{label}.local_info[{index}]", "cannot be negative")

        for index, box in enumerate(w2.box_12_codes):
            code = box.code.strip().upper()
            if code not in VALID_BOX_12_CODES:
                issues.add_error(f"{label}.box_12_codes[{index}]", f"unknown Box 12 code {box.code!r}")
            if box.amount.is_negative():
                issues.add_error(f"{label}.box_12_codes[{index}]", "cannot be negative")

        wages = w2.wages_tips_compensation
        withheld = w2.federal_tax_withheld
        if wages.is_positive() and withheld > wages:
            issues.add_error(
                f"{label}.federal_tax_withheld",
                f"Federal withholding ({withheld}) exceeds wages ({wages})",
            )

        wage_base = rules.ss_wage_base
        ss_wages = w2.social_security_wages
        if wage_base.is_positive() and ss_wages > wage_base:
            issues.add_warning(
                f"{label}.social_security_wages",
                f"Social Security wages ({ss_wages}) exceed {rules.tax_year} wage base ({wage_base})",
            )

        if ss_wages.is_positive() and w2.social_security_tax.is_positive():
            capped = ss_wages.min(wage_base) if wage_base.is_positive() else ss_wages
            expected = capped.multiply_rate(rules.ss_rate_employee)
            if (w2.social_security_tax - expected).abs() > self.TOLERANCE:
                issues.add_warning(
                    f"{label}.social_security_tax",
                    f"Social Security tax ({w2.social_security_tax}) doesn't match "
                    f"expected ({expected} at {_percent(rules.ss_rate_employee)})",
                )

        if w2.medicare_wages.is_positive() and w2.medicare_tax.is_positive():
            expected = w2.medicare_wages.multiply_rate(rules.medicare_rate)
            if (w2.medicare_tax - expected).abs() > self.TOLERANCE:
                issues.add_warning(
                    f"{label}.medicare_tax",
                    f"Medicare tax ({w2.medicare_tax}) doesn't match "
                    f"expected ({expected} at {_percent(rules.medicare_rate)})",
                )

        return issues

    def validate_information_return(self, form: InputForm) -> ValidationErrors:
        """Validate a 1099/1098/SSA-1099 document.

        Checks payer and recipient TIN formats and that no money box is
        negative.
        """
        issues = ValidationErrors()
        payer_field = "payer_tin"
        for candidate in ("payer_tin", "lender_tin", "institution_tin"):
            if candidate in type(form).model_fields:
                payer_field = candidate
                break
        payer_tin = getattr(form, payer_field, "")
        if payer_tin:
            self._check_identifier(issues, f"{form.label}.{payer_field}", payer_tin, require_tin)
        self._check_identifier(
            issues,
            f"{form.label}.{form.RECIPIENT_TIN_FIELD}",
            form.recipient_identifier,
            require_tin,
        )
        self._check_non_negative(issues, form)
        return issues

    def validate_document(self, form: InputForm, rules: TaxRules) -> ValidationErrors:
        if isinstance(form, W2Data):
            return self.validate_w2(form, rules)
        return self.validate_information_return(form)

    # =========================================================================
    # People
    # =========================================================================

    def validate_taxpayer(self, info: TaxpayerInfo, field_name: str) -> ValidationErrors:
        issues = ValidationErrors()
        self._check_identifier(issues, f"{field_name}.ssn", info.ssn, require_ssn)
        return issues

    def validate_dependents(self, dependents: list[Dependent]) -> ValidationErrors:
        """Validate dependent SSNs and flag dependents that lose the CTC."""
        issues = ValidationErrors()
        for index, dependent in enumerate(dependents):
            field_name = f"dependents[{index}]"
            self._check_identifier(issues, f"{field_name}.ssn", dependent.ssn, require_ssn)
            if (
                not dependent.ssn.strip()
                and dependent.age < 17
                and dependent.is_qualifying_child_relationship
            ):
                issues.add_warning(
                    f"{field_name}.ssn",
                    "no SSN; dependent only qualifies for the Credit for Other Dependents",
                )
        return issues

    # =========================================================================
    # Cross-document
    # =========================================================================

    def validate_cross_document(
        self,
        forms: list[InputForm],
        tax_year: int,
        filing_status: FilingStatus,
        has_spouse: bool,
    ) -> ValidationErrors:
        """Cross-document and return-level consistency validation.

        Checks:
        - Every document's tax year matches the return year (error)
        - Recipient TINs name no more people than the return covers (warning)
        - A spouse is present for MFJ (error) and absent otherwise (warning)

        Args:
            forms: Every input document on the return.
            tax_year: The return's tax year.
            filing_status: The return's filing status.
            has_spouse: Whether spouse information was supplied.

        Returns:
            ValidationErrors with any errors or warnings.
        """
        issues = ValidationErrors()

        for form in forms:
            if form.tax_year is not None and form.tax_year != tax_year:
                issues.add_error(
                    f"{form.label}.tax_year",
                    f"document is for {form.tax_year}, return is for {tax_year}",
                )

        joint = filing_status == FilingStatus.MARRIED_FILING_JOINTLY
        tins = {
            _last4(form.recipient_identifier)
            for form in forms
            if form.form_type != InputFormType.FORM_1098_T
            and form.recipient_identifier.strip()
        }
        if len(tins) > (2 if joint else 1):
            issues.add_warning(
                "documents",
                f"Multiple TIN last-4 found across documents: {sorted(tins)}. "
                "Verify all documents are for the same taxpayer.",
            )

        if joint and not has_spouse:
            issues.add_error("spouse", "spouse information is required for married filing jointly")
        elif has_spouse and not joint and filing_status != FilingStatus.MARRIED_FILING_SEPARATELY:
            issues.add_warning(
                "spouse",
                f"spouse information supplied but filing status is {filing_status.label}",
            )

        return issues

    # =========================================================================
    # Whole return
    # =========================================================================

    def validate_return(self, tax_return: TaxReturnInput, rules: TaxRules) -> ValidationErrors:
        """Run every check against a return and collect all issues."""
        issues = ValidationErrors()
        issues.extend(self.validate_taxpayer(tax_return.taxpayer, "taxpayer"))
        if tax_return.spouse is not None:
            issues.extend(self.validate_taxpayer(tax_return.spouse, "spouse"))
        issues.extend(self.validate_dependents(tax_return.dependents))
        for form in tax_return.documents:
            issues.extend(self.validate_document(form, rules))
        issues.extend(
            self.validate_cross_document(
                list(tax_return.documents),
                tax_return.tax_year,
                tax_return.filing_status,
                tax_return.spouse is not None,
            )
        )
        issues.extend(self.validate_manual_entries(tax_return))
        return issues

    def validate_manual_entries(self, tax_return: TaxReturnInput) -> ValidationErrors:
        issues = ValidationErrors()
        for name, value in tax_return.manual.money_fields().items():
            if value.is_negative():
                issues.add_error(f"manual.{name}", f"cannot be negative ({value})")
        return issues


def _percent(rate: Decimal) -> str:
    return f"{(rate * 100).normalize()}%"
