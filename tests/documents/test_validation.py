"""Tests for document, people and cross-document validation."""

import pytest

from taxengine.documents.models import (
    Box12Code,
    Form1098T,
    Form1099INT,
    Form1099NEC,
    FormSSA1099,
    StateTaxInfo,
    W2Data,
)
from taxengine.documents.validation import (
    DocumentValidator,
    ValidationErrors,
    ValidationIssue,
    ValidationSeverity,
    require_ein,
    require_ssn,
    require_tin,
)
from taxengine.personal_tax.calculator import ManualEntries, TaxReturnInput
from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import InvalidIdentifierError, InvalidValueError, ValidationFailedError
from taxengine.tax.rules import TaxRules
from taxengine.tax.types import Dependent, DependentRelationship, FilingStatus, TaxpayerInfo


@pytest.fixture
def validator() -> DocumentValidator:
    return DocumentValidator()


def fields_of(issues: list[ValidationIssue]) -> list[str]:
    return [issue.field for issue in issues]


# =============================================================================
# Accumulator
# =============================================================================


class TestValidationErrors:
    """Tests for the issue accumulator."""

    def test_empty(self) -> None:
        issues = ValidationErrors()
        assert issues.is_empty()
        assert not issues.has_errors()
        issues.raise_for_errors()

    def test_warnings_do_not_raise(self) -> None:
        issues = ValidationErrors()
        issues.add_warning("documents", "check this")
        assert issues.has_warnings()
        assert not issues.has_errors()
        issues.raise_for_errors()

    def test_raise_carries_every_issue(self) -> None:
        issues = ValidationErrors()
        issues.add_error("W-2.employee_ssn", "must be formatted as XXX-XX-XXXX")
        issues.add_warning("documents", "check this")
        issues.add_error("W-2.wages_tips_compensation", "cannot be negative (-$1.00)")

        with pytest.raises(ValidationFailedError) as exc_info:
            issues.raise_for_errors()

        exc = exc_info.value
        assert isinstance(exc, InvalidValueError)
        assert exc.field == "multiple"
        assert len(exc.issues) == 3
        assert exc.reason == (
            "W-2.employee_ssn: must be formatted as XXX-XX-XXXX; "
            "W-2.wages_tips_compensation: cannot be negative (-$1.00)"
        )

    def test_extend_and_split(self) -> None:
        first = ValidationErrors()
        first.add_error("a", "bad")
        second = ValidationErrors()
        second.add_warning("b", "odd")
        first.extend(second)

        assert len(first) == 2
        assert fields_of(first.errors()) == ["a"]
        assert fields_of(first.warnings()) == ["b"]
        assert str(first.all()[1]) == "warning: b: odd"


# =============================================================================
# Identifiers
# =============================================================================


class TestIdentifiers:
    """Tests for SSN/EIN/TIN format checks."""

    def test_valid(self) -> None:
        require_ssn("ssn", "123-45-6789")
        require_ein("ein", "12-3456789")
        require_tin("tin", "12-3456789")
        require_tin("tin", "123-45-6789")

    @pytest.mark.parametrize(
        "value",
        ["123456789", "123-456-789", "abc-de-fghi", "", "\u0661\u0662\u0663-\u0664\u0665-\u0666\u0667\u0668\u0669"],
    )
    def test_invalid_ssn(self, value: str) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            require_ssn("ssn", value)
        assert exc_info.value.expected == "XXX-XX-XXXX"

    def test_invalid_ein(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            require_ein("ein", "123-45-6789")

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            require_ein("ein", "\uff11\uff12-3456789")


# =============================================================================
# W-2
# =============================================================================


class TestValidateW2:
    """Tests for W-2 format and consistency checks."""

    def test_valid_w2(self, validator: DocumentValidator, sample_w2: W2Data, rules: TaxRules) -> None:
        assert validator.validate_w2(sample_w2, rules).is_empty()

    def test_reports_every_problem(self, validator: DocumentValidator, rules: TaxRules) -> None:
        """An invalid SSN and negative wages are both reported."""
        w2 = W2Data(employee_ssn="123456789", wages_tips_compensation="-100")

        issues = validator.validate_w2(w2, rules)

        assert fields_of(issues.errors()) == [
            "W-2.employee_ssn",
            "W-2.wages_tips_compensation",
        ]
        assert issues.errors()[0].message == "must be formatted as XXX-XX-XXXX"
        assert issues.errors()[1].message == "cannot be negative (-$100.00)"

    def test_bad_ein(self, validator: DocumentValidator, sample_w2: W2Data, rules: TaxRules) -> None:
        w2 = sample_w2.model_copy(update={"employer_ein": "123456789"})
        issues = validator.validate_w2(w2, rules)
        assert fields_of(issues.errors()) == ["w2-acme.employer_ein"]

    def test_withholding_exceeds_wages(self, validator: DocumentValidator, rules: TaxRules) -> None:
        w2 = W2Data(wages_tips_compensation="1000", federal_tax_withheld="1500")
        issues = validator.validate_w2(w2, rules)
        assert fields_of(issues.errors()) == ["W-2.federal_tax_withheld"]

    def test_ss_wages_over_wage_base_warns(self, validator: DocumentValidator, rules: TaxRules) -> None:
        w2 = W2Data(
            wages_tips_compensation="200000",
            social_security_wages="200000",
            social_security_tax="10918.20",
            medicare_wages="200000",
            medicare_tax="2900",
        )
        issues = validator.validate_w2(w2, rules)

        assert not issues.has_errors()
        assert fields_of(issues.warnings()) == ["W-2.social_security_wages"]

    def test_ss_tax_mismatch_warns(self, validator: DocumentValidator, sample_w2: W2Data, rules: TaxRules) -> None:
        w2 = sample_w2.model_copy(update={"social_security_tax": UsdAmount.coerce("2000")})
        issues = validator.validate_w2(w2, rules)
        assert fields_of(issues.warnings()) == ["w2-acme.social_security_tax"]
        assert "6.2%" in issues.warnings()[0].message

    def test_medicare_within_tolerance(self, validator: DocumentValidator, sample_w2: W2Data, rules: TaxRules) -> None:
        w2 = sample_w2.model_copy(update={"medicare_tax": UsdAmount.coerce("730")})
        assert validator.validate_w2(w2, rules).is_empty()

    def test_unknown_box_12_code(self, validator: DocumentValidator, rules: TaxRules) -> None:
        w2 = W2Data(box_12_codes=[Box12Code(code="D", amount="5000"), Box12Code(code="ZZ", amount="1")])
        issues = validator.validate_w2(w2, rules)
        assert fields_of(issues.errors()) == ["W-2.box_12_codes[1]"]

    def test_negative_state_entry(self, validator: DocumentValidator, rules: TaxRules) -> None:
        w2 = W2Data(state_info=[StateTaxInfo(state="CA", state_wages="-5")])
        issues = validator.validate_w2(w2, rules)
        assert "W-2.state_info[0]" in fields_of(issues.errors())


# =============================================================================
# Information returns and people
# =============================================================================


class TestValidateInformationReturn:
    """Tests for 1099/1098 checks."""

    def test_valid(self, validator: DocumentValidator, sample_1099_int: Form1099INT) -> None:
        assert validator.validate_information_return(sample_1099_int).is_empty()

    def test_bad_payer_tin(self, validator: DocumentValidator) -> None:
        form = Form1099NEC(payer_tin="12345", nonemployee_compensation="-1")
        issues = validator.validate_information_return(form)
        assert fields_of(issues.errors()) == [
            "1099-NEC.payer_tin",
            "1099-NEC.nonemployee_compensation",
        ]

    def test_institution_tin(self, validator: DocumentValidator) -> None:
        form = Form1098T(institution_tin="bad", student_tin="555-66-7777")
        issues = validator.validate_information_return(form)
        assert fields_of(issues.errors()) == ["1098-T.institution_tin"]

    def test_negative_net_benefits_allowed(self, validator: DocumentValidator) -> None:
        """SSA-1099 box 5 is negative when repayments exceed benefits."""
        form = FormSSA1099(benefits_paid="1000", benefits_repaid="1500", net_benefits="-500")
        assert validator.validate_information_return(form).is_empty()

    def test_negative_repayment_is_error(self, validator: DocumentValidator) -> None:
        form = FormSSA1099(benefits_repaid="-10")
        issues = validator.validate_information_return(form)
        assert fields_of(issues.errors()) == ["SSA-1099.benefits_repaid"]


class TestValidatePeople:
    """Tests for taxpayer and dependent checks."""

    def test_bad_taxpayer_ssn(self, validator: DocumentValidator) -> None:
        issues = validator.validate_taxpayer(TaxpayerInfo(ssn="12-345"), "taxpayer")
        assert fields_of(issues.errors()) == ["taxpayer.ssn"]

    def test_blank_ssn_is_not_checked(self, validator: DocumentValidator) -> None:
        assert validator.validate_taxpayer(TaxpayerInfo(), "spouse").is_empty()

    def test_child_without_ssn_warns(self, validator: DocumentValidator) -> None:
        child = Dependent(relationship=DependentRelationship.SON, age=8, months_lived_with_taxpayer=12)
        issues = validator.validate_dependents([child])
        assert not issues.has_errors()
        assert fields_of(issues.warnings()) == ["dependents[0].ssn"]


# =============================================================================
# Cross-document
# =============================================================================


class TestValidateCrossDocument:
    """Tests for return-level consistency checks."""

    def test_year_mismatch_is_error(self, validator: DocumentValidator, sample_w2: W2Data) -> None:
        w2 = sample_w2.model_copy(update={"tax_year": 2024})
        issues = validator.validate_cross_document([w2], 2025, FilingStatus.SINGLE, False)
        assert fields_of(issues.errors()) == ["w2-acme.tax_year"]

    def test_two_tins_single_warns(
        self, validator: DocumentValidator, sample_w2: W2Data
    ) -> None:
        other = Form1099INT(recipient_tin="987-65-4321")
        issues = validator.validate_cross_document([sample_w2, other], 2025, FilingStatus.SINGLE, False)
        assert fields_of(issues.warnings()) == ["documents"]
        assert "Multiple TIN" in issues.warnings()[0].message

    def test_two_tins_joint_ok(self, validator: DocumentValidator, sample_w2: W2Data) -> None:
        other = Form1099INT(recipient_tin="987-65-4321")
        issues = validator.validate_cross_document(
            [sample_w2, other], 2025, FilingStatus.MARRIED_FILING_JOINTLY, True
        )
        assert issues.is_empty()

    def test_1098_t_student_tin_ignored(self, validator: DocumentValidator, sample_w2: W2Data) -> None:
        tuition = Form1098T(student_tin="555-66-7777")
        issues = validator.validate_cross_document([sample_w2, tuition], 2025, FilingStatus.SINGLE, False)
        assert issues.is_empty()

    def test_joint_without_spouse_is_error(self, validator: DocumentValidator) -> None:
        issues = validator.validate_cross_document([], 2025, FilingStatus.MARRIED_FILING_JOINTLY, False)
        assert fields_of(issues.errors()) == ["spouse"]

    def test_spouse_with_single_status_warns(self, validator: DocumentValidator) -> None:
        issues = validator.validate_cross_document([], 2025, FilingStatus.SINGLE, True)
        assert fields_of(issues.warnings()) == ["spouse"]
        assert issues.warnings()[0].severity == ValidationSeverity.WARNING


class TestValidateReturn:
    """Tests for the whole-return entry point."""

    def test_collects_across_sources(self, validator: DocumentValidator, rules: TaxRules) -> None:
        tax_return = TaxReturnInput(
            filing_status=FilingStatus.SINGLE,
            taxpayer=TaxpayerInfo(ssn="bad"),
            documents=[W2Data(wages_tips_compensation="-1")],
            manual=ManualEntries(estimated_tax_payments="-50", capital_gain_or_loss="-3000"),
        )

        issues = validator.validate_return(tax_return, rules)

        assert fields_of(issues.errors()) == [
            "taxpayer.ssn",
            "W-2.wages_tips_compensation",
            "manual.estimated_tax_payments",
        ]
