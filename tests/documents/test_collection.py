"""Tests for aggregating figures across input documents."""

from decimal import Decimal

from taxengine.documents.collection import InputFormCollection
from taxengine.documents.models import (
    Form1098,
    Form1099DIV,
    Form1099INT,
    Form1099NEC,
    FormSSA1099,
    IncomeField,
    InputFormType,
    W2Data,
)
from taxengine.tax.currency import UsdAmount


def usd(value: str) -> UsdAmount:
    return UsdAmount(Decimal(value))


def test_empty_collection_totals_zero() -> None:
    forms = InputFormCollection()
    assert len(forms) == 0
    assert forms.total_wages() == UsdAmount.ZERO
    assert forms.withholding_by_source().total == UsdAmount.ZERO


def test_multiple_w2_wages_sum(sample_w2: W2Data) -> None:
    second = W2Data(
        employee_ssn="123-45-6789",
        wages_tips_compensation="30000",
        federal_tax_withheld="4500",
    )
    forms = InputFormCollection([sample_w2, second])

    assert forms.total_wages() == usd("80000")
    assert forms.total_federal_withholding() == usd("12000")


def test_mixed_documents(sample_w2: W2Data, sample_1099_int: Form1099INT) -> None:
    forms = InputFormCollection(
        [
            sample_w2,
            sample_1099_int,
            Form1099DIV(total_ordinary_dividends="1000", qualified_dividends="800"),
            Form1099NEC(nonemployee_compensation="5000"),
        ]
    )

    assert forms.total_wages() == usd("50000")
    assert forms.total_taxable_interest() == usd("500")
    assert forms.total_ordinary_dividends() == usd("1000")
    assert forms.total_qualified_dividends() == usd("800")
    assert forms.total(IncomeField.NONEMPLOYEE_COMPENSATION) == usd("5000")


def test_total_of_several_concepts() -> None:
    forms = InputFormCollection(
        [
            Form1099INT(tax_exempt_interest="40"),
            Form1099DIV(exempt_interest_dividends="60"),
        ]
    )
    assert forms.total(IncomeField.TAX_EXEMPT_INTEREST) == usd("100")


def test_withholding_by_source(sample_w2: W2Data) -> None:
    """W-2 goes to 25a, 1099s to 25b, SSA-1099 to 25c."""
    forms = InputFormCollection(
        [
            sample_w2,
            Form1099INT(federal_tax_withheld="100"),
            Form1099NEC(federal_tax_withheld="400"),
            FormSSA1099(federal_tax_withheld="900"),
            Form1098(mortgage_interest="5000"),
        ]
    )

    withholding = forms.withholding_by_source()
    assert withholding.w2 == usd("7500")
    assert withholding.form_1099 == usd("500")
    assert withholding.other == usd("900")
    assert withholding.total == forms.total_federal_withholding()


def test_of_type_and_add(sample_w2: W2Data, sample_1099_int: Form1099INT) -> None:
    forms = InputFormCollection([sample_w2])
    forms.add(sample_1099_int)

    assert len(forms) == 2
    assert forms.of_type(InputFormType.FORM_1099_INT) == [sample_1099_int]
    assert list(forms) == [sample_w2, sample_1099_int]


def test_recipient_identifiers_skip_blanks(sample_w2: W2Data) -> None:
    forms = InputFormCollection(
        [sample_w2, Form1099INT(recipient_tin=" "), Form1099NEC(recipient_tin="987-65-4321")]
    )
    assert forms.recipient_identifiers() == {"123-45-6789", "987-65-4321"}
