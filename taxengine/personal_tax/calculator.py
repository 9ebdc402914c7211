"""Return computation: input documents to a calculated Form 1040.

This module drives one return through the engine:
- Validate every document and return-level fact (errors stop here)
- Aggregate document figures into Form 1040 income, withholding lines
- Select standard vs. itemized deduction and compute the QBI deduction
- Compute bracket tax and the Schedule 8812 child credits
- Derive totals and refund/amount owed on the form

All amounts are UsdAmount. Every amount the engine writes to the form is
rounded to cents, or to whole dollars when ``round_to_whole_dollars`` is
set; the form's own derivations are exact sums of those lines.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, Field

from taxengine.core.config import settings
from taxengine.core.logging import get_logger, return_id_ctx, tax_year_ctx
from taxengine.documents.collection import InputFormCollection
from taxengine.documents.models import IncomeField, InputDocument
from taxengine.documents.validation import DocumentValidator, ValidationIssue
from taxengine.forms.form1040 import STANDARD_DEDUCTION_FLAG, Form1040
from taxengine.tax.credits import ChildTaxCreditResult, compute_child_tax_credit
from taxengine.tax.currency import UsdAmount
from taxengine.tax.loader import RulesLoader
from taxengine.tax.rules import BracketSlice, TaxRules
from taxengine.tax.types import Dependent, FilingStatus, TaxpayerInfo

logger = get_logger(__name__)

Rounder = Callable[[UsdAmount], UsdAmount]


# =============================================================================
# Input models
# =============================================================================


class ManualEntries(BaseModel):
    """Amounts entered by the preparer rather than read from documents.

    Field descriptions name the Form 1040 line each amount lands on.
    """

    SIGNED_FIELDS: ClassVar[frozenset[str]] = frozenset({"capital_gain_or_loss", "other_income"})

    # Wage sub-lines
    household_employee_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1b: Household employee wages")
    unreported_tips: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1c: Tip income not on W-2")
    medicaid_waiver_payments: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1d: Medicaid waiver payments")
    taxable_dependent_care_benefits: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1e: Taxable dependent care benefits")
    adoption_benefits: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1f: Employer-provided adoption benefits")
    form_8919_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1g: Wages from Form 8919")
    other_earned_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1h: Other earned income")
    nontaxable_combat_pay: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 1i: Nontaxable combat pay election")

    # Other income
    capital_gain_or_loss: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 7: Schedule D gain or (loss), excluding 1099-DIV distributions")
    other_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 8: Other Schedule 1 income")
    state_refund_taxable: bool = Field(default=False, description="Prior-year itemizer; 1099-G refunds are taxable")

    # Adjustments and deductions
    adjustments_to_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 10: Schedule 1 adjustments")
    itemized_deductions: UsdAmount = Field(default=UsdAmount.ZERO, description="Schedule A total itemized deductions")
    qualified_business_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Qualified business income for line 13a")
    schedule_1a_deductions: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 13b: Schedule 1-A deductions")

    # Taxes and credits
    schedule_2_line_3: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 17: Schedule 2, line 3")
    schedule_3_line_8: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 20: Schedule 3, line 8")
    other_taxes: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 23: Schedule 2, line 21")

    # Payments
    other_withholding: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 25c: Withholding from other forms")
    estimated_tax_payments: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 26: Estimated payments and prior-year overpayment")
    earned_income_credit: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 27a: Earned income credit")
    american_opportunity_credit: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 29: Refundable AOTC")
    schedule_3_line_15: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 31: Schedule 3, line 15")

    # Refund / amount owed
    applied_to_next_year: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 36: Applied to next year's estimated tax")
    estimated_tax_penalty: UsdAmount = Field(default=UsdAmount.ZERO, description="Line 38: Estimated tax penalty")

    def money_fields(self) -> dict[str, UsdAmount]:
        """Amounts that must not be negative."""
        return {
            name: value
            for name in type(self).model_fields
            if name not in self.SIGNED_FIELDS and isinstance(value := getattr(self, name), UsdAmount)
        }


class TaxReturnInput(BaseModel):
    """Everything needed to compute one return."""

    return_id: str = Field(default="", description="Caller-assigned return identifier")
    tax_year: int = Field(default_factory=lambda: settings.default_tax_year, description="Tax year")
    filing_status: FilingStatus = Field(description="Filing status")
    taxpayer: TaxpayerInfo = Field(default_factory=TaxpayerInfo, description="Primary taxpayer")
    spouse: TaxpayerInfo | None = Field(default=None, description="Spouse (MFJ/MFS)")
    dependents: list[Dependent] = Field(default_factory=list, description="Dependents claimed")
    documents: list[InputDocument] = Field(default_factory=list, description="Input documents")
    manual: ManualEntries = Field(default_factory=ManualEntries, description="Preparer-entered amounts")

    def forms(self) -> InputFormCollection:
        return InputFormCollection(self.documents)


# =============================================================================
# Results
# =============================================================================


@dataclass
class DeductionResult:
    """Result of deduction selection.

    Attributes:
        method: Either "standard" or "itemized".
        amount: The deduction amount to use.
        standard_amount: The standard deduction for this filing status.
        itemized_amount: The total itemized deductions provided.
    """

    method: str
    amount: UsdAmount
    standard_amount: UsdAmount
    itemized_amount: UsdAmount

    @property
    def is_standard(self) -> bool:
        return self.method == "standard"


@dataclass
class ReturnComputation:
    """A computed return.

    Attributes:
        form: The calculated Form 1040.
        rules: Rules the return was computed under.
        deduction: Standard vs. itemized selection.
        qbi_deduction: Line 13a amount.
        credits: Schedule 8812 result.
        tax_breakdown: Per-bracket slices of taxable income.
        warnings: Validation warnings (errors would have stopped computation).
    """

    form: Form1040
    rules: TaxRules
    deduction: DeductionResult
    qbi_deduction: UsdAmount
    credits: ChildTaxCreditResult
    tax_breakdown: list[BracketSlice] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def tax_year(self) -> int:
        return self.form.tax_year

    @property
    def refund(self) -> UsdAmount:
        return self.form.refund()

    @property
    def amount_owed(self) -> UsdAmount:
        return self.form.amount_owed()

    @property
    def effective_rate(self) -> Decimal:
        """Total tax (line 24) as a fraction of AGI, 4 places; 0 without AGI."""
        agi = self.form.amount("11")
        if not agi.is_positive():
            return Decimal("0")
        return (self.form.amount("24").amount / agi.amount).quantize(Decimal("0.0001"))


# =============================================================================
# Deductions
# =============================================================================


def select_deduction(standard: UsdAmount, itemized: UsdAmount) -> DeductionResult:
    """Select standard or itemized deduction.

    Itemized wins only when strictly larger than the standard deduction.

    Example:
        >>> select_deduction(UsdAmount.from_dollars(15750), UsdAmount.from_dollars(10000)).method
        'standard'
    """
    if itemized > standard:
        return DeductionResult(
            method="itemized",
            amount=itemized,
            standard_amount=standard,
            itemized_amount=itemized,
        )
    return DeductionResult(
        method="standard",
        amount=standard,
        standard_amount=standard,
        itemized_amount=itemized,
    )


def compute_qbi_deduction(
    rules: TaxRules,
    qualified_business_income: UsdAmount,
    agi: UsdAmount,
    deduction: UsdAmount,
) -> UsdAmount:
    """Simplified Section 199A deduction (Form 8995).

    The lesser of the QBI rate times qualified business income and the
    same rate times taxable income before the QBI deduction.
    """
    if not qualified_business_income.is_positive():
        return UsdAmount.ZERO
    component = qualified_business_income.multiply_rate(rules.qbi_deduction_rate)
    income_limit = agi.saturating_sub(deduction).multiply_rate(rules.qbi_deduction_rate)
    return component.min(income_limit)


def _rounder() -> Rounder:
    if settings.round_to_whole_dollars:
        return UsdAmount.round_to_dollar
    return UsdAmount.round_to_cents


# =============================================================================
# Return computation
# =============================================================================


def _enter_income(form: Form1040, tax_return: TaxReturnInput, forms: InputFormCollection, r: Rounder) -> None:
    manual = tax_return.manual

    form.set_line("1a", r(forms.total_wages()))
    form.set_line("1b", r(manual.household_employee_wages))
    form.set_line("1c", r(manual.unreported_tips))
    form.set_line("1d", r(manual.medicaid_waiver_payments))
    form.set_line("1e", r(manual.taxable_dependent_care_benefits))
    form.set_line("1f", r(manual.adoption_benefits))
    form.set_line("1g", r(manual.form_8919_wages))
    form.set_line("1h", r(manual.other_earned_income))
    form.set_line("1i", r(manual.nontaxable_combat_pay))

    form.set_line("2a", r(forms.total(IncomeField.TAX_EXEMPT_INTEREST)))
    form.set_line("2b", r(forms.total_taxable_interest()))
    form.set_line("3a", r(forms.total_qualified_dividends()))
    form.set_line("3b", r(forms.total_ordinary_dividends()))
    form.set_line("4a", r(forms.total(IncomeField.IRA_DISTRIBUTIONS_GROSS)))
    form.set_line("4b", r(forms.total(IncomeField.IRA_DISTRIBUTIONS_TAXABLE)))
    form.set_line("5a", r(forms.total(IncomeField.PENSION_GROSS)))
    form.set_line("5b", r(forms.total(IncomeField.PENSION_TAXABLE)))
    form.set_line("6a", r(forms.total(IncomeField.SOCIAL_SECURITY_GROSS)))
    form.set_line("6b", r(forms.total(IncomeField.SOCIAL_SECURITY_TAXABLE)))
    form.set_line(
        "7",
        r(forms.total(IncomeField.CAPITAL_GAIN_DISTRIBUTIONS) + manual.capital_gain_or_loss),
    )

    schedule_1 = forms.total(
        IncomeField.UNEMPLOYMENT_COMPENSATION,
        IncomeField.NONEMPLOYEE_COMPENSATION,
        IncomeField.OTHER_INCOME,
    ) + manual.other_income
    if manual.state_refund_taxable:
        schedule_1 = schedule_1 + forms.total(IncomeField.STATE_TAX_REFUND)
    form.set_line("8", r(schedule_1))
    form.set_line("10", r(manual.adjustments_to_income))


def _enter_payments(form: Form1040, tax_return: TaxReturnInput, forms: InputFormCollection, r: Rounder) -> None:
    manual = tax_return.manual
    withholding = forms.withholding_by_source()

    form.set_line("25a", r(withholding.w2))
    form.set_line("25b", r(withholding.form_1099))
    form.set_line("25c", r(withholding.other + manual.other_withholding))
    form.set_line("26", r(manual.estimated_tax_payments))
    form.set_line("27a", r(manual.earned_income_credit))
    form.set_line("29", r(manual.american_opportunity_credit))
    form.set_line("31", r(manual.schedule_3_line_15))
    form.set_line("36", r(manual.applied_to_next_year))
    form.set_line("38", r(manual.estimated_tax_penalty))


def compute_return(
    tax_return: TaxReturnInput,
    loader: RulesLoader | None = None,
) -> ReturnComputation:
    """Compute a complete Form 1040 for a return.

    Args:
        tax_return: Filing status, people, documents and manual entries.
        loader: Rules loader; defaults to the built-in year table.

    Returns:
        ReturnComputation holding the calculated form and its inputs.

    Raises:
        UnsupportedTaxYearError: If the return's year has no rules.
        ValidationFailedError: If validation found any error; carries every
            issue found.

    Example:
        >>> result = compute_return(TaxReturnInput(
        ...     filing_status=FilingStatus.SINGLE,
        ...     documents=[W2Data(wages_tips_compensation="65750")],
        ... ))
        >>> str(result.form.amount("16"))
        '$5,914.00'
    """
    return_token = return_id_ctx.set(tax_return.return_id or None)
    year_token = tax_year_ctx.set(tax_return.tax_year)
    try:
        return _compute(tax_return, loader or RulesLoader())
    finally:
        tax_year_ctx.reset(year_token)
        return_id_ctx.reset(return_token)


def _compute(tax_return: TaxReturnInput, loader: RulesLoader) -> ReturnComputation:
    year = tax_return.tax_year
    status = tax_return.filing_status
    rules = loader.load(year)

    issues = DocumentValidator().validate_return(tax_return, rules)
    if issues.has_warnings():
        logger.warning(
            "return_validation_warnings",
            warnings=[str(issue) for issue in issues.warnings()],
        )
    if issues.has_errors():
        logger.info("return_validation_failed", error_count=len(issues.errors()))
    issues.raise_for_errors()

    r = _rounder()
    forms = tax_return.forms()
    manual = tax_return.manual
    form = Form1040(year)

    # Income and AGI
    _enter_income(form, tax_return, forms, r)
    form.calculate()
    agi = form.amount("11")

    # Deductions
    taxpayer = tax_return.taxpayer
    spouse = tax_return.spouse
    standard = rules.standard_deduction(
        status,
        taxpayer_65=taxpayer.is_65_or_older(year),
        taxpayer_blind=taxpayer.is_blind,
        spouse_65=spouse.is_65_or_older(year) if spouse else False,
        spouse_blind=spouse.is_blind if spouse else False,
        agi=agi,
    )
    deduction = select_deduction(r(standard), r(manual.itemized_deductions))
    form.set_line("12", deduction.amount)
    form.set_line(STANDARD_DEDUCTION_FLAG, deduction.is_standard)

    qbi = r(compute_qbi_deduction(rules, manual.qualified_business_income, agi, deduction.amount))
    form.set_line("13a", qbi)
    form.set_line("13b", r(manual.schedule_1a_deductions))
    form.calculate()
    taxable_income = form.amount("15")

    # Tax
    breakdown = rules.tax_breakdown(status, taxable_income)
    form.set_line("16", r(UsdAmount.total(s.tax for s in breakdown)))
    form.set_line("17", r(manual.schedule_2_line_3))
    form.calculate()

    # Credits
    earned_income = form.amount("1z") + forms.total(IncomeField.NONEMPLOYEE_COMPENSATION)
    credits = compute_child_tax_credit(
        rules,
        status,
        agi,
        tax_return.dependents,
        tax_liability=form.amount("18"),
        earned_income=earned_income,
    )
    form.set_line("19", r(credits.nonrefundable_credit))
    form.set_line("20", r(manual.schedule_3_line_8))
    form.set_line("23", r(manual.other_taxes))
    form.set_line("28", r(credits.additional_child_tax_credit))

    # Payments
    _enter_payments(form, tax_return, forms, r)
    form.calculate()

    logger.info(
        "return_computed",
        filing_status=status.value,
        agi=str(agi),
        taxable_income=str(taxable_income),
        total_tax=str(form.amount("24")),
        refund=str(form.refund()),
        amount_owed=str(form.amount_owed()),
    )

    return ReturnComputation(
        form=form,
        rules=rules,
        deduction=deduction,
        qbi_deduction=qbi,
        credits=credits,
        tax_breakdown=breakdown,
        warnings=issues.warnings(),
    )
