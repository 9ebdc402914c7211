"""Pydantic models for tax input documents.

This module defines the data models for the information returns a taxpayer
receives:
- W2Data: Employee wage and tax statement
- Form1099INT / Form1099DIV / Form1099R / Form1099G / Form1099NEC / Form1099MISC
- FormSSA1099: Social Security benefit statement
- Form1098 / Form1098E / Form1098T: Mortgage, student loan and tuition statements

Every model declares which tax concepts it carries. The engine reads
documents only through ``amount(IncomeField)`` and ``info(InfoField)``, so
adding a form never touches the aggregation code.

All monetary fields are UsdAmount and default to zero so a partially
filled document still loads; identifier formats are checked by
DocumentValidator, not here, so every problem is reported at once.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, Field

from taxengine.tax.currency import UsdAmount


class InputFormType(str, Enum):
    """Type of input document."""

    W2 = "W-2"
    FORM_1099_INT = "1099-INT"
    FORM_1099_DIV = "1099-DIV"
    FORM_1099_R = "1099-R"
    FORM_1099_G = "1099-G"
    FORM_1099_NEC = "1099-NEC"
    FORM_1099_MISC = "1099-MISC"
    FORM_SSA_1099 = "SSA-1099"
    FORM_1098 = "1098"
    FORM_1098_E = "1098-E"
    FORM_1098_T = "1098-T"

    @property
    def is_1099_family(self) -> bool:
        """True for payer-issued 1099 information returns (lines 25b)."""
        return self.value.startswith("1099-")


class IncomeField(str, Enum):
    """Monetary concepts an input document may carry."""

    WAGES = "wages"
    TAXABLE_INTEREST = "taxable_interest"
    TAX_EXEMPT_INTEREST = "tax_exempt_interest"
    ORDINARY_DIVIDENDS = "ordinary_dividends"
    QUALIFIED_DIVIDENDS = "qualified_dividends"
    CAPITAL_GAIN_DISTRIBUTIONS = "capital_gain_distributions"
    IRA_DISTRIBUTIONS_GROSS = "ira_distributions_gross"
    IRA_DISTRIBUTIONS_TAXABLE = "ira_distributions_taxable"
    PENSION_GROSS = "pension_gross"
    PENSION_TAXABLE = "pension_taxable"
    SOCIAL_SECURITY_GROSS = "social_security_gross"
    SOCIAL_SECURITY_TAXABLE = "social_security_taxable"
    UNEMPLOYMENT_COMPENSATION = "unemployment_compensation"
    STATE_TAX_REFUND = "state_tax_refund"
    NONEMPLOYEE_COMPENSATION = "nonemployee_compensation"
    OTHER_INCOME = "other_income"
    FEDERAL_WITHHOLDING = "federal_withholding"
    STATE_WITHHOLDING = "state_withholding"
    LOCAL_WITHHOLDING = "local_withholding"
    SOCIAL_SECURITY_WAGES = "social_security_wages"
    SOCIAL_SECURITY_TAX_WITHHELD = "social_security_tax_withheld"
    MEDICARE_WAGES = "medicare_wages"
    MEDICARE_TAX_WITHHELD = "medicare_tax_withheld"
    MORTGAGE_INTEREST = "mortgage_interest"
    MORTGAGE_POINTS = "mortgage_points"
    STUDENT_LOAN_INTEREST = "student_loan_interest"
    TUITION_PAID = "tuition_paid"


class InfoField(str, Enum):
    """Identifying text an input document may carry."""

    EMPLOYER_EIN = "employer_ein"
    EMPLOYER_NAME = "employer_name"
    PAYER_NAME = "payer_name"
    PAYER_TIN = "payer_tin"


class InputForm(BaseModel):
    """Base class for input documents.

    Subclasses map concepts to their own attribute names through
    ``AMOUNT_FIELDS`` and ``INFO_FIELDS``; an attribute may be a model field
    or a property.
    """

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {}
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {}
    RECIPIENT_TIN_FIELD: ClassVar[str] = "recipient_tin"
    SIGNED_FIELDS: ClassVar[frozenset[str]] = frozenset()

    form_type: InputFormType
    form_id: str = Field(default="", description="Caller-assigned document identifier")
    tax_year: int | None = Field(default=None, description="Tax year printed on the document")

    def amount(self, concept: IncomeField) -> UsdAmount | None:
        """Return the value of a monetary concept, or None if this form lacks it."""
        attribute = self.AMOUNT_FIELDS.get(concept)
        if attribute is None:
            return None
        return getattr(self, attribute)

    def info(self, concept: InfoField) -> str | None:
        """Return an identifying string, or None if this form lacks it."""
        attribute = self.INFO_FIELDS.get(concept)
        if attribute is None:
            return None
        return getattr(self, attribute)

    def carries(self, concept: IncomeField) -> bool:
        return concept in self.AMOUNT_FIELDS

    @property
    def recipient_identifier(self) -> str:
        """SSN/TIN of the person the document was issued to."""
        return getattr(self, self.RECIPIENT_TIN_FIELD)

    @property
    def label(self) -> str:
        """Human-readable identifier used in validation messages."""
        return self.form_id or self.form_type.value

    def money_fields(self) -> dict[str, UsdAmount]:
        """UsdAmount-valued model fields that must not be negative."""
        return {
            name: value
            for name in type(self).model_fields
            if name not in self.SIGNED_FIELDS and isinstance(value := getattr(self, name), UsdAmount)
        }


# =============================================================================
# W-2
# =============================================================================


class Box12Code(BaseModel):
    """W-2 Box 12 code and amount pair."""

    code: str = Field(description="Box 12 code (e.g., D, E, DD)")
    amount: UsdAmount = Field(default=UsdAmount.ZERO, description="Amount for this code")


class StateTaxInfo(BaseModel):
    """W-2 boxes 15-17 for one state."""

    state: str = Field(default="", description="Box 15: State")
    employer_state_id: str = Field(default="", description="Box 15: Employer's state ID number")
    state_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 16: State wages, tips, etc.")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 17: State income tax")


class LocalTaxInfo(BaseModel):
    """W-2 boxes 18-20 for one locality."""

    locality: str = Field(default="", description="Box 20: Locality name")
    local_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 18: Local wages, tips, etc.")
    local_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 19: Local income tax")


class W2Data(InputForm):
    """W-2 Wage and Tax Statement data.

    All box numbers reference the standard W-2 form layout.
    """

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.WAGES: "wages_tips_compensation",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.SOCIAL_SECURITY_WAGES: "social_security_wages",
        IncomeField.SOCIAL_SECURITY_TAX_WITHHELD: "social_security_tax",
        IncomeField.MEDICARE_WAGES: "medicare_wages",
        IncomeField.MEDICARE_TAX_WITHHELD: "medicare_tax",
        IncomeField.STATE_WITHHOLDING: "total_state_withholding",
        IncomeField.LOCAL_WITHHOLDING: "total_local_withholding",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.EMPLOYER_EIN: "employer_ein",
        InfoField.EMPLOYER_NAME: "employer_name",
    }
    RECIPIENT_TIN_FIELD: ClassVar[str] = "employee_ssn"

    form_type: Literal[InputFormType.W2] = InputFormType.W2

    # Identity fields
    employee_ssn: str = Field(default="", description="Employee SSN (Box a)")
    employer_ein: str = Field(default="", description="Employer EIN (Box b)")
    employer_name: str = Field(default="", description="Employer name (Box c)")
    employee_name: str = Field(default="", description="Employee name (Box e)")

    # Compensation fields
    wages_tips_compensation: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Wages, tips, other compensation")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2: Federal income tax withheld")
    social_security_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 3: Social security wages")
    social_security_tax: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Social security tax withheld")
    medicare_wages: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Medicare wages and tips")
    medicare_tax: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 6: Medicare tax withheld")
    social_security_tips: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 7: Social security tips")
    allocated_tips: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 8: Allocated tips")
    dependent_care_benefits: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 10: Dependent care benefits")
    nonqualified_plans: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 11: Nonqualified plans")

    # Box 12 codes (retirement, insurance, etc.)
    box_12_codes: list[Box12Code] = Field(default_factory=list, description="Box 12: Various codes and amounts")

    # Box 13 checkboxes
    statutory_employee: bool = Field(default=False, description="Box 13: Statutory employee")
    retirement_plan: bool = Field(default=False, description="Box 13: Retirement plan")
    third_party_sick_pay: bool = Field(default=False, description="Box 13: Third-party sick pay")

    # State and local
    state_info: list[StateTaxInfo] = Field(default_factory=list, description="Boxes 15-17")
    local_info: list[LocalTaxInfo] = Field(default_factory=list, description="Boxes 18-20")

    @property
    def total_state_withholding(self) -> UsdAmount:
        return UsdAmount.total(s.state_tax_withheld for s in self.state_info)

    @property
    def total_local_withholding(self) -> UsdAmount:
        return UsdAmount.total(loc.local_tax_withheld for loc in self.local_info)


# =============================================================================
# 1099 family
# =============================================================================


class Form1099INT(InputForm):
    """1099-INT Interest Income data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.TAXABLE_INTEREST: "taxable_interest",
        IncomeField.TAX_EXEMPT_INTEREST: "tax_exempt_interest",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_INT] = InputFormType.FORM_1099_INT

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    # Interest fields
    interest_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Interest income")
    early_withdrawal_penalty: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2: Early withdrawal penalty")
    interest_us_savings_bonds: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 3: Interest on U.S. Savings Bonds and Treasury obligations")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    investment_expenses: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Investment expenses")
    foreign_tax_paid: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 6: Foreign tax paid")
    tax_exempt_interest: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 8: Tax-exempt interest")
    private_activity_bond_interest: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 9: Specified private activity bond interest")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 17: State tax withheld")

    @property
    def taxable_interest(self) -> UsdAmount:
        """Box 1 plus Box 3; Treasury interest is federally taxable."""
        return self.interest_income + self.interest_us_savings_bonds


class Form1099DIV(InputForm):
    """1099-DIV Dividend Income data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.ORDINARY_DIVIDENDS: "total_ordinary_dividends",
        IncomeField.QUALIFIED_DIVIDENDS: "qualified_dividends",
        IncomeField.CAPITAL_GAIN_DISTRIBUTIONS: "total_capital_gain_distributions",
        IncomeField.TAX_EXEMPT_INTEREST: "exempt_interest_dividends",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_DIV] = InputFormType.FORM_1099_DIV

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    # Dividend fields
    total_ordinary_dividends: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1a: Total ordinary dividends")
    qualified_dividends: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1b: Qualified dividends")
    total_capital_gain_distributions: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2a: Total capital gain distributions")
    nondividend_distributions: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 3: Nondividend distributions")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    section_199a_dividends: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Section 199A dividends")
    foreign_tax_paid: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 7: Foreign tax paid")
    exempt_interest_dividends: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 12: Exempt-interest dividends")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 16: State tax withheld")


class Form1099R(InputForm):
    """1099-R Distributions From Pensions, Annuities, Retirement, IRAs.

    Box 7's IRA/SEP/SIMPLE checkbox decides whether the distribution lands
    on Form 1040 line 4 (IRA) or line 5 (pensions and annuities).
    """

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.IRA_DISTRIBUTIONS_GROSS: "ira_distributions_gross",
        IncomeField.IRA_DISTRIBUTIONS_TAXABLE: "ira_distributions_taxable",
        IncomeField.PENSION_GROSS: "pension_gross",
        IncomeField.PENSION_TAXABLE: "pension_taxable",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_R] = InputFormType.FORM_1099_R

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    gross_distribution: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Gross distribution")
    taxable_amount: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2a: Taxable amount")
    taxable_amount_not_determined: bool = Field(default=False, description="Box 2b: Taxable amount not determined")
    total_distribution: bool = Field(default=False, description="Box 2b: Total distribution")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    distribution_code: str = Field(default="", description="Box 7: Distribution code(s)")
    ira_sep_simple: bool = Field(default=False, description="Box 7: IRA/SEP/SIMPLE")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 14: State tax withheld")

    @property
    def ira_distributions_gross(self) -> UsdAmount:
        return self.gross_distribution if self.ira_sep_simple else UsdAmount.ZERO

    @property
    def ira_distributions_taxable(self) -> UsdAmount:
        return self.taxable_amount if self.ira_sep_simple else UsdAmount.ZERO

    @property
    def pension_gross(self) -> UsdAmount:
        return UsdAmount.ZERO if self.ira_sep_simple else self.gross_distribution

    @property
    def pension_taxable(self) -> UsdAmount:
        return UsdAmount.ZERO if self.ira_sep_simple else self.taxable_amount


class Form1099G(InputForm):
    """1099-G Certain Government Payments data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.UNEMPLOYMENT_COMPENSATION: "unemployment_compensation",
        IncomeField.STATE_TAX_REFUND: "state_local_tax_refund",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_G] = InputFormType.FORM_1099_G

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    unemployment_compensation: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Unemployment compensation")
    state_local_tax_refund: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2: State or local income tax refunds")
    refund_tax_year: int | None = Field(default=None, description="Box 3: Tax year of the refund in box 2")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 11: State income tax withheld")


class Form1099NEC(InputForm):
    """1099-NEC Nonemployee Compensation data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.NONEMPLOYEE_COMPENSATION: "nonemployee_compensation",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_NEC] = InputFormType.FORM_1099_NEC

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_name: str = Field(default="", description="Recipient's name")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    # Compensation fields
    nonemployee_compensation: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Nonemployee compensation")
    direct_sales: bool = Field(default=False, description="Box 2: Payer made direct sales of $5,000 or more")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Boxes 5-7: State tax withheld")


class Form1099MISC(InputForm):
    """1099-MISC Miscellaneous Information data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.OTHER_INCOME: "total_other_income",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
        IncomeField.STATE_WITHHOLDING: "state_tax_withheld",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "payer_name",
        InfoField.PAYER_TIN: "payer_tin",
    }

    form_type: Literal[InputFormType.FORM_1099_MISC] = InputFormType.FORM_1099_MISC

    # Identity fields
    payer_name: str = Field(default="", description="Payer's name")
    payer_tin: str = Field(default="", description="Payer's TIN")
    recipient_tin: str = Field(default="", description="Recipient's TIN")

    rents: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Rents")
    royalties: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2: Royalties")
    other_income: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 3: Other income")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Federal income tax withheld")
    state_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 16: State tax withheld")

    @property
    def total_other_income(self) -> UsdAmount:
        """Boxes 1-3, reported on Schedule 1 and carried to line 8."""
        return self.rents + self.royalties + self.other_income


class FormSSA1099(InputForm):
    """SSA-1099 Social Security Benefit Statement data.

    ``taxable_benefits`` is the taxable portion from the Social Security
    benefits worksheet, supplied by the preparer.
    """

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.SOCIAL_SECURITY_GROSS: "net_benefits",
        IncomeField.SOCIAL_SECURITY_TAXABLE: "taxable_benefits",
        IncomeField.FEDERAL_WITHHOLDING: "federal_tax_withheld",
    }
    RECIPIENT_TIN_FIELD: ClassVar[str] = "beneficiary_ssn"
    # Box 5 goes negative when repayments exceed benefits paid.
    SIGNED_FIELDS: ClassVar[frozenset[str]] = frozenset({"net_benefits"})

    form_type: Literal[InputFormType.FORM_SSA_1099] = InputFormType.FORM_SSA_1099

    beneficiary_name: str = Field(default="", description="Box 1: Name")
    beneficiary_ssn: str = Field(default="", description="Box 2: Beneficiary's SSN")
    benefits_paid: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 3: Benefits paid")
    benefits_repaid: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Benefits repaid to SSA")
    net_benefits: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Net benefits")
    federal_tax_withheld: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 6: Voluntary federal income tax withheld")
    taxable_benefits: UsdAmount = Field(default=UsdAmount.ZERO, description="Taxable portion (benefits worksheet)")


# =============================================================================
# 1098 family
# =============================================================================


class Form1098(InputForm):
    """1098 Mortgage Interest Statement data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.MORTGAGE_INTEREST: "mortgage_interest",
        IncomeField.MORTGAGE_POINTS: "points_paid",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "lender_name",
        InfoField.PAYER_TIN: "lender_tin",
    }
    RECIPIENT_TIN_FIELD: ClassVar[str] = "borrower_tin"

    form_type: Literal[InputFormType.FORM_1098] = InputFormType.FORM_1098

    # Identity fields
    lender_name: str = Field(default="", description="Recipient/Lender name")
    lender_tin: str = Field(default="", description="Recipient/Lender TIN")
    borrower_tin: str = Field(default="", description="Payer/Borrower TIN")

    mortgage_interest: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Mortgage interest received")
    outstanding_principal: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 2: Outstanding mortgage principal")
    refund_overpaid_interest: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Refund of overpaid interest")
    mortgage_insurance_premiums: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Mortgage insurance premiums")
    points_paid: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 6: Points paid on purchase of principal residence")
    property_tax: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 10: Real estate taxes paid")


class Form1098E(InputForm):
    """1098-E Student Loan Interest Statement data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.STUDENT_LOAN_INTEREST: "student_loan_interest",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "lender_name",
        InfoField.PAYER_TIN: "lender_tin",
    }
    RECIPIENT_TIN_FIELD: ClassVar[str] = "borrower_tin"

    form_type: Literal[InputFormType.FORM_1098_E] = InputFormType.FORM_1098_E

    lender_name: str = Field(default="", description="Lender name")
    lender_tin: str = Field(default="", description="Lender TIN")
    borrower_tin: str = Field(default="", description="Borrower SSN")

    student_loan_interest: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Student loan interest received by lender")


class Form1098T(InputForm):
    """1098-T Tuition Statement data."""

    AMOUNT_FIELDS: ClassVar[dict[IncomeField, str]] = {
        IncomeField.TUITION_PAID: "payments_received",
    }
    INFO_FIELDS: ClassVar[dict[InfoField, str]] = {
        InfoField.PAYER_NAME: "institution_name",
        InfoField.PAYER_TIN: "institution_tin",
    }
    RECIPIENT_TIN_FIELD: ClassVar[str] = "student_tin"

    form_type: Literal[InputFormType.FORM_1098_T] = InputFormType.FORM_1098_T

    institution_name: str = Field(default="", description="Filer's (institution's) name")
    institution_tin: str = Field(default="", description="Filer's TIN")
    student_name: str = Field(default="", description="Student's name")
    student_tin: str = Field(default="", description="Student's TIN")

    payments_received: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 1: Payments received for qualified tuition")
    adjustments_prior_year: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 4: Adjustments made for a prior year")
    scholarships_grants: UsdAmount = Field(default=UsdAmount.ZERO, description="Box 5: Scholarships or grants")
    at_least_half_time: bool = Field(default=False, description="Box 8: At least half-time student")
    graduate_student: bool = Field(default=False, description="Box 9: Graduate student")


InputDocument = Annotated[
    Union[
        W2Data,
        Form1099INT,
        Form1099DIV,
        Form1099R,
        Form1099G,
        Form1099NEC,
        Form1099MISC,
        FormSSA1099,
        Form1098,
        Form1098E,
        Form1098T,
    ],
    Field(discriminator="form_type"),
]

FORM_MODELS: dict[InputFormType, type[InputForm]] = {
    InputFormType.W2: W2Data,
    InputFormType.FORM_1099_INT: Form1099INT,
    InputFormType.FORM_1099_DIV: Form1099DIV,
    InputFormType.FORM_1099_R: Form1099R,
    InputFormType.FORM_1099_G: Form1099G,
    InputFormType.FORM_1099_NEC: Form1099NEC,
    InputFormType.FORM_1099_MISC: Form1099MISC,
    InputFormType.FORM_SSA_1099: FormSSA1099,
    InputFormType.FORM_1098: Form1098,
    InputFormType.FORM_1098_E: Form1098E,
    InputFormType.FORM_1098_T: Form1098T,
}
