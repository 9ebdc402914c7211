"""Year-scoped statutory rules and the formulas that apply them.

A TaxRules instance holds everything that changes from one tax year to the
next: bracket tables, standard deduction amounts, phase-out thresholds and
credit parameters. Instances are frozen and built once per year (see
year_config.py); the formulas here are pure functions of the rules and
their arguments.

Example:
    >>> from taxengine.tax.loader import get_tax_rules
    >>> from taxengine.tax.types import FilingStatus
    >>> rules = get_tax_rules(2025)
    >>> str(rules.calculate_tax(FilingStatus.SINGLE, UsdAmount.from_dollars(50000)))
    '$5,914.00'
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import InvalidValueError
from taxengine.tax.types import FilingStatus


@dataclass(frozen=True)
class TaxBracket:
    """One marginal rate band. ``max`` is None for the top bracket."""

    rate: Decimal
    min: UsdAmount
    max: UsdAmount | None = None

    @property
    def is_open_ended(self) -> bool:
        return self.max is None


@dataclass(frozen=True)
class BracketSlice:
    """The part of taxable income taxed inside one bracket."""

    bracket: TaxBracket
    taxable_amount: UsdAmount
    tax: UsdAmount


@dataclass(frozen=True)
class PhaseOut:
    """Linear reduction of a benefit above an AGI threshold.

    Single and head-of-household filers share ``single_threshold``; joint
    filers and qualifying surviving spouses share ``joint_threshold``.
    """

    single_threshold: UsdAmount
    joint_threshold: UsdAmount
    mfs_threshold: UsdAmount
    rate: Decimal

    def threshold_for(self, status: FilingStatus) -> UsdAmount:
        if status in (
            FilingStatus.MARRIED_FILING_JOINTLY,
            FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
        ):
            return self.joint_threshold
        if status == FilingStatus.MARRIED_FILING_SEPARATELY:
            return self.mfs_threshold
        return self.single_threshold

    def reduction(self, status: FilingStatus, agi: UsdAmount) -> UsdAmount:
        """Amount the benefit is reduced by; zero at or below the threshold."""
        threshold = self.threshold_for(status)
        if agi <= threshold:
            return UsdAmount.ZERO
        return (agi - threshold).multiply_rate(self.rate)

    def apply(self, status: FilingStatus, agi: UsdAmount, amount: UsdAmount) -> UsdAmount:
        """Reduce ``amount`` by the phase-out, never below zero."""
        return amount.saturating_sub(self.reduction(status, agi))


@dataclass(frozen=True)
class SeniorBonusDeduction:
    """Additional deduction per taxpayer or spouse aged 65 or older."""

    amount_per_person: UsdAmount
    phase_out: PhaseOut


def _validate_brackets(name: str, brackets: tuple[TaxBracket, ...]) -> None:
    if not brackets:
        raise InvalidValueError(name, "bracket table is empty")
    if not brackets[0].min.is_zero():
        raise InvalidValueError(name, "first bracket must start at 0")
    previous: TaxBracket | None = None
    for index, bracket in enumerate(brackets):
        if not (Decimal("0") <= bracket.rate <= Decimal("1")):
            raise InvalidValueError(name, f"bracket {index} rate {bracket.rate} outside [0, 1]")
        if previous is not None and previous.max != bracket.min:
            raise InvalidValueError(
                name, f"bracket {index} starts at {bracket.min}, expected {previous.max}"
            )
        is_last = index == len(brackets) - 1
        if bracket.is_open_ended != is_last:
            raise InvalidValueError(name, "only the last bracket may be open-ended")
        if bracket.max is not None and bracket.max <= bracket.min:
            raise InvalidValueError(name, f"bracket {index} is empty")
        previous = bracket


@dataclass(frozen=True)
class TaxRules:
    """Statutory values for one tax year.

    Monetary values are UsdAmount and rates are Decimal. The dataclass is
    frozen and every sequence is a tuple, so one instance is safely shared.

    Attributes:
        tax_year: The tax year these values apply to.
        brackets_single: Single filer brackets.
        brackets_mfj: Married filing jointly brackets, also used for QSS.
        brackets_mfs: Married filing separately brackets.
        brackets_hoh: Head of household brackets.
        standard_deduction_*: Base standard deduction per status.
        additional_65_blind_single: Age-65/blind increment for Single and HoH.
        additional_65_blind_married: Age-65/blind increment for MFJ, MFS, QSS.
        senior_bonus: Optional per-senior bonus deduction with phase-out.
    """

    tax_year: int

    brackets_single: tuple[TaxBracket, ...]
    brackets_mfj: tuple[TaxBracket, ...]
    brackets_mfs: tuple[TaxBracket, ...]
    brackets_hoh: tuple[TaxBracket, ...]

    # Standard deductions
    standard_deduction_single: UsdAmount
    standard_deduction_mfj: UsdAmount
    standard_deduction_mfs: UsdAmount
    standard_deduction_hoh: UsdAmount
    standard_deduction_qss: UsdAmount
    additional_65_blind_single: UsdAmount
    additional_65_blind_married: UsdAmount
    senior_bonus: SeniorBonusDeduction | None

    # Child Tax Credit / Credit for Other Dependents (Schedule 8812)
    child_tax_credit_max: UsdAmount
    additional_child_tax_credit_max: UsdAmount
    actc_earned_income_threshold: UsdAmount
    child_tax_credit_phase_out: PhaseOut
    credit_for_other_dependents: UsdAmount
    actc_earned_income_rate: Decimal = Decimal("0.15")

    qbi_deduction_rate: Decimal = Decimal("0.20")
    personal_exemption: UsdAmount = UsdAmount.ZERO

    # Payroll constants used to sanity-check W-2 boxes
    ss_wage_base: UsdAmount = UsdAmount.ZERO
    ss_rate_employee: Decimal = Decimal("0.062")
    medicare_rate: Decimal = Decimal("0.0145")

    def __post_init__(self) -> None:
        _validate_brackets("brackets_single", self.brackets_single)
        _validate_brackets("brackets_mfj", self.brackets_mfj)
        _validate_brackets("brackets_mfs", self.brackets_mfs)
        _validate_brackets("brackets_hoh", self.brackets_hoh)

    # =========================================================================
    # Brackets
    # =========================================================================

    def brackets(self, status: FilingStatus) -> tuple[TaxBracket, ...]:
        if status in (
            FilingStatus.MARRIED_FILING_JOINTLY,
            FilingStatus.QUALIFYING_SURVIVING_SPOUSE,
        ):
            return self.brackets_mfj
        if status == FilingStatus.MARRIED_FILING_SEPARATELY:
            return self.brackets_mfs
        if status == FilingStatus.HEAD_OF_HOUSEHOLD:
            return self.brackets_hoh
        return self.brackets_single

    def tax_breakdown(
        self, status: FilingStatus, taxable_income: UsdAmount
    ) -> list[BracketSlice]:
        """Split taxable income across the brackets it reaches.

        Args:
            status: Filing status selecting the bracket table.
            taxable_income: Form 1040 line 15.

        Returns:
            One BracketSlice per bracket that taxes a positive amount, lowest
            first. Zero or negative income yields an empty list.
        """
        slices: list[BracketSlice] = []
        previous_max = UsdAmount.ZERO
        for bracket in self.brackets(status):
            if taxable_income <= previous_max:
                break
            if bracket.max is None:
                in_bracket = taxable_income - previous_max
            else:
                in_bracket = taxable_income.min(bracket.max) - previous_max
            slices.append(
                BracketSlice(
                    bracket=bracket,
                    taxable_amount=in_bracket,
                    tax=in_bracket.multiply_rate(bracket.rate),
                )
            )
            if bracket.max is None:
                break
            previous_max = bracket.max
        return slices

    def calculate_tax(self, status: FilingStatus, taxable_income: UsdAmount) -> UsdAmount:
        """Regular income tax on taxable income, unrounded."""
        return UsdAmount.total(s.tax for s in self.tax_breakdown(status, taxable_income))

    def marginal_rate(self, status: FilingStatus, taxable_income: UsdAmount) -> Decimal:
        slices = self.tax_breakdown(status, taxable_income)
        if not slices:
            return self.brackets(status)[0].rate
        return slices[-1].bracket.rate

    # =========================================================================
    # Standard deduction
    # =========================================================================

    def base_standard_deduction(self, status: FilingStatus) -> UsdAmount:
        return {
            FilingStatus.SINGLE: self.standard_deduction_single,
            FilingStatus.MARRIED_FILING_JOINTLY: self.standard_deduction_mfj,
            FilingStatus.MARRIED_FILING_SEPARATELY: self.standard_deduction_mfs,
            FilingStatus.HEAD_OF_HOUSEHOLD: self.standard_deduction_hoh,
            FilingStatus.QUALIFYING_SURVIVING_SPOUSE: self.standard_deduction_qss,
        }[status]

    def additional_65_blind(self, status: FilingStatus) -> UsdAmount:
        if status in (FilingStatus.SINGLE, FilingStatus.HEAD_OF_HOUSEHOLD):
            return self.additional_65_blind_single
        return self.additional_65_blind_married

    def senior_bonus_amount(
        self, status: FilingStatus, senior_count: int, agi: UsdAmount
    ) -> UsdAmount:
        """Senior bonus deduction after phase-out for ``senior_count`` people."""
        if self.senior_bonus is None or senior_count <= 0:
            return UsdAmount.ZERO
        full = self.senior_bonus.amount_per_person * senior_count
        return self.senior_bonus.phase_out.apply(status, agi, full)

    def standard_deduction(
        self,
        status: FilingStatus,
        taxpayer_65: bool = False,
        taxpayer_blind: bool = False,
        spouse_65: bool = False,
        spouse_blind: bool = False,
        agi: UsdAmount | None = None,
    ) -> UsdAmount:
        """Standard deduction including age/blind increments and senior bonus.

        Spouse increments only count for married filing jointly. With no
        ``agi`` the senior bonus is taken in full.

        Args:
            status: Filing status.
            taxpayer_65: Taxpayer was 65 or older at year end.
            taxpayer_blind: Taxpayer was blind at year end.
            spouse_65: Spouse was 65 or older (MFJ only).
            spouse_blind: Spouse was blind (MFJ only).
            agi: Adjusted gross income used for the senior bonus phase-out.

        Returns:
            The full standard deduction for Form 1040 line 12.
        """
        joint = status == FilingStatus.MARRIED_FILING_JOINTLY
        increment = self.additional_65_blind(status)

        count = int(taxpayer_65) + int(taxpayer_blind)
        if joint:
            count += int(spouse_65) + int(spouse_blind)
        deduction = self.base_standard_deduction(status) + increment * count

        seniors = int(taxpayer_65) + (int(spouse_65) if joint else 0)
        return deduction + self.senior_bonus_amount(
            status, seniors, agi if agi is not None else UsdAmount.ZERO
        )
