"""Child Tax Credit, Credit for Other Dependents and Additional CTC.

Follows the Schedule 8812 worksheet: one combined credit for qualifying
children and other dependents, reduced by the AGI phase-out, split into a
nonrefundable part limited by tax liability (Form 1040 line 19) and a
refundable Additional Child Tax Credit (line 28).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from taxengine.core.logging import get_logger
from taxengine.tax.currency import UsdAmount
from taxengine.tax.rules import TaxRules
from taxengine.tax.types import Dependent, FilingStatus

logger = get_logger(__name__)


@dataclass
class CreditItem:
    """Individual tax credit.

    Attributes:
        name: Name of the credit (e.g., "Child Tax Credit").
        amount: Credit amount.
        refundable: Whether the credit is refundable (can exceed tax liability).
        form: IRS form for claiming this credit.
    """

    name: str
    amount: UsdAmount
    refundable: bool
    form: str


@dataclass
class ChildTaxCreditResult:
    """Outcome of the Schedule 8812 computation.

    Attributes:
        num_ctc_children: Dependents qualifying for the Child Tax Credit.
        num_odc_dependents: Dependents falling to the Credit for Other Dependents.
        initial_credit: Credit before the AGI phase-out.
        phase_out_reduction: Reduction from the AGI phase-out.
        credit_after_phase_out: Credit remaining after the phase-out.
        nonrefundable_credit: Portion limited by tax liability (line 19).
        additional_child_tax_credit: Refundable ACTC (line 28).
        items: Itemized credits for reporting.
    """

    num_ctc_children: int = 0
    num_odc_dependents: int = 0
    initial_credit: UsdAmount = UsdAmount.ZERO
    phase_out_reduction: UsdAmount = UsdAmount.ZERO
    credit_after_phase_out: UsdAmount = UsdAmount.ZERO
    nonrefundable_credit: UsdAmount = UsdAmount.ZERO
    additional_child_tax_credit: UsdAmount = UsdAmount.ZERO
    items: list[CreditItem] = field(default_factory=list)

    @property
    def total_credit(self) -> UsdAmount:
        return self.nonrefundable_credit + self.additional_child_tax_credit


def count_dependents(dependents: Iterable[Dependent]) -> tuple[int, int]:
    """Return (CTC children, ODC dependents)."""
    ctc = 0
    odc = 0
    for dependent in dependents:
        if dependent.qualifies_for_ctc():
            ctc += 1
        else:
            odc += 1
    return ctc, odc


def compute_child_tax_credit(
    rules: TaxRules,
    status: FilingStatus,
    agi: UsdAmount,
    dependents: Iterable[Dependent],
    tax_liability: UsdAmount,
    earned_income: UsdAmount,
) -> ChildTaxCreditResult:
    """Compute the child and other-dependent credits for a return.

    Args:
        rules: Tax rules for the year.
        status: Filing status (selects the phase-out threshold).
        agi: Adjusted gross income (Form 1040 line 11).
        dependents: Dependents claimed on the return.
        tax_liability: Tax the nonrefundable credit may offset (line 18).
        earned_income: Earned income for the ACTC computation.

    Returns:
        ChildTaxCreditResult with the line 19 and line 28 amounts.

    Example:
        >>> result = compute_child_tax_credit(
        ...     RULES_2025, FilingStatus.SINGLE, UsdAmount.from_dollars(50000),
        ...     [child], UsdAmount.from_dollars(1000), UsdAmount.from_dollars(50000),
        ... )
        >>> str(result.nonrefundable_credit), str(result.additional_child_tax_credit)
        ('$1,000.00', '$1,200.00')
    """
    num_ctc, num_odc = count_dependents(dependents)
    result = ChildTaxCreditResult(num_ctc_children=num_ctc, num_odc_dependents=num_odc)
    if num_ctc == 0 and num_odc == 0:
        return result

    initial = (
        rules.child_tax_credit_max * num_ctc
        + rules.credit_for_other_dependents * num_odc
    )
    phase_out = rules.child_tax_credit_phase_out
    reduction = phase_out.reduction(status, agi)
    after_phase_out = initial.saturating_sub(reduction)

    nonrefundable = after_phase_out.min(tax_liability.max(UsdAmount.ZERO))

    actc = UsdAmount.ZERO
    if num_ctc > 0:
        unused = after_phase_out - nonrefundable
        per_child_cap = rules.additional_child_tax_credit_max * num_ctc
        earned_excess = earned_income.saturating_sub(rules.actc_earned_income_threshold)
        earned_limit = earned_excess.multiply_rate(rules.actc_earned_income_rate)
        actc = unused.min(per_child_cap).min(earned_limit)

    result.initial_credit = initial
    result.phase_out_reduction = initial - after_phase_out
    result.credit_after_phase_out = after_phase_out
    result.nonrefundable_credit = nonrefundable
    result.additional_child_tax_credit = actc

    if nonrefundable.is_positive():
        result.items.append(
            CreditItem(
                name="Child Tax Credit / Credit for Other Dependents",
                amount=nonrefundable,
                refundable=False,
                form="Schedule 8812",
            )
        )
    if actc.is_positive():
        result.items.append(
            CreditItem(
                name="Additional Child Tax Credit",
                amount=actc,
                refundable=True,
                form="Schedule 8812",
            )
        )

    logger.debug(
        "child_tax_credit_computed",
        ctc_children=num_ctc,
        odc_dependents=num_odc,
        nonrefundable=str(nonrefundable),
        refundable=str(actc),
    )
    return result
