"""Tax year-specific statutory values.

Each supported year gets one module-level TaxRules constant built from
published IRS figures. Values are written as whole-dollar strings so they
are exact Decimals.

Example:
    >>> from taxengine.tax.year_config import RULES_2025
    >>> str(RULES_2025.standard_deduction_single)
    '$15,750.00'
"""

from __future__ import annotations

from decimal import Decimal

from taxengine.tax.currency import UsdAmount
from taxengine.tax.rules import PhaseOut, SeniorBonusDeduction, TaxBracket, TaxRules

_RATES = (
    Decimal("0.10"),
    Decimal("0.12"),
    Decimal("0.22"),
    Decimal("0.24"),
    Decimal("0.32"),
    Decimal("0.35"),
    Decimal("0.37"),
)


def _usd(value: str) -> UsdAmount:
    return UsdAmount(Decimal(value))


def build_brackets(ceilings: tuple[str, ...]) -> tuple[TaxBracket, ...]:
    """Build a seven-bracket table from its six bracket ceilings.

    Args:
        ceilings: Upper bound of each bracket except the top one, lowest first.

    Returns:
        Contiguous brackets starting at 0, the last one open-ended.
    """
    brackets = []
    floor = UsdAmount.ZERO
    for rate, ceiling in zip(_RATES, ceilings):
        top = _usd(ceiling)
        brackets.append(TaxBracket(rate=rate, min=floor, max=top))
        floor = top
    brackets.append(TaxBracket(rate=_RATES[len(ceilings)], min=floor, max=None))
    return tuple(brackets)


# 2025 Configuration - Rev. Proc. 2024-40 as amended by P.L. 119-21
RULES_2025 = TaxRules(
    tax_year=2025,
    brackets_single=build_brackets(
        ("11925", "48475", "103350", "197300", "250525", "626350")
    ),
    brackets_mfj=build_brackets(
        ("23850", "96950", "206700", "394600", "501050", "751600")
    ),
    brackets_mfs=build_brackets(
        ("11925", "48475", "103350", "197300", "250525", "375800")
    ),
    brackets_hoh=build_brackets(
        ("17000", "64850", "103350", "197300", "250500", "626350")
    ),
    # Standard deductions
    standard_deduction_single=_usd("15750"),
    standard_deduction_mfj=_usd("31500"),
    standard_deduction_mfs=_usd("15750"),
    standard_deduction_hoh=_usd("23625"),
    standard_deduction_qss=_usd("31500"),
    additional_65_blind_single=_usd("2000"),
    additional_65_blind_married=_usd("1600"),
    senior_bonus=SeniorBonusDeduction(
        amount_per_person=_usd("6000"),
        phase_out=PhaseOut(
            single_threshold=_usd("75000"),
            joint_threshold=_usd("150000"),
            mfs_threshold=_usd("75000"),
            rate=Decimal("0.06"),
        ),
    ),
    # Schedule 8812
    child_tax_credit_max=_usd("2200"),
    additional_child_tax_credit_max=_usd("1700"),
    actc_earned_income_threshold=_usd("2500"),
    actc_earned_income_rate=Decimal("0.15"),
    child_tax_credit_phase_out=PhaseOut(
        single_threshold=_usd("200000"),
        joint_threshold=_usd("400000"),
        mfs_threshold=_usd("200000"),
        rate=Decimal("0.05"),
    ),
    credit_for_other_dependents=_usd("500"),
    qbi_deduction_rate=Decimal("0.20"),
    # Payroll
    ss_wage_base=_usd("176100"),
)
