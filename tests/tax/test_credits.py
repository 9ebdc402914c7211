"""Tests for the Child Tax Credit, ODC and Additional Child Tax Credit."""

from decimal import Decimal

import pytest

from taxengine.tax.credits import compute_child_tax_credit, count_dependents
from taxengine.tax.currency import UsdAmount
from taxengine.tax.rules import TaxRules
from taxengine.tax.types import Dependent, DependentRelationship, FilingStatus


def usd(value: str) -> UsdAmount:
    return UsdAmount(Decimal(value))


def make_child(age: int = 10, ssn: str = "987-65-4321") -> Dependent:
    return Dependent(
        first_name="Kid",
        ssn=ssn,
        relationship=DependentRelationship.DAUGHTER,
        age=age,
        months_lived_with_taxpayer=12,
    )


@pytest.fixture
def parent() -> Dependent:
    return Dependent(
        first_name="Grandma",
        ssn="111-22-3333",
        relationship=DependentRelationship.PARENT,
        age=80,
        months_lived_with_taxpayer=12,
    )


def test_count_dependents(parent: Dependent) -> None:
    assert count_dependents([make_child(16), make_child(17), parent]) == (1, 2)


def test_no_dependents_gives_empty_result(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("50000"), [], usd("5000"), usd("50000")
    )
    assert result.total_credit == UsdAmount.ZERO
    assert result.items == []


def test_age_16_gets_child_credit(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("50000"), [make_child(16)], usd("5000"), usd("50000")
    )
    assert result.num_ctc_children == 1
    assert result.nonrefundable_credit == usd("2200")
    assert result.additional_child_tax_credit == UsdAmount.ZERO


def test_age_17_gets_other_dependent_credit(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("50000"), [make_child(17)], usd("5000"), usd("50000")
    )
    assert result.num_ctc_children == 0
    assert result.num_odc_dependents == 1
    assert result.nonrefundable_credit == usd("500")


def test_refundable_portion_capped_per_child(rules: TaxRules) -> None:
    """Tax of $1,000 leaves $1,200 unused, all of it refundable."""
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("50000"), [make_child()], usd("1000"), usd("50000")
    )
    assert result.nonrefundable_credit == usd("1000")
    assert result.additional_child_tax_credit == usd("1200")
    assert len(result.items) == 2
    assert result.items[1].refundable


def test_refundable_portion_capped_at_1700(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("20000"), [make_child()], UsdAmount.ZERO, usd("20000")
    )
    assert result.nonrefundable_credit == UsdAmount.ZERO
    assert result.additional_child_tax_credit == usd("1700")


def test_refundable_portion_limited_by_earned_income(rules: TaxRules) -> None:
    """15% of earned income over $2,500: 15% of $5,500."""
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("8000"), [make_child()], UsdAmount.ZERO, usd("8000")
    )
    assert result.additional_child_tax_credit == usd("825")


def test_no_refundable_portion_for_other_dependents(rules: TaxRules, parent: Dependent) -> None:
    result = compute_child_tax_credit(
        rules, FilingStatus.SINGLE, usd("30000"), [parent], UsdAmount.ZERO, usd("30000")
    )
    assert result.total_credit == UsdAmount.ZERO


def test_phase_out_single(rules: TaxRules) -> None:
    """5% of AGI over $200,000 comes off the combined credit."""
    result = compute_child_tax_credit(
        rules,
        FilingStatus.SINGLE,
        usd("220000"),
        [make_child(), make_child()],
        usd("40000"),
        usd("220000"),
    )
    assert result.initial_credit == usd("4400")
    assert result.phase_out_reduction == usd("1000")
    assert result.nonrefundable_credit == usd("3400")


def test_phase_out_joint_threshold(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules,
        FilingStatus.MARRIED_FILING_JOINTLY,
        usd("220000"),
        [make_child()],
        usd("40000"),
        usd("220000"),
    )
    assert result.phase_out_reduction == UsdAmount.ZERO
    assert result.nonrefundable_credit == usd("2200")


def test_fully_phased_out(rules: TaxRules) -> None:
    result = compute_child_tax_credit(
        rules,
        FilingStatus.SINGLE,
        usd("400000"),
        [make_child()],
        usd("100000"),
        usd("400000"),
    )
    assert result.credit_after_phase_out == UsdAmount.ZERO
    assert result.phase_out_reduction == usd("2200")
    assert result.total_credit == UsdAmount.ZERO
