"""Aggregation of figures across every input document on a return."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from taxengine.documents.models import IncomeField, InputForm, InputFormType
from taxengine.tax.currency import UsdAmount


@dataclass
class WithholdingBySource:
    """Federal withholding split the way Form 1040 lines 25a-25c report it."""

    w2: UsdAmount
    form_1099: UsdAmount
    other: UsdAmount

    @property
    def total(self) -> UsdAmount:
        return self.w2 + self.form_1099 + self.other


class InputFormCollection:
    """Ordered set of input documents with concept-level totals.

    Example:
        >>> forms = InputFormCollection([W2Data(wages_tips_compensation="50000")])
        >>> str(forms.total_wages())
        '$50,000.00'
    """

    def __init__(self, forms: Iterable[InputForm] = ()) -> None:
        self._forms: list[InputForm] = list(forms)

    def __iter__(self) -> Iterator[InputForm]:
        return iter(self._forms)

    def __len__(self) -> int:
        return len(self._forms)

    def add(self, form: InputForm) -> None:
        self._forms.append(form)

    def of_type(self, form_type: InputFormType) -> list[InputForm]:
        return [form for form in self._forms if form.form_type == form_type]

    def total(self, *concepts: IncomeField) -> UsdAmount:
        """Sum the given concepts over every document; absent values count as zero."""
        result = UsdAmount.ZERO
        for form in self._forms:
            for concept in concepts:
                value = form.amount(concept)
                if value is not None:
                    result = result + value
        return result

    def total_wages(self) -> UsdAmount:
        return self.total(IncomeField.WAGES)

    def total_taxable_interest(self) -> UsdAmount:
        return self.total(IncomeField.TAXABLE_INTEREST)

    def total_ordinary_dividends(self) -> UsdAmount:
        return self.total(IncomeField.ORDINARY_DIVIDENDS)

    def total_qualified_dividends(self) -> UsdAmount:
        return self.total(IncomeField.QUALIFIED_DIVIDENDS)

    def total_federal_withholding(self) -> UsdAmount:
        return self.total(IncomeField.FEDERAL_WITHHOLDING)

    def total_state_withholding(self) -> UsdAmount:
        return self.total(IncomeField.STATE_WITHHOLDING)

    def withholding_by_source(self) -> WithholdingBySource:
        """Split federal withholding into W-2, 1099 and other sources."""
        w2 = UsdAmount.ZERO
        form_1099 = UsdAmount.ZERO
        other = UsdAmount.ZERO
        for form in self._forms:
            value = form.amount(IncomeField.FEDERAL_WITHHOLDING)
            if value is None:
                continue
            if form.form_type == InputFormType.W2:
                w2 = w2 + value
            elif form.form_type.is_1099_family:
                form_1099 = form_1099 + value
            else:
                other = other + value
        return WithholdingBySource(w2=w2, form_1099=form_1099, other=other)

    def recipient_identifiers(self) -> set[str]:
        """Distinct non-empty recipient SSN/TINs across documents."""
        return {
            form.recipient_identifier.strip()
            for form in self._forms
            if form.recipient_identifier.strip()
        }
