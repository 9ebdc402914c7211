"""Form 1040: U.S. Individual Income Tax Return.

Entered lines (wages, deductions, tax, credits, payments) are written with
``set_line``; ``calculate()`` then derives the totals in the order the form
itself uses. Reading a derived line before ``calculate()`` has run, or
after a later ``set_line``, raises FormNotCalculatedError rather than
returning a stale figure.

Example:
    >>> form = Form1040(2025)
    >>> form.set_line("1a", UsdAmount.from_dollars(50000))
    >>> form.calculate()
    >>> str(form.amount("9"))
    '$50,000.00'
"""

from __future__ import annotations

from taxengine.forms.base import FormLine, FormValue, OutputFormType
from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import FormNotCalculatedError, InvalidValueError

STANDARD_DEDUCTION_FLAG = "12_standard_deduction"

# (line id, label) in form order.
LINE_LABELS: tuple[tuple[str, str], ...] = (
    ("1a", "Wages from Form(s) W-2, box 1"),
    ("1b", "Household employee wages not reported on Form(s) W-2"),
    ("1c", "Tip income not reported on line 1a"),
    ("1d", "Medicaid waiver payments not reported on Form(s) W-2"),
    ("1e", "Taxable dependent care benefits"),
    ("1f", "Employer-provided adoption benefits"),
    ("1g", "Wages from Form 8919"),
    ("1h", "Other earned income"),
    ("1i", "Nontaxable combat pay election"),
    ("1z", "Total wages"),
    ("2a", "Tax-exempt interest"),
    ("2b", "Taxable interest"),
    ("3a", "Qualified dividends"),
    ("3b", "Ordinary dividends"),
    ("4a", "IRA distributions"),
    ("4b", "IRA distributions, taxable amount"),
    ("5a", "Pensions and annuities"),
    ("5b", "Pensions and annuities, taxable amount"),
    ("6a", "Social security benefits"),
    ("6b", "Social security benefits, taxable amount"),
    ("7", "Capital gain or (loss)"),
    ("8", "Additional income from Schedule 1"),
    ("9", "Total income"),
    ("10", "Adjustments to income from Schedule 1"),
    ("11", "Adjusted gross income"),
    ("12", "Standard deduction or itemized deductions"),
    (STANDARD_DEDUCTION_FLAG, "Standard deduction taken"),
    ("13a", "Qualified business income deduction"),
    ("13b", "Additional deductions from Schedule 1-A"),
    ("14", "Total deductions"),
    ("15", "Taxable income"),
    ("16", "Tax"),
    ("17", "Amount from Schedule 2, line 3"),
    ("18", "Total tax before credits"),
    ("19", "Child tax credit or credit for other dependents"),
    ("20", "Amount from Schedule 3, line 8"),
    ("21", "Total nonrefundable credits"),
    ("22", "Tax after nonrefundable credits"),
    ("23", "Other taxes from Schedule 2, line 21"),
    ("24", "Total tax"),
    ("25a", "Federal income tax withheld from Form(s) W-2"),
    ("25b", "Federal income tax withheld from Form(s) 1099"),
    ("25c", "Federal income tax withheld from other forms"),
    ("25d", "Total federal income tax withheld"),
    ("26", "Estimated tax payments and amount applied from prior year"),
    ("27a", "Earned income credit"),
    ("28", "Additional child tax credit"),
    ("29", "American opportunity credit"),
    ("30", "Reserved for future use"),
    ("31", "Amount from Schedule 3, line 15"),
    ("32", "Total other payments and refundable credits"),
    ("33", "Total payments"),
    ("34", "Overpaid"),
    ("35a", "Refunded to you"),
    ("36", "Applied to next year's estimated tax"),
    ("37", "Amount you owe"),
    ("38", "Estimated tax penalty"),
)

DERIVED_LINES = frozenset(
    {"1z", "9", "11", "14", "15", "18", "21", "22", "24", "25d", "32", "33", "34", "35a", "37"}
)

_LABELS = dict(LINE_LABELS)


class Form1040:
    """Form 1040 line store and derivation chain.

    Attributes:
        tax_year: Tax year this form is for.
    """

    def __init__(self, tax_year: int) -> None:
        self.tax_year = tax_year
        self._values: dict[str, FormValue] = {
            line_id: FormValue.currency(UsdAmount.ZERO) for line_id, _ in LINE_LABELS
        }
        self._values[STANDARD_DEDUCTION_FLAG] = FormValue.boolean(True)
        self._calculated = False

    @property
    def form_type(self) -> OutputFormType:
        return OutputFormType.FORM_1040

    @property
    def is_calculated(self) -> bool:
        return self._calculated

    # =========================================================================
    # Line access
    # =========================================================================

    def set_line(self, line_id: str, value: FormValue | UsdAmount | bool) -> None:
        """Enter a value on a line.

        Raises:
            InvalidValueError: If the line doesn't exist, is derived, or the
                value type doesn't match the line.
        """
        if line_id not in _LABELS:
            raise InvalidValueError("line_id", f"Form 1040 has no line {line_id!r}")
        if line_id in DERIVED_LINES:
            raise InvalidValueError(line_id, "line is derived by calculate()")
        form_value = FormValue.coerce(value)
        if form_value.value_type != self._values[line_id].value_type:
            raise InvalidValueError(
                line_id, f"expected {self._values[line_id].value_type.value} value"
            )
        self._values[line_id] = form_value
        self._calculated = False

    def line(self, line_id: str) -> FormValue | None:
        """Value of a line, or None if the form has no such line.

        Raises:
            FormNotCalculatedError: If the line is derived and the form has
                not been calculated since the last change.
        """
        if line_id not in _LABELS:
            return None
        if line_id in DERIVED_LINES and not self._calculated:
            raise FormNotCalculatedError("Form 1040", line_id)
        return self._values[line_id]

    def amount(self, line_id: str) -> UsdAmount:
        """Currency value of a line.

        Raises:
            InvalidValueError: If the line doesn't exist or isn't currency.
        """
        value = self.line(line_id)
        if value is None:
            raise InvalidValueError("line_id", f"Form 1040 has no line {line_id!r}")
        return value.as_currency()

    def lines(self) -> list[FormLine]:
        """Every line in form order.

        Raises:
            FormNotCalculatedError: If the form has not been calculated.
        """
        if not self._calculated:
            raise FormNotCalculatedError("Form 1040", "1z")
        return [
            FormLine(line_id=line_id, label=label, value=self._values[line_id])
            for line_id, label in LINE_LABELS
        ]

    def _get(self, line_id: str) -> UsdAmount:
        return self._values[line_id].as_currency()

    def _put(self, line_id: str, amount: UsdAmount) -> None:
        self._values[line_id] = FormValue.currency(amount)

    def _sum(self, *line_ids: str) -> UsdAmount:
        return UsdAmount.total(self._get(line_id) for line_id in line_ids)

    @property
    def uses_standard_deduction(self) -> bool:
        return self._values[STANDARD_DEDUCTION_FLAG].as_bool()

    # =========================================================================
    # Derivations
    # =========================================================================

    def calculate_line_1z(self) -> None:
        """Line 1z: sum of lines 1a through 1h (1i is informational)."""
        self._put("1z", self._sum("1a", "1b", "1c", "1d", "1e", "1f", "1g", "1h"))

    def calculate_line_9(self) -> None:
        """Line 9: total income."""
        self._put("9", self._sum("1z", "2b", "3b", "4b", "5b", "6b", "7", "8"))

    def calculate_line_11(self) -> None:
        """Line 11: adjusted gross income. May be negative."""
        self._put("11", self._get("9") - self._get("10"))

    def calculate_line_14(self) -> None:
        self._put("14", self._sum("12", "13a", "13b"))

    def calculate_line_15(self) -> None:
        """Line 15: taxable income, never below zero."""
        self._put("15", self._get("11").saturating_sub(self._get("14")))

    def calculate_line_18(self) -> None:
        self._put("18", self._sum("16", "17"))

    def calculate_line_21(self) -> None:
        self._put("21", self._sum("19", "20"))

    def calculate_line_22(self) -> None:
        self._put("22", self._get("18").saturating_sub(self._get("21")))

    def calculate_line_24(self) -> None:
        self._put("24", self._sum("22", "23"))

    def calculate_line_25d(self) -> None:
        self._put("25d", self._sum("25a", "25b", "25c"))

    def calculate_line_32(self) -> None:
        self._put("32", self._sum("27a", "28", "29", "30", "31"))

    def calculate_line_33(self) -> None:
        self._put("33", self._sum("25d", "26", "32"))

    def calculate_refund_or_owed(self) -> None:
        """Lines 34, 35a and 37 from total payments vs. total tax."""
        total_tax = self._get("24")
        payments = self._get("33")
        if payments > total_tax:
            overpaid = payments - total_tax
            self._put("34", overpaid)
            self._put("35a", overpaid - self._get("36"))
            self._put("37", UsdAmount.ZERO)
        else:
            self._put("34", UsdAmount.ZERO)
            self._put("35a", UsdAmount.ZERO)
            self._put("37", total_tax - payments + self._get("38"))

    def calculate(self) -> None:
        """Derive every total line in form order."""
        self.calculate_line_1z()
        self.calculate_line_9()
        self.calculate_line_11()
        self.calculate_line_14()
        self.calculate_line_15()
        self.calculate_line_18()
        self.calculate_line_21()
        self.calculate_line_22()
        self.calculate_line_24()
        self.calculate_line_25d()
        self.calculate_line_32()
        self.calculate_line_33()
        self.calculate_refund_or_owed()
        self._calculated = True

    # =========================================================================
    # Results
    # =========================================================================

    def _require_calculated(self, line_id: str) -> None:
        if not self._calculated:
            raise FormNotCalculatedError("Form 1040", line_id)

    def is_refund(self) -> bool:
        self._require_calculated("34")
        return self._get("34").is_positive()

    def refund(self) -> UsdAmount:
        self._require_calculated("35a")
        return self._get("35a")

    def amount_owed(self) -> UsdAmount:
        self._require_calculated("37")
        return self._get("37")

    def net_result(self) -> UsdAmount:
        """Refund as a positive amount, balance due as a negative one."""
        if self.is_refund():
            return self._get("35a")
        return -self._get("37")
