"""Output generators for computed returns.

This module provides preparer-facing output:
- form_to_dict / form_to_json: Form 1040 lines as JSON (decimal strings)
- generate_form_worksheet: Excel workbook with the Form 1040 lines, the
  bracket breakdown and any validation warnings
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import orjson
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from taxengine.core.config import settings
from taxengine.forms.base import FormValueType
from taxengine.forms.form1040 import Form1040
from taxengine.personal_tax.calculator import ReturnComputation
from taxengine.tax.currency import UsdAmount

CURRENCY_FORMAT = '"$"#,##0.00'
HEADER_FILL = PatternFill(start_color="DAEEF3", end_color="DAEEF3", fill_type="solid")

# Lines shown in bold on the worksheet.
KEY_LINES = frozenset({"9", "11", "15", "24", "33", "34", "35a", "37"})


# =============================================================================
# JSON export
# =============================================================================


def form_to_dict(form: Form1040) -> dict[str, Any]:
    """Form lines keyed by line id, currency as decimal strings.

    Raises:
        FormNotCalculatedError: If the form has not been calculated.
    """
    return {
        "form_type": form.form_type.value,
        "tax_year": form.tax_year,
        "lines": {line.line_id: line.value.to_json() for line in form.lines()},
        "is_refund": form.is_refund(),
        "net_result": str(form.net_result().amount),
    }


def form_to_json(form: Form1040) -> bytes:
    """Serialize a calculated form with orjson."""
    return orjson.dumps(form_to_dict(form), option=orjson.OPT_INDENT_2)


# =============================================================================
# Excel worksheet
# =============================================================================


def _format_amount(value: UsdAmount | None) -> float | None:
    """Convert UsdAmount to float for Excel display."""
    if value is None:
        return None
    return float(value.round_to_cents().amount)


def _auto_fit_columns(worksheet) -> None:
    """Auto-fit column widths based on content.

    Args:
        worksheet: openpyxl worksheet to adjust.
    """
    for column_cells in worksheet.columns:
        max_length = 0
        column = column_cells[0].column_letter
        for cell in column_cells:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        worksheet.column_dimensions[column].width = min(max_length + 2, 60)


def _write_header_row(worksheet, row: int, headers: list[str]) -> None:
    for col, header in enumerate(headers, start=1):
        cell = worksheet.cell(row=row, column=col, value=header)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", wrap_text=True)
        cell.fill = HEADER_FILL


def _add_form_sheet(
    workbook: Workbook, computation: ReturnComputation, taxpayer_name: str
) -> None:
    ws = workbook.active
    ws.title = "Form 1040"

    ws["A1"] = f"Form 1040: {taxpayer_name}"
    ws["A1"].font = Font(bold=True, size=14)
    ws["A2"] = f"Tax Year: {computation.tax_year}"
    ws["A3"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}"
    ws["A4"] = f"Deduction Method: {computation.deduction.method.title()}"

    _write_header_row(ws, 6, ["Line", "Description", "Amount"])
    row = 7
    for line in computation.form.lines():
        ws.cell(row=row, column=1, value=line.line_id)
        ws.cell(row=row, column=2, value=line.label)
        if line.value.value_type == FormValueType.CURRENCY:
            cell = ws.cell(row=row, column=3, value=_format_amount(line.value.as_currency()))
            cell.number_format = CURRENCY_FORMAT
        else:
            cell = ws.cell(row=row, column=3, value=str(line.value))
        if line.line_id in KEY_LINES:
            for col in (1, 2, 3):
                ws.cell(row=row, column=col).font = Font(bold=True)
        row += 1

    _auto_fit_columns(ws)


def _add_bracket_sheet(workbook: Workbook, computation: ReturnComputation) -> None:
    ws = workbook.create_sheet("Tax Brackets")
    _write_header_row(ws, 1, ["Rate", "From", "To", "Taxable Amount", "Tax"])

    row = 2
    for bracket_slice in computation.tax_breakdown:
        bracket = bracket_slice.bracket
        ws.cell(row=row, column=1, value=float(bracket.rate)).number_format = "0%"
        ws.cell(row=row, column=2, value=_format_amount(bracket.min)).number_format = CURRENCY_FORMAT
        if bracket.max is None:
            ws.cell(row=row, column=3, value="and over")
        else:
            ws.cell(row=row, column=3, value=_format_amount(bracket.max)).number_format = CURRENCY_FORMAT
        ws.cell(row=row, column=4, value=_format_amount(bracket_slice.taxable_amount)).number_format = CURRENCY_FORMAT
        ws.cell(row=row, column=5, value=_format_amount(bracket_slice.tax)).number_format = CURRENCY_FORMAT
        row += 1

    ws.cell(row=row, column=4, value="TOTAL").font = Font(bold=True)
    total = UsdAmount.total(s.tax for s in computation.tax_breakdown)
    cell = ws.cell(row=row, column=5, value=_format_amount(total))
    cell.number_format = CURRENCY_FORMAT
    cell.font = Font(bold=True)

    _auto_fit_columns(ws)


def _add_notes_sheet(workbook: Workbook, computation: ReturnComputation) -> None:
    ws = workbook.create_sheet("Review Notes")
    _write_header_row(ws, 1, ["Field", "Warning"])
    for row, issue in enumerate(computation.warnings, start=2):
        ws.cell(row=row, column=1, value=issue.field)
        ws.cell(row=row, column=2, value=issue.message)
    _auto_fit_columns(ws)


def generate_form_worksheet(
    computation: ReturnComputation,
    output_path: Path | None = None,
    taxpayer_name: str = "",
) -> Path:
    """Generate an Excel worksheet for a computed return.

    Creates sheets for the Form 1040 lines, the per-bracket tax breakdown
    and validation warnings for preparer review.

    Args:
        computation: Result of compute_return.
        output_path: Where to save the xlsx file. Defaults to
            ``form1040_worksheet_<year>.xlsx`` under ``settings.output_dir``.
        taxpayer_name: Name for the sheet header.

    Returns:
        Path to generated file.
    """
    if output_path is None:
        output_path = Path(settings.output_dir) / f"form1040_worksheet_{computation.tax_year}.xlsx"

    workbook = Workbook()

    _add_form_sheet(workbook, computation, taxpayer_name or "Taxpayer")
    _add_bracket_sheet(workbook, computation)
    _add_notes_sheet(workbook, computation)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)

    return output_path
