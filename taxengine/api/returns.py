"""Return computation endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from taxengine.core.logging import get_logger
from taxengine.personal_tax.calculator import TaxReturnInput, compute_return
from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import UnsupportedTaxYearError, ValidationFailedError
from taxengine.tax.loader import RulesLoader

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["returns"])


class RulesYearsResponse(BaseModel):
    """Tax years the engine has rules for."""

    min_year: int
    max_year: int
    years: list[int]


class IssueResponse(BaseModel):
    """One validation issue."""

    field: str
    message: str
    severity: str


class FormLineResponse(BaseModel):
    """One Form 1040 line."""

    line_id: str
    label: str
    value: str | bool


class ComputeResponse(BaseModel):
    """A computed Form 1040 with its headline figures."""

    return_id: str
    tax_year: int
    filing_status: str
    deduction_method: str
    adjusted_gross_income: str
    taxable_income: str
    total_tax: str
    total_payments: str
    is_refund: bool
    refund: str
    amount_owed: str
    effective_rate: str
    lines: list[FormLineResponse]
    warnings: list[IssueResponse] = Field(default_factory=list)


def _money(amount: UsdAmount) -> str:
    return str(amount.round_to_cents().amount)


@router.get("/rules/years", response_model=RulesYearsResponse)
async def supported_years() -> RulesYearsResponse:
    """List the tax years that can be computed."""
    loader = RulesLoader()
    return RulesYearsResponse(
        min_year=loader.min_year,
        max_year=loader.max_year,
        years=list(loader.supported_years()),
    )


@router.post("/returns/compute", response_model=ComputeResponse)
def compute(tax_return: TaxReturnInput) -> ComputeResponse:
    """Compute Form 1040 for the submitted return.

    Raises:
        HTTPException: 400 for an unsupported tax year, 422 listing every
            validation issue when the return has errors.
    """
    try:
        result = compute_return(tax_return)
    except UnsupportedTaxYearError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "message": str(exc),
                "min_year": exc.min_year,
                "max_year": exc.max_year,
            },
        ) from exc
    except ValidationFailedError as exc:
        raise HTTPException(
            status_code=422,
            detail={
                "message": exc.reason,
                "issues": [
                    {
                        "field": issue.field,
                        "message": issue.message,
                        "severity": issue.severity.value,
                    }
                    for issue in exc.issues
                ],
            },
        ) from exc

    form = result.form
    return ComputeResponse(
        return_id=tax_return.return_id,
        tax_year=result.tax_year,
        filing_status=tax_return.filing_status.value,
        deduction_method=result.deduction.method,
        adjusted_gross_income=_money(form.amount("11")),
        taxable_income=_money(form.amount("15")),
        total_tax=_money(form.amount("24")),
        total_payments=_money(form.amount("33")),
        is_refund=form.is_refund(),
        refund=_money(result.refund),
        amount_owed=_money(result.amount_owed),
        effective_rate=str(result.effective_rate),
        lines=[
            FormLineResponse(
                line_id=line.line_id, label=line.label, value=line.value.to_json()
            )
            for line in form.lines()
        ],
        warnings=[
            IssueResponse(
                field=issue.field,
                message=issue.message,
                severity=issue.severity.value,
            )
            for issue in result.warnings
        ],
    )
