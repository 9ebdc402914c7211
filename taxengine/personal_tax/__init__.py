"""Personal return computation and output.

Components:
- Calculator: TaxReturnInput to a calculated Form 1040 (compute_return)
- Output generators: JSON export and Excel worksheet
"""

from taxengine.personal_tax.calculator import (
    DeductionResult,
    ManualEntries,
    ReturnComputation,
    TaxReturnInput,
    compute_qbi_deduction,
    compute_return,
    select_deduction,
)
from taxengine.personal_tax.output import (
    form_to_dict,
    form_to_json,
    generate_form_worksheet,
)

__all__ = [
    "DeductionResult",
    "ManualEntries",
    "ReturnComputation",
    "TaxReturnInput",
    "compute_qbi_deduction",
    "compute_return",
    "select_deduction",
    "form_to_dict",
    "form_to_json",
    "generate_form_worksheet",
]
