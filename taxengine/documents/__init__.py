"""Input document models, aggregation and validation.

This module provides:
- Pydantic models for the W-2, 1099, SSA-1099 and 1098 information returns
- InputFormCollection for concept-level totals across documents
- DocumentValidator for format and consistency checks

Return files are loaded with ``taxengine.documents.loader``.
"""

from taxengine.documents.collection import InputFormCollection, WithholdingBySource
from taxengine.documents.models import (
    FORM_MODELS,
    Box12Code,
    Form1098,
    Form1098E,
    Form1098T,
    Form1099DIV,
    Form1099G,
    Form1099INT,
    Form1099MISC,
    Form1099NEC,
    Form1099R,
    FormSSA1099,
    IncomeField,
    InfoField,
    InputDocument,
    InputForm,
    InputFormType,
    LocalTaxInfo,
    StateTaxInfo,
    W2Data,
)
from taxengine.documents.validation import (
    DocumentValidator,
    ValidationErrors,
    ValidationIssue,
    ValidationSeverity,
)

__all__ = [
    "InputFormCollection",
    "WithholdingBySource",
    "FORM_MODELS",
    "Box12Code",
    "Form1098",
    "Form1098E",
    "Form1098T",
    "Form1099DIV",
    "Form1099G",
    "Form1099INT",
    "Form1099MISC",
    "Form1099NEC",
    "Form1099R",
    "FormSSA1099",
    "IncomeField",
    "InfoField",
    "InputDocument",
    "InputForm",
    "InputFormType",
    "LocalTaxInfo",
    "StateTaxInfo",
    "W2Data",
    "DocumentValidator",
    "ValidationErrors",
    "ValidationIssue",
    "ValidationSeverity",
]
