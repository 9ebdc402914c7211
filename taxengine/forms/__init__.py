"""Output forms produced by the engine."""

from taxengine.forms.base import (
    FormLine,
    FormValue,
    FormValueType,
    OutputForm,
    OutputFormType,
)
from taxengine.forms.form1040 import DERIVED_LINES, LINE_LABELS, Form1040

__all__ = [
    "FormLine",
    "FormValue",
    "FormValueType",
    "OutputForm",
    "OutputFormType",
    "Form1040",
    "LINE_LABELS",
    "DERIVED_LINES",
]
