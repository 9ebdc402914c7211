"""Tax rules, currency arithmetic and year-specific configurations."""

from taxengine.tax.currency import UsdAmount
from taxengine.tax.errors import (
    CalculationOverflowError,
    FormNotCalculatedError,
    InconsistentDataError,
    InvalidIdentifierError,
    InvalidValueError,
    MissingInputError,
    RulesNotFoundError,
    SchemaNotFoundError,
    TaxError,
    UnsupportedTaxYearError,
    ValidationFailedError,
)
from taxengine.tax.loader import RulesLoader, get_tax_rules
from taxengine.tax.rules import (
    BracketSlice,
    PhaseOut,
    SeniorBonusDeduction,
    TaxBracket,
    TaxRules,
)
from taxengine.tax.types import (
    Dependent,
    DependentRelationship,
    FilingStatus,
    TaxpayerInfo,
)
from taxengine.tax.year_config import RULES_2025

__all__ = [
    "UsdAmount",
    "TaxError",
    "UnsupportedTaxYearError",
    "RulesNotFoundError",
    "SchemaNotFoundError",
    "MissingInputError",
    "InvalidValueError",
    "InvalidIdentifierError",
    "InconsistentDataError",
    "CalculationOverflowError",
    "FormNotCalculatedError",
    "ValidationFailedError",
    "RulesLoader",
    "get_tax_rules",
    "TaxBracket",
    "BracketSlice",
    "PhaseOut",
    "SeniorBonusDeduction",
    "TaxRules",
    "RULES_2025",
    "FilingStatus",
    "Dependent",
    "DependentRelationship",
    "TaxpayerInfo",
]
