"""Year-indexed access to TaxRules.

Example:
    >>> from taxengine.tax.loader import RulesLoader
    >>> RulesLoader().load(2025).tax_year
    2025
"""

from __future__ import annotations

from taxengine.core.logging import get_logger
from taxengine.tax.errors import RulesNotFoundError, UnsupportedTaxYearError
from taxengine.tax.rules import TaxRules
from taxengine.tax.year_config import RULES_2025

logger = get_logger(__name__)

MIN_SUPPORTED_YEAR = 2025
MAX_SUPPORTED_YEAR = 2025

RULES_BY_YEAR: dict[int, TaxRules] = {
    2025: RULES_2025,
}


class RulesLoader:
    """Hands out the shared, frozen TaxRules for a tax year.

    The loader performs no computation; the rules tables are built once at
    import time.
    """

    def __init__(
        self,
        min_year: int = MIN_SUPPORTED_YEAR,
        max_year: int = MAX_SUPPORTED_YEAR,
    ) -> None:
        self.min_year = min_year
        self.max_year = max_year

    def is_supported(self, year: int) -> bool:
        return self.min_year <= year <= self.max_year

    def supported_years(self) -> range:
        """Inclusive range of supported years as a Python range."""
        return range(self.min_year, self.max_year + 1)

    def load(self, year: int) -> TaxRules:
        """Return the rules for ``year``.

        Raises:
            UnsupportedTaxYearError: If the year is outside the supported range.
            RulesNotFoundError: If the year is in range but has no table.
        """
        if not self.is_supported(year):
            raise UnsupportedTaxYearError(year, self.min_year, self.max_year)
        rules = RULES_BY_YEAR.get(year)
        if rules is None:
            raise RulesNotFoundError(year)
        logger.debug("rules_loaded", tax_year=year)
        return rules


def get_tax_rules(year: int) -> TaxRules:
    """Get rules for a tax year using the default loader.

    Raises:
        UnsupportedTaxYearError: If the year is not supported.
    """
    return RulesLoader().load(year)
