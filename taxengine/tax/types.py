"""Filing status, taxpayer and dependent models consumed by the rules.

The enums are closed sets; the pydantic models carry the small amount of
derived logic the rules need (age at year end, CTC eligibility).
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class FilingStatus(str, Enum):
    """Filing status for federal income tax."""

    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"
    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_SURVIVING_SPOUSE = "qualifying_surviving_spouse"

    @property
    def code(self) -> str:
        """IRS shorthand for the status (S, MFJ, MFS, HOH, QSS)."""
        return _STATUS_CODES[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_CODES = {
    FilingStatus.SINGLE: "S",
    FilingStatus.MARRIED_FILING_JOINTLY: "MFJ",
    FilingStatus.MARRIED_FILING_SEPARATELY: "MFS",
    FilingStatus.HEAD_OF_HOUSEHOLD: "HOH",
    FilingStatus.QUALIFYING_SURVIVING_SPOUSE: "QSS",
}


class DependentRelationship(str, Enum):
    """Relationship of a dependent to the taxpayer."""

    SON = "son"
    DAUGHTER = "daughter"
    STEPCHILD = "stepchild"
    FOSTER_CHILD = "foster_child"
    BROTHER = "brother"
    SISTER = "sister"
    STEPBROTHER = "stepbrother"
    STEPSISTER = "stepsister"
    HALF_BROTHER = "half_brother"
    HALF_SISTER = "half_sister"
    GRANDCHILD = "grandchild"
    NIECE = "niece"
    NEPHEW = "nephew"
    PARENT = "parent"
    GRANDPARENT = "grandparent"
    AUNT_UNCLE = "aunt_uncle"
    OTHER = "other"


QUALIFYING_CHILD_RELATIONSHIPS: frozenset[DependentRelationship] = frozenset(
    {
        DependentRelationship.SON,
        DependentRelationship.DAUGHTER,
        DependentRelationship.STEPCHILD,
        DependentRelationship.FOSTER_CHILD,
        DependentRelationship.BROTHER,
        DependentRelationship.SISTER,
        DependentRelationship.STEPBROTHER,
        DependentRelationship.STEPSISTER,
        DependentRelationship.HALF_BROTHER,
        DependentRelationship.HALF_SISTER,
        DependentRelationship.GRANDCHILD,
        DependentRelationship.NIECE,
        DependentRelationship.NEPHEW,
    }
)

# Child Tax Credit age limit: under 17 at the end of the tax year.
CTC_AGE_LIMIT = 17
# More than half the year.
CTC_MIN_MONTHS_RESIDENCY = 6


class Dependent(BaseModel):
    """A dependent claimed on the return."""

    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    ssn: str = Field(default="", description="Social Security Number (XXX-XX-XXXX)")
    relationship: DependentRelationship = Field(
        default=DependentRelationship.OTHER, description="Relationship to taxpayer"
    )
    age: int = Field(default=0, ge=0, description="Age at end of tax year")
    months_lived_with_taxpayer: int = Field(
        default=0, ge=0, le=12, description="Months lived with taxpayer during the year"
    )
    is_disabled: bool = Field(default=False, description="Permanently and totally disabled")
    is_student: bool = Field(default=False, description="Full-time student")

    @property
    def is_qualifying_child_relationship(self) -> bool:
        return self.relationship in QUALIFYING_CHILD_RELATIONSHIPS

    def qualifies_for_ctc(self) -> bool:
        """Return True if this dependent qualifies for the Child Tax Credit.

        Requires: under 17 at year end, a qualifying-child relationship,
        at least 6 months living with the taxpayer, and an SSN.
        """
        return (
            self.age < CTC_AGE_LIMIT
            and self.months_lived_with_taxpayer >= CTC_MIN_MONTHS_RESIDENCY
            and self.is_qualifying_child_relationship
            and bool(self.ssn.strip())
        )

    def qualifies_for_odc(self) -> bool:
        """Return True if this dependent falls to the Credit for Other Dependents."""
        return not self.qualifies_for_ctc()


class TaxpayerInfo(BaseModel):
    """Basic facts about the taxpayer or spouse."""

    first_name: str = Field(default="", description="First name")
    last_name: str = Field(default="", description="Last name")
    ssn: str = Field(default="", description="Social Security Number (XXX-XX-XXXX)")
    date_of_birth: date | None = Field(default=None, description="Date of birth")
    is_blind: bool = Field(default=False, description="Legally blind at year end")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_at_year_end(self, tax_year: int) -> int | None:
        """Age on December 31 of the tax year, or None if unknown."""
        if self.date_of_birth is None or self.date_of_birth.year > tax_year:
            return None
        return tax_year - self.date_of_birth.year

    def is_65_or_older(self, tax_year: int) -> bool:
        """Return True if the taxpayer counts as 65 or older for the year.

        The IRS treats a person as reaching an age on the day before the
        birthday, so someone born on January 1 of (tax_year - 64) is 65 by
        December 31.
        """
        if self.date_of_birth is None:
            return False
        return self.date_of_birth <= date(tax_year - 64, 1, 1)
