"""Pytest configuration and shared fixtures for tests."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from taxengine.documents.models import Form1099INT, W2Data
from taxengine.main import app
from taxengine.tax.rules import TaxRules
from taxengine.tax.year_config import RULES_2025


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests.

    Returns:
        Backend name string.
    """
    return "asyncio"


@pytest.fixture
def client() -> TestClient:
    """Create a test client for API testing.

    Returns:
        FastAPI TestClient instance.
    """
    return TestClient(app)


@pytest.fixture
def rules() -> TaxRules:
    """2025 tax rules."""
    return RULES_2025


@pytest.fixture
def sample_w2() -> W2Data:
    """Create a sample W-2 whose payroll boxes agree with its wages."""
    return W2Data(
        form_id="w2-acme",
        employee_ssn="123-45-6789",
        employer_ein="12-3456789",
        employer_name="Acme Corp",
        employee_name="John Doe",
        wages_tips_compensation=Decimal("50000"),
        federal_tax_withheld=Decimal("7500"),
        social_security_wages=Decimal("50000"),
        social_security_tax=Decimal("3100"),
        medicare_wages=Decimal("50000"),
        medicare_tax=Decimal("725"),
    )


@pytest.fixture
def sample_1099_int() -> Form1099INT:
    """Create a sample 1099-INT for testing."""
    return Form1099INT(
        form_id="int-bank",
        payer_name="First National Bank",
        payer_tin="12-3456789",
        recipient_tin="123-45-6789",
        interest_income=Decimal("500"),
    )
