"""Tests for the rules and return computation endpoints."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from taxengine.main import app


@pytest_asyncio.fixture
async def api_client() -> AsyncGenerator[AsyncClient, None]:
    """Create API client against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


def _single_return(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "return_id": "api-1",
        "tax_year": 2025,
        "filing_status": "single",
        "taxpayer": {"first_name": "Jane", "ssn": "123-45-6789"},
        "documents": [
            {
                "form_type": "W-2",
                "employee_ssn": "123-45-6789",
                "employer_ein": "12-3456789",
                "wages_tips_compensation": "65750.00",
                "federal_tax_withheld": "7500.00",
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_rules_years(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/rules/years")

    assert response.status_code == 200
    assert response.json() == {"min_year": 2025, "max_year": 2025, "years": [2025]}


@pytest.mark.asyncio
async def test_compute_single_return(api_client: AsyncClient) -> None:
    """Headline figures come back as decimal strings."""
    response = await api_client.post("/api/returns/compute", json=_single_return())

    assert response.status_code == 200
    data = response.json()
    assert data["return_id"] == "api-1"
    assert data["filing_status"] == "single"
    assert data["deduction_method"] == "standard"
    assert data["adjusted_gross_income"] == "65750.00"
    assert data["taxable_income"] == "50000.00"
    assert data["total_tax"] == "5914.00"
    assert data["is_refund"] is True
    assert data["refund"] == "1586.00"
    assert data["amount_owed"] == "0.00"
    assert data["effective_rate"] == "0.0899"
    assert data["warnings"] == []

    lines = {line["line_id"]: line["value"] for line in data["lines"]}
    assert lines["16"] == "5914.00"
    assert lines["12_standard_deduction"] is True


@pytest.mark.asyncio
async def test_compute_reports_warnings(api_client: AsyncClient) -> None:
    payload = _single_return(spouse={"first_name": "Sam"})

    response = await api_client.post("/api/returns/compute", json=payload)

    assert response.status_code == 200
    assert response.json()["warnings"] == [
        {
            "field": "spouse",
            "message": "spouse information supplied but filing status is Single",
            "severity": "warning",
        }
    ]


@pytest.mark.asyncio
async def test_compute_unsupported_year(api_client: AsyncClient) -> None:
    response = await api_client.post("/api/returns/compute", json=_single_return(tax_year=2020))

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert "2020" in detail["message"]
    assert detail["min_year"] == 2025
    assert detail["max_year"] == 2025


@pytest.mark.asyncio
async def test_compute_validation_failure_lists_every_issue(api_client: AsyncClient) -> None:
    payload = _single_return(
        documents=[
            {
                "form_type": "W-2",
                "employee_ssn": "123456789",
                "wages_tips_compensation": "-100",
            }
        ]
    )

    response = await api_client.post("/api/returns/compute", json=payload)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert [issue["field"] for issue in detail["issues"]] == [
        "W-2.employee_ssn",
        "W-2.wages_tips_compensation",
    ]
    assert detail["message"] == (
        "W-2.employee_ssn: must be formatted as XXX-XX-XXXX; "
        "W-2.wages_tips_compensation: cannot be negative (-$100.00)"
    )


@pytest.mark.asyncio
async def test_compute_rejects_unknown_form_type(api_client: AsyncClient) -> None:
    payload = _single_return(documents=[{"form_type": "K-1"}])

    response = await api_client.post("/api/returns/compute", json=payload)

    assert response.status_code == 422
