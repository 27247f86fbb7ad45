"""
Tests for FastAPI application setup and the public calculator endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    return TestClient(app)


EMPLOYEE = {
    "id": "emp-1",
    "first_name": "John",
    "last_name": "Doe",
    "nis_number": "123456789",
    "basic_salary": 200_000,
}


class TestHealthCheck:
    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_openapi_docs(self, client):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        assert response.json()["info"]["title"] == "GK Tax Core API"


class TestRouteRegistration:
    @pytest.mark.parametrize("prefix", [
        "/api/v1/tax", "/api/v1/payroll", "/api/v1/compliance", "/api/v1/deadlines",
    ])
    def test_routes_registered(self, client, prefix):
        paths = client.get("/openapi.json").json()["paths"]
        assert any(prefix in p for p in paths)


class TestTaxEndpoints:
    def test_vat_calculate(self, client):
        response = client.post("/api/v1/tax/vat/calculate", json={
            "standard_rated_sales": 100_000,
            "standard_rated_purchases": 40_000,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["output_vat"] == 14_000
        assert data["net_vat"] == 8_400
        assert data["total_vat_due"] == 8_400

    def test_vat_calculate_validation(self, client):
        response = client.post("/api/v1/tax/vat/calculate", json={})
        assert response.status_code == 422

    def test_vat_rejects_negative_sales(self, client):
        response = client.post("/api/v1/tax/vat/calculate", json={"standard_rated_sales": -100_000})
        assert response.status_code == 422

    def test_vat_signed_adjustment(self, client):
        response = client.post("/api/v1/tax/vat/calculate", json={
            "standard_rated_sales": 100_000,
            "adjustments": -2_000,
        })
        assert response.status_code == 200
        assert response.json()["total_vat_due"] == 12_000

    def test_unknown_tax_year(self, client):
        response = client.post("/api/v1/tax/vat/calculate", json={
            "standard_rated_sales": 100_000,
            "tax_year": 1999,
        })
        assert response.status_code == 400

    def test_vat_inclusive(self, client):
        response = client.post("/api/v1/tax/vat/simple", json={"amount": 114_000, "is_inclusive": True})
        assert response.status_code == 200
        assert response.json()["amount_before_vat"] == 100_000

    def test_tax_config(self, client):
        response = client.get("/api/v1/tax/config/2025")
        assert response.status_code == 200
        assert response.json()["paye"]["band_1_limit"] == 260_000


class TestPayrollEndpoints:
    def test_paye_calculate(self, client):
        response = client.post("/api/v1/payroll/paye/calculate", json=EMPLOYEE)
        assert response.status_code == 200
        data = response.json()
        assert data["total_paye_tax"] == 14_700
        assert data["net_pay"] == 174_100
        assert data["net_pay_display"] == "GY$174,100.00"

    def test_paye_validation(self, client):
        response = client.post("/api/v1/payroll/paye/calculate", json={})
        assert response.status_code == 422

    def test_paye_rejects_negative_earnings(self, client):
        response = client.post("/api/v1/payroll/paye/calculate", json={**EMPLOYEE, "basic_salary": -1})
        assert response.status_code == 422

    def test_payroll_run(self, client):
        response = client.post("/api/v1/payroll/run", json={"employees": [EMPLOYEE, {**EMPLOYEE, "id": "emp-2"}]})
        assert response.status_code == 200
        totals = response.json()["totals"]
        assert totals["employee_count"] == 2
        assert totals["total_gross_pay"] == 400_000

    def test_gra_export(self, client):
        response = client.post("/api/v1/payroll/exports/gra-7b", json={
            "employees": [EMPLOYEE],
            "employer_tin": "123456789",
            "year": 2025,
        })
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.split("\n")[1] == "123456789,Doe,John,200000.00,14700.00,11200.00"

    def test_nis_export(self, client):
        response = client.post("/api/v1/payroll/exports/nis-cs3", json={
            "employees": [EMPLOYEE],
            "employer_nis_number": "EMP1",
            "period_month": 3,
            "period_year": 2025,
        })
        assert response.status_code == 200
        assert response.text.split("\n")[0] == "NISEMP1032025"

    def test_validators(self, client):
        assert client.get("/api/v1/payroll/validate/nis/A-1234567-B").json()["valid"] is True
        assert client.get("/api/v1/payroll/validate/tin/12345").json()["valid"] is False


class TestComplianceEndpoints:
    def test_score(self, client):
        response = client.post("/api/v1/compliance/score", json={
            "tin_number": "123456789",
            "nis_number": "A1234567",
            "vat_number": "VAT12345",
            "business_registration": "BR-2021",
            "filings": [{"type": "vat", "status": "pending", "due_date": "2025-06-01"}],
            "as_of": "2025-06-15",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 90
        assert data["status"] == "compliant"

    def test_empty_client(self, client):
        response = client.post("/api/v1/compliance/score", json={"as_of": "2025-06-15"})
        assert response.json()["score"] == 23


class TestDeadlineEndpoints:
    def test_next_due_date_for_period(self, client):
        response = client.get("/api/v1/deadlines/next/vat", params={"month": 3, "year": 2025, "as_of": "2025-04-01"})
        assert response.status_code == 200
        data = response.json()
        assert data["due_date"] == "2025-04-22"
        assert data["status"]["days_until_due"] == 21

    def test_incomplete_period(self, client):
        response = client.get("/api/v1/deadlines/next/vat", params={"month": 3})
        assert response.status_code == 400

    def test_unknown_filing_type(self, client):
        response = client.get("/api/v1/deadlines/next/lottery")
        assert response.status_code == 422

    def test_status(self, client):
        response = client.post("/api/v1/deadlines/status", json={"due_date": "2025-06-05", "as_of": "2025-06-01"})
        assert response.json()["status"] == "soon"

    def test_upcoming(self, client):
        response = client.post("/api/v1/deadlines/upcoming", json={
            "services": ["VAT_RETURN", "PAYE_FILING", "NIS_SUBMISSION"],
            "as_of": "2025-10-25",
        })
        data = response.json()
        assert data["total"] == 3
        assert [d["deadline"]["id"] for d in data["deadlines"]] == ["paye", "nis", "vat"]

    def test_holidays(self, client):
        response = client.get("/api/v1/deadlines/holidays/2026")
        assert response.json()["total"] == 13
