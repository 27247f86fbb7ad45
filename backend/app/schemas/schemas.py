"""
Pydantic schemas for API request/response validation.
"""

from datetime import date

from pydantic import BaseModel, Field


# ── Payroll Schemas ──

class PayrollEmployeeRequest(BaseModel):
    id: str = Field(..., min_length=1)
    first_name: str = ""
    last_name: str = ""
    nis_number: str = ""
    basic_salary: float = Field(..., ge=0)
    overtime: float = Field(0.0, ge=0)
    allowances: float = Field(0.0, ge=0)
    bonuses: float = Field(0.0, ge=0)
    dependents: int = Field(0, ge=0)


class PayrollRunRequest(BaseModel):
    employees: list[PayrollEmployeeRequest]
    tax_year: int | None = None


class GRAForm7BRequest(BaseModel):
    employees: list[PayrollEmployeeRequest]
    employer_tin: str = Field(..., min_length=1)
    year: int = Field(..., ge=2000, le=2100)


class NISScheduleRequest(BaseModel):
    employees: list[PayrollEmployeeRequest]
    employer_nis_number: str = Field(..., min_length=1)
    period_month: int = Field(..., ge=1, le=12)
    period_year: int = Field(..., ge=2000, le=2100)


# ── VAT Schemas ──

class VATCalculateRequest(BaseModel):
    standard_rated_sales: float = Field(..., ge=0)
    zero_rated_sales: float = Field(0.0, ge=0)
    exempt_sales: float = Field(0.0, ge=0)
    standard_rated_purchases: float = Field(0.0, ge=0)
    # Signed: credit notes and prior-period corrections go either way
    adjustments: float = 0.0
    tax_year: int | None = None


class VATSimpleRequest(BaseModel):
    amount: float = Field(..., ge=0)
    is_inclusive: bool = False


# ── Compliance Schemas ──

class FilingRecord(BaseModel):
    type: str
    status: str
    due_date: date


class ComplianceScoreRequest(BaseModel):
    tin_number: str | None = None
    nis_number: str | None = None
    vat_number: str | None = None
    business_registration: str | None = None
    filings: list[FilingRecord] = []
    as_of: date | None = None


# ── Deadline Schemas ──

class DeadlineStatusRequest(BaseModel):
    due_date: date
    as_of: date | None = None


class UpcomingDeadlinesRequest(BaseModel):
    services: list[str]
    days_ahead: int | None = Field(None, ge=0)
    as_of: date | None = None
