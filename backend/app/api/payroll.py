"""
Payroll API routes.
PAYE/NIS calculation, payroll runs and statutory export files.
"""

from dataclasses import asdict

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.api.tax import resolve_config
from app.schemas.schemas import (
    PayrollEmployeeRequest,
    PayrollRunRequest,
    GRAForm7BRequest,
    NISScheduleRequest,
)
from app.core.currency import format_gyd
from app.core.reports import ReportGenerator
from app.core.tax_rules.paye import (
    PAYECalculator,
    PayrollEmployee,
    validate_nis_number,
    validate_tin_number,
)

router = APIRouter()

paye_calc = PAYECalculator()
report_gen = ReportGenerator()


def to_employee(data: PayrollEmployeeRequest) -> PayrollEmployee:
    return PayrollEmployee(**data.model_dump())


@router.post("/paye/calculate")
async def calculate_paye(data: PayrollEmployeeRequest):
    """Calculate PAYE, NIS and net pay for one employee (monthly)."""
    result = paye_calc.calculate(to_employee(data))
    response = asdict(result)
    response["net_pay_display"] = format_gyd(result.net_pay)
    return response


@router.post("/run")
async def run_payroll(data: PayrollRunRequest):
    """Run payroll for a batch of employees and return totals."""
    calc = PAYECalculator(resolve_config(data.tax_year))
    summary = calc.process_payroll([to_employee(e) for e in data.employees])
    return asdict(summary)


@router.post("/exports/gra-7b", response_class=PlainTextResponse)
async def export_gra_form_7b(data: GRAForm7BRequest):
    """GRA Form 7B year-end payroll CSV."""
    employees = [to_employee(e) for e in data.employees]
    results = [paye_calc.calculate(e) for e in employees]
    csv = report_gen.generate_gra_form_7b_csv(results, employees, data.employer_tin, data.year)
    return PlainTextResponse(
        csv,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="gra-form-7b-{data.year}.csv"'},
    )


@router.post("/exports/nis-cs3", response_class=PlainTextResponse)
async def export_nis_cs3(data: NISScheduleRequest):
    """NIS CS3 fixed-width contribution schedule."""
    employees = [to_employee(e) for e in data.employees]
    results = [paye_calc.calculate(e) for e in employees]
    return report_gen.generate_nis_cs3_schedule(
        results,
        employees,
        data.employer_nis_number,
        data.period_month,
        data.period_year,
    )


@router.get("/validate/nis/{nis_number}")
async def validate_nis(nis_number: str):
    return {"value": nis_number, "valid": validate_nis_number(nis_number)}


@router.get("/validate/tin/{tin_number}")
async def validate_tin(tin_number: str):
    return {"value": tin_number, "valid": validate_tin_number(tin_number)}
