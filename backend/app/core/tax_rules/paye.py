"""
PAYE / NIS Payroll Calculator
Based on the Guyana 2025 Budget rules (see config.GUYANA_TAX_CONFIG_2025).

Taxable income (monthly):
  Gross - (Employee NIS + Statutory Free Pay + Child Allowance + Tax-free Overtime)

Tax Bands:
  (a) First $260,000 of taxable income at 25%
  (b) Remainder at 35%

NIS:
  - NIS-able earnings capped at the $280,000 monthly ceiling
  - Employee 5.6%, employer 8.4%, each capped at its maximum contribution
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from app.core.tax_rules.config import TaxConfig, GUYANA_TAX_CONFIG_2025

logger = logging.getLogger(__name__)


@dataclass
class PayrollEmployee:
    id: str
    first_name: str
    last_name: str
    nis_number: str = ""
    basic_salary: float = 0.0
    overtime: float = 0.0
    allowances: float = 0.0
    bonuses: float = 0.0
    dependents: int = 0


@dataclass
class PAYEResult:
    employee_id: str
    gross_earnings: float
    statutory_free_pay: float
    child_allowance: float
    overtime_tax_free: float
    taxable_income: float
    tax_band_1_amount: float
    tax_band_1_tax: float
    tax_band_2_amount: float
    tax_band_2_tax: float
    total_paye_tax: float
    nisable_earnings: float
    employee_nis_contribution: float
    employer_nis_contribution: float
    total_deductions: float
    net_pay: float


@dataclass
class PayrollTotals:
    total_gross_pay: float = 0.0
    total_net_pay: float = 0.0
    total_paye: float = 0.0
    total_employee_nis: float = 0.0
    total_employer_nis: float = 0.0
    employee_count: int = 0


@dataclass
class PayrollRunSummary:
    employees: list[PAYEResult] = field(default_factory=list)
    totals: PayrollTotals = field(default_factory=PayrollTotals)
    generated_at: datetime = field(default_factory=datetime.now)


class PAYECalculator:
    """
    Deterministic PAYE and NIS calculator for Guyana employees.
    Rates come from the injected TaxConfig; nothing is hard-coded here.
    """

    def __init__(self, config: TaxConfig = GUYANA_TAX_CONFIG_2025):
        self.config = config

    def calculate_nis(self, gross_earnings: float) -> tuple[float, float, float]:
        """Return (nisable_earnings, employee_contribution, employer_contribution)."""
        nis = self.config.nis
        nisable_earnings = min(gross_earnings, nis.earnings_ceiling)
        employee = min(nisable_earnings * nis.employee_rate, nis.max_employee_contribution)
        employer = min(nisable_earnings * nis.employer_rate, nis.max_employer_contribution)
        return nisable_earnings, round(employee, 2), round(employer, 2)

    def calculate(self, employee: PayrollEmployee) -> PAYEResult:
        paye = self.config.paye

        gross_earnings = round(
            employee.basic_salary + employee.overtime + employee.allowances + employee.bonuses,
            2,
        )

        nisable_earnings, employee_nis, employer_nis = self.calculate_nis(gross_earnings)

        eligible_children = min(employee.dependents, paye.max_child_allowance_children)
        child_allowance = eligible_children * paye.child_allowance_per_child

        overtime_tax_free = min(employee.overtime, paye.overtime_tax_free_limit)

        taxable_income = round(
            max(
                0.0,
                gross_earnings
                - employee_nis
                - paye.statutory_free_pay
                - child_allowance
                - overtime_tax_free,
            ),
            2,
        )

        band_1_amount = 0.0
        band_1_tax = 0.0
        band_2_amount = 0.0
        band_2_tax = 0.0

        if taxable_income > 0:
            band_1_amount = min(taxable_income, paye.band_1_limit)
            band_1_tax = round(band_1_amount * paye.band_1_rate, 2)

            if taxable_income > paye.band_1_limit:
                band_2_amount = round(taxable_income - paye.band_1_limit, 2)
                band_2_tax = round(band_2_amount * paye.band_2_rate, 2)

        total_paye_tax = round(band_1_tax + band_2_tax, 2)
        total_deductions = employee_nis + total_paye_tax
        net_pay = gross_earnings - employee_nis - total_paye_tax

        logger.debug(
            "PAYE for %s: gross=%.2f taxable=%.2f paye=%.2f nis=%.2f",
            employee.id, gross_earnings, taxable_income, total_paye_tax, employee_nis,
        )

        return PAYEResult(
            employee_id=employee.id,
            gross_earnings=gross_earnings,
            statutory_free_pay=paye.statutory_free_pay,
            child_allowance=child_allowance,
            overtime_tax_free=overtime_tax_free,
            taxable_income=taxable_income,
            tax_band_1_amount=band_1_amount,
            tax_band_1_tax=band_1_tax,
            tax_band_2_amount=band_2_amount,
            tax_band_2_tax=band_2_tax,
            total_paye_tax=total_paye_tax,
            nisable_earnings=nisable_earnings,
            employee_nis_contribution=employee_nis,
            employer_nis_contribution=employer_nis,
            total_deductions=total_deductions,
            net_pay=net_pay,
        )

    def process_payroll(self, employees: list[PayrollEmployee]) -> PayrollRunSummary:
        results = [self.calculate(employee) for employee in employees]

        totals = PayrollTotals()
        for result in results:
            totals.total_gross_pay += result.gross_earnings
            totals.total_net_pay += result.net_pay
            totals.total_paye += result.total_paye_tax
            totals.total_employee_nis += result.employee_nis_contribution
            totals.total_employer_nis += result.employer_nis_contribution
            totals.employee_count += 1

        totals.total_gross_pay = round(totals.total_gross_pay, 2)
        totals.total_net_pay = round(totals.total_net_pay, 2)
        totals.total_paye = round(totals.total_paye, 2)
        totals.total_employee_nis = round(totals.total_employee_nis, 2)
        totals.total_employer_nis = round(totals.total_employer_nis, 2)

        logger.info("Processed payroll for %d employee(s)", totals.employee_count)
        return PayrollRunSummary(employees=results, totals=totals)


def validate_nis_number(nis_number: str | None) -> bool:
    """NIS numbers are 9 alphanumeric characters once separators are removed."""
    if not nis_number:
        return False
    cleaned = re.sub(r"[^A-Za-z0-9]", "", nis_number)
    return len(cleaned) == 9


def validate_tin_number(tin_number: str | None) -> bool:
    """TINs are exactly 9 digits once separators are removed."""
    if not tin_number:
        return False
    cleaned = re.sub(r"[^0-9]", "", tin_number)
    return len(cleaned) == 9
