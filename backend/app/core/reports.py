"""
Payroll Report Generator
Produces the statutory payroll files consumed by GRA and NIS e-filing portals.

Report Types:
  - GRA Form 7B (year-end payroll) as CSV
  - NIS CS3 contribution schedule as fixed-width text

Both formats are parsed by agency systems, so field order, widths, padding
and 2-decimal formatting must not change. Results whose employee id has no
match in the employee list are skipped without error.
"""

import logging

from app.core.tax_rules.paye import PAYEResult, PayrollEmployee

logger = logging.getLogger(__name__)

GRA_FORM_7B_HEADERS = [
    "TIN",
    "Last_Name",
    "First_Name",
    "Gross_Earnings",
    "Tax_Deducted",
    "NIS_Employee",
]

NIS_NUMBER_WIDTH = 15
NIS_EARNINGS_WIDTH = 12
NIS_CONTRIBUTION_WIDTH = 10


class ReportGenerator:
    """
    Renders payroll results into agency file formats.
    """

    @staticmethod
    def _match_employees(
        results: list[PAYEResult],
        employees: list[PayrollEmployee],
    ) -> list[tuple[PAYEResult, PayrollEmployee]]:
        by_id = {}
        for employee in employees:
            by_id.setdefault(employee.id, employee)

        matched = []
        for result in results:
            employee = by_id.get(result.employee_id)
            if employee is None:
                logger.debug("No employee record for result %s, skipping row", result.employee_id)
                continue
            matched.append((result, employee))
        return matched

    def generate_gra_form_7b_csv(
        self,
        results: list[PAYEResult],
        employees: list[PayrollEmployee],
        employer_tin: str,
        year: int,
    ) -> str:
        rows = [",".join(GRA_FORM_7B_HEADERS)]
        for result, employee in self._match_employees(results, employees):
            rows.append(",".join([
                employer_tin,
                employee.last_name,
                employee.first_name,
                f"{result.gross_earnings:.2f}",
                f"{result.total_paye_tax:.2f}",
                f"{result.employee_nis_contribution:.2f}",
            ]))

        logger.info("Generated GRA Form 7B for %d with %d row(s)", year, len(rows) - 1)
        return "\n".join(rows)

    def generate_nis_cs3_schedule(
        self,
        results: list[PAYEResult],
        employees: list[PayrollEmployee],
        employer_nis_number: str,
        period_month: int,
        period_year: int,
    ) -> str:
        lines = [f"NIS{employer_nis_number}{period_month:02d}{period_year}"]
        for result, employee in self._match_employees(results, employees):
            lines.append(
                f"{employee.nis_number:<{NIS_NUMBER_WIDTH}}"
                f"{result.nisable_earnings:>{NIS_EARNINGS_WIDTH}.2f}"
                f"{result.employee_nis_contribution:>{NIS_CONTRIBUTION_WIDTH}.2f}"
                f"{result.employer_nis_contribution:>{NIS_CONTRIBUTION_WIDTH}.2f}"
            )

        logger.info(
            "Generated NIS CS3 schedule for %02d/%d with %d line(s)",
            period_month, period_year, len(lines) - 1,
        )
        return "\n".join(lines)
