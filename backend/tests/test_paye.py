"""
Tests for the PAYE / NIS Payroll Calculator.
Validates against the Guyana 2025 Budget rules.

  Statutory free pay: $130,000 | Band 1: first $260,000 at 25% | Band 2: 35%
  NIS: 5.6% employee / 8.4% employer, ceiling $280,000
"""

from dataclasses import replace
from datetime import datetime

import pytest
from app.core.tax_rules.config import GUYANA_TAX_CONFIG_2025
from app.core.tax_rules.paye import (
    PAYECalculator,
    PayrollEmployee,
    validate_nis_number,
    validate_tin_number,
)


@pytest.fixture
def calc():
    return PAYECalculator()


def make_employee(**overrides) -> PayrollEmployee:
    data = {
        "id": "emp-1",
        "first_name": "John",
        "last_name": "Doe",
        "nis_number": "123456789",
        "basic_salary": 150_000,
        "overtime": 20_000,
        "allowances": 15_000,
        "bonuses": 10_000,
        "dependents": 2,
    }
    data.update(overrides)
    return PayrollEmployee(**data)


class TestPAYEScenarios:
    def test_low_income_under_statutory_threshold(self, calc):
        employee = make_employee(basic_salary=100_000, overtime=0, allowances=0, bonuses=0, dependents=0)
        result = calc.calculate(employee)
        assert result.employee_id == "emp-1"
        assert result.gross_earnings == 100_000
        assert result.statutory_free_pay == 130_000
        assert result.child_allowance == 0
        assert result.overtime_tax_free == 0
        assert result.taxable_income == 0
        assert result.total_paye_tax == 0
        assert result.employee_nis_contribution == 5_600
        assert result.net_pay == 94_400

    def test_middle_income(self, calc):
        employee = make_employee(basic_salary=200_000, overtime=30_000, allowances=20_000, bonuses=0, dependents=2)
        result = calc.calculate(employee)
        assert result.gross_earnings == 250_000
        assert result.child_allowance == 20_000
        assert result.overtime_tax_free == 30_000
        assert result.employee_nis_contribution == 14_000
        # 250K - 14K NIS - 130K free pay - 20K children - 30K overtime = 56K
        assert result.taxable_income == 56_000
        assert result.total_paye_tax == 14_000
        assert result.net_pay == 222_000

    def test_high_income_both_bands(self, calc):
        employee = make_employee(basic_salary=400_000, overtime=100_000, allowances=50_000, bonuses=50_000, dependents=3)
        result = calc.calculate(employee)
        assert result.gross_earnings == 600_000
        assert result.child_allowance == 30_000
        assert result.overtime_tax_free == 50_000
        assert result.employee_nis_contribution == 15_680
        # 600K - 15.68K - 130K - 30K - 50K = 374.32K
        assert result.taxable_income == 374_320
        assert result.tax_band_1_amount == 260_000
        assert result.tax_band_1_tax == 65_000
        assert result.tax_band_2_amount == 114_320
        assert result.tax_band_2_tax == pytest.approx(40_012)
        assert result.total_paye_tax == pytest.approx(105_012)
        assert result.net_pay == pytest.approx(479_308)

    def test_overtime_above_tax_free_limit(self, calc):
        employee = make_employee(basic_salary=180_000, overtime=80_000, allowances=10_000, bonuses=0, dependents=1)
        result = calc.calculate(employee)
        assert result.gross_earnings == 270_000
        assert result.overtime_tax_free == 50_000
        assert result.child_allowance == 10_000
        assert result.employee_nis_contribution == 15_120
        assert result.taxable_income == 64_880
        assert result.total_paye_tax == 16_220
        assert result.tax_band_2_tax == 0


class TestPAYEBands:
    def test_taxable_exactly_band_1_limit(self, calc):
        # 405,680 - 15,680 NIS - 130,000 free pay = 260,000
        result = calc.calculate(make_employee(basic_salary=405_680, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.taxable_income == 260_000
        assert result.tax_band_1_tax == 65_000
        assert result.tax_band_2_amount == 0
        assert result.tax_band_2_tax == 0

    def test_one_thousand_into_band_2(self, calc):
        result = calc.calculate(make_employee(basic_salary=406_680, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.taxable_income == 261_000
        assert result.tax_band_2_amount == 1_000
        assert result.tax_band_2_tax == 350

    def test_no_tax_at_free_pay_plus_allowances(self, calc):
        # Gross equals free pay + child allowance + tax-free overtime
        result = calc.calculate(make_employee(basic_salary=150_000, overtime=20_000, allowances=0, bonuses=0, dependents=2))
        assert result.gross_earnings == 170_000
        assert result.total_paye_tax == 0
        assert result.taxable_income == 0


class TestPAYEEdgeCases:
    def test_zero_income(self, calc):
        result = calc.calculate(make_employee(basic_salary=0, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.gross_earnings == 0
        assert result.taxable_income == 0
        assert result.total_paye_tax == 0
        assert result.employee_nis_contribution == 0
        assert result.net_pay == 0

    def test_nis_ceiling(self, calc):
        result = calc.calculate(make_employee(basic_salary=500_000, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.nisable_earnings == GUYANA_TAX_CONFIG_2025.nis.earnings_ceiling
        assert result.employee_nis_contribution == GUYANA_TAX_CONFIG_2025.nis.max_employee_contribution
        assert result.employer_nis_contribution == GUYANA_TAX_CONFIG_2025.nis.max_employer_contribution

    def test_nis_caps_far_above_ceiling(self, calc):
        result = calc.calculate(make_employee(basic_salary=50_000_000))
        assert result.employee_nis_contribution <= 15_680
        assert result.employer_nis_contribution <= 23_520

    def test_employee_and_employer_nis(self, calc):
        result = calc.calculate(make_employee(basic_salary=200_000, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.employee_nis_contribution == 11_200
        assert result.employer_nis_contribution == 16_800
        assert result.employer_nis_contribution / result.employee_nis_contribution == pytest.approx(1.5)

    def test_child_allowance_capped_at_three(self, calc):
        three = calc.calculate(make_employee(basic_salary=300_000, dependents=3))
        four = calc.calculate(make_employee(basic_salary=300_000, dependents=4))
        assert three.child_allowance == 30_000
        assert four.child_allowance == three.child_allowance
        assert four.total_paye_tax == three.total_paye_tax

    def test_taxable_income_floored_at_zero(self, calc):
        result = calc.calculate(make_employee(basic_salary=50_000, overtime=0, allowances=0, bonuses=0, dependents=3))
        assert result.taxable_income == 0
        assert result.total_paye_tax == 0

    def test_negative_inputs_propagate(self, calc):
        result = calc.calculate(make_employee(basic_salary=-1_000, overtime=0, allowances=0, bonuses=0, dependents=0))
        assert result.gross_earnings == -1_000
        assert result.taxable_income == 0
        assert result.net_pay < 0

    @pytest.mark.parametrize("salary", [0, 99_999.99, 123_456.78, 250_000, 405_680, 1_250_000])
    def test_net_pay_identity(self, calc, salary):
        result = calc.calculate(make_employee(basic_salary=salary))
        assert result.net_pay == result.gross_earnings - result.employee_nis_contribution - result.total_paye_tax
        assert result.total_deductions == result.employee_nis_contribution + result.total_paye_tax

    def test_cents_precision(self, calc):
        result = calc.calculate(make_employee(basic_salary=123_456.78, overtime=0, allowances=0, bonuses=0, dependents=1))
        for amount in (result.employee_nis_contribution, result.total_paye_tax, result.taxable_income):
            assert round(amount, 2) == amount


class TestPAYEConfigInjection:
    def test_alternate_band_rate(self):
        config = replace(GUYANA_TAX_CONFIG_2025, paye=replace(GUYANA_TAX_CONFIG_2025.paye, band_1_rate=0.20))
        result = PAYECalculator(config).calculate(
            make_employee(basic_salary=200_000, overtime=30_000, allowances=20_000, bonuses=0, dependents=2)
        )
        assert result.total_paye_tax == 11_200

    def test_alternate_free_pay(self):
        config = replace(GUYANA_TAX_CONFIG_2025, paye=replace(GUYANA_TAX_CONFIG_2025.paye, statutory_free_pay=100_000))
        result = PAYECalculator(config).calculate(
            make_employee(basic_salary=200_000, overtime=0, allowances=0, bonuses=0, dependents=0)
        )
        assert result.statutory_free_pay == 100_000
        assert result.taxable_income == 88_800


class TestProcessPayroll:
    def test_multiple_employees(self, calc):
        employees = [
            make_employee(id=f"emp-{i}", first_name=f"Employee{i + 1}", basic_salary=150_000,
                          overtime=20_000, allowances=10_000, bonuses=0, dependents=1)
            for i in range(3)
        ]
        summary = calc.process_payroll(employees)

        assert len(summary.employees) == 3
        assert summary.totals.employee_count == 3
        assert summary.totals.total_gross_pay == 540_000
        assert summary.totals.total_paye == pytest.approx(sum(r.total_paye_tax for r in summary.employees))
        assert summary.totals.total_employee_nis == pytest.approx(
            sum(r.employee_nis_contribution for r in summary.employees)
        )
        assert summary.totals.total_net_pay == pytest.approx(sum(r.net_pay for r in summary.employees))

    def test_order_independent(self, calc):
        employees = [
            make_employee(id="a", basic_salary=90_000),
            make_employee(id="b", basic_salary=310_000, overtime=75_000),
            make_employee(id="c", basic_salary=1_000_000, dependents=5),
        ]
        forward = calc.process_payroll(employees).totals
        backward = calc.process_payroll(list(reversed(employees))).totals
        assert forward.total_net_pay == pytest.approx(backward.total_net_pay)
        assert forward.total_employer_nis == pytest.approx(backward.total_employer_nis)

    def test_empty_list(self, calc):
        summary = calc.process_payroll([])
        assert summary.employees == []
        assert summary.totals.employee_count == 0
        assert summary.totals.total_gross_pay == 0
        assert summary.totals.total_paye == 0

    def test_generation_timestamp(self, calc):
        summary = calc.process_payroll([make_employee()])
        assert isinstance(summary.generated_at, datetime)


class TestValidators:
    @pytest.mark.parametrize("value", [
        "123456789", "A12345678", "A-1234567-B", "12-345-6789", "a1b2c3d4e",
        "A 1234567 B", "  A1234567B  ",
    ])
    def test_valid_nis_numbers(self, value):
        assert validate_nis_number(value) is True

    @pytest.mark.parametrize("value", ["", "12345", "1234567890", "A١٢٣٤٥٦٧٨", None])
    def test_invalid_nis_numbers(self, value):
        assert validate_nis_number(value) is False

    @pytest.mark.parametrize("value", ["123456789", "987654321", "1-2-3-4-5-6-7-8-9", " 123 456 789 "])
    def test_valid_tin_numbers(self, value):
        assert validate_tin_number(value) is True

    @pytest.mark.parametrize("value", ["", "12345", "1234567890", "12345678A", "ABC123DEF", "١٢٣٤٥٦٧٨٩", None])
    def test_invalid_tin_numbers(self, value):
        assert validate_tin_number(value) is False
