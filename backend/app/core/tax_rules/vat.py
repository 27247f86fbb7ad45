"""
Value Added Tax (VAT) Calculator
Based on the Guyana VAT Act, standard rate 14% (GRA, 2025).

Key provisions:
  - Output VAT charged on standard-rated supplies
  - Zero-rated supplies (exports, basic food items) carry 0% VAT
  - Exempt supplies (financial services, residential rent) carry no VAT
  - Input VAT on standard-rated purchases is credited against output VAT
  - Registration required at $15M annual taxable turnover

A negative net VAT is a refund position and is reported as-is.
"""

from dataclasses import dataclass

from app.core.tax_rules.config import TaxConfig, GUYANA_TAX_CONFIG_2025


@dataclass
class VATCalculation:
    total_sales: float
    standard_rated_sales: float
    zero_rated_sales: float
    exempt_sales: float
    output_vat: float
    total_purchases: float
    standard_rated_purchases: float
    input_vat: float
    net_vat: float
    adjustments: float
    total_vat_due: float


class VATCalculator:
    """
    Deterministic VAT return calculator for Guyanese businesses.
    """

    def __init__(self, config: TaxConfig = GUYANA_TAX_CONFIG_2025):
        self.config = config

    @property
    def rate(self) -> float:
        return self.config.vat.standard_rate

    def calculate(
        self,
        standard_rated_sales: float,
        zero_rated_sales: float = 0.0,
        exempt_sales: float = 0.0,
        standard_rated_purchases: float = 0.0,
        adjustments: float = 0.0,
    ) -> VATCalculation:
        total_sales = standard_rated_sales + zero_rated_sales + exempt_sales
        output_vat = round(standard_rated_sales * self.rate, 2)

        # Only standard-rated purchases are tracked
        total_purchases = standard_rated_purchases
        input_vat = round(standard_rated_purchases * self.rate, 2)

        net_vat = round(output_vat - input_vat, 2)
        total_vat_due = round(net_vat + adjustments, 2)

        return VATCalculation(
            total_sales=round(total_sales, 2),
            standard_rated_sales=standard_rated_sales,
            zero_rated_sales=zero_rated_sales,
            exempt_sales=exempt_sales,
            output_vat=output_vat,
            total_purchases=total_purchases,
            standard_rated_purchases=standard_rated_purchases,
            input_vat=input_vat,
            net_vat=net_vat,
            adjustments=adjustments,
            total_vat_due=total_vat_due,
        )

    def calculate_simple(self, amount: float) -> dict:
        vat_amount = round(amount * self.rate, 2)
        return {
            "amount": amount,
            "vat_rate": round(self.rate * 100, 2),
            "vat_amount": vat_amount,
            "total_with_vat": round(amount + vat_amount, 2),
        }

    def extract_vat_from_inclusive(self, inclusive_amount: float) -> dict:
        amount_before_vat = round(inclusive_amount / (1 + self.rate), 2)
        vat_amount = round(inclusive_amount - amount_before_vat, 2)
        return {
            "inclusive_amount": inclusive_amount,
            "amount_before_vat": amount_before_vat,
            "vat_amount": vat_amount,
            "vat_rate": round(self.rate * 100, 2),
        }

    def check_registration_required(self, annual_revenue: float) -> bool:
        return annual_revenue >= self.config.vat.registration_threshold
