from app.core.tax_rules.config import TaxConfig, TaxConfigRegistry, GUYANA_TAX_CONFIG_2025
from app.core.tax_rules.paye import PAYECalculator, PayrollEmployee, validate_nis_number, validate_tin_number
from app.core.tax_rules.vat import VATCalculator

__all__ = [
    "TaxConfig",
    "TaxConfigRegistry",
    "GUYANA_TAX_CONFIG_2025",
    "PAYECalculator",
    "PayrollEmployee",
    "VATCalculator",
    "validate_nis_number",
    "validate_tin_number",
]
