"""
Tax calculation API routes.
Exposes the VAT calculator and the tax configuration tables.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from app.schemas.schemas import VATCalculateRequest, VATSimpleRequest
from app.core.tax_rules.config import DEFAULT_REGISTRY, TaxConfig, GUYANA_TAX_CONFIG_2025
from app.core.tax_rules.vat import VATCalculator

router = APIRouter()

vat_calc = VATCalculator()


def resolve_config(tax_year: int | None) -> TaxConfig:
    if tax_year is None:
        return GUYANA_TAX_CONFIG_2025
    try:
        return DEFAULT_REGISTRY.for_year(tax_year)
    except LookupError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/config/{tax_year}")
async def get_tax_config(tax_year: int):
    """Return the rate table registered for a tax year."""
    return asdict(resolve_config(tax_year))


@router.post("/vat/calculate")
async def calculate_vat(data: VATCalculateRequest):
    """Calculate a VAT return at the 14% standard rate."""
    calc = VATCalculator(resolve_config(data.tax_year))
    result = calc.calculate(
        standard_rated_sales=data.standard_rated_sales,
        zero_rated_sales=data.zero_rated_sales,
        exempt_sales=data.exempt_sales,
        standard_rated_purchases=data.standard_rated_purchases,
        adjustments=data.adjustments,
    )
    return asdict(result)


@router.post("/vat/simple")
async def calculate_simple_vat(data: VATSimpleRequest):
    """Add VAT to an exclusive amount, or extract it from an inclusive one."""
    if data.is_inclusive:
        return vat_calc.extract_vat_from_inclusive(data.amount)
    return vat_calc.calculate_simple(data.amount)


@router.get("/vat/registration-required")
async def vat_registration_required(annual_revenue: float):
    """Check whether annual revenue crosses the VAT registration threshold."""
    return {
        "annual_revenue": annual_revenue,
        "threshold": vat_calc.config.vat.registration_threshold,
        "registration_required": vat_calc.check_registration_required(annual_revenue),
    }
