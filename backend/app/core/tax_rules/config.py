"""
Tax Configuration
Versioned, immutable rate tables for Guyana payroll and VAT rules.

Each TaxConfig covers an effective date range so that a new tax year can be
registered without touching calculation code.

2025 Budget (GRA / NIS):
  - Statutory free pay: $130,000 monthly
  - PAYE: first $260,000 chargeable at 25%, remainder at 35%
  - Child allowance: $10,000 per child, max 3 children
  - Overtime: first $50,000 monthly is tax-free
  - NIS: 5.6% employee / 8.4% employer on earnings up to $280,000
  - VAT: 14% standard rate, registration above $15M annual turnover
"""

import math
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class PAYEConfig:
    statutory_free_pay: float
    band_1_limit: float
    band_1_rate: float
    band_2_rate: float
    child_allowance_per_child: float
    max_child_allowance_children: int
    overtime_tax_free_limit: float


@dataclass(frozen=True)
class NISConfig:
    earnings_ceiling: float
    employee_rate: float
    employer_rate: float
    max_employee_contribution: float | None = None
    max_employer_contribution: float | None = None

    def __post_init__(self):
        # Caps must stay in step with ceiling x rate
        for cap_name, rate in (
            ("max_employee_contribution", self.employee_rate),
            ("max_employer_contribution", self.employer_rate),
        ):
            derived = round(self.earnings_ceiling * rate, 2)
            cap = getattr(self, cap_name)
            if cap is None:
                object.__setattr__(self, cap_name, derived)
            elif not math.isclose(cap, derived, abs_tol=0.01):
                raise ValueError(
                    f"{cap_name}={cap} does not match earnings ceiling x rate ({derived})"
                )


@dataclass(frozen=True)
class VATConfig:
    standard_rate: float
    registration_threshold: float = 0.0


@dataclass(frozen=True)
class TaxConfig:
    tax_year: int
    effective_from: date
    paye: PAYEConfig
    nis: NISConfig
    vat: VATConfig
    effective_to: date | None = None
    jurisdiction: str = "GY"
    currency: str = "GYD"

    def covers(self, on: date) -> bool:
        if on < self.effective_from:
            return False
        return self.effective_to is None or on <= self.effective_to


GUYANA_TAX_CONFIG_2025 = TaxConfig(
    tax_year=2025,
    effective_from=date(2025, 1, 1),
    paye=PAYEConfig(
        statutory_free_pay=130_000.0,
        band_1_limit=260_000.0,
        band_1_rate=0.25,
        band_2_rate=0.35,
        child_allowance_per_child=10_000.0,
        max_child_allowance_children=3,
        overtime_tax_free_limit=50_000.0,
    ),
    nis=NISConfig(
        earnings_ceiling=280_000.0,
        employee_rate=0.056,
        employer_rate=0.084,
        max_employee_contribution=15_680.0,
        max_employer_contribution=23_520.0,
    ),
    vat=VATConfig(
        standard_rate=0.14,
        registration_threshold=15_000_000.0,
    ),
)


@dataclass(frozen=True)
class TaxConfigRegistry:
    """
    Resolves the TaxConfig in force on a given date.
    When ranges overlap, the config with the latest effective_from wins.
    """

    configs: tuple[TaxConfig, ...] = field(default_factory=tuple)

    def register(self, config: TaxConfig) -> "TaxConfigRegistry":
        return TaxConfigRegistry(configs=self.configs + (config,))

    def for_date(self, on: date) -> TaxConfig:
        matching = [c for c in self.configs if c.covers(on)]
        if not matching:
            raise LookupError(f"No tax configuration in force on {on.isoformat()}")
        return max(matching, key=lambda c: c.effective_from)

    def for_year(self, tax_year: int) -> TaxConfig:
        for config in self.configs:
            if config.tax_year == tax_year:
                return config
        raise LookupError(f"No tax configuration registered for {tax_year}")


DEFAULT_REGISTRY = TaxConfigRegistry().register(GUYANA_TAX_CONFIG_2025)
