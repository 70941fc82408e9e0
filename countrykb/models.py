"""Data models for country financial contexts and derived results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, get_args

Region = Literal[
    "north_america",
    "europe",
    "asia_pacific",
    "latin_america",
    "middle_east",
    "africa",
]
EconomicSystem = Literal["developed", "developing", "emerging"]

REGIONS: tuple[str, ...] = get_args(Region)
ECONOMIC_SYSTEMS: tuple[str, ...] = get_args(EconomicSystem)


@dataclass(frozen=True, slots=True)
class TaxBracket:
    min_income: float
    max_income: float | None  # None = unbounded top bracket
    rate: float  # decimal, 0.25 = 25%


@dataclass(frozen=True, slots=True)
class LuxuryPricing:
    lamborghini_urus: float
    lamborghini_huracan: float
    porsche_911: float
    rolex_submariner: float
    median_home_price_city: float
    median_home_price_suburb: float


@dataclass(frozen=True, slots=True)
class CountryFinancialContext:
    country_code: str
    country_name: str
    currency: str
    currency_symbol: str

    income_tax_brackets: tuple[TaxBracket, ...]
    vat_rate: float
    capital_gains_tax_rate: float
    corporate_tax_rate: float

    # NYC = 100
    cost_of_living_index: float
    rent_index: float
    groceries_index: float
    purchasing_power_index: float

    # Local currency
    average_monthly_income: float
    median_monthly_income: float

    luxury_pricing: LuxuryPricing
    region: Region
    economic_system: EconomicSystem
    financial_regulations: tuple[str, ...]
    last_updated: date

    @property
    def top_marginal_rate(self) -> float:
        return self.income_tax_brackets[-1].rate


@dataclass(slots=True)
class CacheEntry:
    context: CountryFinancialContext
    stored_at: datetime


@dataclass(slots=True)
class BracketTax:
    range: str
    tax: float
    rate: float  # percentage, 10.0 = 10%


@dataclass(slots=True)
class TaxCalculationResult:
    total_tax: float
    effective_rate: float  # percentage
    brackets: list[BracketTax] = field(default_factory=list)


@dataclass(slots=True)
class ComparisonResult:
    country1: str
    country2: str
    overall_difference: float
    rent_difference: float
    groceries_difference: float
    purchasing_power_difference: float
    summary: str


@dataclass(slots=True)
class SupportedCountry:
    code: str
    name: str
    has_full_data: bool
