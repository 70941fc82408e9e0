"""Country data table and context resolution.

The curated table and the secondary name table are bundled JSON assets:

    countrykb/data/
        countries.json       curated financial contexts, keyed by ISO code
        country_names.json   display names for codes without curated data

Both are parsed and validated once at import. Lookups never fail: codes
without curated data resolve to a copy of DEFAULT_CONTEXT carrying the
requested code and its display name.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import date
from importlib import resources
from typing import Any

from countrykb.models import (
    ECONOMIC_SYSTEMS,
    REGIONS,
    CountryFinancialContext,
    LuxuryPricing,
    SupportedCountry,
    TaxBracket,
)

logger = logging.getLogger("countrykb.registry")

UNKNOWN_CODE = "XX"
UNKNOWN_NAME = "Unknown Country"

# Generic-market template for uncurated countries. Thresholds are fixed in
# dollar terms whatever the local currency; see DESIGN.md.
DEFAULT_CONTEXT = CountryFinancialContext(
    country_code=UNKNOWN_CODE,
    country_name=UNKNOWN_NAME,
    currency="USD",
    currency_symbol="$",
    income_tax_brackets=(
        TaxBracket(0, 50000, 0.15),
        TaxBracket(50000, 100000, 0.25),
        TaxBracket(100000, None, 0.35),
    ),
    vat_rate=0.15,
    capital_gains_tax_rate=0.15,
    corporate_tax_rate=0.25,
    cost_of_living_index=50,
    rent_index=25,
    groceries_index=50,
    purchasing_power_index=50,
    average_monthly_income=3000,
    median_monthly_income=2000,
    luxury_pricing=LuxuryPricing(
        lamborghini_urus=300000,
        lamborghini_huracan=350000,
        porsche_911=150000,
        rolex_submariner=12000,
        median_home_price_city=500000,
        median_home_price_suburb=300000,
    ),
    region="europe",
    economic_system="developing",
    financial_regulations=(
        "Standard tax regulations apply",
        "Consult local tax authority",
    ),
    last_updated=date(2025, 1, 1),
)


# --- Validation ---

def bracket_problems(brackets: tuple[TaxBracket, ...] | list[TaxBracket]) -> list[str]:
    """Describe every way a bracket schedule fails to cover [0, inf) exactly once.

    Returns an empty list for a valid schedule.
    """
    if not brackets:
        return ["no brackets"]

    problems: list[str] = []
    if brackets[0].min_income != 0:
        problems.append(f"first bracket starts at {brackets[0].min_income}, not 0")

    for i, bracket in enumerate(brackets):
        if not 0 <= bracket.rate <= 1:
            problems.append(f"bracket {i} rate {bracket.rate} outside [0, 1]")
        is_last = i == len(brackets) - 1
        if bracket.max_income is None:
            if not is_last:
                problems.append(f"bracket {i} is unbounded but not the top bracket")
            continue
        if is_last:
            problems.append("top bracket has an upper bound")
            continue
        if bracket.max_income <= bracket.min_income:
            problems.append(f"bracket {i} is empty or inverted")
        nxt = brackets[i + 1]
        if nxt.min_income != bracket.max_income:
            problems.append(
                f"bracket {i} ends at {bracket.max_income} "
                f"but bracket {i + 1} starts at {nxt.min_income}"
            )
    return problems


# --- Loading ---

def _context_from_dict(data: dict[str, Any]) -> CountryFinancialContext:
    code = data.get("country_code")
    try:
        brackets = tuple(
            TaxBracket(b["min_income"], b["max_income"], b["rate"])
            for b in data["income_tax_brackets"]
        )
        context = CountryFinancialContext(
            country_code=code,
            country_name=data["country_name"],
            currency=data["currency"],
            currency_symbol=data["currency_symbol"],
            income_tax_brackets=brackets,
            vat_rate=data["vat_rate"],
            capital_gains_tax_rate=data["capital_gains_tax_rate"],
            corporate_tax_rate=data["corporate_tax_rate"],
            cost_of_living_index=data["cost_of_living_index"],
            rent_index=data["rent_index"],
            groceries_index=data["groceries_index"],
            purchasing_power_index=data["purchasing_power_index"],
            average_monthly_income=data["average_monthly_income"],
            median_monthly_income=data["median_monthly_income"],
            luxury_pricing=LuxuryPricing(**data["luxury_pricing"]),
            region=data["region"],
            economic_system=data["economic_system"],
            financial_regulations=tuple(data["financial_regulations"]),
            last_updated=date.fromisoformat(data["last_updated"]),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed country record {code!r}: {exc}") from exc

    problems = bracket_problems(context.income_tax_brackets)
    if problems:
        raise ValueError(f"Invalid tax brackets for {code}: {'; '.join(problems)}")
    if context.region not in REGIONS:
        raise ValueError(f"Unknown region {context.region!r} for {code}")
    if context.economic_system not in ECONOMIC_SYSTEMS:
        raise ValueError(
            f"Unknown economic system {context.economic_system!r} for {code}"
        )
    return context


def _read_json(name: str) -> Any:
    text = resources.files("countrykb.data").joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)


def _load_country_table() -> dict[str, CountryFinancialContext]:
    table: dict[str, CountryFinancialContext] = {}
    for code, record in _read_json("countries.json").items():
        context = _context_from_dict(record)
        if context.country_code != code:
            raise ValueError(f"Record keyed {code} carries code {context.country_code}")
        table[code] = context
    return table


COUNTRY_DATA: dict[str, CountryFinancialContext] = _load_country_table()
COUNTRY_NAMES: dict[str, str] = _read_json("country_names.json")

logger.debug(
    "Loaded %d curated countries and %d named countries",
    len(COUNTRY_DATA), len(COUNTRY_NAMES),
)


# --- Resolution ---

def normalize_code(country_code: object) -> str:
    """Uppercase a country code; anything not shaped like alpha-2 becomes XX."""
    if not isinstance(country_code, str):
        return UNKNOWN_CODE
    code = country_code.strip().upper()
    if len(code) != 2 or not (code.isascii() and code.isalpha()):
        return UNKNOWN_CODE
    return code


def country_name(country_code: str) -> str:
    code = normalize_code(country_code)
    if code in COUNTRY_DATA:
        return COUNTRY_DATA[code].country_name
    return COUNTRY_NAMES.get(code, UNKNOWN_NAME)


def resolve(country_code: object) -> CountryFinancialContext:
    """Return the curated context for a code, or a named copy of the default."""
    code = normalize_code(country_code)
    curated = COUNTRY_DATA.get(code)
    if curated is not None:
        return curated

    logger.debug("No curated data for %s, using default context", code)
    return dataclasses.replace(
        DEFAULT_CONTEXT,
        country_code=code,
        country_name=COUNTRY_NAMES.get(code, UNKNOWN_NAME),
    )


def supported_countries(curated_only: bool = False) -> list[SupportedCountry]:
    """List every code with a known name, sorted by display name."""
    codes = set(COUNTRY_DATA)
    if not curated_only:
        codes.update(COUNTRY_NAMES)

    countries = [
        SupportedCountry(
            code=code,
            name=country_name(code),
            has_full_data=code in COUNTRY_DATA,
        )
        for code in codes
    ]
    return sorted(countries, key=lambda c: (c.name.casefold(), c.code))
