"""Text formatters: the context briefing, plus table and JSON output."""

from __future__ import annotations

import io
import json
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from countrykb.models import (
    ComparisonResult,
    CountryFinancialContext,
    SupportedCountry,
    TaxBracket,
    TaxCalculationResult,
)

RULE = "━" * 68


def _quantize(value: float, places: int) -> Decimal:
    """Round half away from zero, with enough precision for any finite float."""
    exact = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def to_fixed(value: float, places: int) -> str:
    """Round half away from zero to a fixed number of decimal places."""
    return f"{_quantize(value, places):f}"


def fmt_amount(value: float) -> str:
    """Format with thousands separators and at most three decimals.

    Whole numbers carry no decimal part: 450000 -> "450,000", 1234.5 -> "1,234.5".
    """
    text = f"{_quantize(value, 3):,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def fmt_money(value: float, symbol: str) -> str:
    return f"{symbol}{fmt_amount(value)}"


def fmt_rate(rate: float) -> str:
    """Format a decimal rate as a percentage with 1 decimal place."""
    return f"{to_fixed(rate * 100, 1)}%"


def fmt_index(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def bracket_range(bracket: TaxBracket, symbol: str) -> str:
    """Human-readable bracket bounds: "$0 - $11,600" or "Above $609,350"."""
    if bracket.max_income is None:
        return f"Above {fmt_money(bracket.min_income, symbol)}"
    return f"{fmt_money(bracket.min_income, symbol)} - {fmt_money(bracket.max_income, symbol)}"


# --- Context briefing ---

def format_context_summary(
    ctx: CountryFinancialContext, tax_example: TaxCalculationResult
) -> str:
    """Render the fixed-layout briefing block for a country.

    ``tax_example`` is the calculation for an average earner. Section order,
    bullet glyphs and number formatting are stable: downstream consumers
    read this text verbatim.
    """
    sym = ctx.currency_symbol
    lux = ctx.luxury_pricing
    regulations = "\n".join(f"• {r}" for r in ctx.financial_regulations)

    return f"""
COUNTRY FINANCIAL CONTEXT: {ctx.country_name} ({ctx.country_code})
{RULE}

CURRENCY & ECONOMY:
• Currency: {ctx.currency} ({sym})
• Economic Status: {ctx.economic_system.capitalize()} market
• Region: {ctx.region.replace('_', ' ', 1).title()}

TAXATION:
• VAT/Sales Tax: {fmt_rate(ctx.vat_rate)}
• Capital Gains Tax: {fmt_rate(ctx.capital_gains_tax_rate)}
• Corporate Tax: {fmt_rate(ctx.corporate_tax_rate)}
• Income Tax (avg earner): ~{to_fixed(tax_example.effective_rate, 1)}% effective rate
• Top Marginal Rate: {fmt_rate(ctx.top_marginal_rate)}

COST OF LIVING (NYC = 100 baseline):
• Overall Index: {fmt_index(ctx.cost_of_living_index)}
• Rent Index: {fmt_index(ctx.rent_index)}
• Groceries Index: {fmt_index(ctx.groceries_index)}
• Purchasing Power: {fmt_index(ctx.purchasing_power_index)}

INCOME LEVELS (in {ctx.currency}):
• Average Monthly: {fmt_money(ctx.average_monthly_income, sym)}
• Median Monthly: {fmt_money(ctx.median_monthly_income, sym)}

LUXURY GOODS PRICING (in {ctx.currency}):
• Lamborghini Urus: {fmt_money(lux.lamborghini_urus, sym)}
• Lamborghini Huracan: {fmt_money(lux.lamborghini_huracan, sym)}
• Porsche 911: {fmt_money(lux.porsche_911, sym)}
• Rolex Submariner: {fmt_money(lux.rolex_submariner, sym)}
• Median Home (City): {fmt_money(lux.median_home_price_city, sym)}
• Median Home (Suburb): {fmt_money(lux.median_home_price_suburb, sym)}

LOCAL REGULATIONS:
{regulations}

Use these figures when providing financial advice. All monetary values are in local currency ({ctx.currency}) unless the user specifies otherwise.
{RULE}
"""


# --- Tables ---

def _render(*renderables: Any) -> str:
    buf = io.StringIO()
    rich_console = Console(file=buf, width=120, no_color=True)
    for r in renderables:
        rich_console.print(r)
    return buf.getvalue()


def format_tax_table(
    ctx: CountryFinancialContext, annual_income: float, result: TaxCalculationResult
) -> str:
    sym = ctx.currency_symbol
    header = (
        f"Income Tax: {ctx.country_name} ({ctx.country_code})\n"
        f"Annual income: {fmt_money(annual_income, sym)} {ctx.currency}"
    )

    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Bracket", style="bold")
    table.add_column("Rate", justify="right")
    table.add_column("Tax", justify="right")
    for b in result.brackets:
        table.add_row(b.range, f"{to_fixed(b.rate, 1)}%", fmt_money(round(b.tax, 2), sym))

    footer = (
        f"Total tax: {fmt_money(round(result.total_tax, 2), sym)}\n"
        f"Effective rate: {to_fixed(result.effective_rate, 2)}%"
    )
    return _render(header, table, footer)


def format_comparison_table(result: ComparisonResult) -> str:
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Index", style="bold")
    table.add_column(f"{result.country2} vs {result.country1}", justify="right")
    rows = [
        ("Overall", result.overall_difference),
        ("Rent", result.rent_difference),
        ("Groceries", result.groceries_difference),
        ("Purchasing power", result.purchasing_power_difference),
    ]
    for label, diff in rows:
        sign = "+" if diff > 0 else ""
        table.add_row(label, f"{sign}{to_fixed(diff, 1)}%")
    return _render(table, result.summary)


def format_countries_table(countries: list[SupportedCountry]) -> str:
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Code", style="bold")
    table.add_column("Country")
    table.add_column("Data")
    for c in countries:
        table.add_row(c.code, c.name, "full" if c.has_full_data else "default")
    return _render(table, f"{len(countries)} countries")


# --- JSON ---

def format_tax_json(
    ctx: CountryFinancialContext, annual_income: float, result: TaxCalculationResult
) -> str:
    data: dict[str, Any] = {
        "country_code": ctx.country_code,
        "currency": ctx.currency,
        "annual_income": annual_income,
        "total_tax": round(result.total_tax, 2),
        "effective_rate": round(result.effective_rate, 2),
        "brackets": [
            {"range": b.range, "rate": round(b.rate, 2), "tax": round(b.tax, 2)}
            for b in result.brackets
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_comparison_json(result: ComparisonResult) -> str:
    data = {
        "country1": result.country1,
        "country2": result.country2,
        "overall_difference": round(result.overall_difference, 2),
        "rent_difference": round(result.rent_difference, 2),
        "groceries_difference": round(result.groceries_difference, 2),
        "purchasing_power_difference": round(result.purchasing_power_difference, 2),
        "summary": result.summary,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_countries_json(countries: list[SupportedCountry]) -> str:
    data = [
        {"code": c.code, "name": c.name, "has_full_data": c.has_full_data}
        for c in countries
    ]
    return json.dumps(data, indent=2, ensure_ascii=False)
