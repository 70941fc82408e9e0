"""Pure calculation functions over country contexts."""

from __future__ import annotations

import math

from countrykb.formatters import bracket_range, to_fixed
from countrykb.models import (
    BracketTax,
    ComparisonResult,
    CountryFinancialContext,
    TaxCalculationResult,
)


def progressive_tax(
    ctx: CountryFinancialContext, annual_income: float
) -> TaxCalculationResult:
    """Marginal income tax: each bracket's rate applies only to its own slice.

    Negative, zero and non-finite incomes owe nothing.
    """
    if not math.isfinite(annual_income) or annual_income <= 0:
        return TaxCalculationResult(total_tax=0.0, effective_rate=0.0, brackets=[])

    brackets: list[BracketTax] = []
    total_tax = 0.0
    remaining = annual_income

    for bracket in ctx.income_tax_brackets:
        if remaining <= 0:
            break

        upper = math.inf if bracket.max_income is None else bracket.max_income
        taxable = min(remaining, upper - bracket.min_income)
        tax = taxable * bracket.rate

        if taxable > 0:
            brackets.append(
                BracketTax(
                    range=bracket_range(bracket, ctx.currency_symbol),
                    tax=tax,
                    rate=bracket.rate * 100,
                )
            )
            total_tax += tax

        remaining -= taxable

    return TaxCalculationResult(
        total_tax=total_tax,
        effective_rate=total_tax / annual_income * 100,
        brackets=brackets,
    )


def percent_difference(a: float, b: float) -> float:
    """Signed change from a to b in percent. A zero baseline yields 0."""
    if a == 0:
        return 0.0
    return (b - a) / a * 100


def compare_contexts(
    ctx_a: CountryFinancialContext, ctx_b: CountryFinancialContext
) -> ComparisonResult:
    """Cost-of-living deltas of B relative to A.

    Positive overall means B is more expensive. The rent and purchasing
    power clauses of the summary always describe B.
    """
    overall = percent_difference(ctx_a.cost_of_living_index, ctx_b.cost_of_living_index)
    rent = percent_difference(ctx_a.rent_index, ctx_b.rent_index)
    groceries = percent_difference(ctx_a.groceries_index, ctx_b.groceries_index)
    purchasing = percent_difference(
        ctx_a.purchasing_power_index, ctx_b.purchasing_power_index
    )

    if overall > 0:
        more_expensive, less_expensive = ctx_b.country_name, ctx_a.country_name
    else:
        more_expensive, less_expensive = ctx_a.country_name, ctx_b.country_name

    summary = (
        f"{more_expensive} is {to_fixed(abs(overall), 0)}% more expensive "
        f"than {less_expensive} overall. "
        f"Rent is {to_fixed(abs(rent), 0)}% {'higher' if rent > 0 else 'lower'} "
        f"in {ctx_b.country_name}, "
        f"and purchasing power is {to_fixed(abs(purchasing), 0)}% "
        f"{'stronger' if purchasing > 0 else 'weaker'}."
    )

    return ComparisonResult(
        country1=ctx_a.country_name,
        country2=ctx_b.country_name,
        overall_difference=overall,
        rent_difference=rent,
        groceries_difference=groceries,
        purchasing_power_difference=purchasing,
        summary=summary,
    )
