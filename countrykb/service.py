"""CountryKnowledge: the engine's public entry points.

One instance owns one ContextCache. Whoever composes the application
(a request handler's dependencies, the CLI) constructs it; every method
is total and returns a value for any country code.
"""

from __future__ import annotations

from typing import Any

from countrykb import calculator, formatters, registry
from countrykb.cache import ContextCache
from countrykb.models import (
    ComparisonResult,
    CountryFinancialContext,
    SupportedCountry,
    TaxCalculationResult,
)


class CountryKnowledge:
    def __init__(self, cache: ContextCache | None = None) -> None:
        self.cache = cache if cache is not None else ContextCache()

    def get_country_context(self, country_code: str) -> CountryFinancialContext:
        return self.cache.get(country_code)

    def calculate_income_tax(
        self, country_code: str, annual_income: float
    ) -> TaxCalculationResult:
        ctx = self.cache.get(country_code)
        return calculator.progressive_tax(ctx, annual_income)

    def compare_cost_of_living(
        self, country_code1: str, country_code2: str
    ) -> ComparisonResult:
        return calculator.compare_contexts(
            self.cache.get(country_code1), self.cache.get(country_code2)
        )

    def generate_ai_context_summary(self, country_code: str) -> str:
        """Briefing text for a language model, with an average-earner tax example."""
        ctx = self.cache.get(country_code)
        # Example income is the average, not the median, monthly income.
        tax_example = calculator.progressive_tax(ctx, ctx.average_monthly_income * 12)
        return formatters.format_context_summary(ctx, tax_example)

    def cache_status(self) -> list[dict[str, Any]]:
        return self.cache.status()

    def clear_cache(self) -> int:
        """Drop every cached context; the next lookup of each code re-resolves."""
        return self.cache.clear()

    def supported_countries(self, curated_only: bool = False) -> list[SupportedCountry]:
        return registry.supported_countries(curated_only=curated_only)
