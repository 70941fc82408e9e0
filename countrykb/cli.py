"""CLI entry point for countrykb."""

from __future__ import annotations

import logging
import math

import click

from countrykb import formatters, registry
from countrykb.service import CountryKnowledge

OUTPUT_OPTION = click.option(
    "--output",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    help="Output format",
)


def _warn_if_uncurated(country_code: str) -> None:
    code = registry.normalize_code(country_code)
    if code not in registry.COUNTRY_DATA:
        click.echo(
            f"Warning: no curated data for {code}; using generic defaults.",
            err=True,
        )


@click.group()
@click.option("--verbose", is_flag=True, help="Log cache and lookup activity to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Country financial reference data.

    Tax brackets, cost-of-living indices and briefing text for ISO 3166-1
    alpha-2 country codes (case-insensitive).
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    ctx.obj = CountryKnowledge()


@main.command()
@click.argument("country_code")
@click.pass_obj
def summary(knowledge: CountryKnowledge, country_code: str) -> None:
    """Print the financial context briefing for COUNTRY_CODE."""
    _warn_if_uncurated(country_code)
    click.echo(knowledge.generate_ai_context_summary(country_code), nl=False)


@main.command()
@click.argument("country_code")
@click.argument("annual_income", type=float)
@OUTPUT_OPTION
@click.pass_obj
def tax(
    knowledge: CountryKnowledge,
    country_code: str,
    annual_income: float,
    output_format: str,
) -> None:
    """Progressive income tax on ANNUAL_INCOME (local currency) in COUNTRY_CODE."""
    if not math.isfinite(annual_income):
        raise click.BadParameter(
            "must be a finite number", param_hint="'ANNUAL_INCOME'"
        )
    if annual_income < 0:
        raise click.BadParameter(
            "must not be negative", param_hint="'ANNUAL_INCOME'"
        )
    _warn_if_uncurated(country_code)

    ctx = knowledge.get_country_context(country_code)
    result = knowledge.calculate_income_tax(country_code, annual_income)

    if output_format == "json":
        click.echo(formatters.format_tax_json(ctx, annual_income, result))
    else:
        click.echo(formatters.format_tax_table(ctx, annual_income, result), nl=False)


@main.command()
@click.argument("country_code1")
@click.argument("country_code2")
@OUTPUT_OPTION
@click.pass_obj
def compare(
    knowledge: CountryKnowledge,
    country_code1: str,
    country_code2: str,
    output_format: str,
) -> None:
    """Cost of living in COUNTRY_CODE2 relative to COUNTRY_CODE1."""
    _warn_if_uncurated(country_code1)
    _warn_if_uncurated(country_code2)

    result = knowledge.compare_cost_of_living(country_code1, country_code2)

    if output_format == "json":
        click.echo(formatters.format_comparison_json(result))
    else:
        click.echo(formatters.format_comparison_table(result), nl=False)


@main.command()
@click.option("--curated-only", is_flag=True, help="Only countries with full data")
@OUTPUT_OPTION
@click.pass_obj
def countries(knowledge: CountryKnowledge, curated_only: bool, output_format: str) -> None:
    """List supported countries."""
    listing = knowledge.supported_countries(curated_only=curated_only)

    if output_format == "json":
        click.echo(formatters.format_countries_json(listing))
    else:
        click.echo(formatters.format_countries_table(listing), nl=False)


if __name__ == "__main__":
    main()
