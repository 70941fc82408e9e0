"""Tests for CLI entry point."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from countrykb.cli import main


class TestSummary:
    def test_prints_briefing(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["summary", "us"])
        assert result.exit_code == 0
        assert "COUNTRY FINANCIAL CONTEXT: United States (US)" in result.output
        assert "• Income Tax (avg earner): ~15.4% effective rate" in result.output
        assert "Warning" not in result.output

    def test_uncurated_warns(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["summary", "ZW"])
        assert result.exit_code == 0
        assert "no curated data for ZW" in result.output
        assert "COUNTRY FINANCIAL CONTEXT: Zimbabwe (ZW)" in result.output


class TestTax:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "60000"])
        assert result.exit_code == 0
        assert "$47,150 - $100,525" in result.output
        assert "Total tax: $8,253" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "GB", "60000", "--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["country_code"] == "GB"
        assert [b["rate"] for b in data["brackets"]] == [0.0, 20.0, 40.0]
        # 37,700 at 20% + 9,730 at 40%
        assert data["total_tax"] == 11432.0

    def test_negative_income_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "--", "-5"])
        assert result.exit_code != 0
        assert "must not be negative" in result.output

    def test_infinite_income_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "inf"])
        assert result.exit_code != 0
        assert "must be a finite number" in result.output

    def test_nan_income_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "nan", "--output", "json"])
        assert result.exit_code != 0
        assert "must be a finite number" in result.output

    def test_very_large_income_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "1e30"])
        assert result.exit_code == 0
        assert "Above $609,350" in result.output

    def test_very_large_income_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "1e30", "--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["annual_income"] == 1e30
        assert data["effective_rate"] == pytest.approx(37.0)

    def test_non_numeric_income(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "lots"])
        assert result.exit_code != 0

    def test_invalid_output_format(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tax", "US", "1000", "--output", "xml"])
        assert result.exit_code != 0


class TestCompare:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["compare", "US", "CH"])
        assert result.exit_code == 0
        assert "Switzerland is 25% more expensive than United States overall." in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["compare", "us", "ch", "--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["country1"] == "United States"
        assert data["overall_difference"] == 25.0


class TestCountries:
    def test_curated_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["countries", "--curated-only", "--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 44
        assert all(c["has_full_data"] for c in data)

    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["countries"])
        assert result.exit_code == 0
        assert "Zimbabwe" in result.output
        assert "192 countries" in result.output


class TestHelp:
    def test_group_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("summary", "tax", "compare", "countries"):
            assert command in result.output

    def test_verbose_flag(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--verbose", "tax", "TH", "500000"])
        assert result.exit_code == 0
