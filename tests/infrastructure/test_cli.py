"""End-to-end tests for the click CLI on the seed catalog."""

import pytest
from click.testing import CliRunner

from storefront.application.dto import LineItemSpec
from storefront.infrastructure.cli.cart_commands import parse_items
from storefront.infrastructure.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCartQuote:

    def test_quote_on_a_monday(self, runner):
        result = runner.invoke(
            cli, ["cart", "quote", "--items", "p1:1,p2:1", "--today", "2026-10-19"]
        )
        assert result.exit_code == 0, result.output
        assert "₩30,000" in result.output
        assert "Points earned: 80p" in result.output
        assert "keyboard+mouse set +50p" in result.output

    def test_quote_date_from_environment(self, runner):
        result = runner.invoke(
            cli,
            ["cart", "quote", "--items", "p1:30"],
            env={"STOREFRONT_TODAY": "2026-10-20"},
        )
        assert result.exit_code == 0, result.output
        assert "Tuesday special" in result.output
        assert "32.5%" in result.output

    def test_unknown_product_is_reported(self, runner):
        result = runner.invoke(
            cli, ["cart", "quote", "--items", "zz:1", "--today", "2026-10-19"]
        )
        assert result.exit_code == 0
        assert "Skipped unknown product 'zz'" in result.output

    def test_repeated_product_is_merged_into_one_line(self, runner):
        result = runner.invoke(
            cli, ["cart", "quote", "--items", "p1:5,p1:5", "--today", "2026-10-19"]
        )
        assert result.exit_code == 0, result.output
        assert "Bug-Free Keyboard (10+)" in result.output
        assert "₩90,000" in result.output

    def test_bad_item_format(self, runner):
        result = runner.invoke(cli, ["cart", "quote", "--items", "p1"])
        assert result.exit_code != 0
        assert "Invalid item format" in result.output

    def test_zero_quantity_is_a_domain_error(self, runner):
        result = runner.invoke(
            cli, ["cart", "quote", "--items", "p1:0", "--today", "2026-10-19"]
        )
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_bad_date(self, runner):
        result = runner.invoke(
            cli, ["cart", "quote", "--items", "p1:1", "--today", "tuesday"]
        )
        assert result.exit_code != 0
        assert "Invalid date" in result.output


class TestParseItems:

    def test_sums_repeated_ids_in_first_seen_order(self):
        assert parse_items("p2:1, p1:5,p2:3") == [
            LineItemSpec("p2", 4),
            LineItemSpec("p1", 5),
        ]

    def test_ignores_empty_pairs(self):
        assert parse_items("p1:1,,") == [LineItemSpec("p1", 1)]


class TestCatalogCommands:

    def test_list(self, runner):
        result = runner.invoke(cli, ["catalog", "list"])
        assert result.exit_code == 0
        assert "Bug-Free Keyboard" in result.output
        assert "SOLD OUT" in result.output

    def test_stock(self, runner):
        result = runner.invoke(cli, ["catalog", "stock"])
        assert result.exit_code == 0
        assert "Error-Proof Laptop Pouch: sold out" in result.output
        assert "Total stock: 110" in result.output


class TestPromoCommands:

    def test_simulate(self, runner):
        result = runner.invoke(cli, ["promo", "simulate", "--ticks", "3", "--seed", "1"])
        assert result.exit_code == 0
        assert result.output.count("[tick") == 3

    def test_run_for_zero_seconds(self, runner):
        result = runner.invoke(cli, ["promo", "run", "--seconds", "0", "--add", "p1,p4"])
        assert result.exit_code == 0
        assert "sold out" in result.output
        assert "Bug-Free Keyboard" in result.output
