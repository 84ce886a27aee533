"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.show_stock import StockLevel, StockReportHandler
from storefront.domain.model.product import Product
from storefront.domain.service.catalog import Catalog
from storefront.infrastructure.bootstrap import catalog as seeded_catalog


def _sale_marker(p: Product) -> str:
    if p.on_flash_sale and p.on_suggested_sale:
        return "SUPER SALE"
    if p.on_flash_sale:
        return "SALE"
    if p.on_suggested_sale:
        return "SUGGESTED"
    return ""


def display_products(cat: Catalog) -> None:
    """Shared formatting for a product table."""
    click.echo(f"{'ID':<4} {'Name':<26} {'Price':>10} {'List':>10} {'Stock':>6}  Sale")
    click.echo("-" * 70)
    for p in cat.list_products():
        stock = "SOLD OUT" if p.is_sold_out else str(p.stock_qty)
        click.echo(
            f"{p.id:<4} {p.name:<26} {str(p.current_price):>10} "
            f"{str(p.original_price):>10} {stock:>6}  {_sale_marker(p)}"
        )


@click.command("list")
def catalog_list() -> None:
    """List all products in the catalog."""
    display_products(seeded_catalog())


@click.command("stock")
def catalog_stock() -> None:
    """Show stock warnings."""
    report = StockReportHandler(seeded_catalog()).handle()

    for warning in report.warnings:
        click.echo(warning.message)
    if not report.warnings:
        click.echo("All products well stocked.")

    click.echo(f"Total stock: {report.total_stock}")
    if report.level is StockLevel.CRITICAL:
        click.echo("Total stock is critically low.")
    elif report.level is StockLevel.WARNING:
        click.echo("Total stock is running low.")
