import logging

import click

from storefront.infrastructure.cli.cart_commands import cart_quote
from storefront.infrastructure.cli.catalog_commands import catalog_list, catalog_stock
from storefront.infrastructure.cli.promo_commands import promo_run, promo_simulate


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Storefront — cart pricing and loyalty points"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def catalog() -> None:
    """Inspect the product catalog."""


@cli.group()
def cart() -> None:
    """Price carts."""


@cli.group()
def promo() -> None:
    """Run timed promotions."""


# Register subcommands
catalog.add_command(catalog_list)
catalog.add_command(catalog_stock)
cart.add_command(cart_quote)
promo.add_command(promo_simulate)
promo.add_command(promo_run)
