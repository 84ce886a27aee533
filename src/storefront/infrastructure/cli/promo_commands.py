"""CLI commands for timed promotions."""

from __future__ import annotations

import time

import click

from storefront.application.edit_cart import AddToCartHandler
from storefront.domain.model.cart import Cart
from storefront.infrastructure.bootstrap import catalog, flash_sale, start_promotions
from storefront.infrastructure.cli.catalog_commands import display_products


@click.command("simulate")
@click.option("--ticks", default=1, show_default=True, type=click.IntRange(min=0),
              help="Number of flash-sale ticks to fire.")
@click.option("--seed", default=None, type=int, help="Random seed for repeatable picks.")
def promo_simulate(ticks: int, seed: int | None) -> None:
    """Fire flash-sale ticks immediately and show the resulting catalog."""
    cat = catalog()
    promotion = flash_sale(cat, seed=seed)

    for n in range(1, ticks + 1):
        outcome = promotion.fire()
        if outcome.applied:
            click.echo(f"[tick {n}] {outcome.message}")
        else:
            click.echo(f"[tick {n}] no sale")

    click.echo()
    display_products(cat)


@click.command("run")
@click.option("--seconds", default=60.0, show_default=True, type=click.FloatRange(min=0),
              help="How long to let the promotion timers run.")
@click.option("--add", "add_ids", default="", help="Product ids to put in the cart first, e.g. 'p1,p2'.")
def promo_run(seconds: float, add_ids: str) -> None:
    """Run the real promotion timers against a cart for a while."""
    cat = catalog()
    cart = Cart()

    adder = AddToCartHandler(cat)
    for product_id in filter(None, (s.strip() for s in add_ids.split(","))):
        result = adder.handle(cart, product_id)
        if not result.ok:
            click.echo(result.message, err=True)

    scheduler = start_promotions(cat, cart)
    try:
        time.sleep(seconds)
    finally:
        scheduler.stop()

    display_products(cat)
