"""CLI commands for pricing a cart."""

from __future__ import annotations

from datetime import date, datetime

import click

from storefront.application.dto import CartSummaryDTO, LineItemSpec
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import catalog, quote_handler


def parse_items(raw: str) -> list[LineItemSpec]:
    """Parse 'p1:3,p2:5' into LineItemSpec list.

    A product named more than once gets one line with the summed quantity,
    in the order it first appeared.
    """
    quantities: dict[str, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        product_id = product_id.strip()
        quantities[product_id] = quantities.get(product_id, 0) + qty
    return [
        LineItemSpec(product_id=product_id, quantity=qty)
        for product_id, qty in quantities.items()
    ]


def parse_day(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{raw}'. Expected YYYY-MM-DD.")


def _display_summary(dto: CartSummaryDTO) -> None:
    for product_id in dto.skipped:
        click.echo(f"Skipped unknown product '{product_id}'")

    click.echo(f"  {'Items':<27} {dto.item_count:>12}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>12}")
    for d in dto.item_discounts:
        label = f"{d.name} (10+)"
        rate = f"-{d.rate_percent}%"
        click.echo(f"  {label:<27} {rate:>12}")
    if dto.bulk_discount:
        click.echo(f"  {'Bulk discount (30+ items)':<27} {'-25%':>12}")
    if dto.special_day:
        click.echo(f"  {'Tuesday special':<27} {'-10%':>12}")
    click.echo(f"  {'-' * 40}")
    click.echo(f"  {'Discount':<27} {dto.discount_percent:>12}")
    click.echo(f"  {'You save':<27} {dto.savings:>12}")
    click.echo(f"  {'Total':<27} {dto.total:>12}")
    click.echo()
    click.echo(f"Points earned: {dto.points}p")
    for line in dto.point_details:
        click.echo(f"  {line}")


@click.command("quote")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--today",
    "today_str",
    default=None,
    envvar="STOREFRONT_TODAY",
    help="Calendar date to price on (YYYY-MM-DD). Defaults to today.",
)
def cart_quote(items: str, today_str: str | None) -> None:
    """Price a cart on the seed catalog and show the points it earns."""
    specs = parse_items(items)
    today = parse_day(today_str)

    handler = quote_handler(catalog())

    try:
        dto = handler.handle(specs, today=today)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(dto)
