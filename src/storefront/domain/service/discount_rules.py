"""Domain service: Discount Rules.

Discounts are evaluated as a fixed pipeline of rules.  Each rule sees the
cart and the running total and either has no effect (returns None) or
returns a replacement total.  The order of ``DISCOUNT_PIPELINE`` *is* the
precedence:

  1. per-item:    lines with enough units get the product's table rate,
                  each applied to the whole subtotal
  2. bulk:        a large enough cart replaces the running total with a flat
                  rate on the subtotal, wiping out step 1
  3. special day: on the special weekday the running total shrinks by a
                  further percentage, if anything is left to discount

The reported rate is always recomputed from the final total, so rules
compose multiplicatively and nothing is ever applied twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional

from storefront.domain.model.cart import LineItem
from storefront.domain.model.policy import DEFAULT_DISCOUNT_POLICY, DiscountPolicy
from storefront.domain.model.product import Product
from storefront.domain.model.results import (
    DiscountBranch,
    DiscountOutcome,
    ItemDiscount,
)
from storefront.domain.model.value_objects import Money, weekday_index

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PricedLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.product.current_price * self.quantity


@dataclass(frozen=True)
class PricingContext:
    """Everything a rule may look at.  Built once per calculation."""

    lines: tuple[PricedLine, ...]
    subtotal: Decimal
    item_count: int
    today: date
    policy: DiscountPolicy


@dataclass(frozen=True)
class RuleEffect:
    """A rule's replacement for the running total."""

    branch: DiscountBranch | None
    total: Decimal
    item_discounts: tuple[ItemDiscount, ...] = ()
    special_day: bool = False


DiscountRule = Callable[[PricingContext, Decimal], Optional[RuleEffect]]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def per_item_rule(ctx: PricingContext, running_total: Decimal) -> RuleEffect | None:
    policy = ctx.policy
    discounts: list[ItemDiscount] = []
    total = running_total

    for line in ctx.lines:
        if line.quantity < policy.item_threshold:
            continue
        rate = policy.item_rate(line.product.id)
        if rate <= 0:
            continue
        discounts.append(
            ItemDiscount(
                product_id=line.product.id,
                name=line.product.name,
                rate_percent=rate,
            )
        )
        total -= ctx.subtotal * rate / HUNDRED

    if not discounts:
        return None
    return RuleEffect(
        branch=DiscountBranch.PER_ITEM,
        total=max(total, ZERO),
        item_discounts=tuple(discounts),
    )


def bulk_rule(ctx: PricingContext, running_total: Decimal) -> RuleEffect | None:
    policy = ctx.policy
    if ctx.item_count < policy.bulk_threshold:
        return None
    # Computed from the subtotal, not the running total: bulk supersedes.
    return RuleEffect(
        branch=DiscountBranch.BULK,
        total=ctx.subtotal * (HUNDRED - policy.bulk_rate) / HUNDRED,
    )


def special_day_rule(ctx: PricingContext, running_total: Decimal) -> RuleEffect | None:
    policy = ctx.policy
    if weekday_index(ctx.today) not in policy.special_days:
        return None
    if running_total <= ZERO:
        return None
    return RuleEffect(
        branch=None,
        total=running_total * (HUNDRED - policy.special_day_rate) / HUNDRED,
        special_day=True,
    )


DISCOUNT_PIPELINE: tuple[DiscountRule, ...] = (
    per_item_rule,
    bulk_rule,
    special_day_rule,
)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def price_lines(
    line_items: Iterable[LineItem],
    catalog_snapshot: Mapping[str, Product],
) -> tuple[list[PricedLine], list[str]]:
    """Resolve line items against the catalog.

    Returns the priced lines and the ids that matched no product.
    """
    priced: list[PricedLine] = []
    unknown: list[str] = []
    for item in line_items:
        product = catalog_snapshot.get(item.product_id)
        if product is None:
            unknown.append(item.product_id)
            continue
        priced.append(PricedLine(product=product, quantity=item.quantity.value))
    return priced, unknown


def discount_rate(subtotal: Decimal, total: Decimal) -> Decimal:
    """Fraction of the subtotal taken off; 0 for an empty subtotal."""
    if subtotal == ZERO:
        return ZERO
    return (subtotal - total) / subtotal


def compute_discount(
    line_items: Iterable[LineItem],
    catalog_snapshot: Mapping[str, Product],
    today: date,
    policy: DiscountPolicy = DEFAULT_DISCOUNT_POLICY,
    pipeline: tuple[DiscountRule, ...] = DISCOUNT_PIPELINE,
) -> DiscountOutcome:
    """Run the discount pipeline over a cart.

    Unknown product ids are ignored.  An empty or zero-value cart comes
    back with no discount and a rate of 0.
    """
    lines, _ = price_lines(line_items, catalog_snapshot)
    subtotal = sum((line.line_total for line in lines), Money.zero()).amount
    item_count = sum(line.quantity for line in lines)

    ctx = PricingContext(
        lines=tuple(lines),
        subtotal=subtotal,
        item_count=item_count,
        today=today,
        policy=policy,
    )

    total = subtotal
    branch = DiscountBranch.NONE
    item_discounts: tuple[ItemDiscount, ...] = ()
    special_day = False

    for rule in pipeline:
        effect = rule(ctx, total)
        if effect is None:
            continue
        total = effect.total
        if effect.branch is not None:
            branch = effect.branch
            item_discounts = effect.item_discounts
        special_day = special_day or effect.special_day

    return DiscountOutcome(
        subtotal=subtotal,
        item_count=item_count,
        total=total,
        branch=branch,
        per_item_discounts=item_discounts,
        special_day_applied=special_day,
        discount_rate=discount_rate(subtotal, total),
    )
