"""Application service: Calculate Cart use case.

Prices a set of line items against the current catalog.  This is a pure
read: the catalog is never touched, and the result is rebuilt from scratch
on every call so it can never go stale.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from storefront.domain.model.cart import LineItem
from storefront.domain.model.policy import DEFAULT_DISCOUNT_POLICY, DiscountPolicy
from storefront.domain.model.results import CartCalculationResult
from storefront.domain.model.value_objects import Money, round_half_up
from storefront.domain.service.catalog import Catalog
from storefront.domain.service.discount_rules import compute_discount, price_lines

logger = logging.getLogger(__name__)


class CalculateCartHandler:

    def __init__(
        self,
        catalog: Catalog,
        policy: DiscountPolicy = DEFAULT_DISCOUNT_POLICY,
    ) -> None:
        self._catalog = catalog
        self._policy = policy

    def handle(
        self,
        line_items: Iterable[LineItem],
        today: date | None = None,
    ) -> CartCalculationResult:
        """Price the cart.

        Steps:
        1. Take one catalog snapshot so every line sees the same prices.
        2. Skip lines whose product id is unknown.
        3. Run the discount pipeline over the resolved lines.
        4. Round only the final total to whole won (half up).
        """
        items = list(line_items)
        today = today or date.today()
        snapshot = self._catalog.snapshot()

        _, unknown = price_lines(items, snapshot)
        for product_id in unknown:
            logger.warning("Skipping cart line for unknown product %r", product_id)

        outcome = compute_discount(items, snapshot, today, self._policy)

        return CartCalculationResult(
            subtotal=Money(outcome.subtotal),
            item_count=outcome.item_count,
            per_item_discounts=outcome.per_item_discounts,
            bulk_discount_applied=outcome.bulk_applied,
            special_day_applied=outcome.special_day_applied,
            discount_rate=outcome.discount_rate,
            total=Money(round_half_up(outcome.total)),
            original_total=Money(outcome.subtotal),
            skipped_product_ids=tuple(unknown),
        )
