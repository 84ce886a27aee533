"""Application service: Accrue Points use case."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from storefront.domain.model.cart import LineItem
from storefront.domain.model.policy import DEFAULT_POINTS_POLICY, PointsPolicy
from storefront.domain.model.results import CartCalculationResult, LoyaltyResult
from storefront.domain.service.loyalty_rules import compute_points


class AccruePointsHandler:

    def __init__(self, policy: PointsPolicy = DEFAULT_POINTS_POLICY) -> None:
        self._policy = policy

    def handle(
        self,
        calculation: CartCalculationResult,
        line_items: Iterable[LineItem],
        today: date | None = None,
    ) -> LoyaltyResult:
        """Points earned for a priced cart.

        Lines the calculator skipped (unknown products) earn nothing.
        """
        skipped = set(calculation.skipped_product_ids)
        known = [item for item in line_items if item.product_id not in skipped]
        return compute_points(
            total=calculation.total,
            item_count=calculation.item_count,
            line_items=known,
            today=today or date.today(),
            policy=self._policy,
        )
