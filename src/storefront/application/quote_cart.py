"""Application service: Quote Cart use case.

Runs the calculator and the points rules back to back and maps both
results to a display DTO.  This is what the CLI shows for a cart.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from storefront.application.accrue_points import AccruePointsHandler
from storefront.application.calculate_cart import CalculateCartHandler
from storefront.application.dto import CartSummaryDTO, ItemDiscountDTO, LineItemSpec
from storefront.domain.model.cart import LineItem
from storefront.domain.model.results import CartCalculationResult, LoyaltyResult


class QuoteCartHandler:

    def __init__(
        self,
        calculator: CalculateCartHandler,
        points: AccruePointsHandler,
    ) -> None:
        self._calculator = calculator
        self._points = points

    def handle(
        self,
        item_specs: list[LineItemSpec],
        today: date | None = None,
    ) -> CartSummaryDTO:
        today = today or date.today()
        line_items = [LineItem.of(s.product_id, s.quantity) for s in item_specs]

        calculation = self._calculator.handle(line_items, today)
        loyalty = self._points.handle(calculation, line_items, today)

        return self._to_dto(calculation, loyalty)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(calc: CartCalculationResult, loyalty: LoyaltyResult) -> CartSummaryDTO:
        percent = (calc.discount_rate * Decimal(100)).quantize(Decimal("0.1"))
        return CartSummaryDTO(
            item_count=calc.item_count,
            subtotal=str(calc.subtotal),
            item_discounts=[
                ItemDiscountDTO(name=d.name, rate_percent=d.rate_percent)
                for d in calc.per_item_discounts
            ],
            bulk_discount=calc.bulk_discount_applied,
            special_day=calc.special_day_applied,
            discount_percent=f"{percent}%",
            savings=str(calc.savings),
            total=str(calc.total),
            points=loyalty.total_points,
            point_details=list(loyalty.detail_lines),
            skipped=list(calc.skipped_product_ids),
        )
