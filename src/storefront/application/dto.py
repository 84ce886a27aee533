"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemSpec:
    """Input: what the shopper holds (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ItemDiscountDTO:
    name: str
    rate_percent: int


@dataclass(frozen=True)
class CartSummaryDTO:
    """Output: a priced cart with its points, as displayed to the user."""

    item_count: int
    subtotal: str  # formatted, e.g. "₩10,000"
    item_discounts: list[ItemDiscountDTO]
    bulk_discount: bool
    special_day: bool
    discount_percent: str  # e.g. "25.0%"
    savings: str
    total: str
    points: int
    point_details: list[str]
    skipped: list[str]
