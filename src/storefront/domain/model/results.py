"""Result types returned by the pricing, loyalty and catalog operations.

Every public operation in the core reports its outcome as one of these
values instead of raising, so callers can decide how to tell the shopper.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


class CatalogFailure(Enum):
    INVALID_PRODUCT = "INVALID_PRODUCT"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    ALREADY_PROMOTED = "ALREADY_PROMOTED"


@dataclass(frozen=True)
class CatalogOutcome:
    """Result of a catalog lookup or mutation.

    On success ``product`` is the record now stored in the catalog.
    """

    product: Product | None = None
    failure: CatalogFailure | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @staticmethod
    def success(product: Product) -> CatalogOutcome:
        return CatalogOutcome(product=product)

    @staticmethod
    def failed(failure: CatalogFailure, message: str) -> CatalogOutcome:
        return CatalogOutcome(failure=failure, message=message)


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------


class DiscountBranch(Enum):
    NONE = "NONE"
    PER_ITEM = "PER_ITEM"
    BULK = "BULK"


@dataclass(frozen=True)
class ItemDiscount:
    product_id: str
    name: str
    rate_percent: int


@dataclass(frozen=True)
class DiscountOutcome:
    """Decision produced by the discount rule pipeline.

    ``total`` is unrounded; rounding to whole won is the calculator's job.
    """

    subtotal: Decimal
    item_count: int
    total: Decimal
    branch: DiscountBranch
    per_item_discounts: tuple[ItemDiscount, ...]
    special_day_applied: bool
    discount_rate: Decimal

    @property
    def bulk_applied(self) -> bool:
        return self.branch is DiscountBranch.BULK


@dataclass(frozen=True)
class CartCalculationResult:
    subtotal: Money
    item_count: int
    per_item_discounts: tuple[ItemDiscount, ...]
    bulk_discount_applied: bool
    special_day_applied: bool
    discount_rate: Decimal
    total: Money
    original_total: Money
    skipped_product_ids: tuple[str, ...] = ()

    @property
    def savings(self) -> Money:
        # Rounding a fractional subtotal up can leave total above it.
        if self.total >= self.original_total:
            return Money.zero()
        return self.original_total - self.total

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0


# ---------------------------------------------------------------------------
# Loyalty
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoyaltyResult:
    base_points: int
    special_day_bonus: int
    combo_bonus: int
    quantity_bonus: int
    total_points: int
    detail_lines: tuple[str, ...]

    @staticmethod
    def empty() -> LoyaltyResult:
        return LoyaltyResult(
            base_points=0,
            special_day_bonus=0,
            combo_bonus=0,
            quantity_bonus=0,
            total_points=0,
            detail_lines=(),
        )
