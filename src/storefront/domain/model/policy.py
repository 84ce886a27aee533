"""Rule tables for pricing, points, promotions and stock warnings.

Each policy is a frozen dataclass whose defaults are the storefront's
production values.  Services take a policy argument so tests can swap
in different numbers without touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# ---------------------------------------------------------------------------
# Product ids referenced by the rules
# ---------------------------------------------------------------------------
KEYBOARD = "p1"
MOUSE = "p2"
MONITOR_ARM = "p3"
LAPTOP_POUCH = "p4"
SPEAKER = "p5"

TUESDAY = 2


def _frozen(mapping: dict[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class DiscountPolicy:
    item_threshold: int = 10
    item_rates: Mapping[str, int] = field(
        default_factory=lambda: _frozen(
            {
                KEYBOARD: 10,
                MOUSE: 15,
                MONITOR_ARM: 20,
                LAPTOP_POUCH: 5,
                SPEAKER: 25,
            }
        )
    )
    bulk_threshold: int = 30
    bulk_rate: int = 25
    special_days: tuple[int, ...] = (TUESDAY,)
    special_day_rate: int = 10

    def item_rate(self, product_id: str) -> int:
        return self.item_rates.get(product_id, 0)


@dataclass(frozen=True)
class QuantityTier:
    threshold: int
    bonus: int


@dataclass(frozen=True)
class PointsPolicy:
    points_unit: int = 1000
    special_days: tuple[int, ...] = (TUESDAY,)
    special_multiplier: int = 2
    keyboard_mouse_bonus: int = 50
    full_set_bonus: int = 100
    # Highest threshold first; the first tier reached wins.
    quantity_tiers: tuple[QuantityTier, ...] = (
        QuantityTier(threshold=30, bonus=100),
        QuantityTier(threshold=20, bonus=50),
        QuantityTier(threshold=10, bonus=20),
    )


@dataclass(frozen=True)
class PromotionPolicy:
    flash_sale_rate: int = 20
    suggestion_rate: int = 5
    # Seconds
    flash_sale_interval: float = 30.0
    flash_sale_max_initial_delay: float = 10.0
    suggestion_interval: float = 60.0
    suggestion_max_initial_delay: float = 20.0


@dataclass(frozen=True)
class StockPolicy:
    low_stock_threshold: int = 5
    total_stock_warning: int = 50
    total_stock_critical: int = 30


DEFAULT_DISCOUNT_POLICY = DiscountPolicy()
DEFAULT_POINTS_POLICY = PointsPolicy()
DEFAULT_PROMOTION_POLICY = PromotionPolicy()
DEFAULT_STOCK_POLICY = StockPolicy()
