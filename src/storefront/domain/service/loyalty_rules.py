"""Domain service: Loyalty Rules.

Points for a finished calculation are built from four independent parts:

  base:        one point per ``points_unit`` of the charged total
  special day: on the special weekday the base is multiplied (the
               multiplied base replaces the base, it is not added to it)
  combos:      keyboard+mouse, and on top of that the full desk set
  quantity:    a single tier bonus, highest tier reached wins

The detail lines are shown to the shopper in a fixed order: the special
day (or plain base) line, then combo lines, then the quantity line.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable

from storefront.domain.model.cart import LineItem
from storefront.domain.model.policy import (
    DEFAULT_POINTS_POLICY,
    KEYBOARD,
    MONITOR_ARM,
    MOUSE,
    PointsPolicy,
)
from storefront.domain.model.results import LoyaltyResult
from storefront.domain.model.value_objects import Money, weekday_index

_DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def base_points(total: Money, policy: PointsPolicy = DEFAULT_POINTS_POLICY) -> int:
    return int(total.amount // Decimal(policy.points_unit))


def special_day_bonus(
    base: int, today: date, policy: PointsPolicy = DEFAULT_POINTS_POLICY
) -> tuple[int, str]:
    """Extra points on top of ``base`` and the line describing the base part."""
    if base > 0 and weekday_index(today) in policy.special_days:
        days = ", ".join(_DAY_NAMES[d] for d in policy.special_days)
        bonus = base * policy.special_multiplier - base
        return bonus, f"{days} x{policy.special_multiplier}"
    return 0, f"base: {base}p" if base > 0 else ""


def combo_bonus(
    product_ids: set[str], policy: PointsPolicy = DEFAULT_POINTS_POLICY
) -> tuple[int, list[str]]:
    bonus = 0
    details: list[str] = []

    has_pair = KEYBOARD in product_ids and MOUSE in product_ids
    if has_pair:
        bonus += policy.keyboard_mouse_bonus
        details.append(f"keyboard+mouse set +{policy.keyboard_mouse_bonus}p")

    if has_pair and MONITOR_ARM in product_ids:
        bonus += policy.full_set_bonus
        details.append(f"full set +{policy.full_set_bonus}p")

    return bonus, details


def quantity_bonus(
    item_count: int, policy: PointsPolicy = DEFAULT_POINTS_POLICY
) -> tuple[int, str]:
    for tier in policy.quantity_tiers:
        if item_count >= tier.threshold:
            return tier.bonus, f"bulk purchase ({tier.threshold}+ items) +{tier.bonus}p"
    return 0, ""


def compute_points(
    total: Money,
    item_count: int,
    line_items: Iterable[LineItem],
    today: date,
    policy: PointsPolicy = DEFAULT_POINTS_POLICY,
) -> LoyaltyResult:
    """Compute the points a purchase earns.

    An empty cart always earns nothing, whatever ``total`` says.
    """
    product_ids = {item.product_id for item in line_items}
    if not product_ids or item_count <= 0:
        return LoyaltyResult.empty()

    details: list[str] = []

    base = base_points(total, policy)
    day_bonus, base_line = special_day_bonus(base, today, policy)
    if base_line:
        details.append(base_line)

    combo, combo_lines = combo_bonus(product_ids, policy)
    details.extend(combo_lines)

    qty_bonus, qty_line = quantity_bonus(item_count, policy)
    if qty_line:
        details.append(qty_line)

    return LoyaltyResult(
        base_points=base,
        special_day_bonus=day_bonus,
        combo_bonus=combo,
        quantity_bonus=qty_bonus,
        total_points=base + day_bonus + combo + qty_bonus,
        detail_lines=tuple(details),
    )
