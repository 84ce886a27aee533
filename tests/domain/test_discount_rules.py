"""Unit tests for the discount rule pipeline."""

from decimal import Decimal

import pytest

from storefront.domain.model.cart import LineItem
from storefront.domain.model.policy import DiscountPolicy
from storefront.domain.model.results import DiscountBranch
from storefront.domain.model.value_objects import Money
from storefront.domain.service.discount_rules import (
    PricingContext,
    bulk_rule,
    compute_discount,
    discount_rate,
    per_item_rule,
    price_lines,
    special_day_rule,
)
from tests.fakes import MONDAY, TUESDAY, default_products


@pytest.fixture
def snapshot():
    return {p.id: p for p in default_products()}


def _items(*pairs):
    return [LineItem.of(pid, qty) for pid, qty in pairs]


class TestNoDiscount:

    def test_small_cart_pays_subtotal(self, snapshot):
        outcome = compute_discount(_items(("p1", 9), ("p2", 9)), snapshot, MONDAY)
        assert outcome.subtotal == Decimal("270000")
        assert outcome.total == outcome.subtotal
        assert outcome.branch is DiscountBranch.NONE
        assert outcome.per_item_discounts == ()
        assert outcome.discount_rate == 0

    def test_empty_cart(self, snapshot):
        outcome = compute_discount([], snapshot, TUESDAY)
        assert outcome.subtotal == 0
        assert outcome.total == 0
        assert outcome.discount_rate == 0
        assert not outcome.special_day_applied

    def test_unknown_products_ignored(self, snapshot):
        outcome = compute_discount(_items(("zz", 40), ("p1", 1)), snapshot, MONDAY)
        assert outcome.item_count == 1
        assert outcome.total == Decimal("10000")


class TestPerItemDiscount:

    @pytest.mark.parametrize(
        "product_id, rate",
        [("p1", 10), ("p2", 15), ("p3", 20), ("p5", 25)],
    )
    def test_table_rate_on_whole_subtotal(self, snapshot, product_id, rate):
        other = "p2" if product_id == "p1" else "p1"
        outcome = compute_discount(_items((product_id, 10), (other, 1)), snapshot, MONDAY)
        expected = outcome.subtotal * (100 - rate) / 100
        assert outcome.total == expected
        assert outcome.discount_rate == Decimal(rate) / 100
        assert outcome.branch is DiscountBranch.PER_ITEM
        assert [d.rate_percent for d in outcome.per_item_discounts] == [rate]

    def test_threshold_is_inclusive(self, snapshot):
        assert compute_discount(_items(("p1", 10)), snapshot, MONDAY).branch is DiscountBranch.PER_ITEM
        assert compute_discount(_items(("p1", 9)), snapshot, MONDAY).branch is DiscountBranch.NONE

    def test_two_qualifying_lines_add_their_rates(self, snapshot):
        outcome = compute_discount(_items(("p1", 10), ("p2", 10)), snapshot, MONDAY)
        # 300000 - 300000*0.10 - 300000*0.15
        assert outcome.total == Decimal("225000")
        assert outcome.discount_rate == Decimal("0.25")
        assert len(outcome.per_item_discounts) == 2

    def test_product_without_rate_is_not_listed(self, snapshot):
        policy = DiscountPolicy(item_rates={"p1": 10})
        outcome = compute_discount(_items(("p2", 10)), snapshot, MONDAY, policy)
        assert outcome.branch is DiscountBranch.NONE
        assert outcome.per_item_discounts == ()


class TestBulkDiscount:

    def test_flat_rate_at_thirty_items(self, snapshot):
        outcome = compute_discount(_items(("p1", 10), ("p2", 10), ("p3", 10)), snapshot, MONDAY)
        assert outcome.total == outcome.subtotal * Decimal("0.75")
        assert outcome.discount_rate == Decimal("0.25")
        assert outcome.bulk_applied

    def test_bulk_discards_per_item_discounts(self, snapshot):
        # speaker alone would be 25% per-item; bulk still takes over
        outcome = compute_discount(_items(("p5", 10), ("p1", 20)), snapshot, MONDAY)
        assert outcome.branch is DiscountBranch.BULK
        assert outcome.per_item_discounts == ()
        assert outcome.total == outcome.subtotal * Decimal("0.75")

    def test_twenty_nine_items_is_not_bulk(self, snapshot):
        outcome = compute_discount(_items(("p1", 29)), snapshot, MONDAY)
        assert outcome.branch is DiscountBranch.PER_ITEM


class TestSpecialDay:

    def test_tuesday_takes_ten_percent_off(self, snapshot):
        outcome = compute_discount(_items(("p1", 1)), snapshot, TUESDAY)
        assert outcome.total == Decimal("9000")
        assert outcome.special_day_applied
        assert outcome.discount_rate == Decimal("0.1")

    def test_composes_multiplicatively_with_bulk(self, snapshot):
        outcome = compute_discount(_items(("p1", 30)), snapshot, TUESDAY)
        assert outcome.total == Decimal("300000") * Decimal("0.75") * Decimal("0.9")
        assert outcome.discount_rate == Decimal("0.325")

    def test_composes_multiplicatively_with_per_item(self, snapshot):
        outcome = compute_discount(_items(("p1", 10)), snapshot, TUESDAY)
        # 100000 * 0.9 * 0.9
        assert outcome.total == Decimal("81000")
        assert outcome.discount_rate == Decimal("0.19")

    def test_rate_is_recomputed_not_accumulated(self, snapshot):
        first = compute_discount(_items(("p1", 10)), snapshot, TUESDAY)
        second = compute_discount(_items(("p1", 10)), snapshot, TUESDAY)
        assert first == second
        assert first.discount_rate == 1 - first.total / first.subtotal

    def test_not_applied_on_other_days(self, snapshot):
        outcome = compute_discount(_items(("p1", 1)), snapshot, MONDAY)
        assert not outcome.special_day_applied

    def test_not_applied_to_zero_total(self, snapshot):
        outcome = compute_discount([], snapshot, TUESDAY)
        assert not outcome.special_day_applied


class TestRulesInIsolation:

    def _ctx(self, snapshot, pairs, today=MONDAY):
        lines, _ = price_lines(_items(*pairs), snapshot)
        subtotal = sum((line.line_total for line in lines), Money.zero()).amount
        return PricingContext(
            lines=tuple(lines),
            subtotal=subtotal,
            item_count=sum(line.quantity for line in lines),
            today=today,
            policy=DiscountPolicy(),
        )

    def test_per_item_rule_no_effect_below_threshold(self, snapshot):
        ctx = self._ctx(snapshot, [("p1", 3)])
        assert per_item_rule(ctx, ctx.subtotal) is None

    def test_bulk_rule_ignores_running_total(self, snapshot):
        ctx = self._ctx(snapshot, [("p1", 30)])
        effect = bulk_rule(ctx, Decimal("1"))
        assert effect.total == Decimal("225000")

    def test_special_day_rule_skips_non_positive_total(self, snapshot):
        ctx = self._ctx(snapshot, [("p1", 1)], today=TUESDAY)
        assert special_day_rule(ctx, Decimal("0")) is None

    def test_custom_pipeline_order(self, snapshot):
        outcome = compute_discount(
            _items(("p1", 10)), snapshot, MONDAY, pipeline=(special_day_rule,)
        )
        assert outcome.branch is DiscountBranch.NONE
        assert outcome.total == outcome.subtotal


class TestDiscountRate:

    def test_zero_subtotal_guard(self):
        assert discount_rate(Decimal("0"), Decimal("0")) == 0

    def test_fraction(self):
        assert discount_rate(Decimal("200"), Decimal("150")) == Decimal("0.25")
