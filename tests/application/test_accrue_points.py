"""Integration tests for calculation followed by points accrual."""

from storefront.application.accrue_points import AccruePointsHandler
from storefront.application.calculate_cart import CalculateCartHandler
from storefront.domain.model.cart import LineItem
from tests.fakes import MONDAY, TUESDAY, make_catalog


def _quote(pairs, today):
    catalog, _ = make_catalog()
    items = [LineItem.of(pid, qty) for pid, qty in pairs]
    calculation = CalculateCartHandler(catalog).handle(items, today)
    return calculation, AccruePointsHandler().handle(calculation, items, today)


class TestAccruePoints:

    def test_points_follow_charged_total(self):
        calculation, points = _quote([("p1", 1), ("p2", 1)], MONDAY)
        assert str(calculation.total) == "₩30,000"
        assert points.base_points == 30
        assert points.total_points == 30 + 50

    def test_tuesday_doubles_base_of_discounted_total(self):
        calculation, points = _quote([("p3", 1)], TUESDAY)
        # 30000 * 0.9 = 27000 -> 27p doubled
        assert points.base_points == 27
        assert points.total_points == 54

    def test_skipped_lines_do_not_count_for_combos(self):
        catalog, _ = make_catalog()
        items = [LineItem.of("p1", 1), LineItem.of("p2", 1)]
        catalog_without_mouse, _ = make_catalog(
            [p for p in catalog.list_products() if p.id != "p2"]
        )
        calculation = CalculateCartHandler(catalog_without_mouse).handle(items, MONDAY)
        points = AccruePointsHandler().handle(calculation, items, MONDAY)
        assert points.combo_bonus == 0
        assert points.total_points == 10

    def test_empty_cart(self):
        _, points = _quote([], TUESDAY)
        assert points.total_points == 0
