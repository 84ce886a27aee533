"""Cart aggregate and its line items.

The cart only tracks *what* the shopper holds.  Stock bookkeeping lives
in the catalog and is coordinated by the application handlers, which
move units between the two so a line never exceeds what was available.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class LineItem:
    """A product id and how many units of it are in the cart."""

    product_id: str
    quantity: Quantity

    @staticmethod
    def of(product_id: str, quantity: int) -> LineItem:
        return LineItem(product_id=product_id, quantity=Quantity(quantity))


@dataclass
class Cart:
    """Aggregate root for the shopper's cart.

    ``lines`` keeps insertion order, which is the order items are shown
    and the order they are handed to the calculator.
    """

    lines: dict[str, int] = field(default_factory=dict)
    last_selected_product_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(self.lines.values())

    def quantity_of(self, product_id: str) -> int:
        return self.lines.get(product_id, 0)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.lines.pop(product_id, None)
        else:
            self.lines[product_id] = quantity

    def remove(self, product_id: str) -> int:
        """Drop a line and return how many units it held."""
        return self.lines.pop(product_id, 0)

    def line_items(self) -> list[LineItem]:
        return [LineItem.of(pid, qty) for pid, qty in self.lines.items()]
