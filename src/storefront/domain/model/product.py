"""Product aggregate.

Products are created once from the catalog seed and live for the whole
process.  A product is never removed: selling out is a state, not a
deletion.  Records are frozen; every change produces a replacement record
which the catalog swaps in whole, so nobody observes a half-updated product.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_qty`` is never negative
    - ``current_price == original_price`` unless a sale flag is set
    """

    id: str
    name: str
    current_price: Money
    original_price: Money
    stock_qty: int
    on_flash_sale: bool = False
    on_suggested_sale: bool = False

    def __post_init__(self) -> None:
        if self.stock_qty < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock_qty}"
            )
        if not self.is_on_sale and self.current_price != self.original_price:
            raise ValidationError(
                f"{self.name} is not on sale but is priced at {self.current_price} "
                f"instead of {self.original_price}"
            )

    @staticmethod
    def create(id: str, name: str, price: Money, stock_qty: int) -> Product:
        """Build a product at its list price with no promotions."""
        return Product(
            id=id,
            name=name,
            current_price=price,
            original_price=price,
            stock_qty=stock_qty,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def is_on_sale(self) -> bool:
        return self.on_flash_sale or self.on_suggested_sale

    @property
    def is_sold_out(self) -> bool:
        return self.stock_qty == 0

    # --- Replacement records --------------------------------------------------

    def with_stock(self, stock_qty: int) -> Product:
        return replace(self, stock_qty=stock_qty)

    def with_price(self, price: Money) -> Product:
        """Reprice the product.

        Off promotion this is a new list price; during a promotion only the
        current (discounted) price moves.
        """
        if self.is_on_sale:
            return replace(self, current_price=price)
        return replace(self, current_price=price, original_price=price)

    def with_sale_flags(
        self,
        on_flash_sale: bool | None = None,
        on_suggested_sale: bool | None = None,
    ) -> Product:
        """Return a copy with the given flags changed and the rest untouched.

        Clearing the last flag restores the list price so the pricing
        invariant still holds.
        """
        flash = self.on_flash_sale if on_flash_sale is None else on_flash_sale
        suggested = (
            self.on_suggested_sale if on_suggested_sale is None else on_suggested_sale
        )
        price = self.current_price if (flash or suggested) else self.original_price
        return replace(
            self,
            current_price=price,
            on_flash_sale=flash,
            on_suggested_sale=suggested,
        )
