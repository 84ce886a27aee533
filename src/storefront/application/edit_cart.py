"""Application services: add, change and remove cart lines.

Each handler coordinates the Cart aggregate with catalog stock.  Units in
the cart are units taken out of stock, so every change to a line moves
the same number of units the other way in the catalog.  Stock is adjusted
*first*; the cart only changes if the catalog accepted the adjustment, so a
rejected change leaves both untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.cart import Cart
from storefront.domain.model.results import CatalogFailure
from storefront.domain.service.catalog import Catalog


class CartAction(Enum):
    ADDED = "ADDED"
    UPDATED = "UPDATED"
    REMOVED = "REMOVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CartOperationResult:
    action: CartAction
    product_id: str
    quantity: int = 0
    failure: CatalogFailure | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


def _rejected(product_id: str, failure: CatalogFailure, message: str) -> CartOperationResult:
    return CartOperationResult(
        action=CartAction.REJECTED,
        product_id=product_id,
        failure=failure,
        message=message,
    )


class AddToCartHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def handle(self, cart: Cart, product_id: str) -> CartOperationResult:
        """Put one more unit of a product in the cart."""
        product = self._catalog.find_by_id(product_id)
        if product is None:
            return _rejected(
                product_id,
                CatalogFailure.INVALID_PRODUCT,
                f"Product with ID '{product_id}' not found",
            )
        if product.is_sold_out:
            return _rejected(
                product_id,
                CatalogFailure.INSUFFICIENT_STOCK,
                f"{product.name} is sold out",
            )

        stock = self._catalog.adjust_stock(product_id, -1)
        if not stock.ok:
            return _rejected(product_id, stock.failure, stock.message)  # type: ignore[arg-type]

        new_quantity = cart.quantity_of(product_id) + 1
        cart.set_quantity(product_id, new_quantity)
        cart.last_selected_product_id = product_id

        return CartOperationResult(
            action=CartAction.ADDED if new_quantity == 1 else CartAction.UPDATED,
            product_id=product_id,
            quantity=new_quantity,
        )


class ChangeQuantityHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def handle(self, cart: Cart, product_id: str, change: int) -> CartOperationResult:
        """Move a line's quantity by ``change`` units.

        Dropping to zero or below removes the line and returns all of its
        units to stock.  Growing past what is in stock is rejected.
        """
        current = cart.quantity_of(product_id)
        product = self._catalog.find_by_id(product_id)
        if product is None or current == 0:
            return _rejected(
                product_id,
                CatalogFailure.INVALID_PRODUCT,
                f"Product with ID '{product_id}' is not in the cart",
            )

        new_quantity = current + change

        if new_quantity <= 0:
            self._catalog.adjust_stock(product_id, current)
            cart.remove(product_id)
            return CartOperationResult(CartAction.REMOVED, product_id, 0)

        if new_quantity > product.stock_qty + current:
            return _rejected(
                product_id,
                CatalogFailure.INSUFFICIENT_STOCK,
                f"Insufficient stock for {product.name} "
                f"(want {new_quantity}, only {product.stock_qty + current} available)",
            )

        stock = self._catalog.adjust_stock(product_id, -change)
        if not stock.ok:
            return _rejected(product_id, stock.failure, stock.message)  # type: ignore[arg-type]

        cart.set_quantity(product_id, new_quantity)
        return CartOperationResult(CartAction.UPDATED, product_id, new_quantity)


class RemoveFromCartHandler:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def handle(self, cart: Cart, product_id: str) -> CartOperationResult:
        quantity = cart.quantity_of(product_id)
        if quantity == 0:
            return _rejected(
                product_id,
                CatalogFailure.INVALID_PRODUCT,
                f"Product with ID '{product_id}' is not in the cart",
            )
        self._catalog.adjust_stock(product_id, quantity)
        cart.remove(product_id)
        return CartOperationResult(CartAction.REMOVED, product_id, 0)
