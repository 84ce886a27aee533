"""Dict-backed implementation of ProductRepository, plus the catalog seed."""

from __future__ import annotations

from storefront.domain.model.policy import (
    KEYBOARD,
    LAPTOP_POUCH,
    MONITOR_ARM,
    MOUSE,
    SPEAKER,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


def seed_products() -> list[Product]:
    """The storefront's fixed starting catalog."""
    return [
        Product.create(KEYBOARD, "Bug-Free Keyboard", Money.of(10000), 50),
        Product.create(MOUSE, "Productivity Mouse", Money.of(20000), 30),
        Product.create(MONITOR_ARM, "Posture Monitor Arm", Money.of(30000), 20),
        Product.create(LAPTOP_POUCH, "Error-Proof Laptop Pouch", Money.of(15000), 0),
        Product.create(SPEAKER, "Lo-Fi Coding Speaker", Money.of(25000), 10),
    ]


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        # dicts keep insertion order, which is the catalog display order
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product
