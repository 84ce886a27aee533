"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  The storefront only ships an in-memory implementation;
the catalog seed is loaded into it at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in catalog order."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Store a product, replacing any record with the same ID."""
