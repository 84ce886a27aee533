"""Domain service: Catalog.

The catalog owns every product record.  Readers get immutable Product
snapshots; writers go through the mutation methods below, each of which
loads the current record, builds a replacement and saves it in one step
under a lock.  Promotions fire from timer threads, so the read-modify-write
must be serialised even though calculations themselves never block.

No method raises for a business failure: an unknown id, a stock
decrement past zero or a promotion the product is not eligible for comes
back as a failed CatalogOutcome and the record is left untouched.
"""

from __future__ import annotations

import logging
import threading

from storefront.domain.model.product import Product
from storefront.domain.model.results import CatalogFailure, CatalogOutcome
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class Catalog:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._lock = threading.RLock()

    # --- Queries --------------------------------------------------------------

    def find_by_id(self, product_id: str) -> Product | None:
        return self._product_repo.get_by_id(product_id)

    def list_products(self) -> list[Product]:
        return self._product_repo.list_all()

    def snapshot(self) -> dict[str, Product]:
        """Consistent id -> product view for a single calculation."""
        with self._lock:
            return {p.id: p for p in self._product_repo.list_all()}

    def total_stock(self) -> int:
        return sum(p.stock_qty for p in self._product_repo.list_all())

    # --- Mutations ------------------------------------------------------------

    def adjust_stock(self, product_id: str, delta: int) -> CatalogOutcome:
        """Add ``delta`` units (negative to take stock).

        Rejected without any change if the stock would go below zero.
        """
        with self._lock:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                return self._not_found(product_id)

            new_stock = product.stock_qty + delta
            if new_stock < 0:
                logger.info(
                    "Rejected stock change %+d for %s: only %d left",
                    delta, product.id, product.stock_qty,
                )
                return CatalogOutcome.failed(
                    CatalogFailure.INSUFFICIENT_STOCK,
                    f"Insufficient stock for {product.name} "
                    f"(need {-delta}, have {product.stock_qty})",
                )
            return self._replace(product.with_stock(new_stock))

    def set_price(self, product_id: str, new_price: Money) -> CatalogOutcome:
        with self._lock:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                return self._not_found(product_id)
            return self._replace(product.with_price(new_price))

    def set_sale_flags(
        self,
        product_id: str,
        on_flash_sale: bool | None = None,
        on_suggested_sale: bool | None = None,
    ) -> CatalogOutcome:
        """Change only the flags that are given; None leaves a flag as is."""
        with self._lock:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                return self._not_found(product_id)
            return self._replace(
                product.with_sale_flags(
                    on_flash_sale=on_flash_sale,
                    on_suggested_sale=on_suggested_sale,
                )
            )

    def apply_flash_sale(self, product_id: str, rate_percent: int) -> CatalogOutcome:
        """Put a product on flash sale at ``rate_percent`` off its list price.

        Sold-out products and products already on flash sale are refused.
        """
        with self._lock:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                return self._not_found(product_id)
            if product.is_sold_out:
                return self._sold_out(product)
            if product.on_flash_sale:
                return self._already_promoted(product, "flash sale")
            flagged = product.with_sale_flags(on_flash_sale=True)
            return self._replace(
                flagged.with_price(product.original_price.percent_off(rate_percent))
            )

    def apply_suggestion_discount(
        self, product_id: str, rate_percent: int
    ) -> CatalogOutcome:
        """Take a further ``rate_percent`` off the product's current price."""
        with self._lock:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                return self._not_found(product_id)
            if product.is_sold_out:
                return self._sold_out(product)
            if product.on_suggested_sale:
                return self._already_promoted(product, "suggestion")
            flagged = product.with_sale_flags(on_suggested_sale=True)
            return self._replace(
                flagged.with_price(product.current_price.percent_off(rate_percent))
            )

    # --- Internal helpers -----------------------------------------------------

    def _replace(self, product: Product) -> CatalogOutcome:
        self._product_repo.save(product)
        logger.debug("Catalog record replaced: %s", product)
        return CatalogOutcome.success(product)

    @staticmethod
    def _not_found(product_id: str) -> CatalogOutcome:
        logger.info("Catalog has no product with id %r", product_id)
        return CatalogOutcome.failed(
            CatalogFailure.INVALID_PRODUCT,
            f"Product with ID '{product_id}' not found",
        )

    @staticmethod
    def _sold_out(product: Product) -> CatalogOutcome:
        return CatalogOutcome.failed(
            CatalogFailure.INSUFFICIENT_STOCK,
            f"{product.name} is sold out",
        )

    @staticmethod
    def _already_promoted(product: Product, promotion: str) -> CatalogOutcome:
        return CatalogOutcome.failed(
            CatalogFailure.ALREADY_PROMOTED,
            f"{product.name} is already on {promotion}",
        )
