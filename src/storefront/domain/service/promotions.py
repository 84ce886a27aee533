"""Domain service: timed promotions.

A promotion is a trigger (which product, if any, should get the deal this
tick) plus an effect (the catalog mutation).  ``fire()`` runs one tick
synchronously; the infrastructure scheduler only decides *when* to call it.
A tick whose candidate is sold out or already on that promotion is a no-op.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from storefront.domain.model.cart import Cart
from storefront.domain.model.policy import DEFAULT_PROMOTION_POLICY, PromotionPolicy
from storefront.domain.model.product import Product
from storefront.domain.service.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromotionOutcome:
    promotion: str
    product_id: str | None
    applied: bool
    message: str = ""


class Promotion(ABC):

    name: str

    def __init__(
        self,
        catalog: Catalog,
        policy: PromotionPolicy = DEFAULT_PROMOTION_POLICY,
    ) -> None:
        self._catalog = catalog
        self._policy = policy

    def fire(self) -> PromotionOutcome:
        candidate = self.pick()
        if candidate is None:
            logger.debug("%s: no eligible product this tick", self.name)
            return PromotionOutcome(self.name, None, applied=False)
        return self.apply(candidate)

    @abstractmethod
    def pick(self) -> Product | None:
        """Choose the product for this tick, or None to skip it."""

    @abstractmethod
    def apply(self, product: Product) -> PromotionOutcome:
        """Mutate the catalog for the chosen product."""


class FlashSalePromotion(Promotion):
    """Random product, fixed percentage off its list price."""

    name = "flash-sale"

    def __init__(
        self,
        catalog: Catalog,
        policy: PromotionPolicy = DEFAULT_PROMOTION_POLICY,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(catalog, policy)
        self._rng = rng or random.Random()

    def pick(self) -> Product | None:
        products = self._catalog.list_products()
        if not products:
            return None
        lucky = self._rng.choice(products)
        if lucky.is_sold_out or lucky.on_flash_sale:
            return None
        return lucky

    def apply(self, product: Product) -> PromotionOutcome:
        rate = self._policy.flash_sale_rate
        result = self._catalog.apply_flash_sale(product.id, rate)
        if not result.ok:
            return PromotionOutcome(self.name, product.id, False, result.message)
        logger.info("Flash sale: %s is %d%% off", product.name, rate)
        return PromotionOutcome(
            self.name,
            product.id,
            applied=True,
            message=f"Flash sale! {product.name} is {rate}% off!",
        )


class SuggestionPromotion(Promotion):
    """Nudge the shopper towards something other than what they just picked.

    Only runs once the cart has something in it.  The first product that
    is not the last one selected, is in stock and is not already suggested
    gets a further discount off its current price.
    """

    name = "suggestion"

    def __init__(
        self,
        catalog: Catalog,
        cart_provider: Callable[[], Cart],
        policy: PromotionPolicy = DEFAULT_PROMOTION_POLICY,
    ) -> None:
        super().__init__(catalog, policy)
        self._cart_provider = cart_provider

    def pick(self) -> Product | None:
        cart = self._cart_provider()
        last_selected = cart.last_selected_product_id
        if cart.is_empty or last_selected is None:
            return None
        for product in self._catalog.list_products():
            if (
                product.id != last_selected
                and not product.is_sold_out
                and not product.on_suggested_sale
            ):
                return product
        return None

    def apply(self, product: Product) -> PromotionOutcome:
        rate = self._policy.suggestion_rate
        result = self._catalog.apply_suggestion_discount(product.id, rate)
        if not result.ok:
            return PromotionOutcome(self.name, product.id, False, result.message)
        logger.info("Suggestion: %s gets an extra %d%% off", product.name, rate)
        return PromotionOutcome(
            self.name,
            product.id,
            applied=True,
            message=f"How about {product.name}? Buy now for an extra {rate}% off!",
        )
