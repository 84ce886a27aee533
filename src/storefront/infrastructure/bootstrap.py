"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import random

from storefront.application.accrue_points import AccruePointsHandler
from storefront.application.calculate_cart import CalculateCartHandler
from storefront.application.quote_cart import QuoteCartHandler
from storefront.domain.model.cart import Cart
from storefront.domain.service.catalog import Catalog
from storefront.domain.service.promotions import (
    FlashSalePromotion,
    SuggestionPromotion,
)
from storefront.domain.service.scheduler import promotion_jobs
from storefront.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
    seed_products,
)
from storefront.infrastructure.scheduling.threading_scheduler import (
    ThreadingPromotionScheduler,
)


def catalog() -> Catalog:
    """A fresh catalog loaded from the seed."""
    return Catalog(InMemoryProductRepository(seed_products()))


def quote_handler(cat: Catalog) -> QuoteCartHandler:
    return QuoteCartHandler(
        calculator=CalculateCartHandler(cat),
        points=AccruePointsHandler(),
    )


def flash_sale(cat: Catalog, seed: int | None = None) -> FlashSalePromotion:
    return FlashSalePromotion(cat, rng=random.Random(seed))


def start_promotions(cat: Catalog, cart: Cart) -> ThreadingPromotionScheduler:
    """Start both timed promotions against ``cart``; caller must ``stop()``."""
    scheduler = ThreadingPromotionScheduler()
    scheduler.start(
        promotion_jobs(
            flash_sale=FlashSalePromotion(cat),
            suggestion=SuggestionPromotion(cat, cart_provider=lambda: cart),
        )
    )
    return scheduler
