"""Abstract scheduler for timed promotions.

Defined in the domain layer so promotions never depend on a clock or a
threading model.  The concrete timer-driven implementation lives in the
infrastructure layer; tests skip scheduling and call ``fire()`` directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from storefront.domain.model.policy import DEFAULT_PROMOTION_POLICY, PromotionPolicy
from storefront.domain.service.promotions import (
    FlashSalePromotion,
    PromotionOutcome,
    SuggestionPromotion,
)


@dataclass(frozen=True)
class PromotionJob:
    """Run ``fire`` every ``interval`` seconds after a random initial delay
    of at most ``max_initial_delay`` seconds."""

    name: str
    interval: float
    max_initial_delay: float
    fire: Callable[[], PromotionOutcome]


class PromotionScheduler(ABC):

    @abstractmethod
    def start(self, jobs: list[PromotionJob]) -> None:
        """Begin running the given jobs."""

    @abstractmethod
    def stop(self) -> None:
        """Cancel every pending run.  Safe to call more than once."""


def promotion_jobs(
    flash_sale: FlashSalePromotion,
    suggestion: SuggestionPromotion,
    policy: PromotionPolicy = DEFAULT_PROMOTION_POLICY,
) -> list[PromotionJob]:
    return [
        PromotionJob(
            name=flash_sale.name,
            interval=policy.flash_sale_interval,
            max_initial_delay=policy.flash_sale_max_initial_delay,
            fire=flash_sale.fire,
        ),
        PromotionJob(
            name=suggestion.name,
            interval=policy.suggestion_interval,
            max_initial_delay=policy.suggestion_max_initial_delay,
            fire=suggestion.fire,
        ),
    ]
