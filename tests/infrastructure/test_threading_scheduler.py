"""Tests for the timer-thread promotion scheduler."""

import threading

from storefront.domain.service.promotions import PromotionOutcome
from storefront.domain.service.scheduler import PromotionJob
from storefront.infrastructure.scheduling.threading_scheduler import (
    ThreadingPromotionScheduler,
)


def _job(fired: threading.Event, calls: list, fail: bool = False) -> PromotionJob:
    def fire() -> PromotionOutcome:
        calls.append(1)
        if len(calls) >= 2:
            fired.set()
        if fail:
            raise RuntimeError("boom")
        return PromotionOutcome("test", "p1", applied=True)

    return PromotionJob(name="test", interval=0.01, max_initial_delay=0.0, fire=fire)


class TestThreadingScheduler:

    def test_job_repeats_until_stopped(self):
        fired, calls = threading.Event(), []
        scheduler = ThreadingPromotionScheduler()
        scheduler.start([_job(fired, calls)])
        try:
            assert fired.wait(timeout=5)
        finally:
            scheduler.stop()
        assert not scheduler.running
        assert len(calls) >= 2

    def test_failing_tick_keeps_schedule_alive(self):
        fired, calls = threading.Event(), []
        scheduler = ThreadingPromotionScheduler()
        scheduler.start([_job(fired, calls, fail=True)])
        try:
            assert fired.wait(timeout=5)
        finally:
            scheduler.stop()

    def test_stop_is_idempotent(self):
        scheduler = ThreadingPromotionScheduler()
        scheduler.stop()
        scheduler.stop()
        assert not scheduler.running
