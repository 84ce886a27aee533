"""Timer-thread implementation of PromotionScheduler.

Each job waits a random initial delay, then re-arms a ``threading.Timer``
after every run.  Timers are daemon threads so a forgotten scheduler never
keeps the process alive.
"""

from __future__ import annotations

import logging
import random
import threading

from storefront.domain.service.scheduler import PromotionJob, PromotionScheduler

logger = logging.getLogger(__name__)


class ThreadingPromotionScheduler(PromotionScheduler):

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()
        self._running = False

    def start(self, jobs: list[PromotionJob]) -> None:
        with self._lock:
            self._running = True
            for job in jobs:
                delay = self._rng.uniform(0, job.max_initial_delay)
                logger.debug("Scheduling %s in %.1fs", job.name, delay)
                self._arm(job, delay)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()

    @property
    def running(self) -> bool:
        return self._running

    # --- Internal helpers -----------------------------------------------------

    def _arm(self, job: PromotionJob, delay: float) -> None:
        timer = threading.Timer(delay, self._run, args=(job,))
        timer.daemon = True
        self._timers[job.name] = timer
        timer.start()

    def _run(self, job: PromotionJob) -> None:
        try:
            outcome = job.fire()
            if outcome.applied:
                logger.info("%s applied to %s", job.name, outcome.product_id)
        except Exception:
            # A failing tick must not kill the schedule; log it and re-arm.
            logger.exception("Promotion %s failed", job.name)
        with self._lock:
            if self._running:
                self._arm(job, job.interval)
