# === FILE: keyword_scout/pipeline/scheduler.py ===
"""Bounded-concurrency pool: one asyncio task per sitemap URL.

Capacity is a semaphore of ``max_workers`` slots.  A slot is released from
the task's done-callback, which fires for every terminal state (normal
result, reported failure, escaped exception, cancellation), so the pool
cannot leak capacity.  Launches are staggered by the rate-limit delay.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, FrozenSet, List, Optional, Sequence, Set

from keyword_scout.config import PipelineConfig
from keyword_scout.logger import LOGGER_NAME
from keyword_scout.pipeline.models import SiteOutcome, SiteTask
from keyword_scout.utils import extract_domain

__all__ = ["Scheduler", "TaskRunner"]

TaskRunner = Callable[[SiteTask], Awaitable[SiteOutcome]]
SleepFunc = Callable[[float], Awaitable[Any]]


def _domain_or_url(url: str) -> str:
    try:
        return extract_domain(url)
    except ValueError:
        return url


class Scheduler:
    """Runs one SiteTask per sitemap with at most ``max_workers`` active at once."""

    def __init__(
        self,
        config: PipelineConfig,
        run_task: TaskRunner,
        *,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.config = config
        self._run_task = run_task
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self.active: Set[asyncio.Task] = set()
        self.peak_active = 0
        self.logger = logging.getLogger(LOGGER_NAME)

    async def run(
        self, sitemap_urls: Sequence[str], excluded: FrozenSet[str] = frozenset()
    ) -> List[SiteOutcome]:
        """Dispatch every URL, wait for all tasks to retire, return their outcomes."""
        capacity = asyncio.Semaphore(self.config.max_workers)
        outcomes: asyncio.Queue[SiteOutcome] = asyncio.Queue()
        excluded = frozenset(excluded)

        for url in sitemap_urls:
            await capacity.acquire()
            task = asyncio.create_task(
                self._run_task(SiteTask(sitemap_url=url, excluded_phrases=excluded)),
                name=f"site:{url}",
            )
            self.active.add(task)
            self.peak_active = max(self.peak_active, len(self.active))
            task.add_done_callback(
                functools.partial(self._retire, url=url, capacity=capacity, outcomes=outcomes)
            )
            self.logger.debug("Dispatched %s (%d active)", url, len(self.active))
            await self._sleep(self.config.rate_limit_delay)

        while self.active:
            await asyncio.wait(set(self.active))

        results: List[SiteOutcome] = []
        while not outcomes.empty():
            results.append(outcomes.get_nowait())
        return results

    def _retire(
        self,
        task: asyncio.Task,
        *,
        url: str,
        capacity: asyncio.Semaphore,
        outcomes: asyncio.Queue[SiteOutcome],
    ) -> None:
        self.active.discard(task)
        capacity.release()

        if task.cancelled():
            outcome = SiteOutcome.failed(_domain_or_url(url), url, "task cancelled")
        elif task.exception() is not None:
            exc = task.exception()
            outcome = SiteOutcome.failed(_domain_or_url(url), url, f"task crashed: {exc!r}")
        else:
            outcome = task.result()

        if outcome.ok:
            self.logger.info(
                "Completed %s: %d keywords, %d phrases",
                outcome.domain,
                outcome.keyword_count,
                outcome.phrase_count,
            )
        else:
            self.logger.error("Failed processing %s: %s", url, outcome.error)
        outcomes.put_nowait(outcome)
