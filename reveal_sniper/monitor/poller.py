from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from reveal_sniper.config import AppSettings
from reveal_sniper.detection import candidate_addresses, detect_reveals
from reveal_sniper.errors import FeedError
from reveal_sniper.execution.confirmation import SwapOutcome
from reveal_sniper.execution.swap_executor import SwapExecutor
from reveal_sniper.feed.spore import SporeFeed


class ExecutionLatch:
    """One-way flag: the execution phase is entered at most once."""

    def __init__(self) -> None:
        self._set = False

    @property
    def is_set(self) -> bool:
        return self._set

    def trip(self) -> None:
        if self._set:
            raise RuntimeError("Execution latch already tripped")
        self._set = True


@dataclass
class Poller:
    settings: AppSettings
    feed: SporeFeed
    executor: SwapExecutor
    latch: ExecutionLatch = field(default_factory=ExecutionLatch)
    ticks: int = 0

    @classmethod
    def create(cls, settings: AppSettings, executor: SwapExecutor) -> Poller:
        feed = SporeFeed(url=settings.feed_url, timeout=settings.feed_timeout_sec)
        return cls(settings=settings, feed=feed, executor=executor)

    async def tick(self) -> list[SwapOutcome] | None:
        if self.latch.is_set:
            return None
        self.ticks += 1

        try:
            snapshot = await asyncio.to_thread(self.feed.fetch_snapshot)
        except FeedError as e:
            logger.error("Error polling Spore API: {}", e)
            return None
        except Exception as e:
            logger.exception("Unexpected error polling Spore API: {}", e)
            return None

        targets = self.settings.targets
        if not detect_reveals(snapshot, targets):
            return None

        self.latch.trip()
        candidates = candidate_addresses(snapshot, targets)
        logger.info(
            "=== Detected reveal === {}. Initiating Jupiter swaps...",
            ", ".join(f"{t.name} tokenAddress: {addr or '-'}" for t, addr in candidates),
        )
        # Unrevealed targets still go through the executor and hit its blank-address guard
        outcomes = await self.executor.execute_all(candidates)
        for o in outcomes:
            if o.skipped:
                logger.info("[{}] skipped (no token address)", o.target.name)
            elif o.success:
                logger.info("[{}] success: {}", o.target.name, o.signature)
            else:
                logger.warning("[{}] failed: {}", o.target.name, o.error_detail)
        return outcomes

    async def run(self) -> list[SwapOutcome]:
        logger.info(
            "Polling {} every {} ms for agents {}",
            self.settings.feed_url,
            self.settings.poll_interval_ms,
            [t.id for t in self.settings.targets],
        )
        outcomes: list[SwapOutcome] = []
        while not self.latch.is_set:
            # The next fetch starts only after this tick (and any execution) has settled
            result = await self.tick()
            if result is not None:
                outcomes = result
                break
            await asyncio.sleep(self.settings.poll_interval_sec)
        logger.info("Execution phase complete after {} tick(s); polling stopped.", self.ticks)
        return outcomes
