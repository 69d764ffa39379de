"""Bounded-concurrency batch compression."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import structlog

from .engine import GroupingEngine, Payload

logger = structlog.get_logger(__name__)


class BatchRunner:
    """Runs the grouping engine over many independent payloads.

    At most `workers` payloads are compressed at once. Results are written
    back by input index, so slot ``i`` always belongs to payload ``i``; a
    payload that fails for any reason leaves ``None`` in its slot and does
    not affect the others.
    """

    def __init__(self, engine: GroupingEngine, workers: Optional[int] = None) -> None:
        self.engine = engine
        self.workers = workers if workers and workers > 0 else engine.config.workers

    def _compress_one(self, index: int, payload: Payload) -> Optional[bytes]:
        try:
            return self.engine.compress_json(payload)
        except Exception as e:
            logger.debug(
                "Batch item failed",
                index=index,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

    def run(self, payloads: Sequence[Payload]) -> List[Optional[bytes]]:
        """Compress every payload on a pool of `workers` threads."""
        results: List[Optional[bytes]] = [None] * len(payloads)
        if not payloads:
            return results

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="compress") as pool:
            futures = {
                pool.submit(self._compress_one, index, payload): index
                for index, payload in enumerate(payloads)
            }
            for future, index in futures.items():
                results[index] = future.result()

        self._log_summary(results)
        return results

    async def run_async(self, payloads: Sequence[Payload]) -> List[Optional[bytes]]:
        """Asyncio variant: a semaphore of `workers` permits guards each item."""
        results: List[Optional[bytes]] = [None] * len(payloads)
        semaphore = asyncio.Semaphore(self.workers)

        async def run_item(index: int, payload: Payload) -> None:
            async with semaphore:
                results[index] = await asyncio.to_thread(self._compress_one, index, payload)

        await asyncio.gather(*(run_item(i, p) for i, p in enumerate(payloads)))

        self._log_summary(results)
        return results

    def _log_summary(self, results: List[Optional[bytes]]) -> None:
        failed = sum(1 for result in results if result is None)
        logger.debug(
            "Batch compressed",
            items=len(results),
            failed=failed,
            workers=self.workers,
        )
