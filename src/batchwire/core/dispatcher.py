"""
Batched dispatch with partial-failure retry.

Both the stream and the queue pipelines follow the same shape: chunk the
entries, send every chunk concurrently, pick out the entries the service
reported as failed, pause, and send those again until they succeed or the
retry budget runs out.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

import structlog

from batchwire.core import backoff
from batchwire.core.chunking import chunk
from batchwire.core.entries import DroppedEntries

logger = structlog.get_logger(__name__)

E = TypeVar("E")
R = TypeVar("R")

DroppedCallback = Callable[[DroppedEntries], None]


async def gather_all(coroutines: Iterable[Awaitable[None]]) -> None:
    """
    Run coroutines concurrently and wait for every one of them.

    Siblings are never cancelled when one fails; the first exception is
    re-raised once all of them have finished.
    """
    results = await asyncio.gather(*coroutines, return_exceptions=True)
    errors = [result for result in results if isinstance(result, BaseException)]
    if not errors:
        return

    for error in errors[1:]:
        logger.error("batch_failed", error=str(error), error_type=type(error).__name__)
    raise errors[0]


class BatchDispatcher(ABC, Generic[E, R]):
    """
    Base class for a batch operation against one stream or queue.

    Subclasses provide the wire call and the way failed entries are
    correlated with the request; this class owns chunking, fan-out,
    backoff and the retry budget.

    Attributes:
        target: Stream name or queue URL, used for logging and dropped entries
        max_retry: Retry rounds allowed after the first dispatch
        base_pause_ms: Base backoff pause in milliseconds
    """

    def __init__(
        self,
        target: str,
        max_retry: int,
        base_pause_ms: int,
        on_dropped: Optional[DroppedCallback] = None,
    ):
        self.target = target
        self.max_retry = max_retry
        self.base_pause_ms = base_pause_ms
        self._on_dropped = on_dropped

    @abstractmethod
    async def send(self, batch: List[E]) -> R:
        """
        Send one batch to the service.

        Raises:
            TransportError: If the call itself fails
        """
        pass

    @abstractmethod
    def find_failed(self, batch: List[E], outcome: R) -> List[E]:
        """Return the entries of ``batch`` that ``outcome`` reports as failed."""
        pass

    def prepare(self, entries: Sequence[E]) -> List[E]:
        """Hook applied to entries before the first chunking."""
        return list(entries)

    def prepare_retry(self, failed: Sequence[E]) -> List[E]:
        """Hook applied to failed entries before they are chunked again."""
        return list(failed)

    @property
    @abstractmethod
    def retry_chunk_size(self) -> int:
        """Chunk size used when failed entries are sent again."""
        pass

    async def dispatch(self, entries: Sequence[E], chunk_size: int) -> None:
        """
        Deliver entries in batches of ``chunk_size``, retrying partial failures.

        Returns normally even when some entries were dropped after the last
        retry round. Errors raised by the service call propagate.
        """
        if not entries:
            return

        batches = chunk(self.prepare(entries), chunk_size)
        logger.debug(
            "dispatching_batches",
            target=self.target,
            entries=len(entries),
            batches=len(batches),
        )
        await gather_all(self._dispatch_batch(batch) for batch in batches)

    async def _dispatch_batch(self, batch: List[E]) -> None:
        outcome = await self.send(batch)
        failed = self.find_failed(batch, outcome)
        if failed:
            logger.info(
                "batch_partially_failed",
                target=self.target,
                size=len(batch),
                failed=len(failed),
            )
            await self.retry(failed, attempt=0)

    async def retry(self, failed: Sequence[E], attempt: int) -> None:
        """
        Send failed entries again as retry round ``attempt``.

        Args:
            failed: Entries that failed in the previous round
            attempt: Zero-based retry round
        """
        if attempt > self.max_retry:
            self._give_up(failed, attempt)
            return

        batches = chunk(self.prepare_retry(failed), self.retry_chunk_size)
        await gather_all(self._retry_batch(batch, attempt) for batch in batches)

    async def _retry_batch(self, batch: List[E], attempt: int) -> None:
        outcome = await self.send(batch)
        failed = self.find_failed(batch, outcome)
        if failed:
            logger.info(
                "retry_partially_failed",
                target=self.target,
                attempt=attempt,
                size=len(batch),
                failed=len(failed),
            )
            await backoff.pause(self.base_pause_ms, attempt)
            await self.retry(failed, attempt + 1)

    def _give_up(self, failed: Sequence[E], attempt: int) -> None:
        # TODO: route these to a dead letter destination once one is configurable
        logger.warning(
            "retries_exhausted",
            target=self.target,
            dropped=len(failed),
            attempts=attempt,
        )
        if self._on_dropped:
            self._on_dropped(DroppedEntries(entries=list(failed), attempts=attempt, target=self.target))
