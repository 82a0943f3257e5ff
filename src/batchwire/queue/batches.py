"""
Queue batch operations.

Send and delete share the same dedup, chunk and retry shape; they differ
in the service call and in the entry type carried into retries.
"""

from typing import Generic, List, Optional, Sequence, TypeVar

from batchwire.core.chunking import remove_duplicates
from batchwire.core.dispatcher import BatchDispatcher, DroppedCallback
from batchwire.core.entries import DeleteEntry, QueueBatchOutcome, SendEntry
from batchwire.transport.interface import QueueTransport

Q = TypeVar("Q", SendEntry, DeleteEntry)


class QueueBatch(BatchDispatcher[Q, QueueBatchOutcome], Generic[Q]):
    """
    Queue batch operation with failures correlated by entry id.

    Entries are deduplicated by id before every round so that ids stay
    unique within each call; retried entries keep their id and fields.
    """

    def __init__(
        self,
        transport: QueueTransport,
        queue_url: str,
        max_retry: int,
        base_pause_ms: int,
        size: int,
        on_dropped: Optional[DroppedCallback] = None,
    ):
        super().__init__(
            target=queue_url,
            max_retry=max_retry,
            base_pause_ms=base_pause_ms,
            on_dropped=on_dropped,
        )
        self.transport = transport
        self.queue_url = queue_url
        self.size = size

    @property
    def retry_chunk_size(self) -> int:
        return self.size

    def prepare(self, entries: Sequence[Q]) -> List[Q]:
        return remove_duplicates(entries)

    def prepare_retry(self, failed: Sequence[Q]) -> List[Q]:
        return remove_duplicates(failed)

    def find_failed(self, batch: List[Q], outcome: QueueBatchOutcome) -> List[Q]:
        failed_ids = outcome.failed_ids
        return [entry for entry in batch if entry.id in failed_ids]

    async def run(self, entries: Sequence[Q]) -> None:
        """Deliver ``entries`` in batches of ``size``."""
        await self.dispatch(entries, self.size)


class SendBatch(QueueBatch[SendEntry]):
    """Sends messages in batches."""

    async def send(self, batch: List[SendEntry]) -> QueueBatchOutcome:
        return await self.transport.send_message_batch(batch, self.queue_url)


class DeleteBatch(QueueBatch[DeleteEntry]):
    """Deletes messages in batches."""

    async def send(self, batch: List[DeleteEntry]) -> QueueBatchOutcome:
        return await self.transport.delete_message_batch(batch, self.queue_url)
