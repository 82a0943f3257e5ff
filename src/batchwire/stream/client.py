"""
Stream ingestion client.

Serializes payloads, merges them into larger records and puts the records
onto a stream in concurrent batches, retrying the records the service
reports as failed.
"""

import json
from typing import Any, Callable, List, Optional, Sequence

import structlog
from pydantic import BaseModel

from batchwire.core.chunking import chunk
from batchwire.core.dispatcher import BatchDispatcher, DroppedCallback
from batchwire.core.entries import PutRecordsOutcome, StreamEntry, new_partition_key
from batchwire.stream.details import StreamPutDetails
from batchwire.transport.interface import StreamTransport

logger = structlog.get_logger(__name__)


def serialize_payload(payload: Any) -> str:
    """Compact JSON form of a payload; pydantic models use their own dump."""
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class StreamPutDispatcher(BatchDispatcher[StreamEntry, PutRecordsOutcome]):
    """
    Puts stream records and retries them by response position.

    Retried records keep their data but get a new partition key, and are
    re-chunked by ``max_merge_count`` rather than ``max_batch_size``.
    """

    def __init__(
        self,
        transport: StreamTransport,
        details: StreamPutDetails,
        partition_key_factory: Callable[[], str] = new_partition_key,
        on_dropped: Optional[DroppedCallback] = None,
    ):
        super().__init__(
            target=details.stream_name,
            max_retry=details.max_retry,
            base_pause_ms=details.base_pause_ms,
            on_dropped=on_dropped,
        )
        self.transport = transport
        self.details = details
        self._partition_key_factory = partition_key_factory

    @property
    def retry_chunk_size(self) -> int:
        return self.details.max_merge_count

    async def send(self, batch: List[StreamEntry]) -> PutRecordsOutcome:
        return await self.transport.put_records(batch, self.details.stream_name)

    def find_failed(self, batch: List[StreamEntry], outcome: PutRecordsOutcome) -> List[StreamEntry]:
        if outcome.failed_record_count <= 0:
            return []

        # Positions past the end of the request have nothing to retry
        return [
            entry.with_new_partition_key(self._partition_key_factory)
            for entry, record in zip(batch, outcome.records)
            if record.failed
        ]


class StreamClient:
    """
    Best-effort delivery of payload lists to a stream.

    Usage:
        ```python
        async with KinesisTransport() as transport:
            client = StreamClient(transport)
            await client.put_records(updates, StreamPutDetails(stream_name="updates"))
        ```
    """

    def __init__(
        self,
        transport: StreamTransport,
        partition_key_factory: Optional[Callable[[], str]] = None,
        on_dropped: Optional[DroppedCallback] = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Stream service adapter
            partition_key_factory: Generates partition keys (random UUIDs by default)
            on_dropped: Called with records given up on after the last retry
        """
        self.transport = transport
        self._partition_key_factory = partition_key_factory or new_partition_key
        self._on_dropped = on_dropped

    def merge(self, payloads: Sequence[Any], details: StreamPutDetails) -> List[StreamEntry]:
        """Serialize payloads and merge them into stream records."""
        serialized = [serialize_payload(payload) for payload in payloads]
        return [
            StreamEntry(
                data=details.group_separator.join(group),
                partition_key=self._partition_key_factory(),
            )
            for group in chunk(serialized, details.max_merge_count)
        ]

    async def put_records(self, payloads: Sequence[Any], details: StreamPutDetails) -> None:
        """
        Put payloads onto the stream described by ``details``.

        Records still failing after ``details.max_retry`` retry rounds are
        dropped; the call returns normally in that case.

        Args:
            payloads: JSON-serializable values or pydantic models
            details: Target stream and batching settings

        Raises:
            TransportError: If a put call fails as a whole
        """
        if not payloads:
            return

        entries = self.merge(payloads, details)
        logger.debug(
            "putting_records",
            stream=details.stream_name,
            payloads=len(payloads),
            records=len(entries),
        )

        dispatcher = StreamPutDispatcher(
            self.transport,
            details,
            partition_key_factory=self._partition_key_factory,
            on_dropped=self._on_dropped,
        )
        await dispatcher.dispatch(entries, details.max_batch_size)

    def on_dropped(self, callback: DroppedCallback) -> None:
        """Register callback for records dropped after exhausting retries."""
        self._on_dropped = callback
