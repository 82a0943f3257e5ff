"""
Queue client.

Entry point for sending and deleting queue messages in batches.
"""

import json
from typing import Any, Optional, Sequence

from batchwire.config import DeliveryConfig, get_config
from batchwire.core.dispatcher import DroppedCallback
from batchwire.core.entries import DeleteEntry, SendEntry
from batchwire.queue.batches import DeleteBatch, SendBatch
from batchwire.transport.interface import QueueTransport


class QueueClient:
    """
    Batched delivery to one queue.

    ``max_retry`` and ``base_pause_ms`` are fixed per client and shared by
    send and delete; the batch size is chosen per call.

    Usage:
        ```python
        async with SqsTransport() as transport:
            client = QueueClient(transport, queue_url)
            await client.send_message_batch(entries)
        ```
    """

    def __init__(
        self,
        transport: QueueTransport,
        queue_url: str,
        max_retry: Optional[int] = None,
        base_pause_ms: Optional[int] = None,
        config: Optional[DeliveryConfig] = None,
        on_dropped: Optional[DroppedCallback] = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Queue service adapter
            queue_url: Target queue
            max_retry: Retry rounds (from config if not provided)
            base_pause_ms: Base backoff pause (from config if not provided)
            config: Delivery configuration
            on_dropped: Called with entries given up on after the last retry
        """
        self.config = config or get_config()
        self.transport = transport
        self.queue_url = queue_url
        self.max_retry = self.config.max_retry if max_retry is None else max_retry
        self.base_pause_ms = self.config.base_pause_ms if base_pause_ms is None else base_pause_ms
        self._on_dropped = on_dropped

    async def send(self, message: Any) -> None:
        """Send a single JSON-encoded message, without batching or retries."""
        body = json.dumps(message, separators=(",", ":"), ensure_ascii=False)
        await self.transport.send_message(body, self.queue_url)

    async def send_message_batch(
        self,
        entries: Sequence[SendEntry],
        size: Optional[int] = None,
    ) -> None:
        """
        Send messages in batches of ``size``.

        Entries sharing an id are sent once. Messages still failing after
        the last retry round are dropped without raising.

        Raises:
            TransportError: If a batch call fails as a whole
        """
        batch = SendBatch(
            self.transport,
            self.queue_url,
            self.max_retry,
            self.base_pause_ms,
            self.config.queue_chunk_size if size is None else size,
            on_dropped=self._on_dropped,
        )
        await batch.run(entries)

    async def delete_message_batch(
        self,
        entries: Sequence[DeleteEntry],
        size: Optional[int] = None,
    ) -> None:
        """
        Delete messages in batches of ``size``.

        Same dedup and retry behavior as :meth:`send_message_batch`.

        Raises:
            TransportError: If a batch call fails as a whole
        """
        batch = DeleteBatch(
            self.transport,
            self.queue_url,
            self.max_retry,
            self.base_pause_ms,
            self.config.queue_chunk_size if size is None else size,
            on_dropped=self._on_dropped,
        )
        await batch.run(entries)

    def on_dropped(self, callback: DroppedCallback) -> None:
        """Register callback for entries dropped after exhausting retries."""
        self._on_dropped = callback
