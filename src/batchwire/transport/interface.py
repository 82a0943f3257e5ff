"""
Abstract interfaces for the stream and queue services.

Defines the contract the dispatchers rely on; adapters translate it to a
concrete client library.
"""

from abc import ABC, abstractmethod
from typing import List

from batchwire.core.entries import (
    DeleteEntry,
    PutRecordsOutcome,
    QueueBatchOutcome,
    SendEntry,
    StreamEntry,
)


class StreamTransport(ABC):
    """
    Abstract interface for a record-stream ingestion service.

    Only whole-call failures are raised; per-record failures are reported
    in the returned outcome.
    """

    async def connect(self) -> None:
        """Establish connection to the service."""
        pass

    async def disconnect(self) -> None:
        """Close connection to the service."""
        pass

    @abstractmethod
    async def put_records(
        self,
        entries: List[StreamEntry],
        stream_name: str,
    ) -> PutRecordsOutcome:
        """
        Put a batch of records onto a stream.

        Args:
            entries: Records to put
            stream_name: Target stream

        Returns:
            Per-position outcome aligned with ``entries``

        Raises:
            TransportError: If the call fails as a whole
        """
        pass

    async def __aenter__(self) -> "StreamTransport":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()


class QueueTransport(ABC):
    """
    Abstract interface for a message queue service.

    Batch calls report per-entry failures by entry id.
    """

    async def connect(self) -> None:
        """Establish connection to the service."""
        pass

    async def disconnect(self) -> None:
        """Close connection to the service."""
        pass

    @abstractmethod
    async def send_message(self, body: str, queue_url: str) -> None:
        """
        Send a single message.

        Raises:
            TransportError: If the call fails
        """
        pass

    @abstractmethod
    async def send_message_batch(
        self,
        entries: List[SendEntry],
        queue_url: str,
    ) -> QueueBatchOutcome:
        """
        Send a batch of messages.

        Args:
            entries: Messages to send, ids unique within the batch
            queue_url: Target queue

        Returns:
            Outcome listing the ids that failed

        Raises:
            TransportError: If the call fails as a whole
        """
        pass

    @abstractmethod
    async def delete_message_batch(
        self,
        entries: List[DeleteEntry],
        queue_url: str,
    ) -> QueueBatchOutcome:
        """
        Delete a batch of messages.

        Args:
            entries: Messages to delete, ids unique within the batch
            queue_url: Target queue

        Returns:
            Outcome listing the ids that failed

        Raises:
            TransportError: If the call fails as a whole
        """
        pass

    async def __aenter__(self) -> "QueueTransport":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()
