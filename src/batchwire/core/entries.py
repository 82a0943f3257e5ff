"""
Transport entry and batch outcome models.

Entries are the units placed in one slot of a batch call; outcomes are
what the stream or queue service reports back for that call.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Set


def new_partition_key() -> str:
    """Generate a random partition key."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class StreamEntry:
    """
    One stream record.

    Attributes:
        data: Delimiter-joined serialized payloads
        partition_key: Random load-distribution hint, not a stable identity
    """

    data: str
    partition_key: str

    def with_new_partition_key(
        self,
        factory: Callable[[], str] = new_partition_key,
    ) -> "StreamEntry":
        """Copy of this entry with a freshly generated partition key."""
        return replace(self, partition_key=factory())


@dataclass(frozen=True)
class RecordResult:
    """Result for one position of a stream put call."""

    error_code: Optional[str] = None
    error_message: Optional[str] = None
    sequence_number: Optional[str] = None
    shard_id: Optional[str] = None

    @property
    def failed(self) -> bool:
        return bool(self.error_code)


@dataclass
class PutRecordsOutcome:
    """
    Response of a stream put call.

    ``records`` is aligned by position with the entries that were sent.
    """

    records: List[RecordResult] = field(default_factory=list)
    failed_record_count: int = 0


@dataclass(frozen=True)
class SendEntry:
    """
    One queue message to send.

    Attributes:
        id: Caller-supplied identity, unique within a batch call
        message_body: Message body
        delay_seconds: Per-message delivery delay
        message_group_id: Group id (FIFO queues)
        message_deduplication_id: Deduplication id (FIFO queues)
        message_attributes: Raw message attributes
    """

    id: str
    message_body: str
    delay_seconds: Optional[int] = None
    message_group_id: Optional[str] = None
    message_deduplication_id: Optional[str] = None
    message_attributes: Optional[Dict[str, Any]] = field(default=None, hash=False, compare=False)


@dataclass(frozen=True)
class DeleteEntry:
    """One queue message to delete, identified by ``id``."""

    id: str
    receipt_handle: str


@dataclass(frozen=True)
class BatchResultError:
    """Failure reported for one entry of a queue batch call."""

    id: str
    code: Optional[str] = None
    sender_fault: bool = False
    message: Optional[str] = None


@dataclass
class QueueBatchOutcome:
    """Response of a queue send or delete batch call."""

    successful_ids: List[str] = field(default_factory=list)
    failed: List[BatchResultError] = field(default_factory=list)

    @property
    def failed_ids(self) -> Set[str]:
        return {error.id for error in self.failed}


@dataclass
class DroppedEntries:
    """
    Entries given up on after the last permitted retry round.

    Attributes:
        entries: Entries that were still failing
        attempts: Retry rounds that were run for them
        target: Stream name or queue URL they were addressed to
    """

    entries: Sequence[Any]
    attempts: int
    target: str

    @property
    def count(self) -> int:
        return len(self.entries)
