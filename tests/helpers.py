"""
Test data builders and in-memory transports shared by the test modules.
"""

import asyncio
from typing import List, Optional, Tuple

from batchwire.core.entries import (
    BatchResultError,
    DeleteEntry,
    PutRecordsOutcome,
    QueueBatchOutcome,
    RecordResult,
    SendEntry,
    StreamEntry,
)
from batchwire.transport.interface import QueueTransport, StreamTransport


FIXED_PARTITION_KEY = "00000000000000000000000000000000"


# ============================================================================
# Response Builders
# ============================================================================

def stream_success() -> PutRecordsOutcome:
    """Stream response with no failed records."""
    return PutRecordsOutcome(records=[], failed_record_count=0)


def stream_first_record_failed() -> PutRecordsOutcome:
    """Stream response where only the first position failed."""
    return PutRecordsOutcome(
        records=[
            RecordResult(error_code="ProvisionedThroughputExceededException", error_message="message"),
            RecordResult(sequence_number="SequenceNumber", shard_id="ShardId"),
        ],
        failed_record_count=1,
    )


def queue_failed(*ids: str) -> QueueBatchOutcome:
    """Queue response where the given ids failed."""
    return QueueBatchOutcome(
        failed=[BatchResultError(id=id_, code="code", sender_fault=False) for id_ in ids],
    )


def make_send_entries(count: int, body: str = '{"prop1":"prop1"}') -> List[SendEntry]:
    """Create send entries with ids message-1..message-N."""
    return [SendEntry(id=f"message-{i}", message_body=body) for i in range(1, count + 1)]


def make_delete_entries(count: int) -> List[DeleteEntry]:
    """Create delete entries with ids message-1..message-N."""
    return [
        DeleteEntry(id=f"message-{i}", receipt_handle=f"ReceiptHandle{i}")
        for i in range(1, count + 1)
    ]


# ============================================================================
# Mock Transports
# ============================================================================

class MockStreamTransport(StreamTransport):
    """Stream transport returning scripted responses, success once exhausted."""

    def __init__(self, responses: Optional[List[PutRecordsOutcome]] = None):
        self.responses = list(responses or [])
        self.calls: List[Tuple[List[StreamEntry], str]] = []
        self.error: Optional[Exception] = None

    async def put_records(self, entries, stream_name) -> PutRecordsOutcome:
        self.calls.append((list(entries), stream_name))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return stream_success()


class MockQueueTransport(QueueTransport):
    """Queue transport returning scripted responses, success once exhausted."""

    def __init__(
        self,
        send_responses: Optional[List[QueueBatchOutcome]] = None,
        delete_responses: Optional[List[QueueBatchOutcome]] = None,
    ):
        self.send_responses = list(send_responses or [])
        self.delete_responses = list(delete_responses or [])
        self.sent_messages: List[Tuple[str, str]] = []
        self.send_calls: List[Tuple[List[SendEntry], str]] = []
        self.delete_calls: List[Tuple[List[DeleteEntry], str]] = []
        self.error: Optional[Exception] = None

    async def send_message(self, body, queue_url) -> None:
        self.sent_messages.append((body, queue_url))

    async def send_message_batch(self, entries, queue_url) -> QueueBatchOutcome:
        self.send_calls.append((list(entries), queue_url))
        if self.error is not None:
            raise self.error
        if self.send_responses:
            return self.send_responses.pop(0)
        return QueueBatchOutcome()

    async def delete_message_batch(self, entries, queue_url) -> QueueBatchOutcome:
        self.delete_calls.append((list(entries), queue_url))
        if self.error is not None:
            raise self.error
        if self.delete_responses:
            return self.delete_responses.pop(0)
        return QueueBatchOutcome()


class GatedStreamTransport(MockStreamTransport):
    """
    Stream transport that holds every call until ``expected`` calls are in flight.

    Batches sent one after the other never open the gate and time out.
    """

    def __init__(self, expected: int, timeout: float = 1.0):
        super().__init__()
        self.expected = expected
        self.timeout = timeout
        self.max_in_flight = 0
        self._in_flight = 0
        self._gate = asyncio.Event()

    async def put_records(self, entries, stream_name) -> PutRecordsOutcome:
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        if self._in_flight >= self.expected:
            self._gate.set()
        try:
            await asyncio.wait_for(self._gate.wait(), timeout=self.timeout)
        finally:
            self._in_flight -= 1
        return await super().put_records(entries, stream_name)
