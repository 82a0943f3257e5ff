"""
Core delivery components.

Chunking, backoff, entry models and the batched dispatch/retry engine
shared by the stream and queue pipelines.
"""

from batchwire.core.chunking import chunk, remove_duplicates
from batchwire.core.backoff import backoff_delay_ms, pause
from batchwire.core.entries import (
    BatchResultError,
    DeleteEntry,
    DroppedEntries,
    PutRecordsOutcome,
    QueueBatchOutcome,
    RecordResult,
    SendEntry,
    StreamEntry,
)
from batchwire.core.dispatcher import BatchDispatcher

__all__ = [
    "chunk",
    "remove_duplicates",
    "backoff_delay_ms",
    "pause",
    "BatchResultError",
    "DeleteEntry",
    "DroppedEntries",
    "PutRecordsOutcome",
    "QueueBatchOutcome",
    "RecordResult",
    "SendEntry",
    "StreamEntry",
    "BatchDispatcher",
]
