"""
batchwire

Client-side batch delivery for stream and queue services.
Splits payload lists into batches that fit per-call limits, sends every
batch concurrently and retries only the items the service reports as failed,
with exponential backoff and a bounded number of rounds.
"""

__version__ = "0.1.0"

from batchwire.config import DeliveryConfig
from batchwire.core.entries import DeleteEntry, DroppedEntries, SendEntry
from batchwire.errors import TransportError
from batchwire.queue.client import QueueClient
from batchwire.stream.client import StreamClient
from batchwire.stream.details import StreamPutDetails

__all__ = [
    "DeliveryConfig",
    "DeleteEntry",
    "DroppedEntries",
    "SendEntry",
    "TransportError",
    "QueueClient",
    "StreamClient",
    "StreamPutDetails",
]
