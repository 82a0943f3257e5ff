"""
Queue batch pipeline.
"""

from batchwire.queue.batches import DeleteBatch, QueueBatch, SendBatch
from batchwire.queue.client import QueueClient

__all__ = [
    "QueueClient",
    "QueueBatch",
    "SendBatch",
    "DeleteBatch",
]
