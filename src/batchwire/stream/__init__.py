"""
Stream ingestion pipeline.
"""

from batchwire.stream.details import StreamPutDetails
from batchwire.stream.client import StreamClient, StreamPutDispatcher, serialize_payload

__all__ = [
    "StreamPutDetails",
    "StreamClient",
    "StreamPutDispatcher",
    "serialize_payload",
]
