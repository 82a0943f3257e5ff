"""
Transport Layer.

Provides abstracted access to the stream and queue services.
Ships aioboto3 adapters for Kinesis and SQS.
"""

from batchwire.transport.interface import QueueTransport, StreamTransport
from batchwire.transport.aws import KinesisTransport, SqsTransport

__all__ = [
    "StreamTransport",
    "QueueTransport",
    "KinesisTransport",
    "SqsTransport",
]
