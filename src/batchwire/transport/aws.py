"""
AWS adapters for the transport interfaces.

Provides Kinesis and SQS access via aioboto3.
"""

from typing import Any, Dict, List, Optional

import aioboto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from batchwire.config import DeliveryConfig, get_config
from batchwire.core.entries import (
    BatchResultError,
    DeleteEntry,
    PutRecordsOutcome,
    QueueBatchOutcome,
    RecordResult,
    SendEntry,
    StreamEntry,
)
from batchwire.errors import TransportError, TransportNotConnectedError
from batchwire.transport.interface import QueueTransport, StreamTransport

logger = structlog.get_logger(__name__)


class _AwsClient:
    """
    Owns an aioboto3 client for one service.

    A prebuilt client can be injected; otherwise one is created on
    ``connect()`` from the region and endpoint settings.
    """

    service_name = ""

    def __init__(
        self,
        config: Optional[DeliveryConfig] = None,
        client: Any = None,
        session: Optional[aioboto3.Session] = None,
    ):
        self.config = config or get_config()
        self._client = client
        self._session = session
        self._client_context: Any = None

    async def connect(self) -> None:
        """Create the service client."""
        if self._client is not None:
            return

        if self._session is None:
            self._session = aioboto3.Session()

        client_kwargs: Dict[str, Any] = {"region_name": self.config.aws_region}
        if self.config.aws_endpoint_url:
            client_kwargs["endpoint_url"] = self.config.aws_endpoint_url

        client_context = self._session.client(self.service_name, **client_kwargs)
        self._client = await client_context.__aenter__()
        # Only an entered context is exited on disconnect()
        self._client_context = client_context
        logger.info(
            "aws_client_connected",
            service=self.service_name,
            region=self.config.aws_region,
        )

    async def disconnect(self) -> None:
        """Close the service client if this adapter created it."""
        if self._client_context is not None:
            await self._client_context.__aexit__(None, None, None)
            self._client_context = None
            self._client = None
            logger.info("aws_client_disconnected", service=self.service_name)

    async def _call(self, operation: str, **kwargs) -> Dict[str, Any]:
        """Invoke a client operation, wrapping botocore failures."""
        if self._client is None:
            raise TransportNotConnectedError(f"{self.service_name} client not connected")

        try:
            return await getattr(self._client, operation)(**kwargs)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            logger.error(
                "aws_request_failed",
                service=self.service_name,
                operation=operation,
                error_code=error_code,
                error=str(e),
            )
            raise TransportError(f"{self.service_name} {operation} failed: {e}", error_code) from e
        except BotoCoreError as e:
            logger.error(
                "aws_request_error",
                service=self.service_name,
                operation=operation,
                error=str(e),
            )
            raise TransportError(f"{self.service_name} {operation} failed: {e}") from e


class KinesisTransport(_AwsClient, StreamTransport):
    """Kinesis Data Streams adapter."""

    service_name = "kinesis"

    async def put_records(
        self,
        entries: List[StreamEntry],
        stream_name: str,
    ) -> PutRecordsOutcome:
        response = await self._call(
            "put_records",
            Records=[
                {"Data": entry.data.encode("utf-8"), "PartitionKey": entry.partition_key}
                for entry in entries
            ],
            StreamName=stream_name,
        )

        return PutRecordsOutcome(
            records=[
                RecordResult(
                    error_code=record.get("ErrorCode"),
                    error_message=record.get("ErrorMessage"),
                    sequence_number=record.get("SequenceNumber"),
                    shard_id=record.get("ShardId"),
                )
                for record in response.get("Records", [])
            ],
            failed_record_count=int(response.get("FailedRecordCount", 0)),
        )


def _send_entry_to_request(entry: SendEntry) -> Dict[str, Any]:
    request: Dict[str, Any] = {"Id": entry.id, "MessageBody": entry.message_body}
    if entry.delay_seconds is not None:
        request["DelaySeconds"] = entry.delay_seconds
    if entry.message_group_id is not None:
        request["MessageGroupId"] = entry.message_group_id
    if entry.message_deduplication_id is not None:
        request["MessageDeduplicationId"] = entry.message_deduplication_id
    if entry.message_attributes:
        request["MessageAttributes"] = entry.message_attributes
    return request


def _parse_batch_response(response: Dict[str, Any]) -> QueueBatchOutcome:
    return QueueBatchOutcome(
        successful_ids=[item["Id"] for item in response.get("Successful", [])],
        failed=[
            BatchResultError(
                id=item["Id"],
                code=item.get("Code"),
                sender_fault=bool(item.get("SenderFault", False)),
                message=item.get("Message"),
            )
            for item in response.get("Failed", [])
        ],
    )


class SqsTransport(_AwsClient, QueueTransport):
    """Simple Queue Service adapter."""

    service_name = "sqs"

    async def send_message(self, body: str, queue_url: str) -> None:
        await self._call("send_message", QueueUrl=queue_url, MessageBody=body)

    async def send_message_batch(
        self,
        entries: List[SendEntry],
        queue_url: str,
    ) -> QueueBatchOutcome:
        response = await self._call(
            "send_message_batch",
            QueueUrl=queue_url,
            Entries=[_send_entry_to_request(entry) for entry in entries],
        )
        return _parse_batch_response(response)

    async def delete_message_batch(
        self,
        entries: List[DeleteEntry],
        queue_url: str,
    ) -> QueueBatchOutcome:
        response = await self._call(
            "delete_message_batch",
            QueueUrl=queue_url,
            Entries=[
                {"Id": entry.id, "ReceiptHandle": entry.receipt_handle}
                for entry in entries
            ],
        )
        return _parse_batch_response(response)
