"""
Per-call settings for putting records onto a stream.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from batchwire.config import DeliveryConfig, get_config


class StreamPutDetails(BaseModel):
    """
    Where and how a list of payloads is put onto a stream.

    Immutable; one instance is shared read-only by every batch of a call.
    """

    model_config = ConfigDict(frozen=True)

    stream_name: str = Field(description="Target stream")
    max_merge_count: int = Field(
        default=10,
        ge=1,
        description="Payloads merged into one record; also the retry chunk size"
    )
    max_batch_size: int = Field(
        default=300,
        ge=1,
        description="Records per put call"
    )
    group_separator: str = Field(
        default="#-#",
        description="Separator between merged payloads"
    )
    max_retry: int = Field(default=3, ge=0, description="Retry rounds allowed")
    base_pause_ms: int = Field(default=200, ge=0, description="Base backoff pause")

    @classmethod
    def from_config(
        cls,
        stream_name: str,
        config: Optional[DeliveryConfig] = None,
    ) -> "StreamPutDetails":
        """Build details for ``stream_name`` from the delivery settings."""
        config = config or get_config()
        return cls(
            stream_name=stream_name,
            max_merge_count=config.stream_max_merge_count,
            max_batch_size=config.stream_max_batch_size,
            group_separator=config.stream_group_separator,
            max_retry=config.max_retry,
            base_pause_ms=config.base_pause_ms,
        )
