"""
Configuration management for batchwire.

Supports configuration via environment variables and .env files.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DeliveryConfig(BaseSettings):
    """
    Default delivery settings shared by the stream and queue clients.

    All settings can be configured via environment variables with the BATCHWIRE_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="BATCHWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Stream ingestion settings
    stream_max_merge_count: int = Field(
        default=10,
        ge=1,
        description="Number of serialized payloads merged into one stream record"
    )
    stream_max_batch_size: int = Field(
        default=300,
        ge=1,
        description="Maximum number of stream records in a single put call"
    )
    stream_group_separator: str = Field(
        default="#-#",
        description="Separator placed between payloads merged into one record"
    )

    # Queue settings
    queue_chunk_size: int = Field(
        default=10,
        ge=1,
        description="Default number of entries per queue batch call"
    )

    # Retry settings
    max_retry: int = Field(
        default=3,
        ge=0,
        description="Retry rounds allowed for partially failed batches"
    )
    base_pause_ms: int = Field(
        default=200,
        ge=0,
        description="Base pause in milliseconds, doubled on every retry round"
    )

    # AWS settings
    aws_region: str = Field(
        default="us-east-1",
        description="Region used when the transports build their own clients"
    )
    aws_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint URL (e.g. LocalStack)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )


# Global config instance
_config: Optional[DeliveryConfig] = None


def get_config() -> DeliveryConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DeliveryConfig()
    return _config


def set_config(config: Optional[DeliveryConfig]) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
