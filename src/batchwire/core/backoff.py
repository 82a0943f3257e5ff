"""
Exponential backoff between retry rounds.
"""

import asyncio

import structlog

logger = structlog.get_logger(__name__)


def backoff_delay_ms(base_pause_ms: int, attempt: int) -> int:
    """Delay before the round after ``attempt``: base * 2^attempt, no jitter."""
    return base_pause_ms * (2 ** attempt)


async def pause(base_pause_ms: int, attempt: int) -> None:
    """Suspend the current task for the backoff delay of ``attempt``."""
    delay_ms = backoff_delay_ms(base_pause_ms, attempt)
    logger.debug("retry_backoff", attempt=attempt, delay_ms=delay_ms)
    await asyncio.sleep(delay_ms / 1000)
