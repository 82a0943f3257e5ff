"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import List, Tuple

import pytest

from batchwire.config import DeliveryConfig
from batchwire.core import backoff
from batchwire.core.entries import DroppedEntries
from tests.helpers import MockQueueTransport, MockStreamTransport


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> DeliveryConfig:
    """Create a test configuration that ignores the environment file."""
    return DeliveryConfig(
        _env_file=None,
        aws_region="eu-west-1",
        log_level="DEBUG",
    )


# ============================================================================
# Mock Transports
# ============================================================================

@pytest.fixture
def mock_stream() -> MockStreamTransport:
    """Create a mock stream transport."""
    return MockStreamTransport()


@pytest.fixture
def mock_queue() -> MockQueueTransport:
    """Create a mock queue transport."""
    return MockQueueTransport()


# ============================================================================
# Backoff and Dropped Entries
# ============================================================================

@pytest.fixture
def recorded_pauses(monkeypatch) -> List[Tuple[int, int]]:
    """Replace backoff pauses with a recorder so tests never sleep."""
    pauses: List[Tuple[int, int]] = []

    async def fake_pause(base_pause_ms: int, attempt: int) -> None:
        pauses.append((base_pause_ms, attempt))

    monkeypatch.setattr(backoff, "pause", fake_pause)
    return pauses


@pytest.fixture
def dropped() -> List[DroppedEntries]:
    """Collects dropped-entries notifications."""
    return []
