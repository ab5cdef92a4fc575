"""
Shared fixtures for unit tests
"""

import pytest

from config.settings import Settings
from tests.unit.stream_doubles import RecordingStreamProducer


@pytest.fixture
def settings():
    """Settings with explicit values (independent of the host environment)"""
    return Settings(
        _env_file=None,
        BROKER="localhost:9092",
        TRADE_TOPIC="trade-data",
        RSI_TOPIC="rsi-data",
        GROUP_ID="rsi-service-test",
        RSI_PERIOD=14,
        RSI_MAX_HISTORY=200,
        PUBLISH_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
def producer():
    """Producer double that records every send"""
    return RecordingStreamProducer()
