"""
Pytest configuration for integration tests

Integration tests need a reachable Kafka broker (docker compose up). When the
broker from BROKER (default localhost:29092) does not accept connections, the
whole directory is skipped instead of failing.
"""

import socket

import pytest

from config.settings import Settings


def _broker_reachable(bootstrap: str, timeout: float = 1.0) -> bool:
    host, _, port = bootstrap.split(",")[0].rpartition(":")
    try:
        with socket.create_connection((host or "localhost", int(port)), timeout=timeout):
            return True
    except (OSError, ValueError):
        return False


@pytest.fixture(scope="session")
def kafka_settings():
    """Settings from the environment; skips when the broker is down"""
    settings = Settings()
    if not _broker_reachable(settings.BROKER):
        pytest.skip(f"Kafka broker not reachable at {settings.BROKER}")
    return settings
