"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no external dependencies)
- integration: Integration tests (requires a Kafka broker, e.g. Docker)
- slow: Slow-running tests (>10 seconds)
"""

import pytest


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (requires Kafka broker)"
    )
    config.addinivalue_line("markers", "slow: Slow tests (>10 seconds)")
