"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from fixtures.clock import FakeClock
from robust_query.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.DEFAULT_TIMEOUT = 0.5
    """
    return Settings(
        # === Logging ===
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Timing Defaults ===
        DEFAULT_TIMEOUT=1.0,
        DEFAULT_RETRY_INTERVAL=0.05,

        # === Monitoring ===
        METRICS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    """Deterministic clock; the executor's sleeps advance it."""
    return FakeClock()
