"""Integration test fixtures.

Integration tests run the executor against the real monotonic clock and
real sleeps, so they are kept short.
"""

import pytest

from robust_query.config import Settings
from robust_query.retry.engine import RetryExecutor


@pytest.fixture
def real_executor(test_settings: Settings) -> RetryExecutor:
    """RetryExecutor using time.monotonic and time.sleep."""
    return RetryExecutor(test_settings)
