"""Unit test fixtures.

Provides an executor wired to the fake clock, so timing behaviour is
asserted without real sleeps.
"""

import pytest

from fixtures.clock import FakeClock
from robust_query.config import Settings
from robust_query.retry.classification import ClassificationPolicy
from robust_query.retry.engine import RetryExecutor


@pytest.fixture
def executor(test_settings: Settings, fake_clock: FakeClock) -> RetryExecutor:
    """RetryExecutor using the default policy and the fake clock."""
    return RetryExecutor(test_settings, clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def create_executor(test_settings: Settings, fake_clock: FakeClock):
    """Factory fixture to create an executor with a custom policy or settings.

    Usage:
        def test_something(create_executor):
            executor = create_executor(policy=ClassificationPolicy.permissive())
    """
    def _create(
        policy: ClassificationPolicy | None = None,
        settings: Settings | None = None,
    ) -> RetryExecutor:
        return RetryExecutor(
            settings or test_settings,
            policy=policy,
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )

    return _create
