"""
Unit tests for RetryExecutor.try_until.

An action is repeated until a predicate query reports the required state,
bounded by an overall timeout.
"""

import pytest

from robust_query.models.enums import AttemptStatus, OutcomeStatus
from robust_query.models.options import Options
from robust_query.queries.exceptions import MissingElementError, QueryNotSupportedError
from robust_query.queries.functional import FunctionPredicateQuery
from robust_query.retry.exceptions import RetryTimeoutError, TryUntilTimeoutError


def create_until(condition, timeout=0.0, retry_interval=0.1):
    """Predicate checked once per round unless a longer timeout is given."""
    return FunctionPredicateQuery(
        condition,
        options=Options(timeout=timeout, retry_interval=retry_interval),
        name="page_shows_result",
    )


def test_try_until_repeats_action_until_state_reached(executor, fake_clock):
    clicks = []

    outcome = executor.try_until(
        lambda: clicks.append(fake_clock()),
        create_until(lambda: len(clicks) >= 2),
        overall_timeout=1.0,
    )

    assert outcome.succeeded
    assert outcome.value is True
    assert outcome.attempts == 2
    assert clicks == pytest.approx([0.0, 0.1])
    assert [r.status for r in outcome.history] == [AttemptStatus.MISMATCHED, AttemptStatus.MATCHED]


def test_try_until_times_out_when_state_never_reached(executor, fake_clock):
    clicks = []

    outcome = executor.try_until(
        lambda: clicks.append(1),
        create_until(lambda: False),
        overall_timeout=0.3,
    )

    assert outcome.timed_out
    assert outcome.attempts == 4
    assert len(clicks) == 4
    assert isinstance(outcome.terminal_error, TryUntilTimeoutError)
    assert outcome.terminal_error.last_value is False
    assert outcome.query_name == "try_until(page_shows_result)"

    with pytest.raises(TryUntilTimeoutError, match="required state was never reached"):
        outcome.result()


def test_try_until_retries_tolerated_action_errors(executor, fake_clock):
    clicks = []

    def click():
        if not clicks:
            clicks.append("failed")
            raise MissingElementError("button not rendered", locator="#submit")
        clicks.append("clicked")

    outcome = executor.try_until(
        click,
        create_until(lambda: clicks[-1] == "clicked"),
        overall_timeout=1.0,
    )

    assert outcome.succeeded
    assert outcome.attempts == 2
    assert outcome.history[0].status == AttemptStatus.RETRYABLE_ERROR


def test_try_until_timeout_mid_action_error_surfaces_error(executor, fake_clock):
    def click():
        raise MissingElementError("button never rendered")

    outcome = executor.try_until(click, create_until(lambda: True), overall_timeout=0.2)

    assert outcome.timed_out
    assert isinstance(outcome.terminal_error, MissingElementError)
    with pytest.raises(RetryTimeoutError) as exc_info:
        outcome.result()
    assert exc_info.value.__cause__ is outcome.terminal_error


def test_try_until_fatal_action_error_aborts(executor, fake_clock):
    def click():
        raise QueryNotSupportedError("driver cannot click")

    outcome = executor.try_until(click, create_until(lambda: True), overall_timeout=5.0)

    assert outcome.status == OutcomeStatus.FAILED
    assert outcome.attempts == 1
    with pytest.raises(QueryNotSupportedError):
        outcome.result()


def test_try_until_fatal_until_error_aborts(executor, fake_clock):
    def broken_condition():
        raise AttributeError("bug in condition")

    outcome = executor.try_until(lambda: None, create_until(broken_condition), overall_timeout=5.0)

    assert outcome.status == OutcomeStatus.FAILED
    assert isinstance(outcome.terminal_error, AttributeError)


def test_try_until_counts_time_spent_in_until(executor, fake_clock):
    """The until query's own retries consume the overall budget."""
    outcome = executor.try_until(
        lambda: None,
        create_until(lambda: False, timeout=0.2, retry_interval=0.1),
        overall_timeout=0.3,
    )

    assert outcome.timed_out
    assert outcome.attempts == 2
    assert outcome.elapsed == pytest.approx(0.4)


def test_try_until_rejects_negative_timeout(executor):
    with pytest.raises(ValueError, match="overall_timeout"):
        executor.try_until(lambda: None, create_until(lambda: True), overall_timeout=-0.1)
