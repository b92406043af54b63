"""
Retry executor for robust query execution.

This module implements the RetryExecutor that drives a query until it
produces the expected result, raises a fatal error, or runs out of time.
It owns all timing, sleeping and error aggregation.

Execution loop:
    1. Attempt: invoke the query (the first attempt always happens)
    2. Classify: matching value -> succeeded; wrong value or retryable
       error -> keep going; fatal error -> failed immediately
    3. Deadline check: elapsed >= timeout -> timed out
    4. Wait until retry_interval after the start of the previous attempt,
       then go back to 1

Timing policy:
    - The interval is measured from the start of the previous attempt, so a
      slow attempt eats into the wait rather than stretching the spacing.
    - The wait is never shortened to fit the remaining budget: consecutive
      attempts are always at least retry_interval apart. The deadline can
      therefore be overshot by up to one interval.
    - An attempt in flight when the deadline passes is allowed to finish and
      its result counts.

Usage:
    executor = RetryExecutor(settings)
    outcome = executor.execute(query)
    value = executor.robustly(query)  # raises on failure
"""

import time
from typing import Any, Callable, Optional, TypeVar, cast

import structlog

from robust_query.config import Settings
from robust_query.config import settings as default_settings
from robust_query.models.enums import AttemptStatus, Classification, OutcomeStatus
from robust_query.models.options import Options
from robust_query.monitoring.metrics import (
    query_attempts_total,
    query_execution_seconds,
    query_outcomes_total,
)
from robust_query.queries.base import PredicateQuery, Query
from robust_query.retry.classification import ClassificationPolicy
from robust_query.retry.exceptions import (
    ExpectedResultNotFoundError,
    RetryTimeoutError,
    TryUntilTimeoutError,
)
from robust_query.retry.outcome import NO_VALUE, AttemptRecord, Outcome

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class RetryExecutor:
    """
    Bounded-retry executor for queries.

    The executor is a pure function of (query, policy) -> outcome: it keeps
    no state between executions and can be shared across any number of
    sequential calls. A single execution is strictly sequential; no two
    attempts are ever in flight at once.

    Attributes:
        settings: Application settings (timing defaults, metrics switch)
        policy: Default classification policy for raised errors
        clock: Monotonic clock returning seconds
        sleep: Blocking sleep taking seconds
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        policy: Optional[ClassificationPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize retry executor.

        Args:
            settings: Application settings (defaults to the global instance)
            policy: Classification policy (defaults to RETRYABLE_ERROR_KINDS)
            clock: Monotonic clock, injectable for deterministic tests
            sleep: Sleep function, injectable for deterministic tests
        """
        self.settings = settings or default_settings
        self.policy = policy or ClassificationPolicy.from_settings(self.settings)
        self.clock = clock
        self.sleep = sleep

        logger.debug(
            "RetryExecutor initialized",
            default_timeout=self.settings.DEFAULT_TIMEOUT,
            default_retry_interval=self.settings.DEFAULT_RETRY_INTERVAL,
            retryable_kinds=self.policy.describe(),
        )

    def resolve_timing(
        self,
        query: Query[Any],
        timeout: Optional[float] = None,
        retry_interval: Optional[float] = None,
    ) -> tuple[float, float]:
        """
        Resolve the timeout and interval for one execution.

        Precedence: explicit override, then the query's options, then the
        configured defaults.

        Raises:
            ValueError: If the timeout is negative or the interval is not
                positive
        """
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {timeout}")
        if retry_interval is not None and retry_interval <= 0:
            raise ValueError(f"retry_interval must be > 0, got {retry_interval}")

        defaults = Options(
            timeout=self.settings.DEFAULT_TIMEOUT,
            retry_interval=self.settings.DEFAULT_RETRY_INTERVAL,
        )
        resolved = defaults.merge(
            Options(timeout=query.timeout, retry_interval=query.retry_interval)
        ).merge(Options(timeout=timeout, retry_interval=retry_interval))

        # Settings fields are always set, so neither merged field is None
        return cast(float, resolved.timeout), cast(float, resolved.retry_interval)

    def execute(
        self,
        query: Query[T],
        *,
        timeout: Optional[float] = None,
        retry_interval: Optional[float] = None,
        policy: Optional[ClassificationPolicy] = None,
    ) -> Outcome[T]:
        """
        Run `query` until it matches, fails fatally, or times out.

        Classified terminal conditions never raise here; call
        `Outcome.result()` (or use `robustly`) to surface them.

        Args:
            query: Query to execute (single use per execution)
            timeout: Override for the query's timeout (seconds)
            retry_interval: Override for the query's retry interval (seconds)
            policy: Override for the executor's classification policy

        Returns:
            Outcome carrying status, value, terminal error and attempt history
        """
        resolved_timeout, interval = self.resolve_timing(query, timeout, retry_interval)
        active_policy = policy or self.policy
        log = logger.bind(query=query.name, timeout=resolved_timeout, retry_interval=interval)

        start = self.clock()
        history: list[AttemptRecord] = []
        last_value: Any = NO_VALUE
        last_error: Optional[Exception] = None

        while True:
            number = len(history) + 1
            attempt_start = self.clock()

            try:
                value = query.attempt()
            except Exception as e:
                finished = self.clock()

                if active_policy.classify(e) == Classification.FATAL:
                    history.append(
                        self._record(query, number, start, attempt_start, finished,
                                     AttemptStatus.FATAL_ERROR, error=e)
                    )
                    log.error(
                        "Query raised fatal error, aborting",
                        attempt=number,
                        error_type=type(e).__name__,
                        error=str(e),
                    )
                    return self._finish(
                        query, OutcomeStatus.FAILED, start, resolved_timeout, interval,
                        history, value=last_value, terminal_error=e,
                    )

                last_error = e
                history.append(
                    self._record(query, number, start, attempt_start, finished,
                                 AttemptStatus.RETRYABLE_ERROR, error=e)
                )
                log.debug(
                    "Query raised retryable error",
                    attempt=number,
                    error_type=type(e).__name__,
                )
            else:
                finished = self.clock()

                if query.is_success(value):
                    history.append(
                        self._record(query, number, start, attempt_start, finished,
                                     AttemptStatus.MATCHED, value=value)
                    )
                    return self._finish(
                        query, OutcomeStatus.SUCCEEDED, start, resolved_timeout, interval,
                        history, value=value,
                    )

                last_value = value
                last_error = None
                history.append(
                    self._record(query, number, start, attempt_start, finished,
                                 AttemptStatus.MISMATCHED, value=value)
                )
                log.debug("Query returned unexpected result", attempt=number, value=repr(value))

            elapsed = self.clock() - start
            if elapsed >= resolved_timeout:
                if last_error is not None:
                    terminal_error: Exception = last_error
                else:
                    terminal_error = ExpectedResultNotFoundError(
                        query_name=query.name,
                        attempts=len(history),
                        elapsed=elapsed,
                        timeout=resolved_timeout,
                        expected=query.expected_result,
                        last_value=last_value,
                    )
                return self._finish(
                    query, OutcomeStatus.TIMED_OUT, start, resolved_timeout, interval,
                    history, value=last_value, terminal_error=terminal_error,
                )

            self._wait_for_interval(attempt_start, interval)

    def robustly(
        self,
        query: Query[T],
        *,
        timeout: Optional[float] = None,
        retry_interval: Optional[float] = None,
        policy: Optional[ClassificationPolicy] = None,
    ) -> T:
        """
        Execute `query` and return its value, raising on failure.

        Raises:
            Exception: The fatal error raised by an attempt
            ExpectedResultNotFoundError: Timed out while values never matched
            RetryTimeoutError: Timed out while attempts kept raising
        """
        outcome = self.execute(
            query, timeout=timeout, retry_interval=retry_interval, policy=policy
        )
        return outcome.result()

    def try_until(
        self,
        action: Callable[[], Any],
        until: PredicateQuery,
        *,
        overall_timeout: float,
        retry_interval: Optional[float] = None,
        policy: Optional[ClassificationPolicy] = None,
    ) -> Outcome[bool]:
        """
        Repeat `action` until the `until` predicate holds.

        Each round runs the action once, then executes `until` with its own
        timeout. Rounds repeat until `until` succeeds or `overall_timeout`
        has elapsed. Errors raised by the action are classified like query
        errors; a fatal error, or a fatal outcome of `until`, ends the loop.

        Args:
            action: Side-effecting callable (e.g. a click)
            until: Predicate describing the required state
            overall_timeout: Budget for all rounds together (seconds)
            retry_interval: Minimum spacing between round starts (defaults to
                the until query's interval, then the configured default)
            policy: Override for the executor's classification policy

        Returns:
            Outcome whose attempts count rounds; timed-out outcomes carry a
            TryUntilTimeoutError unless the last round's action raised
        """
        if overall_timeout < 0:
            raise ValueError(f"overall_timeout must be >= 0, got {overall_timeout}")
        _, interval = self.resolve_timing(until, None, retry_interval)
        active_policy = policy or self.policy
        name = f"try_until({until.name})"
        log = logger.bind(query=name, timeout=overall_timeout, retry_interval=interval)

        start = self.clock()
        history: list[AttemptRecord] = []
        last_value: Any = NO_VALUE
        last_error: Optional[BaseException] = None

        while True:
            number = len(history) + 1
            round_start = self.clock()

            try:
                action()
            except Exception as e:
                finished = self.clock()
                if active_policy.classify(e) == Classification.FATAL:
                    history.append(
                        self._record(None, number, start, round_start, finished,
                                     AttemptStatus.FATAL_ERROR, error=e)
                    )
                    log.error("Action raised fatal error, aborting", round=number,
                              error_type=type(e).__name__, error=str(e))
                    return self._finish(
                        until, OutcomeStatus.FAILED, start, overall_timeout, interval,
                        history, value=last_value, terminal_error=e, name=name,
                    )
                last_error = e
                history.append(
                    self._record(None, number, start, round_start, finished,
                                 AttemptStatus.RETRYABLE_ERROR, error=e)
                )
                log.debug("Action raised retryable error", round=number, error_type=type(e).__name__)
            else:
                check = self.execute(until, policy=active_policy)
                finished = self.clock()

                if check.succeeded:
                    history.append(
                        self._record(None, number, start, round_start, finished,
                                     AttemptStatus.MATCHED, value=check.value)
                    )
                    return self._finish(
                        until, OutcomeStatus.SUCCEEDED, start, overall_timeout, interval,
                        history, value=check.value, name=name,
                    )

                if check.status == OutcomeStatus.FAILED:
                    history.append(
                        self._record(None, number, start, round_start, finished,
                                     AttemptStatus.FATAL_ERROR, error=check.terminal_error)
                    )
                    return self._finish(
                        until, OutcomeStatus.FAILED, start, overall_timeout, interval,
                        history, value=last_value, terminal_error=check.terminal_error, name=name,
                    )

                if check.has_value:
                    last_value = check.value
                last_error = None
                history.append(
                    self._record(None, number, start, round_start, finished,
                                 AttemptStatus.MISMATCHED, value=check.value)
                )
                log.debug("Required state not reached yet", round=number,
                          until_attempts=check.attempts)

            elapsed = self.clock() - start
            if elapsed >= overall_timeout:
                if last_error is not None:
                    terminal_error: BaseException = last_error
                else:
                    terminal_error = TryUntilTimeoutError(
                        query_name=name,
                        attempts=len(history),
                        elapsed=elapsed,
                        timeout=overall_timeout,
                        expected=until.expected_result,
                        last_value=last_value,
                    )
                return self._finish(
                    until, OutcomeStatus.TIMED_OUT, start, overall_timeout, interval,
                    history, value=last_value, terminal_error=terminal_error, name=name,
                )

            self._wait_for_interval(round_start, interval)

    def _wait_for_interval(self, attempt_start: float, interval: float) -> None:
        """Block until `interval` has passed since `attempt_start`."""
        remaining = (attempt_start + interval) - self.clock()
        if remaining > 0:
            self.sleep(remaining)

    def _record(
        self,
        query: Optional[Query[Any]],
        number: int,
        start: float,
        attempt_start: float,
        finished: float,
        status: AttemptStatus,
        value: Any = NO_VALUE,
        error: Optional[BaseException] = None,
    ) -> AttemptRecord:
        if query is not None and self.settings.METRICS_ENABLED:
            query_attempts_total.labels(query=query.name, result=status.value).inc()
        return AttemptRecord(
            number=number,
            started_at=attempt_start - start,
            finished_at=finished - start,
            status=status,
            value=value,
            error=error,
        )

    def _finish(
        self,
        query: Query[Any],
        status: OutcomeStatus,
        start: float,
        timeout: float,
        interval: float,
        history: list[AttemptRecord],
        value: Any = NO_VALUE,
        terminal_error: Optional[BaseException] = None,
        name: Optional[str] = None,
    ) -> Outcome[Any]:
        elapsed = max(0.0, self.clock() - start)
        query_name = name or query.name

        outcome: Outcome[Any] = Outcome(
            status=status,
            attempts=len(history),
            elapsed=elapsed,
            timeout=timeout,
            retry_interval=interval,
            value=value,
            terminal_error=terminal_error,
            expected_result=query.expected_result,
            query_name=query_name,
            history=tuple(history),
        )

        if isinstance(terminal_error, RetryTimeoutError) and terminal_error.outcome is None:
            terminal_error.outcome = outcome

        if self.settings.METRICS_ENABLED:
            query_outcomes_total.labels(query=query_name, status=status.value).inc()
            query_execution_seconds.labels(query=query_name).observe(elapsed)

        if status == OutcomeStatus.SUCCEEDED:
            logger.info(
                "Query succeeded",
                query=query_name,
                attempts=outcome.attempts,
                elapsed_s=round(elapsed, 4),
            )
        elif status == OutcomeStatus.TIMED_OUT:
            logger.warning(
                "Query timed out",
                query=query_name,
                attempts=outcome.attempts,
                elapsed_s=round(elapsed, 4),
                timeout_s=timeout,
                last_value=repr(value) if value is not NO_VALUE else None,
                error_type=type(terminal_error).__name__,
            )

        return outcome
