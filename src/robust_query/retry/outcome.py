"""
Execution outcome and attempt diagnostics.

This module defines the frozen dataclasses handed back by the executor: one
AttemptRecord per attempt, and the Outcome that wraps the terminal state.
Nothing here has behaviour beyond carrying data and re-raising the terminal
error on request.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, cast

from robust_query.models.enums import AttemptStatus, OutcomeStatus
from robust_query.queries.base import ANY_RESULT
from robust_query.retry.exceptions import RetryTimeoutError

T = TypeVar("T")


class _NoValue:
    """Sentinel for "no attempt ever returned a value"."""

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __bool__(self) -> bool:
        return False


NO_VALUE: Any = _NoValue()


@dataclass(frozen=True)
class AttemptRecord:
    """
    Diagnostics for a single attempt.

    Offsets are seconds since the start of the execution, measured on the
    executor's monotonic clock.

    Attributes:
        number: 1-based attempt number
        started_at: Offset at which the attempt was invoked
        finished_at: Offset at which the attempt returned or raised
        status: How the attempt ended
        value: Returned value (NO_VALUE if the attempt raised)
        error: Raised error (None if the attempt returned)
    """

    number: int
    started_at: float
    finished_at: float
    status: AttemptStatus
    value: Any = NO_VALUE
    error: Optional[BaseException] = None

    @property
    def duration(self) -> float:
        return self.finished_at - self.started_at


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Terminal result of one execution.

    Attributes:
        status: SUCCEEDED, FAILED (fatal error) or TIMED_OUT
        attempts: Number of attempts made
        elapsed: Seconds from execution start to the terminal decision
        timeout: Timeout that applied (after resolving overrides/defaults)
        retry_interval: Retry interval that applied
        value: Matching value on success, otherwise the last observed value
        terminal_error: Fatal error, last retryable error, or an
            ExpectedResultNotFoundError for timeout-with-mismatch
        expected_result: What the query was waiting for
        query_name: Label of the query, for messages
        history: One AttemptRecord per attempt, in order
    """

    status: OutcomeStatus
    attempts: int
    elapsed: float
    timeout: float
    retry_interval: float
    value: Any = NO_VALUE
    terminal_error: Optional[BaseException] = None
    expected_result: Any = ANY_RESULT
    query_name: str = "query"
    history: tuple[AttemptRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate outcome invariants."""
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")

        if self.elapsed < 0:
            raise ValueError("elapsed must be >= 0")

        if len(self.history) != self.attempts:
            raise ValueError(
                f"history has {len(self.history)} records but attempts is {self.attempts}"
            )

        if self.status == OutcomeStatus.SUCCEEDED and self.terminal_error is not None:
            raise ValueError("a succeeded outcome cannot carry a terminal_error")

        if self.status != OutcomeStatus.SUCCEEDED and self.terminal_error is None:
            raise ValueError(f"a {self.status.value} outcome requires a terminal_error")

    @property
    def succeeded(self) -> bool:
        return self.status == OutcomeStatus.SUCCEEDED

    @property
    def timed_out(self) -> bool:
        return self.status == OutcomeStatus.TIMED_OUT

    @property
    def has_value(self) -> bool:
        return self.value is not NO_VALUE

    @property
    def last_error(self) -> Optional[BaseException]:
        """Most recent error raised by any attempt, even if later attempts returned."""
        for record in reversed(self.history):
            if record.error is not None:
                return record.error
        return None

    def result(self) -> T:
        """
        Return the success value, or raise the terminal error.

        Raises:
            Exception: The fatal error itself, for FAILED outcomes
            ExpectedResultNotFoundError: Timeout while values never matched
            RetryTimeoutError: Timeout while attempts kept raising, chained to
                the last retryable error
        """
        if self.succeeded:
            return self.value

        # __post_init__ guarantees a terminal error on every non-success outcome
        error = cast(BaseException, self.terminal_error)

        if self.status == OutcomeStatus.FAILED or isinstance(error, RetryTimeoutError):
            raise error

        raise RetryTimeoutError(
            query_name=self.query_name,
            attempts=self.attempts,
            elapsed=self.elapsed,
            timeout=self.timeout,
            last_error=error,
            outcome=self,
        ) from error

    def describe(self) -> str:
        """One-line human-readable summary for failure reports."""
        summary = (
            f"{self.query_name} {self.status.value} after {self.attempts} attempt(s) "
            f"in {self.elapsed:.3f}s (timeout {self.timeout:.3f}s, "
            f"interval {self.retry_interval:.3f}s)"
        )
        if self.has_value:
            summary += f"; last value {self.value!r}"
        if self.terminal_error is not None:
            summary += f"; {type(self.terminal_error).__name__}: {self.terminal_error}"
        return summary
