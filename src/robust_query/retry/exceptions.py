"""
Retry executor terminal errors.

These are raised (via Outcome.result()) when an execution reaches its
deadline without success. Fatal errors are not wrapped: they surface as the
original exception the attempt raised.

All messages report the attempt count and elapsed time so a reader can tell
"timeout too short" apart from "operation is simply broken".
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from robust_query.retry.outcome import Outcome


class RetryTimeoutError(TimeoutError):
    """
    Raised when the deadline passes while attempts kept raising tolerated errors.

    It is chained (`raise ... from`) to the last retryable error, which is also
    exposed as `last_error`.

    Attributes:
        query_name: Label of the query that timed out
        attempts: Number of attempts made
        elapsed: Seconds from first attempt start to the final deadline check
        timeout: Timeout that applied to the execution
        last_error: Last tolerated error raised by an attempt (if any)
        outcome: The outcome this error was derived from (if any)
    """

    def __init__(
        self,
        query_name: str,
        attempts: int,
        elapsed: float,
        timeout: float,
        last_error: BaseException | None = None,
        outcome: "Outcome[Any] | None" = None,
    ) -> None:
        self.query_name = query_name
        self.attempts = attempts
        self.elapsed = elapsed
        self.timeout = timeout
        self.last_error = last_error
        self.outcome = outcome

        super().__init__(self._build_message())

    def _summary(self) -> str:
        return (
            f"{self.query_name} timed out after {self.attempts} attempt(s) "
            f"in {self.elapsed:.3f}s (timeout {self.timeout:.3f}s)"
        )

    def _build_message(self) -> str:
        if self.last_error is None:
            return self._summary()
        return f"{self._summary()}. Last error: {type(self.last_error).__name__}: {self.last_error}"


class ExpectedResultNotFoundError(RetryTimeoutError):
    """
    Raised when the deadline passes while the query kept returning the wrong value.

    No exception was involved in the final attempt; the last observed value
    is carried instead.

    Attributes:
        expected: Value the query was waiting for
        last_value: Value returned by the final attempt
    """

    def __init__(
        self,
        query_name: str,
        attempts: int,
        elapsed: float,
        timeout: float,
        expected: Any,
        last_value: Any,
        outcome: "Outcome[Any] | None" = None,
    ) -> None:
        self.expected = expected
        self.last_value = last_value
        super().__init__(
            query_name=query_name,
            attempts=attempts,
            elapsed=elapsed,
            timeout=timeout,
            last_error=None,
            outcome=outcome,
        )

    def _build_message(self) -> str:
        return (
            f"{self._summary()}. Expected {self.expected!r}, "
            f"last observed {self.last_value!r}"
        )


class TryUntilTimeoutError(ExpectedResultNotFoundError):
    """Raised when repeated actions never brought about the required state."""

    def _build_message(self) -> str:
        return (
            f"{self._summary()}. The required state was never reached "
            f"(expected {self.expected!r}, last observed {self.last_value!r})"
        )
