"""
Bounded-retry execution of queries.

Main Components:
    - RetryExecutor: Drives a query until match, fatal error, or timeout
    - ClassificationPolicy: Decides which error kinds are retried
    - Outcome / AttemptRecord: Terminal result plus per-attempt diagnostics
    - RetryTimeoutError / ExpectedResultNotFoundError: Timeout terminal errors

Usage:
    >>> from robust_query.retry import RetryExecutor
    >>> executor = RetryExecutor(settings)
    >>> outcome = executor.execute(query)
    >>> value = outcome.result()
"""

from robust_query.retry.classification import ClassificationPolicy
from robust_query.retry.engine import RetryExecutor
from robust_query.retry.exceptions import (
    ExpectedResultNotFoundError,
    RetryTimeoutError,
    TryUntilTimeoutError,
)
from robust_query.retry.outcome import NO_VALUE, AttemptRecord, Outcome

__all__ = [
    "AttemptRecord",
    "ClassificationPolicy",
    "ExpectedResultNotFoundError",
    "NO_VALUE",
    "Outcome",
    "RetryExecutor",
    "RetryTimeoutError",
    "TryUntilTimeoutError",
]
