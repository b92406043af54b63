"""
Robust query execution for unreliable, latency-variable checks.

Turns an operation that may fail transiently (typically a lookup against a
live browser DOM) into a single synchronous call that either returns the
expected result or fails deterministically after a bounded time:
- Queries (value and predicate variants) with their own timeout/interval
- Classification of raised errors into retryable and fatal kinds
- A retry executor that owns all timing, sleeping and error aggregation
- Outcomes carrying attempt history for failure reporting

Usage:
    >>> from robust_query import FunctionQuery, RetryExecutor
    >>> executor = RetryExecutor()
    >>> outcome = executor.execute(FunctionQuery(lambda: page.title(), expected_result="Home"))
"""

from robust_query.logging_config import configure_logging
from robust_query.models.enums import (
    AttemptStatus,
    Classification,
    ErrorKind,
    OutcomeStatus,
)
from robust_query.models.options import Options
from robust_query.queries import (
    ANY_RESULT,
    FunctionPredicateQuery,
    FunctionQuery,
    PredicateQuery,
    Query,
)
from robust_query.queries.exceptions import (
    AmbiguousMatchError,
    MissingElementError,
    MissingWindowError,
    QueryError,
    QueryNotSupportedError,
    StaleElementError,
    TransientQueryError,
)
from robust_query.retry import (
    AttemptRecord,
    ClassificationPolicy,
    ExpectedResultNotFoundError,
    Outcome,
    RetryExecutor,
    RetryTimeoutError,
    TryUntilTimeoutError,
)

__version__ = "0.1.0"

__all__ = [
    "ANY_RESULT",
    "AmbiguousMatchError",
    "AttemptRecord",
    "AttemptStatus",
    "Classification",
    "ClassificationPolicy",
    "ErrorKind",
    "ExpectedResultNotFoundError",
    "FunctionPredicateQuery",
    "FunctionQuery",
    "MissingElementError",
    "MissingWindowError",
    "Options",
    "Outcome",
    "OutcomeStatus",
    "PredicateQuery",
    "Query",
    "QueryError",
    "QueryNotSupportedError",
    "RetryExecutor",
    "RetryTimeoutError",
    "StaleElementError",
    "TransientQueryError",
    "TryUntilTimeoutError",
    "configure_logging",
]
