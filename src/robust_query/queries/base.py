"""
Abstract query contract.

Defines the interface the retry executor is written against. A query is a
thing that can be tried repeatedly and that knows what success looks like
and how long it may keep trying. Two variants share one contract:

- Query[T]: produces a typed value
- PredicateQuery: produces a boolean (Query[bool] specialisation)

Queries are stateless with respect to retrying: attempt counts and timing
live in the executor's loop and are reported back on the Outcome.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from robust_query.models.options import Options

T = TypeVar("T")


class _AnyResult:
    """Sentinel type for "any non-raising return counts as success"."""

    _instance: Optional["_AnyResult"] = None

    def __new__(cls) -> "_AnyResult":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY_RESULT"


ANY_RESULT: Any = _AnyResult()


class Query(ABC, Generic[T]):
    """
    Abstract base class for value-producing queries.

    Subclasses implement `run()`. Each call may contact an external system
    and may raise; the executor decides whether a raised error is retried.

    Responsibilities:
    - Produce a candidate result per attempt
    - Declare the expected result (or ANY_RESULT)
    - Carry optional timing options

    Does NOT handle:
    - Counting attempts or measuring time (that's RetryExecutor's job)
    - Deciding whether an error is retryable (that's ClassificationPolicy's job)
    """

    def __init__(self, options: Optional[Options] = None, expected_result: Any = ANY_RESULT):
        self.options = options or Options()
        self._expected_result = expected_result

    @abstractmethod
    def run(self) -> T:
        """
        Produce a result, or raise.

        Raises:
            QueryError: Tagged error the classification policy can inspect
        """
        ...

    def attempt(self) -> T:
        """Single attempt as seen by the executor."""
        return self.run()

    @property
    def expected_result(self) -> Any:
        return self._expected_result

    @property
    def has_expectation(self) -> bool:
        return self._expected_result is not ANY_RESULT

    def is_success(self, value: Any) -> bool:
        """True when `value` satisfies the expectation (value equality)."""
        if not self.has_expectation:
            return True
        return bool(value == self._expected_result)

    @property
    def timeout(self) -> Optional[float]:
        return self.options.timeout

    @property
    def retry_interval(self) -> Optional[float]:
        return self.options.retry_interval

    @property
    def name(self) -> str:
        """Label used in logs and metrics."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return (
            f"{self.name}(expected_result={self._expected_result!r}, "
            f"timeout={self.timeout!r}, retry_interval={self.retry_interval!r})"
        )


class PredicateQuery(Query[bool]):
    """
    Boolean query: success means `predicate()` equals the expected boolean.

    The expected result defaults to True; pass expected_result=False to wait
    for a condition to stop holding (e.g. an element to disappear).
    """

    def __init__(self, options: Optional[Options] = None, expected_result: bool = True):
        super().__init__(options=options, expected_result=expected_result)

    @abstractmethod
    def predicate(self) -> bool:
        ...

    def run(self) -> bool:
        return self.predicate()
