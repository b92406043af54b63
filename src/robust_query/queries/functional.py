"""
Closure-based queries.

Wrap a zero-argument callable so callers do not need to subclass Query for
one-off checks.
"""

from typing import Any, Callable, Optional, TypeVar

from robust_query.models.options import Options
from robust_query.queries.base import ANY_RESULT, PredicateQuery, Query

T = TypeVar("T")


class FunctionQuery(Query[T]):
    """Value query backed by a callable."""

    def __init__(
        self,
        fn: Callable[[], T],
        expected_result: Any = ANY_RESULT,
        options: Optional[Options] = None,
        name: Optional[str] = None,
    ):
        super().__init__(options=options, expected_result=expected_result)
        self._fn = fn
        self._name = name

    def run(self) -> T:
        return self._fn()

    @property
    def name(self) -> str:
        return self._name or getattr(self._fn, "__name__", self.__class__.__name__)


class FunctionPredicateQuery(PredicateQuery):
    """Predicate query backed by a callable returning a boolean."""

    def __init__(
        self,
        fn: Callable[[], bool],
        expected_result: bool = True,
        options: Optional[Options] = None,
        name: Optional[str] = None,
    ):
        super().__init__(options=options, expected_result=expected_result)
        self._fn = fn
        self._name = name

    def predicate(self) -> bool:
        return bool(self._fn())

    @property
    def name(self) -> str:
        return self._name or getattr(self._fn, "__name__", self.__class__.__name__)
