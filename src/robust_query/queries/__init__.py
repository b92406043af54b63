"""
Query abstraction consumed by the retry executor.

Main Components:
    - Query: Abstract value-producing query
    - PredicateQuery: Boolean specialisation (expected result defaults to True)
    - FunctionQuery / FunctionPredicateQuery: Wrap plain callables
    - ANY_RESULT: Sentinel meaning any non-raising return is success
"""

from robust_query.queries.base import ANY_RESULT, PredicateQuery, Query
from robust_query.queries.functional import FunctionPredicateQuery, FunctionQuery

__all__ = [
    "ANY_RESULT",
    "FunctionPredicateQuery",
    "FunctionQuery",
    "PredicateQuery",
    "Query",
]
