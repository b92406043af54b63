"""
Typed errors raised by query attempts.

Every error carries an ErrorKind tag so the classification policy can decide
retry/no-retry without inspecting exception classes. Producers of queries
(driver bindings, page lookups) raise these instead of their own exceptions.
"""

from typing import Any

from robust_query.models.enums import ErrorKind


class QueryError(Exception):
    """
    Base exception for all errors raised by a query attempt.

    Subclasses fix the kind; the base class accepts any kind so a producer
    can tag an error explicitly.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        kind: ErrorKind | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MissingElementError(QueryError):
    """
    Raised when the element a query looks for is not (yet) present.

    The most common transient condition: the page has not finished rendering.
    """

    kind = ErrorKind.ELEMENT_NOT_FOUND

    def __init__(self, message: str, locator: str | None = None):
        details = {}
        if locator:
            details["locator"] = locator
        super().__init__(message, details)


class StaleElementError(QueryError):
    """Raised when a previously found element has been detached from the DOM."""

    kind = ErrorKind.STALE_ELEMENT


class MissingWindowError(QueryError):
    """Raised when the window or frame a query targets is not open."""

    kind = ErrorKind.WINDOW_NOT_FOUND

    def __init__(self, message: str, locator: str | None = None):
        details = {}
        if locator:
            details["locator"] = locator
        super().__init__(message, details)


class AmbiguousMatchError(QueryError):
    """
    Raised when a locator matches more than one element.

    Fatal by default: ambiguity usually means the locator is wrong, not that
    the page is still loading.
    """

    kind = ErrorKind.AMBIGUOUS_MATCH

    def __init__(self, message: str, locator: str | None = None, match_count: int | None = None):
        details: dict[str, Any] = {}
        if locator:
            details["locator"] = locator
        if match_count is not None:
            details["match_count"] = match_count
        super().__init__(message, details)


class TransientQueryError(QueryError):
    """Generic transient failure (connection hiccup, element not interactable yet)."""

    kind = ErrorKind.TRANSIENT


class QueryNotSupportedError(QueryError):
    """
    Raised when the underlying driver cannot perform the query at all.

    Never retryable: no amount of waiting makes an unsupported operation work.
    """

    kind = ErrorKind.NOT_SUPPORTED


def error_kind(error: BaseException) -> ErrorKind:
    """Return the kind tag of an error, or UNKNOWN for untagged errors."""
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind
    return ErrorKind.UNKNOWN
