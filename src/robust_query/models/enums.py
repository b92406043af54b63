"""
Enumerations for robust query execution.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Closed set of error kinds an attempt can raise.

    Classification matches on this tag, never on the exception class.
    UNKNOWN is assigned to any error that carries no tag (e.g. a TypeError
    from a bug in the query itself).
    """

    ELEMENT_NOT_FOUND = "element_not_found"
    STALE_ELEMENT = "stale_element"
    WINDOW_NOT_FOUND = "window_not_found"
    AMBIGUOUS_MATCH = "ambiguous_match"
    TRANSIENT = "transient"
    NOT_SUPPORTED = "not_supported"
    UNKNOWN = "unknown"


class Classification(str, Enum):
    """Decision taken for a raised error: swallow and retry, or abort."""

    RETRYABLE = "retryable"
    FATAL = "fatal"


class OutcomeStatus(str, Enum):
    """Terminal state of one execution."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class AttemptStatus(str, Enum):
    """How a single attempt ended."""

    MATCHED = "matched"
    MISMATCHED = "mismatched"
    RETRYABLE_ERROR = "retryable_error"
    FATAL_ERROR = "fatal_error"
