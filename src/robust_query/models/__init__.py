"""
Data models for robust query execution.

Includes:
- Enums (ErrorKind, Classification, OutcomeStatus, AttemptStatus)
- Options (frozen pydantic model for per-query timeout and retry interval)
"""

from robust_query.models.enums import (
    AttemptStatus,
    Classification,
    ErrorKind,
    OutcomeStatus,
)
from robust_query.models.options import Options

__all__ = [
    "AttemptStatus",
    "Classification",
    "ErrorKind",
    "Options",
    "OutcomeStatus",
]
