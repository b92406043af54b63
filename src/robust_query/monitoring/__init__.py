"""Monitoring and metrics instrumentation for robust query execution.

Exports custom Prometheus metrics for attempt and outcome tracking.
"""

from robust_query.monitoring.metrics import (
    query_attempts_total,
    query_execution_seconds,
    query_outcomes_total,
)

__all__ = [
    "query_attempts_total",
    "query_outcomes_total",
    "query_execution_seconds",
]
