"""Custom Prometheus metrics for robust query execution.

Exposed through the default prometheus_client registry; the host process
decides how to serve them. Useful alert signals:
- query_outcomes_total{status="timed_out"} (queries routinely hitting their timeout)
- query_outcomes_total{status="failed"} (fatal errors, usually bugs or broken locators)
- query_attempts_total{result="retryable_error"} (flaky page state)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

query_attempts_total = Counter(
    "query_attempts_total",
    "Total query attempts by query and attempt result",
    ["query", "result"],
)
"""
Attempt counter by query label and attempt result.

Labels:
- query: Query name (class name or wrapped function name)
- result: matched, mismatched, retryable_error, fatal_error
"""

# === Outcome Metrics ===

query_outcomes_total = Counter(
    "query_outcomes_total",
    "Total query executions by query and terminal status",
    ["query", "status"],
)
"""
Execution counter by terminal status.

Labels:
- query: Query name
- status: succeeded, failed, timed_out
"""

query_execution_seconds = Histogram(
    "query_execution_seconds",
    "Wall-clock duration of a query execution including retries",
    ["query"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
"""
Execution duration histogram.

Buckets are tuned for DOM polling: most checks settle well under a second,
timeouts are typically a few seconds.
"""
