"""
Integration tests for robust query execution.

Runs the executor against the real monotonic clock and real sleeps:
- Spacing between attempts
- Deadline bounds on total execution time
"""
