"""
Test doubles for robust query execution.

Contains:
- clock.py: FakeClock, a deterministic monotonic clock with a recording sleep
- queries.py: Query doubles (always succeeds, throws then succeeds, always
  throws, predicate variants) that record when each call happened
"""
