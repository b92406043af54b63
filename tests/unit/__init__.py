"""
Unit tests for robust query execution.

Tests individual components in isolation against a fake clock:
- Query abstraction and typed errors
- Classification policy
- Retry executor (execute, robustly, try_until)
- Outcome diagnostics
"""
