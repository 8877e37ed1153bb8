"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, retry

__all__ = ["DEFAULT_RETRY_POLICY", "RetryPolicy", "retry"]
