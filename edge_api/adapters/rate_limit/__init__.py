"""Rate limiting adapters.

This package provides a small abstraction layer over the counting strategy.
The fixed-window limiter keeps its counters in any key-value store from
``edge_api.adapters.kv``.
"""

from edge_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from edge_api.adapters.rate_limit.fixed_window import KeyValueFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "KeyValueFixedWindowRateLimiter",
    "RateLimitResult",
]
