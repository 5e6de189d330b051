# Request protection

from .rate_limit import RateLimitMiddleware, FixedWindowCounter

__all__ = ["RateLimitMiddleware", "FixedWindowCounter"]
