"""
Middleware modules for the TrackProfit server.

This package contains the request timing/tracing middleware and the API rate
limit middleware.
"""

from .logfire_middleware import LogfireMiddleware
from .rate_limit_middleware import RateLimitMiddleware

__all__ = ["LogfireMiddleware", "RateLimitMiddleware"]
