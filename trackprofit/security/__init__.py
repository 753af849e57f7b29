"""
Request security helpers: rate limiting, CSRF tokens, input sanitization and
security event logging.
"""

from .csrf import CSRFProtection, csrf_protection
from .rate_limiter import (
    API_RATE_LIMIT,
    DEFAULT_RATE_LIMIT,
    FILE_UPLOAD_RATE_LIMIT,
    LOGIN_RATE_LIMIT,
    RateLimitConfig,
    RateLimiter,
    RateLimitResult,
    rate_limiter,
)
from .sanitizers import generate_nonce, sanitize_file_name, sanitize_html, sanitize_input
from .security_logger import drain_pending_events, log_security_event, pending_event_count, requeue_events

__all__ = [
    "API_RATE_LIMIT",
    "CSRFProtection",
    "DEFAULT_RATE_LIMIT",
    "FILE_UPLOAD_RATE_LIMIT",
    "LOGIN_RATE_LIMIT",
    "RateLimitConfig",
    "RateLimitResult",
    "RateLimiter",
    "csrf_protection",
    "drain_pending_events",
    "generate_nonce",
    "log_security_event",
    "pending_event_count",
    "rate_limiter",
    "requeue_events",
    "sanitize_file_name",
    "sanitize_html",
    "sanitize_input",
]
