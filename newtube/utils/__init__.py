"""Utility modules for the NewTube application."""

from newtube.utils.logging import LogContext, get_logger, setup_logging
from newtube.utils.pagination import Cursor, decode_cursor, encode_cursor, keyset_predicate, paginate
from newtube.utils.rate_limiter import RateLimitResult, SlidingWindowRateLimiter, rate_limiter
from newtube.utils.retry import RetryConfig, retry_async
from newtube.utils.signatures import WebhookVerificationError, verify_mux, verify_svix

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Pagination
    "Cursor",
    "decode_cursor",
    "encode_cursor",
    "keyset_predicate",
    "paginate",
    # Rate limiting
    "rate_limiter",
    "RateLimitResult",
    "SlidingWindowRateLimiter",
    # Retry
    "retry_async",
    "RetryConfig",
    # Webhook signatures
    "verify_mux",
    "verify_svix",
    "WebhookVerificationError",
]
