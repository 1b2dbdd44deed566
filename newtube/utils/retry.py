"""Retry utilities with exponential backoff for external API calls."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from newtube.errors import UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 2
    base_delay: float = 0.5  # seconds
    max_delay: float = 5.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        ConnectionError,
        TimeoutError,
    )
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)


DEFAULT_RETRY_CONFIG = RetryConfig()


def _backoff(config: RetryConfig, attempt: int) -> float:
    return min(config.base_delay * (config.exponential_base**attempt), config.max_delay)


async def retry_async(
    func: Callable[..., Awaitable[httpx.Response]],
    *args: Any,
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    operation_name: str = "operation",
    **kwargs: Any,
) -> httpx.Response:
    """Execute an HTTP call with retry logic and exponential backoff.

    Non-retryable error statuses are returned to the caller unchanged.

    Raises:
        UpstreamServiceError: If every attempt failed
    """
    for attempt in range(config.max_retries + 1):
        last_attempt = attempt == config.max_retries
        try:
            response = await func(*args, **kwargs)
        except config.retryable_exceptions as e:
            if last_attempt:
                logger.error(f"{operation_name}: Failed after {attempt + 1} attempts: {e}")
                raise UpstreamServiceError(operation_name, str(e)) from e
            delay = _backoff(config, attempt)
            logger.warning(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
            )
            await asyncio.sleep(delay)
            continue

        if response.status_code not in config.retryable_status_codes:
            return response

        if last_attempt:
            logger.error(
                f"{operation_name}: Failed after {attempt + 1} attempts "
                f"with status {response.status_code}"
            )
            raise UpstreamServiceError(operation_name, f"status {response.status_code}")

        delay = _backoff(config, attempt)
        logger.warning(
            f"{operation_name}: Got status {response.status_code}, "
            f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
        )
        await asyncio.sleep(delay)

    raise UpstreamServiceError(operation_name, "no attempts made")
