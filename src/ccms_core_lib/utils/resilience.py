"""Resilience utilities for CCMS backend calls.

Read requests are retried on transport failures (connection refused, read
timeouts, dropped connections). HTTP status errors are never retried: a 4xx
or 5xx answer is a real answer and goes straight back to the caller. Writes
are not wrapped at all so a create is never sent twice.
"""

import logging
from typing import Any, Callable, TypeVar

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_read_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 4,
    multiplier: float = 0.5,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Create a retry decorator for read requests with specific parameters.

    Args:
        max_attempts: Maximum number of attempts (1 disables retrying)
        min_wait: Minimum wait time between attempts (seconds)
        max_wait: Maximum wait time between attempts (seconds)
        multiplier: Exponential backoff multiplier

    Returns:
        A retry decorator that retries ``httpx.TransportError`` only

    Example:
        ```python
        fast_retry = create_read_retry(max_attempts=5, min_wait=0, max_wait=1)

        @fast_retry
        async def fetch_cases():
            ...
        ```
    """
    return retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def call_with_retry(
    policy: Callable[[Callable[..., T]], Callable[..., T]],
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> T:
    """Apply a retry policy to a single call without decorating the function."""
    return policy(func)(*args, **kwargs)
