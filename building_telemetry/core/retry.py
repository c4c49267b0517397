"""Opt-in retry policy for callers of the portal client.

Nothing in the package retries on its own; wrap a call here when a caller
wants backoff on transient failures.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from .exceptions import ApiException

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0
RETRY_MAX_DELAY = 10.0


async def call_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    attempts: int = RETRY_MAX_ATTEMPTS,
    base_delay: float = RETRY_BASE_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    retry_on: Tuple[Type[BaseException], ...] = (ApiException,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await ``func`` until it succeeds, doubling the delay between attempts.

    Args:
        func: Zero-argument coroutine function to call
        attempts: Total number of attempts, at least 1
        base_delay: Delay before the second attempt, in seconds
        max_delay: Cap on the delay
        retry_on: Exception types that trigger another attempt
        sleep: Sleep coroutine, replaceable in tests

    Returns:
        The first successful result

    Raises:
        The last exception when every attempt failed, or any exception not
        listed in ``retry_on`` immediately
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    delay = base_delay
    for attempt in range(1, attempts + 1):
        try:
            return await func()
        except retry_on as exc:
            if attempt == attempts:
                _LOGGER.error(f"Giving up after {attempts} attempts: {type(exc).__name__}: {exc}")
                raise
            _LOGGER.warning(
                f"Attempt {attempt}/{attempts} failed: {type(exc).__name__}: {exc}. "
                f"Retrying in {delay:.1f}s..."
            )
            await sleep(delay)
            delay = min(delay * 2, max_delay)
    raise AssertionError("unreachable")
