"""Bounded fixed-delay retry for async operations."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY = 1.0  # seconds


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    name: str | None = None,
) -> T:
    """
    Run an async operation, retrying on failure with a fixed delay.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        max_attempts: Total number of attempts (>= 1)
        delay: Seconds to wait between attempts, constant
        retry_on: Exception types that trigger another attempt
        name: Label used in log messages

    Returns:
        The operation's result from the first successful attempt

    Raises:
        The exception from the last attempt, unchanged. Exceptions that are
        not instances of ``retry_on`` propagate immediately.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    label = name or getattr(operation, "__name__", "operation")

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except retry_on as e:
            if attempt == max_attempts:
                logger.error(f"{label} failed after {max_attempts} attempts: {e}")
                raise
            logger.warning(
                f"{label} failed (attempt {attempt}/{max_attempts}): {e}; "
                f"retrying in {delay}s"
            )
            await asyncio.sleep(delay)

    raise AssertionError("unreachable")
