"""Exponential backoff retry for optimistic-concurrency conflicts.

Domain ніколи не retry-ить сам. Application layer може повторити весь
use case (reload → mutate → update) обмежену кількість разів, якщо
інша транзакція встигла змінити listing між load і update.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Type, TypeVar

from marketplace.domain.shared import ConcurrencyException

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 0.05,
    max_delay: float = 1.0,
    exponential_base: float = 2.0,
    retryable_exceptions: tuple[Type[Exception], ...] = (ConcurrencyException,),
) -> T:
    """Run `operation`, retrying on retryable exceptions with exponential backoff.

    Args:
        operation: Zero-arg coroutine factory (кожна спроба - новий coroutine).
        max_retries: Скільки разів повторити після першої спроби.
        base_delay: Базова затримка в секундах.
        max_delay: Максимальна затримка в секундах.
        exponential_base: База для exponential backoff.
        retryable_exceptions: Tuple exceptions які можна retry.

    Returns:
        Result of the first successful attempt.

    Raises:
        The last retryable exception once attempts are exhausted; any other
        exception immediately.

    Example:
        >>> # Перша спроба fails → wait 0.05s
        >>> # Друга спроба fails → wait 0.1s
        >>> # Третя спроба fails → wait 0.2s
        >>> # Четверта спроба fails → raise ListingConcurrencyError
    """
    name = getattr(operation, "__name__", repr(operation))

    for attempt in range(max_retries + 1):
        try:
            result = await operation()
        except retryable_exceptions as e:
            if attempt >= max_retries:
                logger.error(
                    "retry.exhausted",
                    extra={
                        "function": name,
                        "total_attempts": max_retries + 1,
                        "error": str(e),
                    },
                )
                raise

            delay = min(base_delay * (exponential_base**attempt), max_delay)
            logger.warning(
                "retry.attempt",
                extra={
                    "function": name,
                    "attempt": attempt + 1,
                    "max_retries": max_retries,
                    "delay_seconds": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)
        else:
            if attempt > 0:
                logger.info(
                    "retry.success",
                    extra={
                        "function": name,
                        "attempt": attempt + 1,
                        "total_attempts": max_retries + 1,
                    },
                )
            return result

    raise RuntimeError("Retry logic error: no attempt was made")

