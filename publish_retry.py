"""Fixed-delay retry for publish attempts."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Type, TypeVar

from config import PUBLISH_MAX_ATTEMPTS, PUBLISH_RETRY_DELAY

logger = logging.getLogger("Retry")

T = TypeVar("T")
SleepFunc = Callable[[float], Awaitable[None]]


@dataclass
class RetryConfig:
    """Configuration for retry behavior. Delay is in seconds."""
    max_attempts: int = PUBLISH_MAX_ATTEMPTS
    delay: float = PUBLISH_RETRY_DELAY
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,)


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""

    def __init__(self, attempts: int, last_error: Exception, errors: List[Exception]) -> None:
        self.attempts = attempts
        self.last_error = last_error
        self.errors = errors
        super().__init__(f"Failed after {attempts} attempts: {last_error}")


async def retry_async(
    func: Callable[..., Awaitable[T]],
    config: Optional[RetryConfig] = None,
    sleep_func: Optional[SleepFunc] = None,
    *args: Any,
    **kwargs: Any,
) -> T:
    """Await func, retrying with a fixed delay between attempts.

    Raises:
        RetryError: If every attempt fails.
    """
    cfg = config or RetryConfig()
    do_sleep = sleep_func or asyncio.sleep
    max_attempts = max(1, cfg.max_attempts)
    errors: List[Exception] = []

    for attempt in range(1, max_attempts + 1):
        try:
            return await func(*args, **kwargs)
        except cfg.retryable_exceptions as exc:
            errors.append(exc)
            logger.warning("Attempt %d/%d failed: %s", attempt, max_attempts, str(exc))

        if attempt < max_attempts:
            logger.info("Retrying in %.1f seconds...", cfg.delay)
            await do_sleep(cfg.delay)

    raise RetryError(max_attempts, errors[-1], errors)
