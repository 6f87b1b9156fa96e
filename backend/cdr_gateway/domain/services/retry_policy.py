"""
Retry Policy
Fixed-delay retry for flaky backend lookups
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _always_retryable(error: Exception) -> bool:
    return True


class RetryPolicy:
    """
    Runs an async operation up to ``max_attempts`` times.

    The delay between attempts is constant (no exponential backoff) and the
    caller's request is held for the whole sequence. The error from the last
    attempt is re-raised once attempts run out, or immediately when
    ``is_retryable`` says the error is permanent.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 1.0,
        is_retryable: Optional[Callable[[Exception], bool]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")

        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.is_retryable = is_retryable or _always_retryable
        self._sleep = sleep or asyncio.sleep

    async def run(self, operation: Callable[[], Awaitable[T]], description: str = "operation") -> T:
        """
        Call ``operation`` until it succeeds or attempts are exhausted.

        Args:
            operation: Zero-argument coroutine factory, called once per attempt
            description: Label used in log lines

        Returns:
            The first successful result

        Raises:
            Exception: The last error raised by ``operation``
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                if not self.is_retryable(e):
                    logger.warning(f"{description} failed with non-retryable error: {e}")
                    raise

                if attempt >= self.max_attempts:
                    logger.error(f"{description} failed after {attempt} attempts: {e}")
                    raise

                logger.warning(
                    f"{description} attempt {attempt}/{self.max_attempts} failed: {e}; "
                    f"retrying in {self.delay_seconds:.2f}s"
                )
                await self._sleep(self.delay_seconds)

        # max_attempts >= 1, so the loop always returns or raises
        raise RuntimeError(f"{description}: retry loop exited without a result")
