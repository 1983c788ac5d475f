"""Shared rate-limit retry policy for completion calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from flowstate.client import is_rate_limit_message
from flowstate.config import RetryConfig
from flowstate.exceptions import FlowstateError, RateLimitError, UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


def is_rate_limited(error: BaseException) -> bool:
    """Whether an error is a rate-limit signal worth retrying."""
    if isinstance(error, RateLimitError):
        return True
    if isinstance(error, UpstreamError) and error.status == 429:
        return True
    if not isinstance(error, FlowstateError):
        if getattr(error, "status_code", None) == 429:
            return True
    return is_rate_limit_message(str(error))


class RetryPolicy:
    """Retry an async operation with exponential back-off on rate limits.

    With the defaults, up to 5 attempts are made, waiting 0.5s, 1s, 2s and 4s
    between them. Any other error is raised immediately, and once attempts run
    out the last rate-limit error is raised.

    Example:
        >>> policy = RetryPolicy()
        >>> text = await policy.run(lambda: client.complete(system, user, ...))
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the policy.

        Args:
            config: Attempt count and initial delay. Uses defaults if not provided.
            sleep: Awaitable sleep function (injectable for tests).
        """
        self._config = config or RetryConfig()
        if self._config.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self._config.max_attempts

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (0-based)."""
        return self._config.initial_delay * (2**attempt)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation``, retrying while it is rate limited.

        Raises:
            Whatever ``operation`` last raised.
        """
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as e:
                attempt += 1
                if not is_rate_limited(e) or attempt >= self._config.max_attempts:
                    raise
                delay = self.delay_for(attempt - 1)
                logger.warning(
                    "Rate limited. Retrying in %.1fs (attempt %d/%d)",
                    delay,
                    attempt,
                    self._config.max_attempts,
                )
                await self._sleep(delay)
