"""Text-completion service client wrapper."""

import logging
from typing import Protocol

import openai
from openai import AsyncOpenAI

from flowstate.config import CompletionConfig
from flowstate.exceptions import RateLimitError, UpstreamError

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("too many requests", "rate limit")


def is_rate_limit_message(message: str | None) -> bool:
    """Whether an upstream error message describes a rate limit."""
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in _RATE_LIMIT_MARKERS)


class CompletionProtocol(Protocol):
    """Protocol for text-completion services.

    Implementations raise RateLimitError for rate limiting and UpstreamError
    for any other failure, so callers can tell the two apart.
    """

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the completion text for a system + user prompt."""
        ...


class CompletionClient:
    """Production completion client for OpenAI-compatible chat APIs.

    Wraps AsyncOpenAI with consistent error mapping. The SDK's own retries are
    disabled: rate-limit back-off is the caller's retry policy's job.
    Implements CompletionProtocol.
    """

    def __init__(
        self,
        config: CompletionConfig,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Completion service configuration.
            client: Optional preconfigured AsyncOpenAI instance.
        """
        self._config = config
        if client is not None:
            self._client: AsyncOpenAI | None = client
        elif config.api_key:
            self._client = AsyncOpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                max_retries=0,
            )
        else:
            logger.warning("No completion API key configured")
            self._client = None

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Request one chat completion.

        Returns:
            The first choice's text, or "" if the model returned nothing.

        Raises:
            RateLimitError: If the service is rate limiting us.
            UpstreamError: If the service is unconfigured, unreachable or failing.
        """
        if self._client is None:
            raise UpstreamError("Completion service API key is not configured")

        logger.debug(
            "Requesting completion from %s (temperature=%s, max_tokens=%d)",
            self._config.model,
            temperature,
            max_tokens,
        )
        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.RateLimitError as e:
            raise RateLimitError(f"Completion rate limited: {e}", status=429) from e
        except openai.APIStatusError as e:
            if e.status_code == 429 or is_rate_limit_message(e.message):
                raise RateLimitError(
                    f"Completion rate limited: {e}", status=e.status_code
                ) from e
            raise UpstreamError(
                f"Completion request failed: {e}", status=e.status_code
            ) from e
        except openai.APIError as e:
            if is_rate_limit_message(e.message):
                raise RateLimitError(f"Completion rate limited: {e}") from e
            raise UpstreamError(f"Completion request failed: {e}") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
