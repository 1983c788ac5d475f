"""Language-model song suggestion service."""

import logging

from flowstate.client import CompletionProtocol
from flowstate.config import CompletionConfig
from flowstate.exceptions import FormatError, UpstreamError
from flowstate.lib.parsing import parse_suggestions
from flowstate.models.domain import SongSuggestion
from flowstate.services.retry import RetryPolicy

logger = logging.getLogger(__name__)

SUGGEST_SYSTEM_PROMPT = """You are a music expert creating personalized playlists.
Given a user's request, suggest {count} specific, real songs that match the mood, genre, or theme.

IMPORTANT:
- Only suggest REAL songs that actually exist
- Include exact artist name and song title
- Match the vibe/mood of the request
- Vary the artists for diversity
- Return ONLY a JSON array of objects with "title" and "artist" fields
- No additional text or explanation

Example output format:
[{{"title": "Blinding Lights", "artist": "The Weeknd"}}, {{"title": "Levitating", "artist": "Dua Lipa"}}]"""


class SuggestionGenerator:
    """Asks the completion service for songs matching a prompt.

    Fails closed: an unreachable service or an unparseable answer raises,
    because there is nothing sensible to build a playlist from otherwise.
    """

    def __init__(
        self,
        client: CompletionProtocol,
        config: CompletionConfig | None = None,
        retry: RetryPolicy | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Completion service client.
            config: Sampling settings. Uses defaults if not provided.
            retry: Rate-limit retry policy. Uses defaults if not provided.
        """
        self._client = client
        self._config = config or CompletionConfig()
        self._retry = retry or RetryPolicy()

    async def suggest(self, prompt: str, count: int) -> list[SongSuggestion]:
        """Get up to ``count`` song suggestions for ``prompt``.

        Makes exactly one completion call (plus rate-limit retries).

        Args:
            prompt: Free-text mood/activity prompt.
            count: Maximum number of suggestions to return.

        Returns:
            Between 0 and ``count`` suggestions, in the model's order.

        Raises:
            ValueError: If prompt is empty or count is not positive.
            UpstreamError: If the completion service fails or stays rate limited.
            FormatError: If no suggestion list can be parsed from the answer.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt cannot be empty")
        if count < 1:
            raise ValueError("count must be positive")

        system_prompt = SUGGEST_SYSTEM_PROMPT.format(count=count)
        logger.info("Requesting %d suggestions for: %s", count, prompt)

        try:
            text = await self._retry.run(
                lambda: self._client.complete(
                    system_prompt,
                    prompt,
                    temperature=self._config.suggest_temperature,
                    max_tokens=self._config.suggest_max_tokens,
                )
            )
        except UpstreamError as e:
            logger.error("Suggestion request failed: %s", e)
            raise

        try:
            suggestions = parse_suggestions(text, count)
        except FormatError:
            logger.error("Could not parse suggestions from: %.200s", text)
            raise

        logger.info("Got %d suggestions", len(suggestions))
        return suggestions
