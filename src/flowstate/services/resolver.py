"""Multi-tier video resolution service."""

import logging
from collections.abc import Sequence

from flowstate.exceptions import AllProvidersExhaustedError, UpstreamError
from flowstate.lib.ranking import rank_by_audio_preference
from flowstate.models.domain import ResolvedVideo
from flowstate.providers.base import SearchProvider

logger = logging.getLogger(__name__)


class VideoResolver:
    """Resolves a search query against providers in fixed tier order.

    Pipeline Overview:
    ==================
    1. Ask the first tier. If it answers (even with zero results), that answer
       is final; only failures fall through.
    2. On failure, move to the next tier (the Piped mirrors, then Invidious).
    3. Re-rank answers from tiers flagged ``rerank`` so audio uploads come first.
    4. Truncate to ``max_results``.
    """

    def __init__(self, providers: Sequence[SearchProvider]) -> None:
        """Initialize the resolver.

        Args:
            providers: Search tiers in fallback order.
        """
        if not providers:
            raise ValueError("VideoResolver needs at least one provider")
        self._providers = tuple(providers)

    @property
    def providers(self) -> tuple[SearchProvider, ...]:
        return self._providers

    async def resolve(self, query: str, max_results: int) -> list[ResolvedVideo]:
        """Find up to ``max_results`` videos for ``query``.

        Args:
            query: Free-text search query.
            max_results: Maximum number of videos to return.

        Returns:
            Videos ordered by relevance, then audio preference.

        Raises:
            ValueError: If max_results is not positive.
            AllProvidersExhaustedError: If every tier failed.
        """
        if max_results < 1:
            raise ValueError("max_results must be positive")

        errors: dict[str, Exception] = {}
        for provider in self._providers:
            try:
                videos = await provider.search(query, max_results)
            except UpstreamError as e:
                logger.warning("Tier %s failed for '%s': %s", provider.name, query, e)
                errors[provider.name] = e
                continue

            if provider.rerank:
                videos = rank_by_audio_preference(videos)
            if errors:
                logger.info(
                    "Resolved '%s' via fallback tier %s", query, provider.name
                )
            return videos[:max_results]

        logger.warning("All providers failed for '%s'", query)
        raise AllProvidersExhaustedError(query, errors)
