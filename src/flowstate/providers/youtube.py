"""YouTube Data API v3 search provider (primary tier)."""

import logging
from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from flowstate.exceptions import UpstreamError
from flowstate.lib.parsing import parse_iso_duration
from flowstate.models.domain import ResolvedVideo
from flowstate.models.providers import (
    YouTubeSearchResponse,
    YouTubeSnippet,
    YouTubeVideoListResponse,
)
from flowstate.providers.base import fetch_json
from flowstate.providers.credentials import CredentialSelector, RandomCredentialSelector

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"

MUSIC_CATEGORY_ID = "10"

# search.list rejects maxResults above 50
_MAX_PAGE_SIZE = 50


def prefer_audio_query(query: str) -> str:
    """Append "audio" unless the query already asks for audio or official uploads."""
    lowered = query.lower()
    if "audio" in lowered or "official" in lowered:
        return query
    return f"{query} audio"


class YouTubeDataProvider:
    """Primary search tier backed by the official YouTube Data API.

    Each search costs two calls: search.list for candidates (twice the
    requested count, music category only) and videos.list for durations.
    Failures are never retried here; the resolver falls through to the
    next tier instead.
    Implements SearchProvider.
    """

    name = "youtube"
    rerank = True

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_keys: Sequence[str],
        *,
        selector: CredentialSelector | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the provider.

        Args:
            http: Shared async HTTP client.
            api_keys: YouTube Data API keys. May be empty, which fails every call.
            selector: Strategy choosing a key per call. Random by default.
            timeout: Per-request timeout in seconds.
        """
        self._http = http
        self._api_keys = tuple(api_keys)
        self._selector = selector or RandomCredentialSelector()
        self._timeout = timeout

    async def search(self, query: str, max_results: int) -> list[ResolvedVideo]:
        """Search YouTube for music videos matching ``query``.

        Returns:
            Up to ``2 * max_results`` matches in YouTube relevance order. An
            empty list means YouTube answered but found nothing.

        Raises:
            UpstreamError: If no key is configured or either API call fails.
        """
        if not self._api_keys:
            raise UpstreamError("No YouTube API keys configured")

        api_key = self._selector.select(self._api_keys)
        logger.debug(
            "Using API key %d of %d",
            self._api_keys.index(api_key) + 1,
            len(self._api_keys),
        )

        audio_query = prefer_audio_query(query)
        logger.debug("Searching YouTube for: %s", audio_query)

        payload = await fetch_json(
            self._http,
            SEARCH_URL,
            params={
                "part": "snippet",
                "q": audio_query,
                "type": "video",
                "maxResults": str(min(max_results * 2, _MAX_PAGE_SIZE)),
                "videoEmbeddable": "true",
                "videoCategoryId": MUSIC_CATEGORY_ID,
                "key": api_key,
            },
            timeout=self._timeout,
            provider="YouTube search",
        )
        try:
            search = YouTubeSearchResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError(f"Unexpected YouTube search response: {e}") from e

        video_ids = search.video_ids
        if not video_ids:
            logger.debug("No YouTube results for: %s", audio_query)
            return []

        durations, snippets = await self._lookup_details(video_ids, api_key)

        fallback = {
            item.id.video_id: item.snippet for item in search.items if item.id.video_id
        }
        results: list[ResolvedVideo] = []
        for video_id in video_ids:
            snippet: YouTubeSnippet = snippets.get(video_id) or fallback[video_id]
            results.append(
                ResolvedVideo(
                    provider_id=video_id,
                    title=snippet.title,
                    channel=snippet.channel_title,
                    thumbnail_url=snippet.thumbnail_url,
                    duration_seconds=durations.get(video_id, 0),
                    source=self.name,
                )
            )

        logger.debug("YouTube returned %d results", len(results))
        return results

    async def _lookup_details(
        self, video_ids: list[str], api_key: str
    ) -> tuple[dict[str, int], dict[str, YouTubeSnippet]]:
        """Fetch durations (seconds) and snippets for ``video_ids``."""
        payload = await fetch_json(
            self._http,
            VIDEOS_URL,
            params={
                "part": "contentDetails,snippet",
                "id": ",".join(video_ids),
                "key": api_key,
            },
            timeout=self._timeout,
            provider="YouTube video details",
        )
        try:
            details = YouTubeVideoListResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError(f"Unexpected YouTube details response: {e}") from e

        durations = {
            item.id: parse_iso_duration(item.content_details.duration)
            for item in details.items
        }
        snippets = {item.id: item.snippet for item in details.items}
        return durations, snippets
