"""Suggestion and content filtering endpoints."""

from fastapi import APIRouter

from flowstate_api.api.deps import ContentFilterDep, SuggestionsDep
from flowstate_api.schemas.ai import (
    FilterRequest,
    FilterResponse,
    SuggestRequest,
    SuggestResponse,
)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/suggest")
async def suggest(body: SuggestRequest, suggestions: SuggestionsDep) -> SuggestResponse:
    """Ask the completion service for songs matching a prompt."""
    songs = await suggestions.suggest(body.prompt, body.count)
    return SuggestResponse(songs=songs)


@router.post("/filter")
async def filter_tracks(
    body: FilterRequest, content_filter: ContentFilterDep
) -> FilterResponse:
    """Drop non-songs. Returns every track unchanged if filtering fails."""
    tracks = await content_filter.filter(body.tracks)
    return FilterResponse(tracks=tracks)
