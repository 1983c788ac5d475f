"""Suggestion and filtering schemas."""

from flowstate import SongSuggestion, Track
from pydantic import BaseModel, Field


class SuggestRequest(BaseModel):
    """Request for song suggestions."""

    prompt: str = Field(min_length=1, max_length=500)
    count: int = Field(default=30, ge=1, le=50)


class SuggestResponse(BaseModel):
    """Song suggestions in the model's order."""

    songs: list[SongSuggestion]


class FilterRequest(BaseModel):
    """Tracks to run through the content filter."""

    tracks: list[Track] = Field(max_length=100)


class FilterResponse(BaseModel):
    """Tracks kept by the content filter, in request order."""

    tracks: list[Track]
