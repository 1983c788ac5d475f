"""Search API schemas."""

from flowstate import ResolvedVideo
from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request to resolve a free-text query to videos."""

    query: str = Field(min_length=1, max_length=300)
    max_results: int = Field(default=5, ge=1, le=25)


class SearchResponse(BaseModel):
    """Response for search results."""

    results: list[ResolvedVideo] = Field(default_factory=list)
