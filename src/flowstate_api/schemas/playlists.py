"""Playlist request/response schemas."""

from flowstate import Playlist
from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request to generate a playlist from a prompt."""

    prompt: str = Field(min_length=1, max_length=500)
    count: int | None = Field(default=None, ge=1, le=50)
    name: str | None = Field(default=None, min_length=1, max_length=200)


class PlaylistSummary(BaseModel):
    """Playlist listing item."""

    id: str
    name: str
    track_count: int
    total_duration_seconds: int
    created_at_ms: int

    @classmethod
    def from_playlist(cls, playlist: Playlist) -> "PlaylistSummary":
        return cls(
            id=playlist.id,
            name=playlist.name,
            track_count=playlist.stats.track_count,
            total_duration_seconds=playlist.stats.total_duration_seconds,
            created_at_ms=playlist.created_at_ms,
        )


class PlaylistListResponse(BaseModel):
    """List of playlists response, oldest first."""

    items: list[PlaylistSummary]
