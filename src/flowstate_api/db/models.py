"""Database models."""

from typing import Any

from flowstate import Playlist
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class PlaylistRecord(SQLModel, table=True):
    """A saved playlist.

    The full playlist lives in ``payload``; the other columns are copies
    for listing and ordering without decoding it.
    """

    __tablename__ = "playlists"

    namespace: str = Field(primary_key=True)
    id: str = Field(primary_key=True)
    name: str = Field(max_length=200)
    created_at_ms: int = Field(index=True)
    track_count: int = Field(default=0)
    total_duration_seconds: int = Field(default=0)
    payload: dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))

    @classmethod
    def from_playlist(cls, playlist: Playlist, namespace: str) -> "PlaylistRecord":
        return cls(
            namespace=namespace,
            id=playlist.id,
            name=playlist.name,
            created_at_ms=playlist.created_at_ms,
            track_count=playlist.stats.track_count,
            total_duration_seconds=playlist.stats.total_duration_seconds,
            payload=playlist.model_dump(mode="json"),
        )

    def to_playlist(self) -> Playlist:
        return Playlist.model_validate(self.payload)
