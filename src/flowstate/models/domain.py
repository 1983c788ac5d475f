"""Domain models for flowstate.

These are the public models that flow through the generation pipeline:
SongSuggestion -> ResolvedVideo -> Track -> Playlist.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from flowstate.utils.naming import clean_title

# Placeholder stats. Nothing in the pipeline analyses audio, so these are
# fixed values rather than measurements.
PLACEHOLDER_ENERGY = 0.5
PLACEHOLDER_TEMPO = 120.0


class SongSuggestion(BaseModel):
    """A (title, artist) pair proposed by the language model.

    Not yet verified to exist on any provider.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    title: str
    artist: str

    @field_validator("title", "artist")
    @classmethod
    def non_empty_string(cls, v: str) -> str:
        """Validate that title and artist are non-empty strings."""
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def search_query(self) -> str:
        """Query used to resolve this suggestion to a video."""
        return f"{self.artist} {self.title} audio"


class ResolvedVideo(BaseModel):
    """One provider match for a search query.

    Providers return heterogeneous shapes; durations are normalised to
    seconds before this model is built. Unknown duration is 0.

    Attributes:
        provider_id: The provider's opaque video identifier.
        title: Video title as uploaded.
        channel: Channel or uploader name.
        thumbnail_url: Thumbnail URL, empty if unknown.
        duration_seconds: Duration in whole seconds.
        source: Name of the provider tier that produced this match.
    """

    model_config = ConfigDict(frozen=True)

    provider_id: str = Field(min_length=1)
    title: str
    channel: str = ""
    thumbnail_url: str = ""
    duration_seconds: int = Field(default=0, ge=0)
    source: str = ""


class Track(BaseModel):
    """A resolved, playable track.

    ``id`` and ``provider_id`` hold the same value: consumers address tracks
    by ``id`` while the resolver addresses them by ``provider_id``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str
    artist: str
    duration_seconds: int = Field(default=0, ge=0)
    thumbnail_url: str = ""
    provider_id: str = Field(min_length=1)

    @model_validator(mode="after")
    def ids_match(self) -> Track:
        if self.id != self.provider_id:
            raise ValueError("id and provider_id must be the same video ID")
        return self

    @classmethod
    def from_video(cls, video: ResolvedVideo) -> Track:
        """Build a track from a provider match."""
        return cls(
            id=video.provider_id,
            title=clean_title(video.title) or video.title,
            artist=video.channel,
            duration_seconds=video.duration_seconds,
            thumbnail_url=video.thumbnail_url,
            provider_id=video.provider_id,
        )


class PlaylistStats(BaseModel):
    """Aggregate playlist statistics.

    Attributes:
        total_duration_seconds: Sum of member track durations.
        track_count: Number of tracks.
        average_energy: Fixed placeholder (0.5), not measured.
        average_tempo: Fixed placeholder (120 BPM), not measured.
    """

    model_config = ConfigDict(frozen=True)

    total_duration_seconds: int = Field(default=0, ge=0)
    track_count: int = Field(default=0, ge=0)
    average_energy: float = PLACEHOLDER_ENERGY
    average_tempo: float = PLACEHOLDER_TEMPO

    @classmethod
    def from_tracks(cls, tracks: Sequence[Track]) -> PlaylistStats:
        return cls(
            total_duration_seconds=sum(t.duration_seconds for t in tracks),
            track_count=len(tracks),
        )


class Playlist(BaseModel):
    """A generated playlist.

    Owns a private copy of its tracks. Re-saving a playlist with the same
    ``id`` replaces the stored one.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    tracks: list[Track] = Field(default_factory=list)
    created_at_ms: int
    stats: PlaylistStats

    @model_validator(mode="after")
    def stats_match_tracks(self) -> Playlist:
        if self.stats.track_count != len(self.tracks):
            raise ValueError(
                f"stats.track_count={self.stats.track_count} "
                f"but playlist has {len(self.tracks)} tracks"
            )
        return self

    @property
    def track_ids(self) -> list[str]:
        return [t.id for t in self.tracks]
