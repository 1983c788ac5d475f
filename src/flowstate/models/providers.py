"""Models for parsing search provider responses.

These are internal models used to parse and validate raw payloads from
the YouTube Data API and the Piped/Invidious mirrors. They may change if
the upstream APIs change.
"""

from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "InvidiousItem",
    "InvidiousThumbnail",
    "PipedItem",
    "PipedSearchResponse",
    "YouTubeContentDetails",
    "YouTubeSearchItem",
    "YouTubeSearchResponse",
    "YouTubeSnippet",
    "YouTubeVideoItem",
    "YouTubeVideoListResponse",
]


class ProviderModel(BaseModel):
    """Base model for provider responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


# -- YouTube Data API v3 --


class YouTubeThumbnail(ProviderModel):
    url: str


class YouTubeSnippet(ProviderModel):
    """Snippet part shared by search and video resources."""

    title: str = ""
    channel_title: str = Field(default="", alias="channelTitle")
    thumbnails: dict[str, YouTubeThumbnail] = Field(default_factory=dict)

    @property
    def thumbnail_url(self) -> str:
        """Medium thumbnail, falling back to default, then anything."""
        for key in ("medium", "default"):
            if key in self.thumbnails:
                return self.thumbnails[key].url
        return next((t.url for t in self.thumbnails.values()), "")


class YouTubeSearchId(ProviderModel):
    video_id: str | None = Field(default=None, alias="videoId")


class YouTubeSearchItem(ProviderModel):
    """Item in a search.list response."""

    id: YouTubeSearchId
    snippet: YouTubeSnippet = Field(default_factory=YouTubeSnippet)


class YouTubeSearchResponse(ProviderModel):
    items: list[YouTubeSearchItem] = Field(default_factory=list)

    @property
    def video_ids(self) -> list[str]:
        return [item.id.video_id for item in self.items if item.id.video_id]


class YouTubeContentDetails(ProviderModel):
    duration: str = ""  # ISO 8601, e.g. "PT3M45S"


class YouTubeVideoItem(ProviderModel):
    """Item in a videos.list response."""

    id: str
    snippet: YouTubeSnippet = Field(default_factory=YouTubeSnippet)
    content_details: YouTubeContentDetails = Field(
        default_factory=YouTubeContentDetails, alias="contentDetails"
    )


class YouTubeVideoListResponse(ProviderModel):
    items: list[YouTubeVideoItem] = Field(default_factory=list)


# -- Piped --


class PipedItem(ProviderModel):
    """Stream item in a Piped /search response."""

    url: str = ""
    type: str = "stream"
    title: str = ""
    uploader_name: str = Field(default="", alias="uploaderName")
    thumbnail: str = ""
    duration: int = -1  # seconds, -1 when unknown

    @property
    def video_id(self) -> str | None:
        """Video ID parsed from the relative watch URL ("/watch?v=ID")."""
        ids = parse_qs(urlparse(self.url).query).get("v")
        return ids[0] if ids else None


class PipedSearchResponse(ProviderModel):
    items: list[PipedItem] = Field(default_factory=list)


# -- Invidious --


class InvidiousThumbnail(ProviderModel):
    quality: str = ""
    url: str


class InvidiousItem(ProviderModel):
    """Video item in an Invidious /api/v1/search response."""

    type: str = "video"
    title: str = ""
    video_id: str | None = Field(default=None, alias="videoId")
    author: str = ""
    length_seconds: int = Field(default=0, alias="lengthSeconds")
    video_thumbnails: list[InvidiousThumbnail] = Field(
        default_factory=list, alias="videoThumbnails"
    )

    @property
    def thumbnail_url(self) -> str:
        for thumb in self.video_thumbnails:
            if thumb.quality == "medium":
                return thumb.url
        return self.video_thumbnails[0].url if self.video_thumbnails else ""
