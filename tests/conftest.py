"""Test fixtures and configuration for flowstate tests.

This module provides shared fixtures organized into:
- Fakes (defined in fakes.py): wired into the service fixtures below
- Factory fixtures: Builders for tracks and videos
- Service fixtures: Pipeline components wired to the fakes
"""

from collections.abc import Callable

import pytest
from fakes import FIXED_NOW, FakeCompletion, FakeProvider, SleepRecorder
from flowstate.config import RetryConfig
from flowstate.models.domain import ResolvedVideo, Track
from flowstate.services.assembler import PlaylistAssembler
from flowstate.services.content_filter import ContentFilter
from flowstate.services.resolver import VideoResolver
from flowstate.services.retry import RetryPolicy
from flowstate.services.store import InMemoryPlaylistStore
from flowstate.services.suggestions import SuggestionGenerator


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def make_video() -> Callable[..., ResolvedVideo]:
    """Build ResolvedVideo instances with sensible defaults."""

    def _make(
        provider_id: str,
        title: str = "Song",
        channel: str = "Artist",
        duration_seconds: int = 200,
        source: str = "fake",
    ) -> ResolvedVideo:
        return ResolvedVideo(
            provider_id=provider_id,
            title=title,
            channel=channel,
            thumbnail_url=f"https://img.example/{provider_id}.jpg",
            duration_seconds=duration_seconds,
            source=source,
        )

    return _make


@pytest.fixture
def make_track() -> Callable[..., Track]:
    """Build Track instances with sensible defaults."""

    def _make(
        track_id: str,
        title: str = "Song",
        artist: str = "Artist",
        duration_seconds: int = 200,
    ) -> Track:
        return Track(
            id=track_id,
            title=title,
            artist=artist,
            duration_seconds=duration_seconds,
            provider_id=track_id,
        )

    return _make


@pytest.fixture
def sample_tracks(make_track: Callable[..., Track]) -> list[Track]:
    """Three distinct tracks."""
    return [
        make_track("v1", "Midnight City", "M83", 244),
        make_track("v2", "Nightcall", "Kavinsky", 258),
        make_track("v3", "Blinding Lights", "The Weeknd", 200),
    ]


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def retry(sleep: SleepRecorder) -> RetryPolicy:
    """Default retry policy that records delays instead of sleeping."""
    return RetryPolicy(RetryConfig(), sleep=sleep)


@pytest.fixture
def store() -> InMemoryPlaylistStore:
    return InMemoryPlaylistStore()


@pytest.fixture
def assembler(store: InMemoryPlaylistStore) -> PlaylistAssembler:
    """Assembler with a fixed clock and sequential IDs."""
    counter = iter(range(1, 1000))
    return PlaylistAssembler(
        store,
        clock=lambda: FIXED_NOW,
        id_generator=lambda ms: f"playlist-{ms}-{next(counter)}",
    )


@pytest.fixture
def make_suggestion_generator(
    retry: RetryPolicy,
) -> Callable[[FakeCompletion], SuggestionGenerator]:
    def _make(completion: FakeCompletion) -> SuggestionGenerator:
        return SuggestionGenerator(completion, retry=retry)

    return _make


@pytest.fixture
def make_content_filter(
    retry: RetryPolicy,
) -> Callable[[FakeCompletion], ContentFilter]:
    def _make(completion: FakeCompletion) -> ContentFilter:
        return ContentFilter(completion, retry=retry)

    return _make


@pytest.fixture
def make_resolver() -> Callable[..., VideoResolver]:
    def _make(*providers: FakeProvider) -> VideoResolver:
        return VideoResolver(providers)

    return _make

