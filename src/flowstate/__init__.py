"""flowstate - Turn a mood or activity prompt into a playable playlist.

This library asks a language model for songs that fit a prompt, resolves
each suggestion to a video across several search providers, filters out
non-songs, removes duplicates and saves the result as a playlist.

Designed for use as a library in applications (e.g., FastAPI) with
a CLI for debugging and development.

Examples:
    Generate a playlist:
    ```python
    from flowstate import CompletionConfig, ResolverConfig, create_playlist_generator

    generator = create_playlist_generator(
        CompletionConfig(api_key="..."),
        ResolverConfig(youtube_api_keys=("...",)),
    )
    async with generator:
        playlist = await generator.generate("late night drive")
    for track in playlist.tracks:
        print(f"{track.artist} - {track.title}")
    ```

    Resolve a single query:
    ```python
    from flowstate import create_resolver

    resolver, http = create_resolver(ResolverConfig(youtube_api_keys=("...",)))
    videos = await resolver.resolve("Daft Punk Digital Love", 5)
    await http.aclose()
    ```
"""

import httpx

from flowstate.client import CompletionClient, CompletionProtocol
from flowstate.config import (
    CompletionConfig,
    GeneratorConfig,
    ResolverConfig,
    RetryConfig,
)
from flowstate.exceptions import (
    AllProvidersExhaustedError,
    CancellationError,
    FlowstateError,
    FormatError,
    NoSuggestionsError,
    NoTracksResolvedError,
    RateLimitError,
    UpstreamError,
)
from flowstate.models import (
    CancelToken,
    GenerationStage,
    Playlist,
    PlaylistStats,
    ResolvedVideo,
    SongSuggestion,
    Track,
)
from flowstate.providers import create_http_client, create_providers
from flowstate.services import (
    ContentFilter,
    InMemoryPlaylistStore,
    PlaylistAssembler,
    PlaylistGenerator,
    PlaylistStore,
    PlaylistStoreProtocol,
    SuggestionGenerator,
    VideoResolver,
)
from flowstate.services.retry import RetryPolicy
from flowstate.utils import format_duration


def create_resolver(
    config: ResolverConfig,
    http: httpx.AsyncClient | None = None,
) -> tuple[VideoResolver, httpx.AsyncClient]:
    """Create a VideoResolver over the default provider tiers.

    Args:
        config: Resolver configuration.
        http: Optional shared HTTP client. A new one is created if not provided.

    Returns:
        The resolver and the HTTP client it uses. The caller closes the client.
    """
    http = http or create_http_client()
    return VideoResolver(create_providers(config, http)), http


def create_playlist_generator(
    completion: CompletionConfig,
    resolver: ResolverConfig,
    generator: GeneratorConfig | None = None,
    store: PlaylistStoreProtocol | None = None,
    retry: RetryConfig | None = None,
) -> PlaylistGenerator:
    """Create a fully wired playlist generator.

    This is the recommended way to generate playlists from library code. It
    creates the completion client and a shared HTTP client, and closes both
    when the generator is closed.

    Args:
        completion: Completion service configuration.
        resolver: Provider configuration.
        generator: Optional generation settings. Uses defaults if not provided.
        store: Optional storage collaborator. Playlists are kept in memory
            if not provided.
        retry: Optional rate-limit retry settings.

    Returns:
        A configured PlaylistGenerator. Use it as an async context manager
        or call aclose() when done.
    """
    client = CompletionClient(completion)
    video_resolver, http = create_resolver(resolver)
    policy = RetryPolicy(retry)

    return PlaylistGenerator(
        SuggestionGenerator(client, completion, policy),
        video_resolver,
        ContentFilter(client, completion, policy),
        PlaylistAssembler(store or InMemoryPlaylistStore()),
        generator,
        closers=(client.aclose, http.aclose),
    )


__all__ = [
    "AllProvidersExhaustedError",
    "CancelToken",
    "CancellationError",
    "CompletionClient",
    "CompletionConfig",
    "CompletionProtocol",
    "ContentFilter",
    "FlowstateError",
    "FormatError",
    "GenerationStage",
    "GeneratorConfig",
    "InMemoryPlaylistStore",
    "NoSuggestionsError",
    "NoTracksResolvedError",
    "Playlist",
    "PlaylistAssembler",
    "PlaylistGenerator",
    "PlaylistStats",
    "PlaylistStore",
    "PlaylistStoreProtocol",
    "RateLimitError",
    "ResolvedVideo",
    "ResolverConfig",
    "RetryConfig",
    "RetryPolicy",
    "SongSuggestion",
    "SuggestionGenerator",
    "Track",
    "UpstreamError",
    "VideoResolver",
    "create_playlist_generator",
    "create_resolver",
    "format_duration",
]
