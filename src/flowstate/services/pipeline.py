"""End-to-end playlist generation pipeline."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Sequence
from types import TracebackType
from typing import Self

from flowstate.config import GeneratorConfig
from flowstate.exceptions import (
    CancellationError,
    NoSuggestionsError,
    NoTracksResolvedError,
)
from flowstate.lib.dedupe import dedupe_tracks
from flowstate.models.cancel import CancelToken
from flowstate.models.domain import Playlist, SongSuggestion, Track
from flowstate.models.enums import GenerationStage
from flowstate.services.assembler import PlaylistAssembler
from flowstate.services.content_filter import ContentFilter
from flowstate.services.resolver import VideoResolver
from flowstate.services.suggestions import SuggestionGenerator

logger = logging.getLogger(__name__)

StageCallback = Callable[[GenerationStage], None]
Closer = Callable[[], Awaitable[None]]


class PlaylistGenerator:
    """Turns a prompt into a saved, deduplicated playlist.

    Pipeline Overview:
    ==================
    1. SUGGESTING - One completion call for (title, artist) candidates.
                   No candidates is terminal (NoSuggestionsError).
    2. RESOLVING - One resolver call per suggestion, all running concurrently.
                   A failed or empty resolution drops that suggestion only.
                   No tracks at all is terminal (NoTracksResolvedError).
    3. FILTERING - One completion call dropping non-songs. Fails open.
    4. DEDUPLICATING - Drops tracks repeating an id or normalized title.
    5. ASSEMBLING - Names the playlist, computes stats and persists it.

    Any terminal error moves the request to FAILED and is re-raised; no
    partial playlist is ever returned or saved.

    Example:
        >>> async with create_playlist_generator(completion, resolver) as gen:
        ...     playlist = await gen.generate("late night drive")
        >>> print(playlist.name, playlist.stats.track_count)
    """

    def __init__(
        self,
        suggestions: SuggestionGenerator,
        resolver: VideoResolver,
        content_filter: ContentFilter,
        assembler: PlaylistAssembler,
        config: GeneratorConfig | None = None,
        *,
        closers: Sequence[Closer] = (),
    ) -> None:
        """Initialize the generator.

        Args:
            suggestions: Suggestion step.
            resolver: Multi-tier video resolver.
            content_filter: Non-song filter step.
            assembler: Naming, stats and persistence step.
            config: Generation settings. Uses defaults if not provided.
            closers: Async callables releasing clients owned by this generator,
                run by aclose().
        """
        self._suggestions = suggestions
        self._resolver = resolver
        self._filter = content_filter
        self._assembler = assembler
        self._config = config or GeneratorConfig()
        self._closers = tuple(closers)

        if (
            self._config.resolve_concurrency is not None
            and self._config.resolve_concurrency < 1
        ):
            raise ValueError("resolve_concurrency must be positive")

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    # ============================================================================
    # PUBLIC API
    # ============================================================================

    async def generate(
        self,
        prompt: str,
        *,
        count: int | None = None,
        name: str | None = None,
        cancel_token: CancelToken | None = None,
        on_stage: StageCallback | None = None,
    ) -> Playlist:
        """Generate and persist a playlist for ``prompt``.

        Args:
            prompt: Free-text mood/activity prompt.
            count: Number of suggestions to request. Defaults to the
                configured suggestion_count.
            name: Explicit playlist name. Derived from the prompt if not given.
            cancel_token: Optional token, checked between stages and before
                each resolution task.
            on_stage: Optional callback invoked on every stage transition.

        Returns:
            The saved Playlist.

        Raises:
            ValueError: If prompt is empty or count is not positive.
            NoSuggestionsError: If the model suggested nothing.
            NoTracksResolvedError: If no suggestion resolved to a video.
            CancellationError: If cancel_token was cancelled.
            UpstreamError: If the suggestion step failed.
            FormatError: If the suggestion answer could not be parsed.
        """
        count = count if count is not None else self._config.suggestion_count

        def enter(stage: GenerationStage) -> None:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            logger.info("Stage: %s", stage)
            if on_stage is not None:
                on_stage(stage)

        try:
            enter(GenerationStage.SUGGESTING)
            suggestions = await self._suggestions.suggest(prompt, count)
            if not suggestions:
                raise NoSuggestionsError(f"No songs suggested for '{prompt}'")

            enter(GenerationStage.RESOLVING)
            tracks = await self._resolve_all(suggestions, cancel_token)
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            if not tracks:
                raise NoTracksResolvedError(
                    f"None of {len(suggestions)} suggestions could be resolved"
                )

            enter(GenerationStage.FILTERING)
            tracks = await self._filter.filter(tracks)

            enter(GenerationStage.DEDUPLICATING)
            unique = dedupe_tracks(tracks)
            if len(unique) < len(tracks):
                logger.info("Removed %d duplicate tracks", len(tracks) - len(unique))

            enter(GenerationStage.ASSEMBLING)
            playlist = self._assembler.assemble(name, unique, prompt=prompt)
            await self._assembler.save(playlist)
        except CancellationError as e:
            logger.warning("Generation cancelled: %s", e)
            if on_stage is not None:
                on_stage(GenerationStage.FAILED)
            raise
        except Exception as e:
            logger.error("Generation failed for '%s': %s", prompt, e)
            if on_stage is not None:
                on_stage(GenerationStage.FAILED)
            raise

        logger.info(
            "Generated playlist '%s' with %d tracks",
            playlist.name,
            playlist.stats.track_count,
        )
        if on_stage is not None:
            on_stage(GenerationStage.DONE)
        return playlist

    async def aclose(self) -> None:
        """Release the clients this generator owns."""
        for close in self._closers:
            await close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ============================================================================
    # RESOLUTION FAN-OUT
    # ============================================================================

    async def _resolve_all(
        self,
        suggestions: Sequence[SongSuggestion],
        cancel_token: CancelToken | None,
    ) -> list[Track]:
        """Resolve every suggestion concurrently and wait for all of them.

        Tracks are returned in completion order.
        """
        limit = self._config.resolve_concurrency
        semaphore = asyncio.Semaphore(limit) if limit is not None else None
        tracks: list[Track] = []

        async def resolve_one(suggestion: SongSuggestion) -> None:
            guard = semaphore if semaphore is not None else contextlib.nullcontext()
            async with guard:
                if cancel_token is not None and cancel_token.is_cancelled:
                    return
                track = await self._resolve_suggestion(suggestion)
            if track is not None:
                tracks.append(track)

        await asyncio.gather(*(resolve_one(s) for s in suggestions))
        logger.info("Resolved %d of %d suggestions", len(tracks), len(suggestions))
        return tracks

    async def _resolve_suggestion(self, suggestion: SongSuggestion) -> Track | None:
        """Resolve one suggestion to its best match, or None on any failure."""
        try:
            videos = await self._resolver.resolve(suggestion.search_query, 1)
        except Exception as e:
            logger.warning(
                "Could not resolve '%s' by %s: %s",
                suggestion.title,
                suggestion.artist,
                e,
            )
            return None

        if not videos:
            logger.warning(
                "No match for '%s' by %s", suggestion.title, suggestion.artist
            )
            return None
        return Track.from_video(videos[0])
