"""Playlist assembly and persistence."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from flowstate.models.domain import Playlist, PlaylistStats, Track
from flowstate.services.store import PlaylistStoreProtocol
from flowstate.utils.naming import generate_playlist_id, generate_playlist_name

logger = logging.getLogger(__name__)


class PlaylistAssembler:
    """Turns a final track list into a saved Playlist."""

    def __init__(
        self,
        store: PlaylistStoreProtocol,
        *,
        clock: Callable[[], datetime] | None = None,
        id_generator: Callable[[int], str] = generate_playlist_id,
    ) -> None:
        """Initialize the assembler.

        Args:
            store: Storage collaborator that persists playlists.
            clock: Returns the current time. Defaults to UTC now.
            id_generator: Builds a playlist ID from epoch milliseconds.
        """
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))
        self._id_generator = id_generator

    def name_for(self, prompt: str) -> str:
        """Generate a playlist name from the prompt."""
        return generate_playlist_name(prompt, today=self._clock().date())

    def assemble(
        self,
        name: str | None,
        tracks: Sequence[Track],
        *,
        prompt: str = "",
    ) -> Playlist:
        """Build a Playlist from tracks.

        Args:
            name: Explicit playlist name, or None to derive one from ``prompt``.
            tracks: Final, deduplicated tracks in playback order.
            prompt: Prompt the playlist was generated from.

        Returns:
            A new Playlist with its own copy of ``tracks`` and computed stats.
        """
        now_ms = int(self._clock().timestamp() * 1000)
        return Playlist(
            id=self._id_generator(now_ms),
            name=name or self.name_for(prompt),
            tracks=list(tracks),
            created_at_ms=now_ms,
            stats=PlaylistStats.from_tracks(tracks),
        )

    async def save(self, playlist: Playlist) -> None:
        """Persist ``playlist`` via the storage collaborator.

        The store is synchronous, so the write runs in a worker thread.
        """
        await asyncio.to_thread(self._store.save, playlist)
        logger.debug("Saved playlist %s (%s)", playlist.id, playlist.name)
