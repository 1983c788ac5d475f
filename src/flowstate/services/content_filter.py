"""Language-model content validation for resolved tracks."""

import logging
from collections.abc import Sequence

from flowstate.client import CompletionProtocol
from flowstate.config import CompletionConfig
from flowstate.exceptions import FlowstateError
from flowstate.lib.parsing import parse_indices
from flowstate.models.domain import Track
from flowstate.services.retry import RetryPolicy

logger = logging.getLogger(__name__)

FILTER_SYSTEM_PROMPT = """You are a music content validator. Your job is to filter out non-music content.

REJECT these types:
- Compilation albums (e.g., "Greatest Hits", "Best of...")
- Full albums or album playlists
- Podcasts, interviews, or talk shows
- "10 hour loop" or extended versions
- Mix/mashup compilations
- Karaoke versions (unless specifically requested)
- Lyric videos that are just text

ACCEPT these types:
- Official audio/video
- Live performances
- Acoustic versions
- Remix versions (by credited artists)
- Cover versions (if clearly labeled)
- Music videos

Return ONLY a JSON array of the INDEX NUMBERS that are valid individual songs.
Example: [0, 2, 3, 5, 7]"""


def format_track_list(tracks: Sequence[Track]) -> str:
    """Render tracks as numbered lines: ``0: "Title" by Artist``."""
    return "\n".join(f'{i}: "{t.title}" by {t.artist}' for i, t in enumerate(tracks))


class ContentFilter:
    """Drops compilations, loops, podcasts and other non-songs.

    Fails open: if the completion service is down, stays rate limited or
    answers with something unparseable, every input track is kept. Losing a
    whole playlist to a filtering hiccup is worse than keeping one compilation.
    """

    def __init__(
        self,
        client: CompletionProtocol,
        config: CompletionConfig | None = None,
        retry: RetryPolicy | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Completion service client.
            config: Sampling settings. Uses defaults if not provided.
            retry: Rate-limit retry policy. Uses defaults if not provided.
        """
        self._client = client
        self._config = config or CompletionConfig()
        self._retry = retry or RetryPolicy()

    async def filter(self, tracks: Sequence[Track]) -> list[Track]:
        """Keep the tracks the model judges to be genuine individual songs.

        Args:
            tracks: Resolved tracks, in pipeline order.

        Returns:
            A subset of ``tracks`` in their original relative order, or all of
            them unchanged if filtering failed.
        """
        if not tracks:
            return []

        logger.info("Filtering %d tracks", len(tracks))
        try:
            text = await self._retry.run(
                lambda: self._client.complete(
                    FILTER_SYSTEM_PROMPT,
                    format_track_list(tracks),
                    temperature=self._config.filter_temperature,
                    max_tokens=self._config.filter_max_tokens,
                )
            )
            keep = parse_indices(text, len(tracks))
        except FlowstateError as e:
            logger.warning("Content filter failed, keeping all tracks: %s", e)
            return list(tracks)
        except Exception:
            logger.exception("Unexpected content filter error, keeping all tracks")
            return list(tracks)

        kept = [tracks[i] for i in keep]
        logger.info("Filtered %d -> %d tracks", len(tracks), len(kept))
        return kept
