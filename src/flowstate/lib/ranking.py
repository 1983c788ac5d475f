"""Audio-preference ranking for search results.

Audio-only uploads ("... (Official Audio)", "Artist - Topic") play better in an
audio app than music videos with intros and skits, so primary-tier results
are reordered to put them first.
"""

import re
from collections.abc import Sequence

from flowstate.models.domain import ResolvedVideo
from flowstate.models.enums import TitleSignal

_AUDIO_PATTERN = re.compile(r"\b(?:audio|topic)\b", re.IGNORECASE)
_VIDEO_PATTERN = re.compile(
    r"\b(?:video|music video|official video|mv)\b", re.IGNORECASE
)


def classify_title(title: str) -> TitleSignal:
    """Classify a title by its audio or video markers.

    A title with both markers ("Official Audio Video") ranks after plain
    audio uploads but ahead of unmarked titles.
    """
    has_audio = _AUDIO_PATTERN.search(title) is not None
    has_video = _VIDEO_PATTERN.search(title) is not None
    if has_audio:
        return TitleSignal.AUDIO_VIDEO if has_video else TitleSignal.AUDIO
    if has_video:
        return TitleSignal.VIDEO
    return TitleSignal.NEUTRAL


def rank_by_audio_preference(videos: Sequence[ResolvedVideo]) -> list[ResolvedVideo]:
    """Order videos audio first, then audio with a video marker, neutral, video.

    The sort is stable, so provider relevance order is kept within each group
    and ranking an already-ranked list changes nothing.
    """
    return sorted(videos, key=lambda v: classify_title(v.title).rank)
