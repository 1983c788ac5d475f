"""Track deduplication."""

import re
from collections.abc import Sequence

from flowstate.models.domain import Track

_NON_WORD_PATTERN = re.compile(r"[^\w\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace.

    Example:
        >>> normalize_title("  Blinding   Lights (Remastered!) ")
        'blinding lights remastered'
    """
    stripped = _NON_WORD_PATTERN.sub("", title.lower())
    return _WHITESPACE_PATTERN.sub(" ", stripped).strip()


def dedupe_tracks(tracks: Sequence[Track]) -> list[Track]:
    """Remove tracks that repeat an earlier track's ID or normalised title.

    First occurrence wins and output keeps first-occurrence order.
    """
    seen_ids: set[str] = set()
    seen_titles: set[str] = set()
    unique: list[Track] = []

    for track in tracks:
        title_key = normalize_title(track.title)
        if track.id in seen_ids or title_key in seen_titles:
            continue
        seen_ids.add(track.id)
        seen_titles.add(title_key)
        unique.append(track)

    return unique
