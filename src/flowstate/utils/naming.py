"""Naming and display helpers for playlists and tracks."""

import re
import time
import uuid
from datetime import date

# Filler phrases removed from prompts before picking name keywords
_FILLER_PATTERN = re.compile(
    r"\b(?:playlist|songs?|music|give me|play|i want)\b", re.IGNORECASE
)

_STOP_WORDS = frozenset({"the", "and", "for", "with", "that", "this", "from"})

_MIN_KEYWORD_LENGTH = 4
_MAX_KEYWORDS = 3

# "(Official Video)", "[Official Music Video]", "(official audio)", ...
_OFFICIAL_MARKER_PATTERN = re.compile(
    r"\s*[(\[]official (?:video|audio|music video)[)\]]", re.IGNORECASE
)


def generate_playlist_name(prompt: str, today: date | None = None) -> str:
    """Derive a short playlist name from the user's prompt.

    Filler phrases ("give me", "song" or "songs", ...) are removed, then the
    first three words longer than three characters that aren't stop words are
    title-cased.

    Args:
        prompt: Free-text prompt the playlist was generated from.
        today: Date used for the fallback name. Defaults to today.

    Returns:
        Name like "Late Night Drive", or "Playlist <date>" if no keyword survives.

    Example:
        >>> generate_playlist_name("give me some late night drive music")
        'Some Late Night'
    """
    cleaned = _FILLER_PATTERN.sub("", prompt.lower()).strip()
    keywords = [
        word
        for word in cleaned.split()
        if len(word) >= _MIN_KEYWORD_LENGTH and word not in _STOP_WORDS
    ][:_MAX_KEYWORDS]

    if not keywords:
        return f"Playlist {(today or date.today()).strftime('%x')}"

    return " ".join(word[0].upper() + word[1:] for word in keywords)


def generate_playlist_id(now_ms: int | None = None) -> str:
    """Create an opaque playlist ID from the current time and a random suffix."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"playlist-{now_ms}-{uuid.uuid4().hex[:9]}"


def clean_title(title: str) -> str:
    """Strip "(Official Video)"-style markers from a video title."""
    return _OFFICIAL_MARKER_PATTERN.sub("", title).strip()


def format_duration(seconds: int) -> str:
    """Format seconds as M:SS, or H:MM:SS for an hour or more."""
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
