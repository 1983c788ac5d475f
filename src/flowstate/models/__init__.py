"""Data models for flowstate.

Public API:
    SongSuggestion - (title, artist) proposed by the language model
    ResolvedVideo - One provider match for a search query
    Track - A resolved, playable track
    Playlist, PlaylistStats - The assembled result
    GenerationStage - Orchestrator state machine stages
    CancelToken - Cooperative cancellation

Internal (not exported):
    providers.py - Models for parsing raw provider responses
"""

from flowstate.models.cancel import CancelToken
from flowstate.models.domain import (
    Playlist,
    PlaylistStats,
    ResolvedVideo,
    SongSuggestion,
    Track,
)
from flowstate.models.enums import GenerationStage, TitleSignal

__all__ = [
    "CancelToken",
    "GenerationStage",
    "Playlist",
    "PlaylistStats",
    "ResolvedVideo",
    "SongSuggestion",
    "TitleSignal",
    "Track",
]
