"""Pipeline services for flowstate.

Public API:
    SuggestionGenerator - Prompt -> song suggestions (fails closed)
    VideoResolver - Query -> videos across provider tiers
    ContentFilter - Drops non-songs (fails open)
    PlaylistAssembler - Naming, stats and persistence
    PlaylistGenerator - Full pipeline: suggest + resolve + filter + dedupe + assemble

Storage:
    PlaylistStoreProtocol - Storage collaborator abstraction
    PlaylistStore - SQLite blob store
    InMemoryPlaylistStore - Dict-backed store

Internal (not exported):
    RetryPolicy - Shared rate-limit retry policy
"""

from flowstate.services.assembler import PlaylistAssembler
from flowstate.services.content_filter import ContentFilter
from flowstate.services.pipeline import PlaylistGenerator
from flowstate.services.resolver import VideoResolver
from flowstate.services.store import (
    InMemoryPlaylistStore,
    PlaylistStore,
    PlaylistStoreProtocol,
)
from flowstate.services.suggestions import SuggestionGenerator

__all__ = [
    "ContentFilter",
    "InMemoryPlaylistStore",
    "PlaylistAssembler",
    "PlaylistGenerator",
    "PlaylistStore",
    "PlaylistStoreProtocol",
    "SuggestionGenerator",
    "VideoResolver",
]
