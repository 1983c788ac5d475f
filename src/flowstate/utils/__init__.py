"""Utility functions for flowstate."""

from flowstate.utils.naming import (
    clean_title,
    format_duration,
    generate_playlist_id,
    generate_playlist_name,
)

__all__ = [
    "clean_title",
    "format_duration",
    "generate_playlist_id",
    "generate_playlist_name",
]
