"""Pure helpers used by the pipeline services.

Modules:
    parsing - JSON-array extraction from model output, duration parsing
    ranking - Audio-preference ranking of search results
    dedupe - Track deduplication
"""

from flowstate.lib.dedupe import dedupe_tracks, normalize_title
from flowstate.lib.parsing import (
    extract_json_array,
    parse_indices,
    parse_iso_duration,
    parse_string_list,
    parse_suggestions,
)
from flowstate.lib.ranking import classify_title, rank_by_audio_preference

__all__ = [
    "classify_title",
    "dedupe_tracks",
    "extract_json_array",
    "normalize_title",
    "parse_indices",
    "parse_iso_duration",
    "parse_string_list",
    "parse_suggestions",
    "rank_by_audio_preference",
]
