"""Parsers for free-form model output and provider metadata.

Language models are asked for bare JSON but routinely wrap it in prose or
code fences. Everything here treats the completion text as untrusted input:
it either yields a well-formed value or raises FormatError, never a guess.
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from flowstate.exceptions import FormatError
from flowstate.models.domain import SongSuggestion

logger = logging.getLogger(__name__)

_ISO_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def _balanced_array_end(text: str, start: int) -> int | None:
    """Index of the "]" closing the array opened at ``start``.

    Brackets inside JSON string literals are ignored. Returns None when the
    array is never closed.
    """
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_array(
    text: str,
    accept: Callable[[list[Any]], bool] | None = None,
) -> list[Any]:
    """Return the first balanced ``[...]`` literal in ``text`` that parses as JSON.

    Args:
        text: Raw completion text.
        accept: Optional predicate; arrays it rejects are skipped.

    Returns:
        The decoded list.

    Raises:
        FormatError: If no acceptable array literal exists.
    """
    start = text.find("[")
    while start != -1:
        end = _balanced_array_end(text, start)
        if end is not None:
            try:
                value = json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                value = None
            if isinstance(value, list) and (accept is None or accept(value)):
                return value
        start = text.find("[", start + 1)

    raise FormatError("No JSON array found in completion response")


def parse_suggestions(text: str, count: int) -> list[SongSuggestion]:
    """Parse song suggestions out of a completion.

    Entries that aren't objects with a non-empty title and artist are dropped.
    The result is truncated to ``count`` and never padded.

    Raises:
        FormatError: If there is no array, or it has entries but none are valid.
    """
    raw = extract_json_array(text)
    suggestions: list[SongSuggestion] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object suggestion: %r", entry)
            continue
        try:
            suggestions.append(SongSuggestion.model_validate(entry))
        except ValidationError:
            logger.debug("Skipping malformed suggestion: %r", entry)

    if raw and not suggestions:
        raise FormatError(f"None of the {len(raw)} suggestions had a title and artist")

    return suggestions[:count]


def _is_int_array(value: list[Any]) -> bool:
    return all(isinstance(i, int) and not isinstance(i, bool) for i in value)


def parse_indices(text: str, size: int) -> list[int]:
    """Parse the indices a filter completion chose to keep.

    Uses the first array of integers in the text. Out-of-range indices are
    dropped silently; duplicates collapse. Returned ascending so callers keep
    their original order.

    Raises:
        FormatError: If no array of integers exists.
    """
    indices = extract_json_array(text, accept=_is_int_array)
    return sorted({i for i in indices if 0 <= i < size})


def parse_iso_duration(value: str | None) -> int:
    """Convert an ISO 8601 duration ("PT1H2M3S") to seconds.

    Each component is optional; missing components count as 0, and anything
    unparseable is 0.

    Example:
        >>> parse_iso_duration("PT3M45S")
        225
    """
    if not value:
        return 0
    match = _ISO_DURATION_PATTERN.search(value)
    if not match:
        return 0
    hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def parse_string_list(value: str) -> list[str]:
    """Parse a JSON list or a comma-separated string into strings.

    Used for multi-valued settings such as API keys and instance URLs, so the
    CLI and the API read the same environment values the same way.

    Example:
        >>> parse_string_list(" k1 , k2 ,")
        ['k1', 'k2']
        >>> parse_string_list('["k1", "k2"]')
        ['k1', 'k2']

    Raises:
        ValueError: If a JSON value is malformed or not a list of strings.
    """
    value = value.strip()
    if value.startswith("["):
        items = json.loads(value)
        if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
            raise ValueError("Expected a JSON list of strings")
        return [item.strip() for item in items if item.strip()]
    return [item.strip() for item in value.split(",") if item.strip()]
