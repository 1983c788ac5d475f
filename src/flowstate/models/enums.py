"""Enumerations for flowstate domain models."""

from enum import StrEnum


class GenerationStage(StrEnum):
    """States of a single playlist generation request.

    Requests move forward through the stages in declaration order and end in
    either DONE or FAILED.
    """

    SUGGESTING = "suggesting"
    RESOLVING = "resolving"
    FILTERING = "filtering"
    DEDUPLICATING = "deduplicating"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transitions follow this stage."""
        return self in (GenerationStage.DONE, GenerationStage.FAILED)


class TitleSignal(StrEnum):
    """What a video title says about the upload.

    Ordered by preference: audio uploads first, audio uploads that also
    mention a video next, then plain titles, videos last.
    """

    AUDIO = "audio"
    AUDIO_VIDEO = "audio_video"
    NEUTRAL = "neutral"
    VIDEO = "video"

    @property
    def rank(self) -> int:
        """Sort key for audio-preference ranking (lower sorts first)."""
        match self:
            case TitleSignal.AUDIO:
                return 0
            case TitleSignal.AUDIO_VIDEO:
                return 1
            case TitleSignal.NEUTRAL:
                return 2
            case TitleSignal.VIDEO:
                return 3
