"""Custom exceptions and error handlers for the API.

All API errors use a consistent response format:
{
    "error": "error_code",
    "message": "Human-readable description",
    ...additional context fields
}
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from flowstate import (
    AllProvidersExhaustedError,
    CancellationError,
    FlowstateError,
    FormatError,
    NoSuggestionsError,
    NoTracksResolvedError,
    RateLimitError,
    UpstreamError,
)
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str


class PlaylistNotFoundError(FlowstateError):
    """Raised when a saved playlist is not found."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, playlist_id: str) -> None:
        self.playlist_id = playlist_id
        super().__init__(f"Playlist {playlist_id} not found")


# Most specific first; the first isinstance match wins
_ERROR_CODES: tuple[tuple[type[FlowstateError], str], ...] = (
    (PlaylistNotFoundError, "playlist_not_found"),
    (NoSuggestionsError, "no_suggestions"),
    (NoTracksResolvedError, "no_tracks_resolved"),
    (CancellationError, "cancelled"),
    (RateLimitError, "rate_limited"),
    (AllProvidersExhaustedError, "providers_exhausted"),
    (UpstreamError, "upstream_error"),
    (FormatError, "format_error"),
)


def error_code_for(exc: FlowstateError) -> str:
    """Machine-readable error identifier for ``exc``."""
    for exc_class, code in _ERROR_CODES:
        if isinstance(exc, exc_class):
            return code
    return "internal_error"


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(FlowstateError)
    async def flowstate_error_handler(
        request: Request, exc: FlowstateError
    ) -> JSONResponse:
        """Generic handler for all FlowstateError subclasses."""
        content: dict[str, str | None] = {
            "error": error_code_for(exc),
            "message": exc.message,
        }

        for field in ("playlist_id", "query"):
            value = getattr(exc, field, None)
            if value is not None:
                content[field] = str(value)

        return JSONResponse(status_code=exc.status_code, content=content)
