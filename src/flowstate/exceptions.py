"""Custom exceptions for flowstate.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.
"""


class FlowstateError(Exception):
    """Base exception for flowstate.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UpstreamError(FlowstateError):
    """A dependency is unreachable or returned a non-retryable failure.

    Raised by the completion client and the search providers. The optional
    ``status`` holds the HTTP status of the failed call when there was one.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class RateLimitError(UpstreamError):
    """The upstream service signalled a rate limit (HTTP 429 or equivalent).

    The only error the shared retry policy retries.
    """

    status_code: int = 429  # Too Many Requests


class FormatError(FlowstateError):
    """A response could not be parsed into the expected shape.

    Raised when no well-formed JSON array can be found in a completion.
    """

    status_code: int = 502  # Bad Gateway (upstream returned garbage)


class AllProvidersExhaustedError(UpstreamError):
    """Every search tier failed for a single resolution query.

    Attributes:
        query: The query that could not be resolved.
        errors: Per-tier errors keyed by provider name, in tier order.
    """

    def __init__(self, query: str, errors: dict[str, Exception]) -> None:
        self.query = query
        self.errors = errors
        detail = "; ".join(f"{name}: {err}" for name, err in errors.items())
        super().__init__(f"All providers failed for '{query}': {detail}")


class NoSuggestionsError(FlowstateError):
    """The completion service produced no usable song suggestions."""

    status_code: int = 422  # Unprocessable Entity


class NoTracksResolvedError(FlowstateError):
    """None of the suggestions could be matched to a playable video."""

    status_code: int = 404  # Not Found


class CancellationError(FlowstateError):
    """Operation was cancelled.

    Raised when a generation is abandoned via a CancelToken.
    """

    status_code: int = 499  # Client Closed Request (nginx convention)
