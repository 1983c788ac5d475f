"""Search provider protocol and shared HTTP helpers."""

import logging
from typing import Any, Protocol

import httpx

from flowstate.exceptions import UpstreamError
from flowstate.models.domain import ResolvedVideo

logger = logging.getLogger(__name__)

USER_AGENT = "flowstate/0.1"


class SearchProvider(Protocol):
    """Protocol for one video search tier.

    Attributes:
        name: Short provider name used in logs and ResolvedVideo.source.
        rerank: Whether results should get audio-preference ranking.
            Only worthwhile for providers returning surplus candidates.
    """

    name: str
    rerank: bool

    async def search(self, query: str, max_results: int) -> list[ResolvedVideo]:
        """Search for videos.

        Returns:
            Matches in provider relevance order. May hold more than
            ``max_results`` when the provider over-fetches for ranking.

        Raises:
            UpstreamError: If the provider cannot serve the request.
        """
        ...


def create_http_client() -> httpx.AsyncClient:
    """Create the HTTP client shared by all providers."""
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


async def fetch_json(
    http: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, str],
    timeout: float,
    provider: str,
) -> Any:
    """GET ``url`` and decode the JSON body.

    Args:
        http: Shared async HTTP client.
        url: Request URL.
        params: Query parameters.
        timeout: Per-request timeout in seconds.
        provider: Provider label for error messages.

    Raises:
        UpstreamError: On network errors, timeouts, non-2xx statuses or
            bodies that aren't JSON.
    """
    try:
        response = await http.get(url, params=params, timeout=timeout)
    except httpx.TimeoutException as e:
        raise UpstreamError(f"{provider} timed out after {timeout}s") from e
    except httpx.HTTPError as e:
        raise UpstreamError(f"{provider} request failed: {e}") from e

    if not response.is_success:
        raise UpstreamError(
            f"{provider} returned {response.status_code} {response.reason_phrase}",
            status=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(f"{provider} returned invalid JSON") from e
