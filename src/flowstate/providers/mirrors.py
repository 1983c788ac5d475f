"""Piped and Invidious mirror search providers (fallback tiers).

Each mirror family is a list of independently run public instances. They
come and go, so every tier tries its instances in order with a short timeout
and only fails once all of them have.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from flowstate.exceptions import UpstreamError
from flowstate.models.domain import ResolvedVideo
from flowstate.models.providers import InvidiousItem, PipedSearchResponse
from flowstate.providers.base import fetch_json

logger = logging.getLogger(__name__)

_INVIDIOUS_RESULTS = TypeAdapter(list[InvidiousItem])


class MirrorProvider(ABC):
    """Search tier spread over several interchangeable instances.

    Mirrors report duration as plain seconds and return few candidates, so
    their results are not re-ranked.
    Implements SearchProvider.
    """

    name: str
    rerank = False

    def __init__(
        self,
        http: httpx.AsyncClient,
        instances: Sequence[str],
        *,
        timeout: float = 5.0,
    ) -> None:
        """Initialize the provider.

        Args:
            http: Shared async HTTP client.
            instances: Instance base URLs, tried in order.
            timeout: Per-instance request timeout in seconds.
        """
        if not instances:
            raise ValueError(f"{type(self).__name__} needs at least one instance")
        self._http = http
        self._instances = tuple(url.rstrip("/") for url in instances)
        self._timeout = timeout

    @property
    def instances(self) -> tuple[str, ...]:
        return self._instances

    async def search(self, query: str, max_results: int) -> list[ResolvedVideo]:
        """Search each instance in turn until one answers.

        An instance that answers with no results counts as an answer.

        Raises:
            UpstreamError: If every instance failed.
        """
        failures: list[str] = []
        for instance in self._instances:
            try:
                payload = await fetch_json(
                    self._http,
                    self._search_url(instance),
                    params=self._search_params(query),
                    timeout=self._timeout,
                    provider=f"{self.name} {instance}",
                )
                videos = self._parse(payload)
            except (UpstreamError, ValidationError) as e:
                logger.debug("%s instance %s failed: %s", self.name, instance, e)
                failures.append(f"{instance}: {e}")
                continue

            logger.debug(
                "%s instance %s returned %d results", self.name, instance, len(videos)
            )
            return videos[:max_results]

        raise UpstreamError(
            f"All {len(self._instances)} {self.name} instances failed "
            f"({'; '.join(failures)})"
        )

    @abstractmethod
    def _search_url(self, instance: str) -> str: ...

    @abstractmethod
    def _search_params(self, query: str) -> dict[str, str]: ...

    @abstractmethod
    def _parse(self, payload: Any) -> list[ResolvedVideo]:
        """Convert a raw response into matches. May raise ValidationError."""
        ...


class PipedProvider(MirrorProvider):
    """Tier 2: Piped API instances."""

    name = "piped"

    def _search_url(self, instance: str) -> str:
        return f"{instance}/search"

    def _search_params(self, query: str) -> dict[str, str]:
        return {"q": query, "filter": "music_songs"}

    def _parse(self, payload: Any) -> list[ResolvedVideo]:
        response = PipedSearchResponse.model_validate(payload)
        return [
            ResolvedVideo(
                provider_id=video_id,
                title=item.title,
                channel=item.uploader_name,
                thumbnail_url=item.thumbnail,
                duration_seconds=max(item.duration, 0),
                source=self.name,
            )
            for item in response.items
            if item.type == "stream" and (video_id := item.video_id)
        ]


class InvidiousProvider(MirrorProvider):
    """Tier 3: Invidious instances."""

    name = "invidious"

    def _search_url(self, instance: str) -> str:
        return f"{instance}/api/v1/search"

    def _search_params(self, query: str) -> dict[str, str]:
        return {"q": query, "type": "video"}

    def _parse(self, payload: Any) -> list[ResolvedVideo]:
        items = _INVIDIOUS_RESULTS.validate_python(payload)
        return [
            ResolvedVideo(
                provider_id=item.video_id,
                title=item.title,
                channel=item.author,
                thumbnail_url=item.thumbnail_url,
                duration_seconds=max(item.length_seconds, 0),
                source=self.name,
            )
            for item in items
            if item.type == "video" and item.video_id
        ]
