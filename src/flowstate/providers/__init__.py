"""Video search providers, one per resolution tier.

Public API:
    SearchProvider - Protocol implemented by every tier
    YouTubeDataProvider - Tier 1, official YouTube Data API
    PipedProvider - Tier 2, Piped mirror instances
    InvidiousProvider - Tier 3, Invidious mirror instances
    CredentialSelector - Strategy for picking an API key per call
"""

import httpx

from flowstate.config import ResolverConfig
from flowstate.providers.base import SearchProvider, create_http_client
from flowstate.providers.credentials import (
    CredentialSelector,
    RandomCredentialSelector,
    RoundRobinCredentialSelector,
)
from flowstate.providers.mirrors import InvidiousProvider, MirrorProvider, PipedProvider
from flowstate.providers.youtube import YouTubeDataProvider


def create_providers(
    config: ResolverConfig,
    http: httpx.AsyncClient,
    selector: CredentialSelector | None = None,
) -> list[SearchProvider]:
    """Build the tiers in fallback order: YouTube, Piped, Invidious.

    Mirror tiers with no configured instances are left out.
    """
    providers: list[SearchProvider] = [
        YouTubeDataProvider(
            http,
            config.youtube_api_keys,
            selector=selector,
            timeout=config.primary_timeout,
        )
    ]
    if config.piped_instances:
        providers.append(
            PipedProvider(http, config.piped_instances, timeout=config.mirror_timeout)
        )
    if config.invidious_instances:
        providers.append(
            InvidiousProvider(
                http, config.invidious_instances, timeout=config.mirror_timeout
            )
        )
    return providers


__all__ = [
    "CredentialSelector",
    "InvidiousProvider",
    "MirrorProvider",
    "PipedProvider",
    "RandomCredentialSelector",
    "RoundRobinCredentialSelector",
    "SearchProvider",
    "YouTubeDataProvider",
    "create_http_client",
    "create_providers",
]
