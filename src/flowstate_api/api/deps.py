"""FastAPI dependency injection factories.

Dependencies are defined as Annotated types for clean, reusable injection.

Usage in routes:
    from flowstate_api.api.deps import GeneratorDep

    @router.post("/playlists/generate")
    async def generate(generator: GeneratorDep) -> ...:
        ...
"""

from typing import Annotated

from fastapi import Depends
from flowstate import (
    ContentFilter,
    PlaylistGenerator,
    PlaylistStoreProtocol,
    SuggestionGenerator,
    VideoResolver,
)

from flowstate_api.api.container import Services, get_services
from flowstate_api.settings import Settings, get_settings

# -- Settings --

SettingsDep = Annotated[Settings, Depends(get_settings)]

# -- Service dependencies (request-scoped via app.state) --

ServicesDep = Annotated[Services, Depends(get_services)]


def _get_suggestions(services: ServicesDep) -> SuggestionGenerator:
    return services.suggestions


def _get_resolver(services: ServicesDep) -> VideoResolver:
    return services.resolver


def _get_content_filter(services: ServicesDep) -> ContentFilter:
    return services.content_filter


def _get_generator(services: ServicesDep) -> PlaylistGenerator:
    return services.generator


def _get_repository(services: ServicesDep) -> PlaylistStoreProtocol:
    return services.repository


SuggestionsDep = Annotated[SuggestionGenerator, Depends(_get_suggestions)]
ResolverDep = Annotated[VideoResolver, Depends(_get_resolver)]
ContentFilterDep = Annotated[ContentFilter, Depends(_get_content_filter)]
GeneratorDep = Annotated[PlaylistGenerator, Depends(_get_generator)]
RepositoryDep = Annotated[PlaylistStoreProtocol, Depends(_get_repository)]
